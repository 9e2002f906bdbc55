from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from rotation_updater.application.commands import (
    PutTeamCommand,
    PutUserCommand,
    TeamKeyCommand,
    UpdateOnCallCommand,
    UserKeyCommand,
)
from rotation_updater.domain.models import Team, User
from rotation_updater.ports.mappings import TeamRepository, UserRepository
from rotation_updater.ports.secrets import SecretStore
from rotation_updater.ports.slack import SlackUserGroupPort

Response = Dict[str, str]


def respond(payload: Optional[Any] = None) -> Response:
    """Wrap a payload in the ``{"body": <json>}`` envelope; None becomes ``{}``."""
    return {"body": json.dumps(payload if payload is not None else {})}


class RotationService:
    """Application service relaying VictorOps on-call changes to Slack user groups."""

    def __init__(
        self,
        teams: TeamRepository,
        users: UserRepository,
        secrets: SecretStore,
        slack: SlackUserGroupPort,
        slack_token_secret_name: str,
    ) -> None:
        self.teams = teams
        self.users = users
        self.secrets = secrets
        self.slack = slack
        self.slack_token_secret_name = slack_token_secret_name
        self.logger = logging.getLogger(__name__)

    # On-call relay -----------------------------------------------------------

    def update_on_call(self, command: UpdateOnCallCommand) -> Response:
        team = self.teams.get(command.group)
        if team is None:
            self.logger.info("Team not found for victorOpsGroupId: %s", command.group)
            return respond()

        user = self.users.get(command.user)
        if user is None:
            self.logger.info("User not found for victorOpsUserId: %s", command.user)
            return respond()

        token = self.secrets.get_secret(self.slack_token_secret_name)
        if token is None:
            self.logger.warning("Failed to retrieve secret: %s", self.slack_token_secret_name)
            return respond()

        result = self.slack.replace_membership(team.slack_user_group_id, user.slack_user_id, token)
        return respond(result)

    # Teams -------------------------------------------------------------------

    def put_team(self, command: PutTeamCommand) -> Response:
        team = Team(
            victor_ops_group_id=command.victor_ops_group_id,
            slack_user_group_id=command.slack_user_group_id,
        )
        self.teams.put(team)
        self.logger.info("Stored team %s -> %s", team.victor_ops_group_id, team.slack_user_group_id)
        return respond()

    def get_team(self, command: TeamKeyCommand) -> Response:
        team = self.teams.get(command.victor_ops_group_id)
        return respond(team.to_item() if team else None)

    def delete_team(self, command: TeamKeyCommand) -> Response:
        self.teams.delete(command.victor_ops_group_id)
        self.logger.info("Deleted team %s", command.victor_ops_group_id)
        return respond()

    # Users -------------------------------------------------------------------

    def put_user(self, command: PutUserCommand) -> Response:
        user = User(
            victor_ops_user_id=command.victor_ops_user_id,
            slack_user_id=command.slack_user_id,
        )
        self.users.put(user)
        self.logger.info("Stored user %s -> %s", user.victor_ops_user_id, user.slack_user_id)
        return respond()

    def get_user(self, command: UserKeyCommand) -> Response:
        user = self.users.get(command.victor_ops_user_id)
        return respond(user.to_item() if user else None)

    def delete_user(self, command: UserKeyCommand) -> Response:
        self.users.delete(command.victor_ops_user_id)
        self.logger.info("Deleted user %s", command.victor_ops_user_id)
        return respond()
