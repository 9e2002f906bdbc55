from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, List, Optional

import boto3

from rotation_updater.adapters.dynamodb.repository import DynamoDbTeamRepository, DynamoDbUserRepository
from rotation_updater.adapters.secrets_manager.client import SecretsManagerSecretStore
from rotation_updater.adapters.slack.client import SlackUserGroupClient
from rotation_updater.application.dispatcher import OperationDispatcher
from rotation_updater.application.services import Response, RotationService
from rotation_updater.config import ConfigurationError, Settings
from rotation_updater.infrastructure.persistence import InMemoryTeamRepository, InMemoryUserRepository
from rotation_updater.infrastructure.secrets.in_memory import InMemorySecretStore
from rotation_updater.ports.mappings import TeamRepository, UserRepository
from rotation_updater.ports.secrets import SecretStore
from rotation_updater.ports.slack import SlackUserGroupPort

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOCAL_SECRET_NAME = "local/slack-bot-token"


@dataclass
class RelayContext:
    """Client handles shared by every invocation handled by this process."""

    teams: TeamRepository
    users: UserRepository
    secrets: SecretStore
    slack: SlackUserGroupPort
    slack_token_secret_name: str

    def dispatcher(self) -> OperationDispatcher:
        service = RotationService(
            teams=self.teams,
            users=self.users,
            secrets=self.secrets,
            slack=self.slack,
            slack_token_secret_name=self.slack_token_secret_name,
        )
        return OperationDispatcher(service)

    def close(self) -> None:
        close = getattr(self.slack, "close", None)
        if close is not None:
            close()


def build_context(settings: Settings) -> RelayContext:
    """Wire the AWS-backed adapters described by ``settings``."""
    session = boto3.Session(region_name=settings.aws_region)
    dynamodb = session.client("dynamodb")
    secrets_manager = session.client("secretsmanager")
    return RelayContext(
        teams=DynamoDbTeamRepository(dynamodb, settings.teams_table),
        users=DynamoDbUserRepository(dynamodb, settings.users_table),
        secrets=SecretsManagerSecretStore(secrets_manager),
        slack=SlackUserGroupClient(
            base_url=settings.slack_api_base_url,
            timeout=settings.slack_timeout_seconds,
        ),
        slack_token_secret_name=settings.slack_token_secret_name,
    )


def build_in_memory_context(slack_token: Optional[str], slack: Optional[SlackUserGroupPort] = None) -> RelayContext:
    """Wire in-memory mappings and secrets; Slack calls are still real unless ``slack`` is given."""
    secrets = InMemorySecretStore()
    if slack_token:
        secrets.set_secret(LOCAL_SECRET_NAME, slack_token)
    return RelayContext(
        teams=InMemoryTeamRepository(),
        users=InMemoryUserRepository(),
        secrets=secrets,
        slack=slack or SlackUserGroupClient(),
        slack_token_secret_name=LOCAL_SECRET_NAME,
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # The Lambda runtime installs its own root handler, which makes basicConfig a no-op.
    logging.getLogger().setLevel(level.upper())


@lru_cache(maxsize=1)
def _process_dispatcher() -> OperationDispatcher:
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    logging.getLogger(__name__).info(
        "Starting rotation updater for tables '%s' and '%s'", settings.teams_table, settings.users_table
    )
    return build_context(settings).dispatcher()


def handler(event: Dict[str, Any], context: Any = None) -> Response:
    """AWS Lambda entry point."""
    return _process_dispatcher().dispatch(event)


def _read_events(source: str) -> List[Dict[str, Any]]:
    if source == "-":
        payload = json.load(sys.stdin)
    else:
        with open(source, "r") as f:
            payload = json.load(f)
    return payload if isinstance(payload, list) else [payload]


def main(argv: Optional[List[str]] = None) -> None:
    """
    Dispatch one event (or a JSON list of events) and print each response.

    By default the AWS adapters are used and the same environment variables as
    the Lambda are required. With ``--in-memory`` the mappings and the bot
    token live in memory for the duration of the run; the token is read from
    SLACK_BOT_TOKEN.
    """
    parser = argparse.ArgumentParser(prog="rotation-updater", description="Relay VictorOps on-call events to Slack user groups.")
    parser.add_argument("events", nargs="?", default="-", help="JSON file with the event(s); '-' reads stdin")
    parser.add_argument("--in-memory", action="store_true", help="use in-memory mappings and secrets")
    args = parser.parse_args(argv)

    if args.in_memory:
        configure_logging(os.environ.get("LOG_LEVEL", "INFO"))
        context = build_in_memory_context(os.environ.get("SLACK_BOT_TOKEN"))
    else:
        try:
            settings = Settings.from_env()
        except ConfigurationError as exc:
            raise SystemExit(str(exc))
        configure_logging(settings.log_level)
        context = build_context(settings)

    dispatcher = context.dispatcher()
    try:
        try:
            events = _read_events(args.events)
        except (OSError, ValueError) as exc:
            raise SystemExit(f"Failed to read events from {args.events}: {exc}")

        for event in events:
            print(json.dumps(dispatcher.dispatch(event)))
    finally:
        context.close()


if __name__ == "__main__":
    main()
