from typing import Optional

from rotation_updater.domain.models import Team, User


class MappingStoreError(Exception):
    """Raised when the backing store cannot complete a mapping operation."""


class TeamRepository:
    """Abstract storage for VictorOps team to Slack user group mappings."""

    def get(self, victor_ops_group_id: str) -> Optional[Team]:
        raise NotImplementedError

    def put(self, team: Team) -> None:
        raise NotImplementedError

    def delete(self, victor_ops_group_id: str) -> None:
        raise NotImplementedError


class UserRepository:
    """Abstract storage for VictorOps user to Slack user mappings."""

    def get(self, victor_ops_user_id: str) -> Optional[User]:
        raise NotImplementedError

    def put(self, user: User) -> None:
        raise NotImplementedError

    def delete(self, victor_ops_user_id: str) -> None:
        raise NotImplementedError
