from __future__ import annotations

from typing import Dict, Optional

from rotation_updater.domain.models import Team, User
from rotation_updater.ports.mappings import TeamRepository, UserRepository


class InMemoryTeamRepository(TeamRepository):
    def __init__(self) -> None:
        self._storage: Dict[str, Team] = {}

    def get(self, victor_ops_group_id: str) -> Optional[Team]:
        return self._storage.get(victor_ops_group_id)

    def put(self, team: Team) -> None:
        self._storage[team.victor_ops_group_id] = team

    def delete(self, victor_ops_group_id: str) -> None:
        self._storage.pop(victor_ops_group_id, None)


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._storage: Dict[str, User] = {}

    def get(self, victor_ops_user_id: str) -> Optional[User]:
        return self._storage.get(victor_ops_user_id)

    def put(self, user: User) -> None:
        self._storage[user.victor_ops_user_id] = user

    def delete(self, victor_ops_user_id: str) -> None:
        self._storage.pop(victor_ops_user_id, None)
