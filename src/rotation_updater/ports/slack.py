from __future__ import annotations

from typing import Optional, Protocol


class SlackUserGroupPort(Protocol):
    """Output port for changing Slack user group membership."""

    def replace_membership(self, user_group_id: str, user_id: str, token: str) -> Optional[dict]:
        ...
