from __future__ import annotations

from typing import Optional, Protocol


class SecretStore(Protocol):
    """Read access to named secrets such as the Slack bot token."""

    def get_secret(self, name: str) -> Optional[str]:
        """Return the current value of the secret, or None if it cannot be read."""
        ...
