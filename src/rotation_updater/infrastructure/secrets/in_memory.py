from __future__ import annotations

from typing import Dict, Optional

from rotation_updater.ports.secrets import SecretStore


class InMemorySecretStore(SecretStore):
    """Secret store backed by a plain dict, for local runs."""

    def __init__(self, secrets: Optional[Dict[str, str]] = None) -> None:
        self._secrets: Dict[str, str] = dict(secrets or {})

    def get_secret(self, name: str) -> Optional[str]:
        return self._secrets.get(name)

    def set_secret(self, name: str, value: str) -> None:
        self._secrets[name] = value
