from __future__ import annotations

import logging
from typing import Any, Optional

from botocore.exceptions import BotoCoreError, ClientError

from rotation_updater.ports.secrets import SecretStore

logger = logging.getLogger(__name__)


class SecretsManagerSecretStore(SecretStore):
    """Reads string secrets from AWS Secrets Manager.

    Retrieval problems are logged and reported as a missing secret; callers
    decide whether they can continue without it.
    """

    def __init__(self, client: Any) -> None:
        self.client = client

    def get_secret(self, name: str) -> Optional[str]:
        try:
            response = self.client.get_secret_value(SecretId=name)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "Unknown")
            logger.error(f"Failed to retrieve secret {name} from Secrets Manager ({code}): {e}")
            return None
        except BotoCoreError as e:
            logger.error(f"Failed to reach Secrets Manager for secret {name}: {e}")
            return None

        value = response.get("SecretString")
        if value is None:
            logger.warning(f"Secret {name} has no string value")
        return value
