from __future__ import annotations

import os
from typing import List, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError

REQUIRED_ENV_VARS = [
    "TEAMS_TABLE",
    "USERS_TABLE",
    "SLACK_TOKEN_SECRET_NAME",
]


class ConfigurationError(RuntimeError):
    pass


def _missing_env(env: Mapping[str, str], vars_to_check: List[str]) -> List[str]:
    return [name for name in vars_to_check if not env.get(name)]


class Settings(BaseModel):
    """Process configuration, read once from the environment."""

    teams_table: str
    users_table: str
    slack_token_secret_name: str
    aws_region: Optional[str] = None
    slack_api_base_url: str = "https://slack.com/api"
    slack_timeout_seconds: float = Field(default=10.0, gt=0)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Required:
        - TEAMS_TABLE
        - USERS_TABLE
        - SLACK_TOKEN_SECRET_NAME

        Optional:
        - AWS_REGION             (default: boto3 resolution)
        - SLACK_API_BASE_URL     (default: https://slack.com/api)
        - SLACK_TIMEOUT_SECONDS  (default: 10)
        - LOG_LEVEL              (default: INFO)
        """
        env = os.environ if env is None else env
        missing = _missing_env(env, REQUIRED_ENV_VARS)
        if missing:
            joined = ", ".join(missing)
            raise ConfigurationError(f"Missing required environment variables: {joined}")

        optional = {
            "aws_region": env.get("AWS_REGION"),
            "slack_api_base_url": env.get("SLACK_API_BASE_URL"),
            "slack_timeout_seconds": env.get("SLACK_TIMEOUT_SECONDS"),
            "log_level": env.get("LOG_LEVEL"),
        }
        try:
            return cls(
                teams_table=env["TEAMS_TABLE"],
                users_table=env["USERS_TABLE"],
                slack_token_secret_name=env["SLACK_TOKEN_SECRET_NAME"],
                **{name: value for name, value in optional.items() if value},
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
