from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _Mapping(BaseModel):
    """Stored with the camelCase attribute names used on the wire."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_item(self) -> dict:
        return self.model_dump(by_alias=True)


class Team(_Mapping):
    """A VictorOps team and the Slack user group that mirrors its on-call person."""

    victor_ops_group_id: str = Field(alias="victorOpsGroupId", min_length=1)
    slack_user_group_id: str = Field(alias="slackUserGroupId", min_length=1)


class User(_Mapping):
    """A person known to VictorOps and to Slack."""

    victor_ops_user_id: str = Field(alias="victorOpsUserId", min_length=1)
    slack_user_id: str = Field(alias="slackUserId", min_length=1)
