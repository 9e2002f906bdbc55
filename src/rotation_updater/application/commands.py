from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _Command(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class UpdateOnCallCommand(_Command):
    group: str = Field(..., description="VictorOps group identifier")
    user: str = Field(..., description="VictorOps user identifier")


class PutTeamCommand(_Command):
    victor_ops_group_id: str = Field(alias="victorOpsGroupId", description="VictorOps group identifier")
    slack_user_group_id: str = Field(alias="slackUserGroupId", description="Slack user group identifier")


class TeamKeyCommand(_Command):
    victor_ops_group_id: str = Field(alias="victorOpsGroupId", description="VictorOps group identifier")


class PutUserCommand(_Command):
    victor_ops_user_id: str = Field(alias="victorOpsUserId", description="VictorOps user identifier")
    slack_user_id: str = Field(alias="slackUserId", description="Slack user identifier")


class UserKeyCommand(_Command):
    victor_ops_user_id: str = Field(alias="victorOpsUserId", description="VictorOps user identifier")
