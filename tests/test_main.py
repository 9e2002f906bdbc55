import json

import pytest

from rotation_updater import main as entrypoint
from rotation_updater.adapters.dynamodb.repository import DynamoDbTeamRepository, DynamoDbUserRepository
from rotation_updater.adapters.secrets_manager.client import SecretsManagerSecretStore
from rotation_updater.adapters.slack.client import SlackUserGroupClient
from rotation_updater.config import Settings
from rotation_updater.domain.models import Team, User
from rotation_updater.infrastructure.persistence.in_memory import InMemoryTeamRepository, InMemoryUserRepository
from rotation_updater.infrastructure.secrets.in_memory import InMemorySecretStore


class RecordingSlack:
    def __init__(self) -> None:
        self.calls = []

    def replace_membership(self, user_group_id, user_id, token):
        self.calls.append((user_group_id, user_id, token))
        return {"ok": True}


def test_build_context_wires_aws_adapters():
    settings = Settings(
        teams_table="teams",
        users_table="users",
        slack_token_secret_name="slack/bot-token",
        aws_region="us-east-1",
        slack_timeout_seconds=3,
    )

    context = entrypoint.build_context(settings)

    assert isinstance(context.teams, DynamoDbTeamRepository)
    assert context.teams.table.table_name == "teams"
    assert isinstance(context.users, DynamoDbUserRepository)
    assert context.users.table.table_name == "users"
    assert isinstance(context.secrets, SecretsManagerSecretStore)
    assert isinstance(context.slack, SlackUserGroupClient)
    assert context.slack_token_secret_name == "slack/bot-token"


def test_lambda_handler_uses_process_dispatcher(monkeypatch):
    slack = RecordingSlack()
    context = entrypoint.build_in_memory_context("xoxb-local", slack=slack)
    context.teams.put(Team(victor_ops_group_id="G1", slack_user_group_id="SG1"))
    context.users.put(User(victor_ops_user_id="U1", slack_user_id="S1"))
    dispatcher = context.dispatcher()
    monkeypatch.setattr(entrypoint, "_process_dispatcher", lambda: dispatcher)

    response = entrypoint.handler({"operation": "updateOnCall", "group": "G1", "user": "U1"}, None)

    assert json.loads(response["body"]) == {"ok": True}
    assert slack.calls == [("SG1", "S1", "xoxb-local")]


def test_process_dispatcher_is_built_once(monkeypatch):
    monkeypatch.setenv("TEAMS_TABLE", "teams")
    monkeypatch.setenv("USERS_TABLE", "users")
    monkeypatch.setenv("SLACK_TOKEN_SECRET_NAME", "slack/bot-token")
    monkeypatch.setenv("AWS_REGION", "us-east-1")
    entrypoint._process_dispatcher.cache_clear()
    try:
        assert entrypoint._process_dispatcher() is entrypoint._process_dispatcher()
    finally:
        entrypoint._process_dispatcher.cache_clear()


def test_cli_runs_event_list_in_memory(tmp_path, capsys, monkeypatch):
    monkeypatch.delenv("SLACK_BOT_TOKEN", raising=False)
    events = tmp_path / "events.json"
    events.write_text(
        json.dumps(
            [
                {"operation": "putTeam", "victorOpsGroupId": "G1", "slackUserGroupId": "SG1"},
                {"operation": "getTeam", "victorOpsGroupId": "G1"},
                {"operation": "updateOnCall", "group": "G1", "user": "U1"},
            ]
        )
    )

    entrypoint.main(["--in-memory", str(events)])

    lines = capsys.readouterr().out.splitlines()
    assert [json.loads(json.loads(line)["body"]) for line in lines] == [
        {},
        {"victorOpsGroupId": "G1", "slackUserGroupId": "SG1"},
        {},
    ]


def test_cli_requires_configuration(monkeypatch):
    for name in ("TEAMS_TABLE", "USERS_TABLE", "SLACK_TOKEN_SECRET_NAME"):
        monkeypatch.delenv(name, raising=False)

    with pytest.raises(SystemExit) as excinfo:
        entrypoint.main(["-"])

    assert "Missing required environment variables" in str(excinfo.value)


def test_cli_rejects_unreadable_events(tmp_path):
    with pytest.raises(SystemExit):
        entrypoint.main(["--in-memory", str(tmp_path / "missing.json")])


class ClosableSlack(RecordingSlack):
    def __init__(self) -> None:
        super().__init__()
        self.closed = False

    def close(self):
        self.closed = True


def test_context_close_releases_slack_client():
    slack = ClosableSlack()
    context = entrypoint.build_in_memory_context("xoxb-local", slack=slack)

    context.close()

    assert slack.closed


def test_context_close_tolerates_slack_without_close():
    context = entrypoint.build_in_memory_context(None, slack=RecordingSlack())

    context.close()


def test_cli_closes_context_after_run(tmp_path, monkeypatch):
    slack = ClosableSlack()
    monkeypatch.setattr(
        entrypoint,
        "build_in_memory_context",
        lambda token: entrypoint.RelayContext(
            teams=InMemoryTeamRepository(),
            users=InMemoryUserRepository(),
            secrets=InMemorySecretStore(),
            slack=slack,
            slack_token_secret_name="unused",
        ),
    )
    events = tmp_path / "events.json"
    events.write_text(json.dumps({"operation": "getUser", "victorOpsUserId": "U1"}))

    entrypoint.main(["--in-memory", str(events)])

    assert slack.closed


def test_cli_closes_context_when_events_are_unreadable(tmp_path, monkeypatch):
    slack = ClosableSlack()
    build = entrypoint.build_in_memory_context
    monkeypatch.setattr(entrypoint, "build_in_memory_context", lambda token: build(token, slack=slack))

    with pytest.raises(SystemExit):
        entrypoint.main(["--in-memory", str(tmp_path / "missing.json")])

    assert slack.closed
