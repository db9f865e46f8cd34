"""
CLI wiring tests.

Commands run through typer's CliRunner against the fake API and a
temporary sqlite file, so a mailbox created by one invocation is visible
to the next.
"""

import pytest
from typer.testing import CliRunner

from adapters.factory import AdapterFactory
from config.adapters import TestingConfig
from fakes import detail_payload, summary_payload
from main import app

runner = CliRunner()

CREATED = {"address": "a@b.com", "password": "secret", "token": "t", "account": {"id": 1}}


@pytest.fixture
def factory(tmp_path, api, monkeypatch):
    config = TestingConfig(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}",
        poll_interval_seconds=60,
    )
    factory = AdapterFactory(config)
    factory._api_client = api
    monkeypatch.setattr("adapters.cli.common.get_adapter_factory", lambda: factory)
    return factory


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert "1.0.0" in result.output


def test_show_without_mailbox(factory):
    result = runner.invoke(app, ["mailbox", "show"])

    assert result.exit_code == 0
    assert "mailbox new" in result.output


def test_new_then_show_uses_persisted_session(factory, api):
    api.create_responses.append(CREATED)

    created = runner.invoke(app, ["mailbox", "new"])
    shown = runner.invoke(app, ["mailbox", "show", "--password"])

    assert created.exit_code == 0
    assert "a@b.com" in created.output
    assert shown.exit_code == 0
    assert "a@b.com" in shown.output
    assert "secret" in shown.output


def test_new_failure_exits_with_error(factory, api):
    api.create_responses.append(RuntimeError("upstream down"))

    result = runner.invoke(app, ["mailbox", "new"])

    assert result.exit_code == 1
    assert "upstream down" in result.output


def test_inbox_list_and_read(factory, api):
    api.create_responses.append(CREATED)
    api.default_list_response = {"hydra:member": [summary_payload("m1", "Welcome")]}
    api.message_responses["m1"] = detail_payload("m1", "Welcome", html=None, text="plain body")

    runner.invoke(app, ["mailbox", "new"])
    listed = runner.invoke(app, ["inbox", "list"])
    read = runner.invoke(app, ["inbox", "read", "m1"])

    assert listed.exit_code == 0
    assert "Welcome" in listed.output
    assert read.exit_code == 0
    assert "plain body" in read.output
    assert ("get_message", ("t", "m1")) in api.calls


def test_read_unknown_message_fails(factory, api):
    api.create_responses.append(CREATED)

    runner.invoke(app, ["mailbox", "new"])
    result = runner.invoke(app, ["inbox", "read", "missing"])

    assert result.exit_code == 1


def test_clear_forgets_session(factory, api):
    api.create_responses.append(CREATED)

    runner.invoke(app, ["mailbox", "new"])
    cleared = runner.invoke(app, ["mailbox", "clear", "--force"])
    shown = runner.invoke(app, ["mailbox", "show"])

    assert cleared.exit_code == 0
    assert "a@b.com" not in shown.output


def test_domains(factory, api):
    api.domains_response = {"domains": ["mail.test"]}

    result = runner.invoke(app, ["mailbox", "domains"])

    assert result.exit_code == 0
    assert "mail.test" in result.output
