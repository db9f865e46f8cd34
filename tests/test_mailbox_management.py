"""
Tests for mailbox lifecycle management.
"""

import asyncio

import pytest

from core.domain.entities import MailboxState, Session
from core.domain.ports import TempMailApiError
from core.usecases.mailbox_management import DEFAULT_CREATE_ERROR, MailboxController
from fakes import settle

CREATED = {"address": "a@b.com", "password": "p", "token": "t", "account": {"id": 1}}
REGENERATED = {"address": "c@d.com", "password": "p2", "token": "t2", "account": None}


@pytest.fixture
def controller(api, store, logger):
    return MailboxController(api, store, logger)


class TestCreate:
    """Mailbox creation and regeneration."""

    def test_create_from_empty(self, controller, api, store):
        api.create_responses.append(CREATED)

        session = asyncio.run(controller.create())

        assert session == Session(address="a@b.com", password="p", token="t", account={"id": 1})
        assert controller.session == session
        assert controller.state == MailboxState.ACTIVE
        assert controller.error == ""
        assert asyncio.run(store.load()) == session

    def test_regenerate_replaces_whole_session(self, controller, api, store):
        api.create_responses.extend([CREATED, REGENERATED])

        async def scenario():
            await controller.create()
            return await controller.create()

        session = asyncio.run(scenario())

        assert session == Session(address="c@d.com", password="p2", token="t2")
        assert controller.session.account is None
        assert asyncio.run(store.load()) == session

    def test_failure_from_empty_rolls_back_and_reports(self, controller, api, store, logger):
        api.create_responses.append(TempMailApiError("메일함 생성", 503, "upstream down"))

        result = asyncio.run(controller.create())

        assert result is None
        assert controller.state == MailboxState.EMPTY
        assert controller.session == Session.empty()
        assert "upstream down" in controller.error
        assert store.records == {}
        assert len(logger.messages("error")) == 1

    def test_failure_while_regenerating_keeps_prior_session(self, controller, api, store):
        api.create_responses.extend([CREATED, TempMailApiError("메일함 생성", 500, "boom")])

        async def scenario():
            first = await controller.create()
            second = await controller.create()
            return first, second

        first, second = asyncio.run(scenario())

        assert second is None
        assert controller.state == MailboxState.ACTIVE
        assert controller.session == first
        assert controller.error
        assert asyncio.run(store.load()) == first

    @pytest.mark.parametrize(
        "response",
        [
            {"address": "a@b.com", "password": "p", "token": ""},
            {"address": "a@b.com", "token": "t"},
            {"password": "p", "token": "t"},
            ["not", "a", "dict"],
        ],
    )
    def test_incomplete_response_is_a_failure(self, controller, api, response):
        api.create_responses.append(response)

        assert asyncio.run(controller.create()) is None
        assert controller.session == Session.empty()
        assert controller.state == MailboxState.EMPTY
        assert controller.error

    def test_error_without_message_uses_default(self, controller, api):
        api.create_responses.append(RuntimeError())

        asyncio.run(controller.create())

        assert controller.error == DEFAULT_CREATE_ERROR

    def test_new_attempt_clears_previous_error(self, controller, api):
        api.create_responses.extend([RuntimeError("first"), CREATED])

        async def scenario():
            await controller.create()
            assert controller.error == "first"
            await controller.create()

        asyncio.run(scenario())

        assert controller.error == ""

    def test_dismiss_error(self, controller, api):
        api.create_responses.append(RuntimeError("boom"))
        asyncio.run(controller.create())

        controller.dismiss_error()

        assert controller.error == ""


class TestCreateConcurrency:
    """Only one creation request may be in flight."""

    def test_second_create_is_coalesced(self, controller, api):
        api.create_responses.extend([CREATED, REGENERATED])

        async def scenario():
            api.create_gate = asyncio.Event()
            first = asyncio.ensure_future(controller.create())
            await settle()
            assert controller.state == MailboxState.CREATING

            second = asyncio.ensure_future(controller.create())
            await settle()
            api.create_gate.set()
            return await first, await second

        first, second = asyncio.run(scenario())

        assert api.count("create_mailbox") == 1
        assert first == second
        assert controller.session.address == "a@b.com"

    def test_clear_during_creation_discards_result(self, controller, api, store):
        api.create_responses.append(CREATED)

        async def scenario():
            api.create_gate = asyncio.Event()
            pending = asyncio.ensure_future(controller.create())
            await settle()

            await controller.clear()
            api.create_gate.set()
            return await pending

        result = asyncio.run(scenario())

        assert result is None
        assert controller.state == MailboxState.EMPTY
        assert controller.session == Session.empty()
        assert store.records == {}

    def test_create_after_clear_sends_new_request(self, controller, api, store):
        api.create_responses.extend([CREATED, REGENERATED])

        async def scenario():
            api.create_gate = asyncio.Event()
            stale = asyncio.ensure_future(controller.create())
            await settle()

            await controller.clear()
            fresh = asyncio.ensure_future(controller.create())
            await settle()
            assert controller.state == MailboxState.CREATING

            api.create_gate.set()
            return await stale, await fresh

        stale, fresh = asyncio.run(scenario())

        assert api.count("create_mailbox") == 2
        assert stale is None
        assert fresh == Session(address="c@d.com", password="p2", token="t2")
        assert controller.session == fresh
        assert controller.state == MailboxState.ACTIVE
        assert controller.error == ""
        assert asyncio.run(store.load()) == fresh


class TestClearAndRestore:
    """Clearing and startup restoration."""

    def test_clear_wipes_session_and_persisted_state(self, controller, api, store):
        api.create_responses.append(CREATED)

        async def scenario():
            await controller.create()
            await controller.clear()
            return await store.load()

        assert asyncio.run(scenario()) == Session.empty()
        assert controller.session == Session.empty()
        assert controller.state == MailboxState.EMPTY

    def test_clear_from_empty(self, controller):
        asyncio.run(controller.clear())

        assert controller.state == MailboxState.EMPTY

    def test_restore_active_session(self, controller, active_session):
        controller.restore(active_session)

        assert controller.state == MailboxState.ACTIVE
        assert controller.token == "t"

    def test_restore_empty_session_stays_empty(self, controller):
        generation = controller.token_generation

        controller.restore(Session.empty())

        assert controller.state == MailboxState.EMPTY
        assert controller.token_generation == generation

    def test_listeners_see_every_session_change(self, controller, api):
        api.create_responses.append(CREATED)
        seen = []
        controller.add_listener(lambda session: seen.append(session.token))

        async def scenario():
            await controller.create()
            await controller.clear()

        asyncio.run(scenario())

        assert seen == ["t", ""]

    def test_token_generation_increases_on_each_change(self, controller, api):
        api.create_responses.extend([CREATED, REGENERATED])

        async def scenario():
            generations = [controller.token_generation]
            await controller.create()
            generations.append(controller.token_generation)
            await controller.create()
            generations.append(controller.token_generation)
            await controller.clear()
            generations.append(controller.token_generation)
            return generations

        generations = asyncio.run(scenario())

        assert generations == sorted(set(generations))
