"""
Tests for the HTTP adapter, using httpx.MockTransport.
"""

import asyncio
import json

import httpx
import pytest

from adapters.external.temp_mail_api_client import TempMailApiClientAdapter
from core.domain.ports import TempMailApiError


def make_client(handler, logger):
    return TempMailApiClientAdapter(
        logger=logger,
        base_url="http://backend.test/",
        transport=httpx.MockTransport(handler),
    )


class TestTempMailApiClient:

    def test_list_domains(self, logger):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"domains": [{"domain": "a.com"}]})

        result = asyncio.run(make_client(handler, logger).list_domains())

        assert result == {"domains": [{"domain": "a.com"}]}
        assert requests[0].method == "GET"
        assert str(requests[0].url) == "http://backend.test/api/domains"

    def test_create_mailbox_posts_empty_json(self, logger):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(
                200,
                json={"address": "a@b.com", "password": "p", "token": "t", "account": {"id": 1}},
            )

        result = asyncio.run(make_client(handler, logger).create_mailbox())

        assert result["token"] == "t"
        assert requests[0].method == "POST"
        assert requests[0].url.path == "/api/temp-mail/new"
        assert json.loads(requests[0].content) == {}

    def test_create_mailbox_failure_carries_response_text(self, logger):
        def handler(request):
            return httpx.Response(502, text="provider unavailable")

        with pytest.raises(TempMailApiError) as exc_info:
            asyncio.run(make_client(handler, logger).create_mailbox())

        assert exc_info.value.status_code == 502
        assert exc_info.value.detail == "provider unavailable"
        assert "provider unavailable" in str(exc_info.value)
        # 오류 로그는 유즈케이스에서 한 번만 남김
        assert logger.messages("error") == []

    def test_list_messages_passes_token_as_query(self, logger):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"hydra:member": []})

        asyncio.run(make_client(handler, logger).list_messages("tok en/&"))

        assert requests[0].url.path == "/api/temp-mail/messages"
        assert requests[0].url.params["token"] == "tok en/&"

    def test_get_message(self, logger):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"id": "abc", "subject": "hi"})

        result = asyncio.run(make_client(handler, logger).get_message("t", "abc"))

        assert result["subject"] == "hi"
        assert requests[0].url.path == "/api/temp-mail/messages/abc"
        assert requests[0].url.params["token"] == "t"

    @pytest.mark.parametrize("status", [400, 401, 404, 500])
    def test_non_success_raises(self, logger, status):
        def handler(request):
            return httpx.Response(status, text="nope")

        with pytest.raises(TempMailApiError) as exc_info:
            asyncio.run(make_client(handler, logger).list_messages("t"))

        assert exc_info.value.status_code == status

    def test_transport_error_propagates(self, logger):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(httpx.HTTPError):
            asyncio.run(make_client(handler, logger).list_domains())
