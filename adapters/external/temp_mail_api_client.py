"""
임시 메일 백엔드 API 클라이언트 어댑터

임시 메일 백엔드(/api/...)와의 통신을 담당하는 어댑터입니다.
모든 요청/응답 본문은 JSON이며, 토큰은 쿼리 파라미터로 전달합니다.
"""

from typing import Optional
from urllib.parse import quote

import httpx

from core.domain.ports import LoggerPort, TempMailApiClientPort, TempMailApiError


class TempMailApiClientAdapter(TempMailApiClientPort):
    """임시 메일 백엔드 API 클라이언트 어댑터"""

    def __init__(
        self,
        logger: LoggerPort,
        base_url: str = "http://localhost:8000",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.logger = logger
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    @staticmethod
    def _check_response(operation: str, response: httpx.Response) -> dict:
        if not response.is_success:
            raise TempMailApiError(operation, response.status_code, response.text)
        return response.json()

    async def list_domains(self) -> dict:
        """도메인 목록을 조회합니다."""
        self.logger.debug("도메인 목록 조회")

        url = f"{self.base_url}/api/domains"

        async with self._client() as client:
            response = await client.get(url)

            result = self._check_response("도메인 목록 조회", response)
            self.logger.debug(f"도메인 목록 조회 성공: {len(result.get('domains') or [])}개 도메인")
            return result

    async def create_mailbox(self) -> dict:
        """새 메일함을 생성합니다."""
        self.logger.debug("메일함 생성 요청")

        url = f"{self.base_url}/api/temp-mail/new"

        async with self._client() as client:
            response = await client.post(url, json={})

            result = self._check_response("메일함 생성", response)
            self.logger.debug(f"메일함 생성 성공: {result.get('address', 'N/A')}")
            return result

    async def list_messages(self, token: str) -> dict:
        """메시지 목록을 조회합니다."""
        self.logger.debug("메시지 목록 조회")

        url = f"{self.base_url}/api/temp-mail/messages"

        async with self._client() as client:
            response = await client.get(url, params={"token": token})

            result = self._check_response("메시지 목록 조회", response)
            message_count = len(result.get("hydra:member") or [])
            self.logger.debug(f"메시지 목록 조회 성공: {message_count}개 메시지")
            return result

    async def get_message(self, token: str, message_id: str) -> dict:
        """특정 메시지를 조회합니다."""
        self.logger.debug(f"메시지 조회: message_id={message_id}")

        url = f"{self.base_url}/api/temp-mail/messages/{quote(str(message_id), safe='')}"

        async with self._client() as client:
            response = await client.get(url, params={"token": token})

            result = self._check_response("메시지 조회", response)
            self.logger.debug(f"메시지 조회 성공: {result.get('subject', 'N/A')}")
            return result
