"""
테스트용 가짜 포트 구현

네트워크 없이 응답 순서와 도착 시점을 제어할 수 있는 API 클라이언트와
로그를 기록하는 로거를 제공합니다.
"""

import asyncio
from collections import deque
from typing import Any, Deque, Dict, List, Optional, Tuple

from core.domain.ports import LoggerPort, TempMailApiClientPort, TempMailApiError


class RecordingLogger(LoggerPort):
    """기록만 하는 로거"""

    def __init__(self):
        self.records: List[Tuple[str, str]] = []

    def info(self, message: str, **kwargs) -> None:
        self.records.append(("info", message))

    def warning(self, message: str, **kwargs) -> None:
        self.records.append(("warning", message))

    def error(self, message: str, **kwargs) -> None:
        self.records.append(("error", message))

    def debug(self, message: str, **kwargs) -> None:
        self.records.append(("debug", message))

    def messages(self, level: str) -> List[str]:
        return [message for lvl, message in self.records if lvl == level]


class FakeTempMailApi(TempMailApiClientPort):
    """
    가짜 임시 메일 API

    응답 값이 Exception이면 해당 예외를 발생시킵니다. gate가 설정되어 있으면
    이벤트가 set될 때까지 응답을 보류합니다.
    """

    def __init__(self):
        self.domains_response: Any = {"domains": []}
        self.create_responses: Deque[Any] = deque()
        self.list_responses: Deque[Any] = deque()
        self.default_list_response: Any = {"hydra:member": []}
        self.message_responses: Dict[str, Any] = {}

        self.create_gate: Optional[asyncio.Event] = None
        self.list_gates: Deque[asyncio.Event] = deque()
        self.message_gates: Dict[str, asyncio.Event] = {}

        self.calls: List[Tuple[str, tuple]] = []

    def count(self, name: str) -> int:
        return sum(1 for call, _ in self.calls if call == name)

    @staticmethod
    def _respond(value: Any) -> Any:
        if isinstance(value, Exception):
            raise value
        return value

    async def list_domains(self) -> dict:
        self.calls.append(("list_domains", ()))
        return self._respond(self.domains_response)

    async def create_mailbox(self) -> dict:
        self.calls.append(("create_mailbox", ()))
        if self.create_gate is not None:
            await self.create_gate.wait()
        if not self.create_responses:
            raise TempMailApiError("메일함 생성", 500, "no response configured")
        return self._respond(self.create_responses.popleft())

    async def list_messages(self, token: str) -> dict:
        self.calls.append(("list_messages", (token,)))
        # 호출 시점에 응답을 결정해 두어야 도착 순서와 무관하게 요청-응답이 짝지어짐
        response = self.list_responses.popleft() if self.list_responses else self.default_list_response
        if self.list_gates:
            await self.list_gates.popleft().wait()
        return self._respond(response)

    async def get_message(self, token: str, message_id: str) -> dict:
        self.calls.append(("get_message", (token, message_id)))
        gate = self.message_gates.get(message_id)
        if gate is not None:
            await gate.wait()
        if message_id not in self.message_responses:
            raise TempMailApiError("메시지 조회", 404, "not found")
        return self._respond(self.message_responses[message_id])


def summary_payload(message_id: str, subject: str = "hi", **extra) -> dict:
    """메시지 목록 항목 응답"""
    payload = {
        "id": message_id,
        "from": {"name": "Sender", "address": "sender@example.com"},
        "subject": subject,
        "intro": f"intro {message_id}",
        "createdAt": "2024-05-01T10:00:00+00:00",
    }
    payload.update(extra)
    return payload


def detail_payload(message_id: str, subject: str = "hi", **extra) -> dict:
    """전체 메시지 응답"""
    payload = summary_payload(message_id, subject)
    payload.update(
        {
            "to": [{"address": "a@b.com"}],
            "html": [f"<p>body {message_id}</p>"],
            "text": f"body {message_id}",
        }
    )
    payload.update(extra)
    return payload


async def settle(rounds: int = 20) -> None:
    """대기 중인 작업들이 진행되도록 이벤트 루프를 몇 차례 양보합니다."""
    for _ in range(rounds):
        await asyncio.sleep(0)
