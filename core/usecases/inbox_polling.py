"""
받은편지함 폴링 유즈케이스

활성 토큰이 있는 동안 일정 간격으로 메시지 목록을 조회합니다.
조회 실패 시 기존 목록을 유지하며, 토큰이 바뀐 뒤 도착한 응답은 폐기합니다.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, List, Optional

from ..domain.entities import MessageSummary
from ..domain.ports import LoggerPort, TempMailApiClientPort

MessagesListener = Callable[[List[MessageSummary]], None]
ErrorListener = Callable[[Exception], None]

DEFAULT_POLL_INTERVAL = 10.0


class InboxPoller:
    """받은편지함 폴링 유즈케이스"""

    def __init__(
        self,
        api_client: TempMailApiClientPort,
        logger: LoggerPort,
        interval: float = DEFAULT_POLL_INTERVAL,
    ):
        if interval <= 0:
            raise ValueError("폴링 간격은 0보다 커야 합니다")

        self.api_client = api_client
        self.logger = logger
        self.interval = interval

        self.token: str = ""
        self.messages: List[MessageSummary] = []
        self.messages_loading: bool = False
        self.last_error: Optional[str] = None

        # 토큰 변경/중지 시 증가
        self._generation: int = 0
        self._task: Optional[asyncio.Task] = None
        self._in_flight: Optional[asyncio.Task] = None
        self._in_flight_generation: int = -1
        self._listeners: List[MessagesListener] = []
        self._error_listeners: List[ErrorListener] = []

    def add_listener(self, listener: MessagesListener) -> None:
        """새 목록이 적용될 때 호출될 리스너를 등록합니다."""
        self._listeners.append(listener)

    def add_error_listener(self, listener: ErrorListener) -> None:
        """목록 조회 실패 시 호출될 리스너를 등록합니다."""
        self._error_listeners.append(listener)

    def is_polling(self) -> bool:
        """폴링 작업이 실행 중인지 확인"""
        return self._task is not None and not self._task.done()

    async def refresh(self) -> List[MessageSummary]:
        """
        현재 메시지 목록을 조회합니다.

        같은 토큰으로 진행 중인 요청이 있으면 그 결과를 함께 기다립니다.
        실패하면 오류를 기록하고 기존 목록을 그대로 반환합니다.

        Returns:
            현재 메시지 목록
        """
        if not self.token:
            return self.messages

        if (
            self._in_flight is not None
            and not self._in_flight.done()
            and self._in_flight_generation == self._generation
        ):
            self.logger.debug("진행 중인 메시지 목록 조회에 합류합니다")
            await asyncio.shield(self._in_flight)
            return self.messages

        self._in_flight_generation = self._generation
        self._in_flight = asyncio.ensure_future(
            self._fetch(self.token, self._generation)
        )
        await asyncio.shield(self._in_flight)
        return self.messages

    async def _fetch(self, token: str, generation: int) -> None:
        self.messages_loading = True
        try:
            data = await self.api_client.list_messages(token)
            members = (data or {}).get("hydra:member") or []
            messages = [MessageSummary(**item) for item in members]
        except Exception as e:
            if generation == self._generation:
                self.last_error = str(e)
                self.logger.error(f"메시지 목록 조회 실패: {str(e)}")
                for listener in list(self._error_listeners):
                    listener(e)
            else:
                self.logger.debug(f"폐기된 메시지 목록 조회 실패: {str(e)}")
            return
        finally:
            if generation == self._generation:
                self.messages_loading = False

        if generation != self._generation:
            self.logger.debug("토큰이 변경되어 메시지 목록 응답을 폐기합니다")
            return

        self.messages = messages
        self.last_error = None
        self.logger.debug(f"메시지 목록 조회 성공: {len(messages)}개 메시지")

        for listener in list(self._listeners):
            listener(messages)

    def start_polling(self, token: str) -> None:
        """
        주기적인 메시지 목록 조회를 시작합니다.

        시작 즉시 한 번 조회하고, 이후 interval 초마다 조회합니다.
        같은 토큰으로 이미 폴링 중이면 아무 것도 하지 않습니다.
        """
        if not token:
            self.stop_polling()
            return

        if token == self.token and self.is_polling():
            self.logger.debug("이미 같은 토큰으로 폴링 중입니다")
            return

        if token != self.token:
            self.messages = []
            self.last_error = None

        self.stop_polling()
        self.token = token
        self._task = asyncio.ensure_future(self._run(self._generation))
        self.logger.info(f"메시지 폴링 시작: 간격 {self.interval}초")

    async def _run(self, generation: int) -> None:
        while generation == self._generation:
            await self.refresh()
            await asyncio.sleep(self.interval)

    def stop_polling(self) -> None:
        """주기적인 조회를 중지합니다. 여러 번 호출해도 안전합니다."""
        self._generation += 1
        self.messages_loading = False

        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            self.logger.info("메시지 폴링 중지")

    def clear_messages(self) -> None:
        """메시지 목록을 비웁니다."""
        self.messages = []
        self.last_error = None

    def reset(self) -> None:
        """폴링을 중지하고 토큰과 목록을 비웁니다."""
        self.stop_polling()
        self.token = ""
        self.clear_messages()

    async def aclose(self) -> None:
        """폴링을 중지하고 취소된 작업이 끝날 때까지 기다립니다."""
        task = self._task
        self.stop_polling()
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                pass

    @asynccontextmanager
    async def polling(self, token: str) -> AsyncIterator["InboxPoller"]:
        """블록을 벗어날 때 항상 폴링을 중지하는 컨텍스트 매니저"""
        self.start_polling(token)
        try:
            yield self
        finally:
            await self.aclose()
