"""
임시 메일 세션 유즈케이스

메일함 관리, 폴링, 메시지 선택, 도메인 카탈로그, 세션 저장소를 하나로 묶어
데이터 흐름을 연결합니다.

- 메일함 관리가 토큰을 만들면 폴러가 그 토큰으로 목록을 조회합니다.
- 폴러가 새 목록을 적용하면 선택기가 선택을 재검증합니다.
- 세션이 바뀌면 목록과 선택을 비우고 폴링을 재시작하거나 중지합니다.
"""

from typing import List, Optional, Union

from ..domain.entities import (
    Domain,
    MailboxState,
    MessageSummary,
    SelectedMessage,
    Session,
)
from ..domain.ports import LoggerPort, SessionStorePort, TempMailApiClientPort
from .domain_catalog import DomainCatalog
from .inbox_polling import DEFAULT_POLL_INTERVAL, InboxPoller
from .mailbox_management import MailboxController
from .message_selection import MessageSelector


class TempMailSession:
    """임시 메일 세션 유즈케이스"""

    def __init__(
        self,
        api_client: TempMailApiClientPort,
        session_store: SessionStorePort,
        logger: LoggerPort,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        notify_background_errors: bool = False,
    ):
        self.session_store = session_store
        self.logger = logger
        self.notify_background_errors = notify_background_errors
        self.notices: List[str] = []

        self.mailbox = MailboxController(api_client, session_store, logger)
        self.poller = InboxPoller(api_client, logger, interval=poll_interval)
        self.selector = MessageSelector(api_client, lambda: self.mailbox.token, logger)
        self.domain_catalog = DomainCatalog(api_client, logger)

        self.mailbox.add_listener(self._on_session_changed)
        self.poller.add_listener(self._on_messages_changed)
        self.poller.add_error_listener(self._on_poll_failed)

    # 조회용 속성
    @property
    def session(self) -> Session:
        return self.mailbox.session

    @property
    def state(self) -> MailboxState:
        return self.mailbox.state

    @property
    def error(self) -> str:
        return self.mailbox.error

    @property
    def messages(self) -> List[MessageSummary]:
        return self.poller.messages

    @property
    def selected(self) -> Optional[SelectedMessage]:
        return self.selector.selected

    @property
    def domains(self) -> List[Domain]:
        return self.domain_catalog.domains

    async def start(self) -> None:
        """저장된 세션을 복원하고 도메인 목록을 한 번 조회합니다."""
        self.logger.info("임시 메일 세션 시작")

        session = await self.session_store.load()
        self.mailbox.restore(session)

        await self.domain_catalog.fetch()
        if self.domain_catalog.last_error and self.notify_background_errors:
            self.notices.append(f"도메인 목록을 불러오지 못했습니다: {self.domain_catalog.last_error}")

    async def create_mailbox(self) -> Optional[Session]:
        """새 메일함을 생성하거나 재생성합니다."""
        return await self.mailbox.create()

    async def refresh(self) -> List[MessageSummary]:
        """메시지 목록을 즉시 새로 고칩니다."""
        return await self.poller.refresh()

    async def select(self, message: Union[str, MessageSummary]) -> Optional[SelectedMessage]:
        """
        메시지를 선택합니다.

        Args:
            message: 메시지 요약 또는 현재 목록에 있는 메시지 ID

        Raises:
            ValueError: 현재 목록에 없는 메시지 ID인 경우
        """
        if isinstance(message, str):
            summary = self.find_message(message)
            if summary is None:
                raise ValueError(f"메시지를 찾을 수 없습니다: {message}")
            message = summary

        return await self.selector.select(message)

    def find_message(self, message_id: str) -> Optional[MessageSummary]:
        """현재 목록에서 메시지를 찾습니다."""
        for message in self.poller.messages:
            if message.id == message_id:
                return message
        return None

    async def clear(self) -> None:
        """세션, 목록, 선택, 저장된 세션을 모두 비웁니다."""
        await self.mailbox.clear()

    def dismiss_error(self) -> None:
        """메일함 생성 오류를 닫습니다."""
        self.mailbox.dismiss_error()

    def dismiss_notices(self) -> None:
        """백그라운드 알림을 비웁니다."""
        self.notices.clear()

    async def aclose(self) -> None:
        """폴링을 중지하고 자원을 정리합니다."""
        await self.poller.aclose()
        self.logger.info("임시 메일 세션 종료")

    async def __aenter__(self) -> "TempMailSession":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def _on_session_changed(self, session: Session) -> None:
        self.selector.clear()

        if session.token:
            self.poller.clear_messages()
            self.poller.start_polling(session.token)
        else:
            self.poller.reset()

    def _on_messages_changed(self, messages: List[MessageSummary]) -> None:
        self.selector.reconcile(messages)

    def _on_poll_failed(self, error: Exception) -> None:
        if self.notify_background_errors:
            self.notices.append(f"메시지 목록을 새로 고치지 못했습니다: {str(error)}")
