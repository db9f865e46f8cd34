"""
메일함 관리 유즈케이스

임시 메일함의 생성, 재생성, 초기화 등 세션 수명 주기를 관리합니다.
상태 전이: EMPTY → CREATING → ACTIVE → (CREATING | EMPTY)
"""

import asyncio
from typing import Callable, List, Optional

from ..domain.entities import MailboxState, Session
from ..domain.ports import (
    LoggerPort,
    SessionStorePort,
    TempMailApiClientPort,
)

SessionListener = Callable[[Session], None]

DEFAULT_CREATE_ERROR = "Failed to create mailbox"


class MailboxController:
    """메일함 관리 유즈케이스"""

    def __init__(
        self,
        api_client: TempMailApiClientPort,
        session_store: SessionStorePort,
        logger: LoggerPort,
    ):
        self.api_client = api_client
        self.session_store = session_store
        self.logger = logger

        self.session: Session = Session.empty()
        self.state: MailboxState = MailboxState.EMPTY
        self.error: str = ""
        # 세션이 교체될 때마다 증가하며, 늦게 도착한 응답을 걸러내는 데 사용
        self.token_generation: int = 0

        self._create_task: Optional[asyncio.Task] = None
        self._create_generation: int = -1
        self._listeners: List[SessionListener] = []

    @property
    def token(self) -> str:
        return self.session.token

    def add_listener(self, listener: SessionListener) -> None:
        """세션 변경 리스너를 등록합니다."""
        self._listeners.append(listener)

    def restore(self, session: Session) -> None:
        """
        저장소에서 읽은 세션으로 초기 상태를 설정합니다.

        활성 세션이면 ACTIVE, 그렇지 않으면 EMPTY 상태를 유지합니다.
        """
        if not session.is_active():
            self.logger.debug("복원할 세션이 없습니다")
            return

        self.logger.info(f"세션 복원: {session.address}")
        self._replace_session(session, MailboxState.ACTIVE)

    async def create(self) -> Optional[Session]:
        """
        새 메일함을 생성합니다. 활성 세션이 있으면 재생성합니다.

        생성 중에 다시 호출되면 진행 중인 요청의 결과를 함께 기다립니다.

        Returns:
            새 세션, 실패하거나 결과가 폐기된 경우 None
        """
        # 초기화 이전에 시작된 요청에는 합류하지 않음
        if (
            self._create_task is not None
            and not self._create_task.done()
            and self._create_generation == self.token_generation
        ):
            self.logger.debug("메일함 생성이 이미 진행 중입니다")
            return await asyncio.shield(self._create_task)

        self._create_generation = self.token_generation
        self._create_task = asyncio.ensure_future(self._create(self._create_generation))
        return await asyncio.shield(self._create_task)

    async def _create(self, generation: int) -> Optional[Session]:
        if generation != self.token_generation:
            return None
        prior_state = self.state

        self.state = MailboxState.CREATING
        self.error = ""
        self.logger.info("메일함 생성 시작")

        try:
            data = await self.api_client.create_mailbox()
            session = self._session_from_response(data)
        except Exception as e:
            if generation != self.token_generation:
                self.logger.debug(f"폐기된 메일함 생성 요청 실패: {str(e)}")
                return None
            self.state = prior_state
            self.error = str(e) or DEFAULT_CREATE_ERROR
            self.logger.error(f"메일함 생성 실패: {self.error}")
            return None

        if generation != self.token_generation:
            # 생성 도중 세션이 초기화됨
            self.logger.warning(f"메일함 생성 결과 폐기: {session.address}")
            return None

        self._replace_session(session, MailboxState.ACTIVE)
        await self.session_store.save(session)

        self.logger.info(f"메일함 생성 완료: {session.address}")
        return session

    async def clear(self) -> None:
        """세션, 메시지 목록, 선택을 모두 비우고 저장된 세션을 삭제합니다."""
        self.logger.info(f"메일함 초기화: {self.session.address or '(없음)'}")

        self.error = ""
        self._replace_session(Session.empty(), MailboxState.EMPTY)
        await self.session_store.clear()

    def dismiss_error(self) -> None:
        """표시된 오류 메시지를 닫습니다."""
        self.error = ""

    def _replace_session(self, session: Session, state: MailboxState) -> None:
        self.session = session
        self.state = state
        self.token_generation += 1

        for listener in list(self._listeners):
            listener(session)

    def _session_from_response(self, data: dict) -> Session:
        if not isinstance(data, dict):
            raise ValueError(DEFAULT_CREATE_ERROR)

        session = Session(
            address=data.get("address") or "",
            password=data.get("password") or "",
            token=data.get("token") or "",
            account=data.get("account"),
        )
        if not session.is_active():
            raise ValueError("메일함 생성 응답에 주소, 비밀번호 또는 토큰이 없습니다")
        return session
