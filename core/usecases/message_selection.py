"""
메시지 선택 유즈케이스

현재 열린 메시지를 추적하고, 선택 시 전체 본문을 지연 조회합니다.
새 목록이 도착하면 선택을 재검증합니다.
"""

from typing import Callable, Iterable, Optional

from ..domain.entities import MessageDetail, MessageSummary, SelectedMessage
from ..domain.ports import LoggerPort, TempMailApiClientPort

DEFAULT_LOAD_ERROR = "Failed to load message"


class MessageSelector:
    """메시지 선택 유즈케이스"""

    def __init__(
        self,
        api_client: TempMailApiClientPort,
        token_provider: Callable[[], str],
        logger: LoggerPort,
    ):
        self.api_client = api_client
        self.token_provider = token_provider
        self.logger = logger

        self.selected: Optional[SelectedMessage] = None
        # 선택이 바뀔 때마다 증가
        self._generation: int = 0

    @property
    def selected_id(self) -> Optional[str]:
        return self.selected.id if self.selected else None

    async def select(self, summary: MessageSummary) -> Optional[SelectedMessage]:
        """
        메시지를 선택하고 전체 본문을 조회합니다.

        조회 중에는 요약 정보와 로딩 표시를 유지하며, 실패하면 요약 정보에
        오류 메시지를 붙여 둡니다. 조회 도중 다른 메시지가 선택되면 늦게
        도착한 응답은 폐기됩니다.

        Args:
            summary: 목록에서 선택한 메시지

        Returns:
            현재 선택 상태 (폐기된 경우에도 최신 선택)
        """
        self._generation += 1
        generation = self._generation

        self.selected = SelectedMessage.pending(summary)
        self.logger.debug(f"메시지 선택: {summary.id}")

        token = self.token_provider()
        if not token:
            self.selected = SelectedMessage.failed(summary, "활성화된 메일함이 없습니다")
            return self.selected

        try:
            data = await self.api_client.get_message(token, summary.id)
            detail = MessageDetail(**data)
        except Exception as e:
            if generation != self._generation:
                self.logger.debug(f"폐기된 메시지 조회 실패: {summary.id}")
                return self.selected
            self.logger.error(f"메시지 조회 실패: {summary.id}, 오류: {str(e)}")
            self.selected = SelectedMessage.failed(summary, str(e) or DEFAULT_LOAD_ERROR)
            return self.selected

        if generation != self._generation:
            self.logger.debug(f"이전 선택의 응답을 폐기합니다: {summary.id}")
            return self.selected

        self.selected = SelectedMessage.loaded(detail)
        return self.selected

    def reconcile(self, latest: Iterable[MessageSummary]) -> None:
        """
        최신 메시지 목록에 대해 선택을 재검증합니다.

        선택된 메시지가 목록에 없으면 선택을 해제합니다. 목록에 있으면
        이미 불러온 본문을 포함한 선택을 그대로 둡니다.
        """
        if self.selected is None:
            return

        ids = {message.id for message in latest}
        if self.selected.id not in ids:
            self.logger.info(f"목록에서 사라진 메시지 선택 해제: {self.selected.id}")
            self.clear()

    def clear(self) -> None:
        """선택을 해제하고 진행 중인 조회 결과를 무효화합니다."""
        self._generation += 1
        self.selected = None
