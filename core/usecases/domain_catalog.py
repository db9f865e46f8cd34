"""
도메인 카탈로그 유즈케이스

사용 가능한 메일함 도메인 목록을 조회합니다. 참고용 정보이며,
실패해도 메일함 생성에는 영향을 주지 않습니다.
"""

from typing import List, Optional

from ..domain.entities import Domain
from ..domain.ports import LoggerPort, TempMailApiClientPort


class DomainCatalog:
    """도메인 카탈로그 유즈케이스"""

    def __init__(self, api_client: TempMailApiClientPort, logger: LoggerPort):
        self.api_client = api_client
        self.logger = logger
        self.domains: List[Domain] = []
        self.last_error: Optional[str] = None

    async def fetch(self) -> List[Domain]:
        """
        도메인 목록을 조회합니다. 자동 재시도는 하지 않습니다.

        Returns:
            도메인 목록 (실패 시 빈 목록)
        """
        try:
            data = await self.api_client.list_domains()
            items = (data or {}).get("domains") or []
        except Exception as e:
            self.logger.warning(f"도메인 목록 조회 실패: {str(e)}")
            self.last_error = str(e)
            self.domains = []
            return self.domains

        domains = []
        for item in items:
            try:
                domains.append(Domain.from_api(item))
            except ValueError as e:
                self.logger.warning(f"도메인 항목 무시: {str(e)}")

        self.domains = domains
        self.last_error = None
        self.logger.debug(f"도메인 목록 조회 성공: {len(domains)}개")
        return self.domains
