"""
어댑터 팩토리

모든 어댑터들을 생성하고 의존성을 주입하는 팩토리 클래스입니다.
클린 아키텍처의 의존성 역전 원칙을 구현합니다.
"""

from typing import Optional

from core.domain.ports import (
    ConfigPort,
    EncryptionServicePort,
    LoggerPort,
    SessionStorePort,
    TempMailApiClientPort,
)
from core.usecases.temp_mail_session import TempMailSession

from .db.database import DatabaseAdapter, initialize_database
from .db.session_store import DatabaseSessionStoreAdapter, InMemorySessionStoreAdapter
from .external.encryption_service import EncryptionServiceAdapter
from .external.temp_mail_api_client import TempMailApiClientAdapter
from .logger import LoggerAdapter
from config.adapters import get_config


class AdapterFactory:
    """어댑터 팩토리"""

    def __init__(self, config: Optional[ConfigPort] = None):
        self.config = config or get_config()
        self._logger: Optional[LoggerPort] = None
        self._encryption_service: Optional[EncryptionServicePort] = None
        self._api_client: Optional[TempMailApiClientPort] = None
        self._database: Optional[DatabaseAdapter] = None

    def create_logger(self) -> LoggerPort:
        """로거 어댑터를 생성합니다."""
        if self._logger is None:
            self._logger = LoggerAdapter(
                name="tempmail",
                level=self.config.get_log_level(),
                format_string=self.config.get_log_format(),
            )
        return self._logger

    def create_encryption_service(self) -> EncryptionServicePort:
        """암호화 서비스 어댑터를 생성합니다."""
        if self._encryption_service is None:
            self._encryption_service = EncryptionServiceAdapter(
                encryption_key=self.config.get_encryption_key(),
                logger=self.create_logger(),
            )
        return self._encryption_service

    def create_api_client(self) -> TempMailApiClientPort:
        """임시 메일 API 클라이언트 어댑터를 생성합니다."""
        if self._api_client is None:
            self._api_client = TempMailApiClientAdapter(
                logger=self.create_logger(),
                base_url=self.config.get_backend_url(),
                timeout=self.config.get_request_timeout(),
            )
        return self._api_client

    async def create_database(self) -> DatabaseAdapter:
        """데이터베이스 어댑터를 초기화하고 테이블을 준비합니다."""
        if self._database is None:
            database = initialize_database(self.config)
            await database.ensure_ready()
            self._database = database
        return self._database

    async def create_session_store(self, ephemeral: bool = False) -> SessionStorePort:
        """
        세션 저장소 어댑터를 생성합니다.

        ephemeral이면 메모리 저장소를, 그렇지 않으면 데이터베이스 저장소를 사용합니다.
        """
        logger = self.create_logger()
        key = self.config.get_session_key()
        encryption_service = self.create_encryption_service()

        if ephemeral:
            return InMemorySessionStoreAdapter(
                logger=logger,
                key=key,
                encryption_service=encryption_service,
            )

        database = await self.create_database()
        return DatabaseSessionStoreAdapter(
            database=database,
            logger=logger,
            key=key,
            encryption_service=encryption_service,
        )

    async def create_temp_mail_session(self, ephemeral: bool = False) -> TempMailSession:
        """임시 메일 세션 유즈케이스를 생성합니다."""
        return TempMailSession(
            api_client=self.create_api_client(),
            session_store=await self.create_session_store(ephemeral),
            logger=self.create_logger(),
            poll_interval=self.config.get_poll_interval_seconds(),
            notify_background_errors=self.config.should_notify_background_errors(),
        )

    async def close(self) -> None:
        """데이터베이스 연결 등 자원을 정리합니다."""
        if self._database is not None:
            await self._database.close()
            self._database = None


# 전역 팩토리 인스턴스
_factory: Optional[AdapterFactory] = None


def get_adapter_factory() -> AdapterFactory:
    """전역 어댑터 팩토리 인스턴스를 반환합니다."""
    global _factory
    if _factory is None:
        _factory = AdapterFactory()
    return _factory
