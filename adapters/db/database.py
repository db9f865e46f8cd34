"""
데이터베이스 연결 및 세션 관리

클라이언트 상태(세션 레코드)를 보관하는 로컬 데이터베이스의
SQLAlchemy 비동기 엔진과 세션을 관리합니다.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.domain.ports import ConfigPort
from .models import Base, ClientStateModel


class DatabaseAdapter:
    """클라이언트 상태 데이터베이스 어댑터"""

    def __init__(self, config: ConfigPort):
        self.config = config
        self.database_url = config.get_database_url()
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker] = None

    def is_initialized(self) -> bool:
        return self.engine is not None

    async def initialize(self) -> None:
        """엔진과 세션 팩토리를 생성합니다. 이미 초기화되었으면 무시합니다."""
        if self.is_initialized():
            return

        engine_options = {"echo": self.config.is_debug() and self.config.get_log_level() == "DEBUG"}
        if not self.database_url.startswith("sqlite"):
            # SQLite 드라이버는 연결 풀 크기 옵션을 받지 않음
            engine_options.update(pool_size=5, max_overflow=5, pool_pre_ping=True)

        self.engine = create_async_engine(self.database_url, **engine_options)
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def ensure_ready(self) -> None:
        """초기화 후 client_state 테이블이 없으면 생성합니다."""
        await self.initialize()
        await self.create_tables()

    async def create_tables(self) -> None:
        async with self._begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_tables(self) -> None:
        async with self._begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def reset(self) -> None:
        """저장된 상태를 모두 지우고 빈 테이블을 다시 만듭니다."""
        await self.drop_tables()
        await self.create_tables()

    async def list_state_records(self) -> List[ClientStateModel]:
        """저장된 상태 레코드를 키 순서로 조회합니다."""
        async with self.get_session() as session:
            result = await session.execute(select(ClientStateModel).order_by(ClientStateModel.key))
            return list(result.scalars().all())

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """데이터베이스 세션을 생성합니다. 예외 발생 시 롤백합니다."""
        if self.session_factory is None:
            raise RuntimeError("데이터베이스가 초기화되지 않았습니다")

        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def close(self) -> None:
        """엔진을 정리합니다. 여러 번 호출해도 안전합니다."""
        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None
            self.session_factory = None

    def _begin(self):
        if self.engine is None:
            raise RuntimeError("데이터베이스가 초기화되지 않았습니다")
        return self.engine.begin()


def initialize_database(config: ConfigPort) -> DatabaseAdapter:
    """설정의 database_url로 데이터베이스 어댑터를 만듭니다."""
    return DatabaseAdapter(config)
