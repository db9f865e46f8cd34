"""
세션 저장소 어댑터

메일함 세션(주소, 비밀번호, 토큰, 계정)을 하나의 JSON 레코드로 저장합니다.
저장은 최선 노력 방식으로, 손상되었거나 읽을 수 없는 레코드는 "세션 없음"으로
취급하며 어떤 오류도 호출자에게 전파하지 않습니다.
"""

import json
from abc import abstractmethod
from typing import Dict, Optional

from core.domain.entities import Session
from core.domain.ports import EncryptionServicePort, LoggerPort, SessionStorePort
from .database import DatabaseAdapter
from .models import ClientStateModel

DEFAULT_SESSION_KEY = "tempMail.session"


class BaseSessionStoreAdapter(SessionStorePort):
    """직렬화와 암호화를 담당하는 세션 저장소 기본 클래스"""

    def __init__(
        self,
        logger: LoggerPort,
        key: str = DEFAULT_SESSION_KEY,
        encryption_service: Optional[EncryptionServicePort] = None,
    ):
        self.logger = logger
        self.key = key
        self.encryption_service = encryption_service

    @abstractmethod
    async def _read(self) -> Optional[str]:
        """저장된 원본 레코드 조회"""
        pass

    @abstractmethod
    async def _write(self, value: str) -> None:
        """원본 레코드 저장"""
        pass

    @abstractmethod
    async def _delete(self) -> None:
        """원본 레코드 삭제"""
        pass

    async def load(self) -> Session:
        """저장된 세션을 조회합니다."""
        try:
            raw = await self._read()
        except Exception as e:
            self.logger.warning(f"세션 저장소를 읽을 수 없습니다: {str(e)}")
            return Session.empty()

        if not raw:
            self.logger.debug(f"저장된 세션 없음: {self.key}")
            return Session.empty()

        try:
            session = await self._decode(raw)
        except Exception as e:
            self.logger.warning(f"손상된 세션 레코드를 무시합니다: {self.key}, 오류: {str(e)}")
            return Session.empty()

        if not session.is_active():
            self.logger.debug(f"불완전한 세션 레코드를 무시합니다: {self.key}")
            return Session.empty()

        self.logger.debug(f"세션 조회 성공: {session.address}")
        return session

    async def save(self, session: Session) -> None:
        """주소와 토큰이 모두 있을 때만 세션을 저장합니다."""
        if not (session.address and session.token):
            return

        try:
            await self._write(await self._encode(session))
        except Exception as e:
            self.logger.error(f"세션 저장 실패: {session.address}, 오류: {str(e)}")
            return

        self.logger.debug(f"세션 저장 성공: {session.address}")

    async def clear(self) -> None:
        """저장된 세션을 삭제합니다."""
        try:
            await self._delete()
        except Exception as e:
            self.logger.error(f"세션 삭제 실패: {self.key}, 오류: {str(e)}")
            return

        self.logger.debug(f"세션 삭제 성공: {self.key}")

    async def _encode(self, session: Session) -> str:
        record = session.to_record()
        record["encrypted"] = self.encryption_service is not None

        if self.encryption_service is not None:
            record["password"] = await self.encryption_service.encrypt(session.password)
            record["token"] = await self.encryption_service.encrypt(session.token)

        return json.dumps(record, ensure_ascii=False)

    async def _decode(self, raw: str) -> Session:
        record = json.loads(raw)
        if not isinstance(record, dict):
            raise ValueError("세션 레코드는 JSON 객체여야 합니다")

        password = record.get("password") or ""
        token = record.get("token") or ""

        if record.get("encrypted"):
            if self.encryption_service is None:
                raise ValueError("암호화된 레코드를 복호화할 키가 없습니다")
            password = await self.encryption_service.decrypt(password)
            token = await self.encryption_service.decrypt(token)

        return Session(
            address=record.get("address") or "",
            password=password,
            token=token,
            account=record.get("account"),
        )


class InMemorySessionStoreAdapter(BaseSessionStoreAdapter):
    """메모리 기반 세션 저장소 어댑터"""

    def __init__(
        self,
        logger: LoggerPort,
        key: str = DEFAULT_SESSION_KEY,
        encryption_service: Optional[EncryptionServicePort] = None,
    ):
        super().__init__(logger, key, encryption_service)
        self.records: Dict[str, str] = {}

    async def _read(self) -> Optional[str]:
        return self.records.get(self.key)

    async def _write(self, value: str) -> None:
        self.records[self.key] = value

    async def _delete(self) -> None:
        self.records.pop(self.key, None)


class DatabaseSessionStoreAdapter(BaseSessionStoreAdapter):
    """데이터베이스 기반 세션 저장소 어댑터"""

    def __init__(
        self,
        database: DatabaseAdapter,
        logger: LoggerPort,
        key: str = DEFAULT_SESSION_KEY,
        encryption_service: Optional[EncryptionServicePort] = None,
    ):
        super().__init__(logger, key, encryption_service)
        self.database = database

    async def _read(self) -> Optional[str]:
        async with self.database.get_session() as db_session:
            model = await db_session.get(ClientStateModel, self.key)
            return model.value if model else None

    async def _write(self, value: str) -> None:
        async with self.database.get_session() as db_session:
            model = await db_session.get(ClientStateModel, self.key)
            if model:
                model.value = value
            else:
                db_session.add(ClientStateModel(key=self.key, value=value))
            await db_session.commit()

    async def _delete(self) -> None:
        async with self.database.get_session() as db_session:
            model = await db_session.get(ClientStateModel, self.key)
            if model:
                await db_session.delete(model)
                await db_session.commit()
