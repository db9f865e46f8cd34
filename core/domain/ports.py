"""
포트 인터페이스 정의

클린 아키텍처의 핵심으로, Core 레이어와 외부 어댑터 간의 계약을 정의합니다.
모든 포트는 추상 기본 클래스(ABC)로 정의되어 구현을 강제합니다.
"""

from abc import ABC, abstractmethod

from .entities import Session


class TempMailApiError(Exception):
    """임시 메일 백엔드 API 오류"""

    def __init__(self, operation: str, status_code: int, detail: str = ""):
        self.operation = operation
        self.status_code = status_code
        self.detail = detail
        message = f"{operation} 실패: {status_code}"
        if detail:
            message = f"{message} - {detail}"
        super().__init__(message)


class TempMailApiClientPort(ABC):
    """임시 메일 백엔드 API 클라이언트 포트"""

    @abstractmethod
    async def list_domains(self) -> dict:
        """도메인 목록 조회 ({"domains": [...]})"""
        pass

    @abstractmethod
    async def create_mailbox(self) -> dict:
        """새 메일함 생성 ({address, password, token, account})"""
        pass

    @abstractmethod
    async def list_messages(self, token: str) -> dict:
        """메시지 목록 조회 ({"hydra:member": [...]})"""
        pass

    @abstractmethod
    async def get_message(self, token: str, message_id: str) -> dict:
        """특정 메시지 조회"""
        pass


class SessionStorePort(ABC):
    """세션 저장소 포트

    저장은 최선 노력 방식입니다. 구현체는 예외를 호출자에게 전파하지 않습니다.
    """

    @abstractmethod
    async def load(self) -> Session:
        """저장된 세션 조회 (없거나 손상된 경우 빈 세션)"""
        pass

    @abstractmethod
    async def save(self, session: Session) -> None:
        """세션 저장 (주소와 토큰이 모두 있을 때만)"""
        pass

    @abstractmethod
    async def clear(self) -> None:
        """저장된 세션 삭제"""
        pass


class EncryptionServicePort(ABC):
    """암호화 서비스 포트"""

    @abstractmethod
    async def encrypt(self, data: str) -> str:
        """데이터 암호화"""
        pass

    @abstractmethod
    async def decrypt(self, encrypted_data: str) -> str:
        """데이터 복호화"""
        pass


class LoggerPort(ABC):
    """로거 포트"""

    @abstractmethod
    def info(self, message: str, **kwargs) -> None:
        """정보 로그"""
        pass

    @abstractmethod
    def warning(self, message: str, **kwargs) -> None:
        """경고 로그"""
        pass

    @abstractmethod
    def error(self, message: str, **kwargs) -> None:
        """오류 로그"""
        pass

    @abstractmethod
    def debug(self, message: str, **kwargs) -> None:
        """디버그 로그"""
        pass


class ConfigPort(ABC):
    """설정 포트"""

    # 환경 설정
    @abstractmethod
    def get_environment(self) -> str:
        """환경 조회 (development, production, testing)"""
        pass

    @abstractmethod
    def is_debug(self) -> bool:
        """디버그 모드 여부"""
        pass

    # 백엔드 설정
    @abstractmethod
    def get_backend_url(self) -> str:
        """백엔드 베이스 URL 조회"""
        pass

    @abstractmethod
    def get_request_timeout(self) -> float:
        """요청 타임아웃(초) 조회"""
        pass

    # 폴링 설정
    @abstractmethod
    def get_poll_interval_seconds(self) -> float:
        """메시지 폴링 간격(초) 조회"""
        pass

    @abstractmethod
    def should_notify_background_errors(self) -> bool:
        """백그라운드 오류(도메인/폴링)를 사용자 알림으로 올릴지 여부"""
        pass

    # 세션 저장소 설정
    @abstractmethod
    def get_database_url(self) -> str:
        """세션 저장 데이터베이스 URL 조회"""
        pass

    @abstractmethod
    def get_session_key(self) -> str:
        """세션 레코드 키 조회"""
        pass

    # 보안 설정
    @abstractmethod
    def get_encryption_key(self) -> str:
        """암호화 키 조회"""
        pass

    # 로깅 설정
    @abstractmethod
    def get_log_level(self) -> str:
        """로그 레벨 조회"""
        pass

    @abstractmethod
    def get_log_format(self) -> str:
        """로그 포맷 조회"""
        pass

    # 복합 설정 조회 메서드
    @abstractmethod
    def get_backend_config(self) -> dict:
        """백엔드 설정 조회"""
        pass
