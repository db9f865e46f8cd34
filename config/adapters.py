"""
설정 어댑터

임시 메일 클라이언트의 백엔드, 폴링, 세션 저장소, 로깅 설정을 관리합니다.
환경 변수(TEMPMAIL_ 접두사)와 .env 파일에서 값을 읽습니다.
"""

import os
from typing import Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.ports import ConfigPort


class BaseConfig(BaseSettings, ConfigPort):
    """기본 설정 클래스"""

    model_config = SettingsConfigDict(
        env_prefix="TEMPMAIL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # 환경 설정
    environment: str = Field(default="development")
    debug: bool = Field(default=False)

    # 백엔드 설정
    backend_url: str = Field(default="http://localhost:8000")
    request_timeout: float = Field(default=30.0)

    # 폴링 설정
    poll_interval_seconds: float = Field(default=10.0)
    notify_background_errors: bool = Field(default=False)

    # 세션 저장소 설정
    database_url: str = Field(default="sqlite+aiosqlite:///./tempmail.db")
    session_key: str = Field(default="tempMail.session")

    # 암호화 설정
    encryption_key: str = Field(default="dev_encryption_key_32_bytes_long")

    # 로깅 설정
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    @validator("backend_url")
    def validate_backend_url(cls, v):
        """백엔드 URL 검증"""
        if not v.startswith(("http://", "https://")):
            raise ValueError("유효한 URL이 아닙니다")
        return v.rstrip("/")

    @validator("poll_interval_seconds", "request_timeout")
    def validate_positive(cls, v):
        """양수 검증"""
        if v <= 0:
            raise ValueError("0보다 큰 값이어야 합니다")
        return v

    @validator("encryption_key")
    def validate_encryption_key(cls, v):
        """암호화 키 검증"""
        if len(v) < 32:
            # 32바이트 미만이면 패딩
            v = v.ljust(32, '0')
        elif len(v) > 32:
            # 32바이트 초과면 자르기
            v = v[:32]
        return v

    @validator("log_level")
    def validate_log_level(cls, v):
        """로그 레벨 검증"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"로그 레벨은 {valid_levels} 중 하나여야 합니다")
        return v.upper()

    # ConfigPort 인터페이스 구현
    def get_environment(self) -> str:
        return self.environment

    def is_debug(self) -> bool:
        return self.debug

    def get_backend_url(self) -> str:
        return self.backend_url

    def get_request_timeout(self) -> float:
        return self.request_timeout

    def get_poll_interval_seconds(self) -> float:
        return self.poll_interval_seconds

    def should_notify_background_errors(self) -> bool:
        return self.notify_background_errors

    def get_database_url(self) -> str:
        return self.database_url

    def get_session_key(self) -> str:
        return self.session_key

    def get_encryption_key(self) -> str:
        return self.encryption_key

    def get_log_level(self) -> str:
        return self.log_level

    def get_log_format(self) -> str:
        return self.log_format

    def get_backend_config(self) -> dict:
        """백엔드 설정 조회"""
        return {
            "base_url": self.backend_url,
            "timeout": self.request_timeout,
            "poll_interval_seconds": self.poll_interval_seconds,
        }


class DevelopmentConfig(BaseConfig):
    """개발 환경 설정"""

    environment: str = "development"
    debug: bool = True
    log_level: str = "DEBUG"


class ProductionConfig(BaseConfig):
    """운영 환경 설정"""

    environment: str = "production"
    debug: bool = False
    log_level: str = "INFO"
    encryption_key: str = Field(...)

    @validator("encryption_key")
    def validate_production_encryption_key(cls, v):
        """운영 환경에서는 실제 암호화 키가 필수"""
        if not v or v.startswith("dev_"):
            raise ValueError("운영 환경에서는 실제 암호화 키가 필요합니다")
        return v


class TestingConfig(BaseConfig):
    """테스트 환경 설정"""

    environment: str = "testing"
    debug: bool = True
    log_level: str = "WARNING"

    # 테스트용 기본값들
    database_url: str = "sqlite+aiosqlite:///:memory:"
    encryption_key: str = "test_encryption_key_32_bytes_long"


class ConfigAdapter:
    """설정 어댑터 팩토리"""

    @staticmethod
    def create_config() -> ConfigPort:
        """환경에 따른 설정 객체를 생성합니다."""
        # TEMPMAIL_ENVIRONMENT 우선, 없으면 ENVIRONMENT
        environment = (
            os.getenv("TEMPMAIL_ENVIRONMENT") or os.getenv("ENVIRONMENT") or "development"
        ).lower()

        if environment == "production":
            return ProductionConfig()
        elif environment == "testing":
            return TestingConfig()
        else:
            return DevelopmentConfig()


# 전역 설정 인스턴스
_config: Optional[ConfigPort] = None


def get_config() -> ConfigPort:
    """전역 설정 인스턴스를 반환합니다."""
    global _config
    if _config is None:
        _config = ConfigAdapter.create_config()
    return _config
