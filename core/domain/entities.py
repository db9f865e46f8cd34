"""
도메인 엔티티 정의

임시 메일함 클라이언트의 핵심 개념을 나타내는 엔티티들을 정의합니다.
모든 엔티티는 Pydantic 모델을 기반으로 하여 타입 안정성을 보장합니다.
백엔드 응답의 camelCase 키(createdAt, from)는 별칭으로 매핑합니다.
"""

from datetime import datetime
from enum import Enum
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, validator


class MailboxState(str, Enum):
    """메일함 상태"""
    EMPTY = "empty"
    CREATING = "creating"
    ACTIVE = "active"


class SelectionStatus(str, Enum):
    """선택된 메시지 상태"""
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class Session(BaseModel):
    """임시 메일함 세션 엔티티 (주소, 비밀번호, 토큰, 계정)"""

    model_config = ConfigDict(frozen=True)

    address: str = Field(default="", description="메일 주소")
    password: str = Field(default="", description="메일함 비밀번호")
    token: str = Field(default="", description="Bearer 토큰 (불투명 문자열)")
    account: Any = Field(None, description="백엔드 계정 정보 (형식 제한 없음)")

    @classmethod
    def empty(cls) -> "Session":
        """빈 세션을 생성합니다."""
        return cls()

    def is_active(self) -> bool:
        """주소, 비밀번호, 토큰이 모두 있는지 확인"""
        return bool(self.address and self.password and self.token)

    def is_empty(self) -> bool:
        """세션이 비어 있는지 확인"""
        return not (self.address or self.password or self.token)

    def to_record(self) -> dict:
        """저장용 레코드로 변환"""
        return {
            "address": self.address,
            "password": self.password,
            "token": self.token,
            "account": self.account,
        }


class Sender(BaseModel):
    """발신자/수신자 주소"""

    model_config = ConfigDict(frozen=True, extra="allow")

    name: Optional[str] = Field(None, description="표시 이름")
    address: str = Field(default="", description="메일 주소")


class Domain(BaseModel):
    """메일함 도메인"""

    model_config = ConfigDict(frozen=True, extra="allow")

    name: str = Field(..., description="도메인 이름")

    @classmethod
    def from_api(cls, item: Any) -> "Domain":
        """백엔드 응답 항목(문자열 또는 객체)을 도메인으로 변환"""
        if isinstance(item, str):
            return cls(name=item)
        if isinstance(item, dict):
            data = dict(item)
            if not data.get("name") and data.get("domain"):
                data["name"] = data["domain"]
            return cls(**data)
        raise ValueError(f"알 수 없는 도메인 형식입니다: {item!r}")


class MessageSummary(BaseModel):
    """메시지 목록 항목 엔티티"""

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    id: str = Field(..., description="메시지 ID")
    sender: Sender = Field(default_factory=Sender, alias="from", description="발신자")
    subject: Optional[str] = Field(None, description="제목")
    intro: Optional[str] = Field(None, description="본문 미리보기")
    created_at: Optional[datetime] = Field(None, alias="createdAt", description="수신 시간")

    @validator("id", pre=True)
    def validate_id(cls, v):
        """숫자 ID도 문자열로 취급"""
        if v is None or v == "":
            raise ValueError("메시지 ID가 필요합니다")
        return str(v)

    @validator("sender", pre=True)
    def validate_sender(cls, v):
        """발신자 정보가 없으면 빈 주소로 대체"""
        return v or {}

    def sender_display(self) -> str:
        """발신자 표시 문자열"""
        return self.sender.name or self.sender.address or "Unknown sender"

    def subject_display(self) -> str:
        """제목 표시 문자열"""
        return self.subject or "(no subject)"


class MessageDetail(MessageSummary):
    """전체 메시지 엔티티"""

    to: List[Sender] = Field(default_factory=list, description="수신자 목록")
    html: Optional[List[str]] = Field(None, description="HTML 본문 조각")
    text: Optional[str] = Field(None, description="텍스트 본문")

    def body(self) -> Tuple[str, str]:
        """표시할 본문을 (종류, 내용) 형태로 반환합니다."""
        if self.html:
            return "html", "".join(self.html)
        if self.text:
            return "text", self.text
        return "empty", "No content"


class SelectedMessage(MessageDetail):
    """현재 열려 있는 메시지 (로딩/오류 상태 포함)"""

    loading: bool = Field(default=False, description="본문 로딩 중 여부")
    error: Optional[str] = Field(None, description="본문 로딩 오류 메시지")

    @staticmethod
    def _message_data(message: MessageSummary) -> dict:
        data = message.model_dump(by_alias=True)
        data.pop("loading", None)
        data.pop("error", None)
        return data

    @classmethod
    def pending(cls, summary: MessageSummary) -> "SelectedMessage":
        """요약 정보로 로딩 중인 선택을 생성합니다."""
        return cls(**cls._message_data(summary), loading=True)

    @classmethod
    def loaded(cls, detail: MessageDetail) -> "SelectedMessage":
        """전체 메시지로 로딩 완료된 선택을 생성합니다."""
        return cls(**cls._message_data(detail))

    @classmethod
    def failed(cls, summary: MessageSummary, error: str) -> "SelectedMessage":
        """요약 정보를 유지한 채 오류 상태의 선택을 생성합니다."""
        return cls(**cls._message_data(summary), error=error)

    @property
    def status(self) -> SelectionStatus:
        """선택 상태"""
        if self.loading:
            return SelectionStatus.LOADING
        if self.error:
            return SelectionStatus.ERROR
        return SelectionStatus.LOADED
