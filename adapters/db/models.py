"""
SQLAlchemy 데이터베이스 모델

클라이언트 로컬 상태를 저장하는 키-값 테이블 모델을 정의합니다.
세션 레코드는 잘 알려진 하나의 키 아래 JSON 문자열로 저장됩니다.
"""

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class ClientStateModel(Base):
    """클라이언트 상태 테이블 모델"""

    __tablename__ = "client_state"

    key = Column(String(255), primary_key=True, index=True)
    value = Column(Text, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<ClientStateModel(key={self.key})>"
