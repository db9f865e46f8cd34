"""
외부 서비스 어댑터 패키지

외부 API, 서비스와의 통신을 담당하는 어댑터들을 포함합니다.
"""

from .temp_mail_api_client import TempMailApiClientAdapter
from .encryption_service import EncryptionServiceAdapter

__all__ = [
    "TempMailApiClientAdapter",
    "EncryptionServiceAdapter",
]
