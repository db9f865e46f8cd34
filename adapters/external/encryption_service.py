"""
암호화 서비스 어댑터

세션 저장소에 기록되는 메일함 비밀번호와 토큰을 Fernet으로 암호화합니다.
키는 설정의 encryption_key에서 PBKDF2로 파생합니다.
"""

import base64

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from core.domain.ports import EncryptionServicePort, LoggerPort

SESSION_SALT = b"tempmail_session_salt"
KDF_ITERATIONS = 100000


def derive_fernet_key(secret: str, salt: bytes = SESSION_SALT) -> bytes:
    """설정된 비밀 값에서 Fernet 키를 파생합니다."""
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=salt,
        iterations=KDF_ITERATIONS,
    )
    return base64.urlsafe_b64encode(kdf.derive(secret.encode()))


class EncryptionServiceAdapter(EncryptionServicePort):
    """세션 필드 암호화 어댑터"""

    def __init__(self, encryption_key: str, logger: LoggerPort):
        self.logger = logger
        self._fernet = Fernet(derive_fernet_key(encryption_key))

    async def encrypt(self, data: str) -> str:
        """빈 문자열은 그대로 빈 문자열로 저장합니다."""
        if not data:
            return ""
        return self._fernet.encrypt(data.encode()).decode()

    async def decrypt(self, encrypted_data: str) -> str:
        """
        암호문을 복호화합니다.

        Raises:
            ValueError: 다른 키로 암호화되었거나 손상된 값인 경우
        """
        if not encrypted_data:
            return ""

        try:
            return self._fernet.decrypt(encrypted_data.encode()).decode()
        except (InvalidToken, UnicodeError) as e:
            self.logger.warning("세션 필드를 복호화할 수 없습니다 (키 불일치 또는 손상)")
            raise ValueError("복호화 실패") from e
