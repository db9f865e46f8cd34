"""
로거 어댑터

Core 레이어의 LoggerPort를 Python 표준 logging으로 구현합니다.
CLI 출력(표, 메시지 본문)과 섞이지 않도록 로그는 stderr로 보냅니다.
"""

import logging
import sys

from core.domain.ports import LoggerPort

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class LoggerAdapter(LoggerPort):
    """표준 logging 기반 로거 어댑터"""

    def __init__(
        self,
        name: str = "tempmail",
        level: str = "INFO",
        format_string: str = DEFAULT_LOG_FORMAT,
    ):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper(), logging.INFO))
        self.logger.propagate = False

        # 같은 이름으로 여러 번 생성되어도 핸들러는 하나만 유지
        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stderr)
            self.logger.addHandler(handler)
        for handler in self.logger.handlers:
            handler.setFormatter(logging.Formatter(format_string))

    def info(self, message: str, **kwargs) -> None:
        self.logger.info(message, extra=kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self.logger.warning(message, extra=kwargs)

    def error(self, message: str, **kwargs) -> None:
        self.logger.error(message, extra=kwargs)

    def debug(self, message: str, **kwargs) -> None:
        self.logger.debug(message, extra=kwargs)
