"""
Pytest configuration and fixtures for all tests.
"""

import os
import sys

import pytest

# 저장소 루트를 import 경로에 추가
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, os.path.dirname(__file__))

os.environ.setdefault("ENVIRONMENT", "testing")

from adapters.db.session_store import InMemorySessionStoreAdapter  # noqa: E402
from core.domain.entities import Session  # noqa: E402
from fakes import FakeTempMailApi, RecordingLogger  # noqa: E402


@pytest.fixture
def logger():
    """로그를 기록하는 로거"""
    return RecordingLogger()


@pytest.fixture
def api():
    """가짜 임시 메일 API"""
    return FakeTempMailApi()


@pytest.fixture
def store(logger):
    """메모리 세션 저장소"""
    return InMemorySessionStoreAdapter(logger=logger)


@pytest.fixture
def active_session():
    """활성 세션"""
    return Session(address="a@b.com", password="p", token="t", account={"id": 1})
