"""Pytest configuration shared across the suite."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from otp_basic.core.config import Settings
from otp_basic.db.session import build_engine
from otp_basic.main import create_app
from otp_basic.services.credentials import CredentialManager
from otp_basic.store.memory import InMemoryTokenStore
from otp_basic.store.sql import SqlTokenStore

# RFC 6238 appendix B seed ("12345678901234567890") in base32
RFC_SECRET = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"


class FrozenClock:
    """Settable clock for CredentialManager."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


@pytest.fixture
def clock() -> FrozenClock:
    # Start of a 30 s step, so +-29 s stays inside or next to it predictably
    return FrozenClock(datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def memory_store() -> InMemoryTokenStore:
    return InMemoryTokenStore()


@pytest.fixture
def sql_store(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'tokens.sqlite'}")
    store = SqlTokenStore(engine)
    yield store
    store.close()


@pytest.fixture(params=["memory", "sql"])
def store(request, tmp_path):
    """Both TokenStore backends, for contract tests."""
    if request.param == "memory":
        yield InMemoryTokenStore()
        return
    engine = build_engine(f"sqlite:///{tmp_path / 'contract.sqlite'}")
    s = SqlTokenStore(engine)
    yield s
    s.close()


@pytest.fixture
def manager(memory_store, clock) -> CredentialManager:
    return CredentialManager(memory_store, clock=clock)


@pytest.fixture
def app_store() -> InMemoryTokenStore:
    return InMemoryTokenStore()


@pytest.fixture
def client(app_store):
    settings = Settings(store_backend="memory", log_level="WARNING")
    app = create_app(settings, store=app_store)
    with TestClient(app) as c:
        yield c
