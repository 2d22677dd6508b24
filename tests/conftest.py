"""Shared fixtures: operation contexts, both memo store backends, a
call-recording store wrapper and an HTTP test client."""

from typing import List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from fibsrv_api.app.core.config import Settings
from fibsrv_api.app.core.context import OperationContext
from fibsrv_api.app.core.metrics import MemoStats
from fibsrv_api.app.main import create_app
from fibsrv_api.app.services.fib_service import FibService
from fibsrv_api.app.stores.base import Memo, MemoStore
from fibsrv_api.app.stores.memory import InMemoryMemoStore
from fibsrv_api.app.stores.sqlite import SQLiteMemoStore


class RecordingStore(MemoStore):
    """Delegating store that logs every get/put in call order."""

    def __init__(self, inner: MemoStore) -> None:
        super().__init__(inner.stats)
        self.inner = inner
        self.backend = inner.backend
        self.calls: List[Tuple] = []

    def get(self, ctx: OperationContext, n: int) -> Optional[int]:
        self.calls.append(("get", n))
        return self.inner.get(ctx, n)

    def put(self, ctx: OperationContext, n: int, value: int) -> None:
        self.calls.append(("put", n, value))
        self.inner.put(ctx, n, value)

    def count_less_or_equal(self, ctx: OperationContext, target: int) -> int:
        return self.inner.count_less_or_equal(ctx, target)

    def find_highest_at_most(self, ctx: OperationContext, target: int) -> Optional[Memo]:
        return self.inner.find_highest_at_most(ctx, target)

    def clear(self, ctx: OperationContext) -> None:
        self.inner.clear(ctx)

    @property
    def writes(self) -> List[Tuple]:
        return [c for c in self.calls if c[0] == "put"]


@pytest.fixture
def ctx():
    return OperationContext.background()


@pytest.fixture
def memory_store():
    return InMemoryMemoStore(stats=MemoStats())


@pytest.fixture
def sqlite_store(tmp_path):
    s = SQLiteMemoStore.connect(
        str(tmp_path / "memos.db"), attempts=1, interval=0, stats=MemoStats()
    )
    yield s
    s.close()


@pytest.fixture(params=["memory", "sqlite"])
def store(request, tmp_path):
    """Each test using this fixture runs once per backend."""
    if request.param == "memory":
        yield InMemoryMemoStore(stats=MemoStats())
        return
    s = SQLiteMemoStore.connect(
        str(tmp_path / "memos.db"), attempts=1, interval=0, stats=MemoStats()
    )
    yield s
    s.close()


@pytest.fixture
def recording_store(store):
    return RecordingStore(store)


@pytest.fixture
def make_recording():
    """Factory wrapping a (fresh in-memory by default) store in a recorder."""

    def _make(inner: Optional[MemoStore] = None) -> RecordingStore:
        return RecordingStore(inner if inner is not None else InMemoryMemoStore())

    return _make


@pytest.fixture
def service(store):
    return FibService(store)


@pytest.fixture(params=["memory", "sqlite"])
def api_settings(request, tmp_path):
    return Settings(
        store_backend=request.param,
        database_url=str(tmp_path / "api.db"),
        connect_attempts=1,
        connect_interval=0,
        request_timeout=30,
    )


@pytest.fixture
def client(api_settings):
    app = create_app(api_settings)
    # Entering the context runs the startup and shutdown hooks.
    with TestClient(app) as c:
        yield c
