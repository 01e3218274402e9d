"""
Fixtures compartilhadas: repositórios limpos (memória e SQLite) e relógio controlado.
"""
import sys
from datetime import datetime, timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from config.database import build_engine, init_db
from services.data_service import DemoTableStore, SqlTableStore
from services.errors import PersistenceFailure


class FakeClock:
    """Relógio que avança um minuto a cada leitura."""

    def __init__(self, start: datetime = datetime(2025, 6, 5, 9, 0)):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(minutes=1)
        return current


class FlakyStore(DemoTableStore):
    """Repositório em memória que falha nas operações marcadas em `fail_on`."""

    def __init__(self, **kwargs):
        super().__init__(seed=False, **kwargs)
        self.fail_on = set()

    def _maybe_fail(self, operation: str, table: str) -> None:
        if (operation, table) in self.fail_on:
            raise PersistenceFailure(f"Falha simulada: {operation} em {table}")

    def fetch_all(self, table, *args, **kwargs):
        self._maybe_fail("fetch_all", table)
        return super().fetch_all(table, *args, **kwargs)

    def insert(self, table, record):
        self._maybe_fail("insert", table)
        return super().insert(table, record)

    def update(self, table, record_id, patch):
        self._maybe_fail("update", table)
        return super().update(table, record_id, patch)

    def remove(self, table, record_id):
        self._maybe_fail("remove", table)
        return super().remove(table, record_id)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def demo_store():
    return DemoTableStore(seed=False)


@pytest.fixture
def sql_store():
    engine = build_engine("sqlite://")
    init_db(bind=engine)
    yield SqlTableStore(engine)
    engine.dispose()


@pytest.fixture(params=["demo", "sql"])
def store(request):
    """Executa o teste nos dois repositórios."""
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def flaky_store():
    return FlakyStore()
