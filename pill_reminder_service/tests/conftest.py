from datetime import datetime

import pytest

from app.schemas.models import Medication
from app.services.persistence import KeyValueStore, PersistenceAdapter
from app.services.store import MedicationStore


class FakeClock:
    """Callable clock whose time is set by the test."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 3, 15, 12, 0, 0)


@pytest.fixture
def clock(now: datetime) -> FakeClock:
    return FakeClock(now)


@pytest.fixture
def amoxicillin() -> Medication:
    return Medication(id="amox", name="Amoxicillin", dosage="250mg", frequency=8, start_time="07:00")


@pytest.fixture
def lisinopril() -> Medication:
    return Medication(id="lis", name="Lisinopril", dosage="10mg", frequency=24, start_time="08:00",
                      observations="Take on a full stomach.")


@pytest.fixture
def kv(tmp_path) -> KeyValueStore:
    store = KeyValueStore(tmp_path / "pill.db")
    yield store
    store.close()


@pytest.fixture
def adapter(kv: KeyValueStore) -> PersistenceAdapter:
    return PersistenceAdapter(kv)


@pytest.fixture
def store(adapter: PersistenceAdapter, clock: FakeClock) -> MedicationStore:
    """Store loaded from an empty database, i.e. the seed medications."""
    s = MedicationStore(adapter, clock=clock)
    s.load()
    return s
