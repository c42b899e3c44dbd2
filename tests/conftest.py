"""Pytest configuration and shared fixtures."""

import itertools
from datetime import date, datetime, timezone

import pytest
import structlog

from loadboard_app.board.store import LoadStore
from loadboard_app.config.defaults import StoreParams
from loadboard_app.data.models import AppState, Bid, EquipmentType, Load, LoadDraft
from loadboard_app.errors import PersistenceError
from loadboard_app.persistence.memory_gateway import InMemoryGateway

FIXED_NOW = datetime(2024, 7, 25, 15, 30, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def reset_structlog():
    """Each test starts from structlog defaults so capture_logs sees bound loggers."""
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()


class FlakyGateway(InMemoryGateway):
    """In-memory gateway whose saves can be made to fail on demand."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fail_saves = False
        self.save_calls = 0

    def _write_document(self, document: str) -> None:
        self.save_calls += 1
        if self.fail_saves:
            raise OSError("store unavailable")
        super()._write_document(document)


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def sample_draft() -> LoadDraft:
    """A valid single-stop load draft."""
    return LoadDraft(
        item_descriptions=("Gulfshore Life",),
        origin="Miami, FL",
        destinations=("Atlanta, GA",),
        pickup_date=date(2024, 8, 10),
        delivery_date=date(2024, 8, 12),
        pallet_count=10,
        weight=15000,
        equipment_type=EquipmentType.DRY_VAN_53,
        details="Liftgate required.",
        reference_number="TR-GL-100",
    )


@pytest.fixture
def multi_stop_draft() -> LoadDraft:
    """A valid three-stop load draft with destination references."""
    return LoadDraft(
        item_descriptions=("Boca Magazine", "Delray Magazine"),
        origin="3487 South Preston Highway, Lebanon Junction, KY 40150",
        destinations=("Atlanta, GA", "Miami, FL", "West Palm Beach, FL"),
        destination_refs=("PO-1", "", "PO-3"),
        pickup_date=date(2024, 9, 1),
        delivery_date=date(2024, 9, 4),
        pallet_count=22,
        weight=31000,
        equipment_type=EquipmentType.FLATBED,
    )


@pytest.fixture
def sample_load(sample_draft) -> Load:
    """A posted load with one bid."""
    bid = Bid(
        id="bid-1",
        carrier_name="Sunshine Express",
        amount=1250.0,
        timestamp=FIXED_NOW,
        carrier_email="ops@sunshine.example",
        transit_days=2,
    )
    return Load.from_draft("load-a", sample_draft).with_bid(bid)


@pytest.fixture
def sample_state(sample_load) -> AppState:
    return AppState(loads=(sample_load,), carrier_emails=("Carrier@Example.com",))


@pytest.fixture
def memory_gateway(sample_state) -> FlakyGateway:
    """Failure-injectable gateway already holding sample_state."""
    gateway = FlakyGateway()
    gateway.save(sample_state)
    gateway.save_calls = 0
    return gateway


@pytest.fixture
def sequential_ids():
    """Deterministic id factory: load-1, load-2, bid-3, ..."""
    counter = itertools.count(1)
    return lambda prefix: f"{prefix}-{next(counter)}"


@pytest.fixture
def store(memory_gateway, sequential_ids) -> LoadStore:
    return LoadStore(
        memory_gateway,
        params=StoreParams(),
        id_factory=sequential_ids,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def persistence_error() -> PersistenceError:
    return PersistenceError("store unavailable", operation="save", target="test")
