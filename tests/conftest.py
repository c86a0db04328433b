import pytest

from core.db import _connect
from core.models import DailyRowInput
from core.services.clients import add_client
from core.services.items import add_item, adjust_stock
from core.store import MemoryStore, SqliteStore


@pytest.fixture
def store():
    """Empty in-memory store."""
    return MemoryStore()


@pytest.fixture
def sqlite_store():
    """Store backed by an in-memory SQLite database."""
    conn = _connect(":memory:")
    yield SqliteStore(conn)
    conn.close()


@pytest.fixture(params=["memory", "sqlite"])
def any_store(request):
    """Runs a test once per backend."""
    if request.param == "memory":
        yield MemoryStore()
    else:
        conn = _connect(":memory:")
        yield SqliteStore(conn)
        conn.close()


@pytest.fixture
def shop(store):
    """Two clients and two paper items with opening stock."""
    alpha = add_client(store, name="Alpha Prints")
    beta = add_client(store, name="Beta Media")
    add_item(store, sku="PAP-001", name="A4 Paper", uom="sheets", reorder_level=100, price=0.5)
    add_item(store, sku="BRD-001", name="Art Board", uom="sheets", reorder_level=50, price=4.0)
    adjust_stock(store, "PAP-001", direction="IN", quantity=1000)
    adjust_stock(store, "BRD-001", direction="IN", quantity=500)
    return {"store": store, "alpha": alpha, "beta": beta}


@pytest.fixture
def make_row():
    """Factory for daily sheet rows with zeroed defaults."""
    def _make(client_id, sku="PAP-001", ss=0, fb=0, waste=0, design=0.0, finishing=0.0, ref=""):
        return DailyRowInput(
            client_id=client_id,
            job_reference=ref,
            designing_charges=design,
            material_sku=sku,
            ss_qty=ss,
            fb_qty=fb,
            finishing=finishing,
            waste=waste,
        )
    return _make
