import pytest
from httpx import AsyncClient, ASGITransport

from shopledger.main import app
from shopledger.db.database import Database, get_db
from shopledger.services.sale_service import SaleRecorder, get_sale_recorder
from tests.helpers import add_product


@pytest.fixture
async def database(tmp_path):
    """Fresh SQLite database file per test."""
    database = Database(url=f"sqlite:///{tmp_path / 'shopledger.db'}")
    await database.init_schema()
    yield database
    await database.disconnect()


@pytest.fixture
def recorder(database):
    return SaleRecorder(database, allow_negative_stock=True, timeout=5)


@pytest.fixture
async def client(database, recorder):
    """Async test client wired to the temporary database."""
    app.dependency_overrides[get_db] = lambda: database
    app.dependency_overrides[get_sale_recorder] = lambda: recorder

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def rice(database):
    return await add_product(database, "Rice", 10, 15, 100)
