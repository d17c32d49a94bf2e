"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe sees the test engine
    - seeded_config inserts the default retirement ages, as the initial migration does

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
    - Engine built with db/session.create_session_factory, the same factory scripts use
"""

from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient

from officer_records.db.base import Base
from officer_records.db.session import create_session_factory
from officer_records.infrastructure.database import get_db, DatabaseSessionManager
from officer_records.models.personnel import Personnel
from officer_records.services.config_store import seed_default_config
import officer_records.infrastructure.database as db_module
from officer_records.main import app


@pytest.fixture
async def test_engine_and_factory():
    engine, factory = create_session_factory("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine, factory
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def test_engine(test_engine_and_factory):
    return test_engine_and_factory[0]


@pytest.fixture
def test_session_factory(test_engine_and_factory):
    return test_engine_and_factory[1]


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def seeded_config(test_db):
    await seed_default_config(test_db)


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def make_personnel(test_db):
    """Insert a personnel row directly, bypassing the service layer."""
    counter = iter(range(1, 10_000))

    async def _make(**fields) -> Personnel:
        values = {"nrp": f"NRP{next(counter):05d}", "nama": "Budi Santoso"}
        values.update(fields)
        personnel = Personnel(**values)
        test_db.add(personnel)
        await test_db.commit()
        await test_db.refresh(personnel)
        return personnel

    return _make


@pytest.fixture
def pension_ready_fields() -> dict:
    """Record fields that reproduce the reference pension of 2 751 250."""
    return {
        "pangkat": "Brigjen TNI",
        "gpt": 1_000_000,
        "mdk": 28,
        "tmt_tni": date(1990, 1, 1),
        "pensiun": date(2020, 1, 1),
        "pasangan": "Siti Aminah",
        "sts_anak_1": "AKTIF",
        "sts_anak_2": "AKTIF",
        "sts_anak_3": "AKTIF",
    }
