"""
Burger Boots Backend — Test Configuration (conftest.py)
=========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Points the application at a throwaway SQLite database and storage
       directory BEFORE any burgerboots module is imported, then builds the
       schema fresh for every test that asks for the database.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── temp_storage: Temporary directory for file operations
    ├── sample_image_bytes: Fake image content for upload tests
    ├── database: Creates all tables, drops them afterwards
    │   ├── db_session: AsyncSession bound to the test database
    │   └── test_client: HTTPX AsyncClient talking to the FastAPI app
"""

import os
import tempfile

# Override settings for testing BEFORE any burgerboots imports
_TEST_DIR = tempfile.mkdtemp(prefix="burgerboots_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TEST_DIR, 'test.db')}"
os.environ["STORAGE_ROOT"] = os.path.join(_TEST_DIR, "uploads")
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402


@pytest.fixture
def temp_storage(tmp_path):
    """A fresh storage directory per test (pytest cleans it up)."""
    storage_dir = tmp_path / "storage"
    storage_dir.mkdir()
    return str(storage_dir)


@pytest.fixture
def sample_image_bytes():
    """
    Minimal JPEG bytes: SOI marker + JFIF header + EOI marker.

    Not a real photograph; uploads are checked by extension and size only.
    """
    return (
        b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
        b'\xff\xd9'
    )


@pytest_asyncio.fixture
async def database():
    """Creates every table before the test and drops them afterwards."""
    import burgerboots.models  # noqa: F401
    from burgerboots.database import Base, engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    """
    An AsyncSession for service-level tests.

    Usage:
        async def test_create(db_session):
            product = await product_service.create(db_session, fields={...})
    """
    from burgerboots.database import async_session_factory

    async with async_session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def test_client(database):
    """
    HTTPX AsyncClient configured to talk to the FastAPI app via ASGITransport.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from burgerboots.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
