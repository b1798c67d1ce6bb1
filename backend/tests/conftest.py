"""
Registry API — Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── engine:            async SQLite engine on a temp file, tables created
    ├── provider:          ConnectionProvider wrapping that engine
    ├── upstream_calls:    list of requests seen by the fake function
    ├── upstream_handler:  swappable handler behind httpx.MockTransport
    ├── function_client:   FunctionClient talking to the fake function
    ├── test_client:       HTTPX AsyncClient wired to a fresh app
    ├── seed_company / seed_customer / seed_names: insert helpers
    └── mock_provider:     provider stand-in for service unit tests
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["FUNCTION_URL"] = "http://function.test/my-function"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import AsyncGenerator, Callable, Dict, List, Optional  # noqa: E402
from unittest.mock import MagicMock  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import insert  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine  # noqa: E402
from sqlalchemy.pool import AsyncAdaptedQueuePool  # noqa: E402

from app.database import Base, ConnectionProvider  # noqa: E402
from app.models import Company, Customer, FoodItem, Student  # noqa: E402
from app.services.function_client import FunctionClient  # noqa: E402

FUNCTION_URL = os.environ["FUNCTION_URL"]


# ══════════════════════════════════════════════════════════════════════════
# Store Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """
    A file-backed SQLite engine with the four tables created.

    A file (rather than :memory:) keeps a real connection pool in play, so
    release-on-exit can be observed through pool.checkedout().
    """
    eng = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'registry.db'}", poolclass=AsyncAdaptedQueuePool
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def provider(engine) -> ConnectionProvider:
    return ConnectionProvider(engine)


@pytest.fixture
def mock_provider():
    """
    Provider stand-in for service tests that must not touch a store.

    Usage:
        await company_service.update_company(mock_provider, "C1", CompanyChanges())
        mock_provider.acquire.assert_not_called()
    """
    provider = MagicMock(spec=ConnectionProvider)
    provider.acquire = MagicMock()
    return provider


@pytest.fixture
def seed_company(engine) -> Callable:
    async def _seed(company_id: str, name: Optional[str] = None, city: Optional[str] = None) -> None:
        async with engine.begin() as conn:
            await conn.execute(
                insert(Company.__table__).values(
                    COMPANY_ID=company_id, COMPANY_NAME=name, COMPANY_CITY=city
                )
            )

    return _seed


@pytest.fixture
def seed_customer(engine) -> Callable:
    async def _seed(cust_code: str, name: str) -> None:
        async with engine.begin() as conn:
            await conn.execute(
                insert(Customer.__table__).values(CUST_CODE=cust_code, CUST_NAME=name)
            )

    return _seed


@pytest.fixture
def seed_names(engine) -> Callable:
    """Insert student names and food item names in one go."""

    async def _seed(students: List[str] = (), foods: List[str] = ()) -> None:
        async with engine.begin() as conn:
            for name in students:
                await conn.execute(insert(Student.__table__).values(NAME=name))
            for item in foods:
                await conn.execute(insert(FoodItem.__table__).values(ITEM_NAME=item))

    return _seed


# ══════════════════════════════════════════════════════════════════════════
# External Function Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def upstream_calls() -> List[httpx.Request]:
    return []


@pytest.fixture
def upstream_handler(upstream_calls) -> Dict[str, Callable]:
    """
    Holder for the fake function's behaviour.

    Tests replace ``upstream_handler["respond"]`` to simulate failures; the
    default echoes the `param` query value back as JSON.
    """

    def respond(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"message": f"Hello, {request.url.params['param']}"})

    return {"respond": respond}


@pytest_asyncio.fixture
async def function_client(upstream_calls, upstream_handler) -> AsyncGenerator[FunctionClient, None]:
    def dispatch(request: httpx.Request) -> httpx.Response:
        upstream_calls.append(request)
        return upstream_handler["respond"](request)

    client = FunctionClient(FUNCTION_URL, timeout=2.0, transport=httpx.MockTransport(dispatch))
    yield client
    await client.aclose()


# ══════════════════════════════════════════════════════════════════════════
# API Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(provider, function_client) -> AsyncGenerator[AsyncClient, None]:
    """
    Provides an async HTTP test client for endpoint testing.

    ASGITransport does not run the lifespan, so the resources it would
    create are attached to app.state directly.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from app.main import create_app

    app = create_app()
    app.state.connection_provider = provider
    app.state.function_client = function_client
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
