"""
Pytest configuration and fixtures for testing
"""
import os

# Must be set before the application modules read their settings
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ["OPENAI_API_KEY"] = ""

import httpx
import pytest
from sqlalchemy.pool import StaticPool

from database import Base, build_engine, build_session_factory, get_db, init_db
from services.retry_policy import RetryPolicy
from services.session_store import SessionStore

# Create in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class StubTextClient:
    """
    Stands in for TextGenerationClient.

    Each call consumes the next entry of `outcomes` (falling back to
    `default` when empty). An entry that is an exception class or instance
    is raised, anything else is returned as the generated text.
    """

    def __init__(self, outcomes=None, default="نص مولد"):
        self.outcomes = list(outcomes or [])
        self.default = default
        self.prompts = []

    @property
    def calls(self) -> int:
        return len(self.prompts)

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        outcome = self.outcomes.pop(0) if self.outcomes else self.default
        if isinstance(outcome, type) and issubclass(outcome, Exception):
            raise outcome("stubbed failure")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class RecordingSleep:
    """Async sleep replacement that records the requested waits instead of waiting"""

    def __init__(self):
        self.waits = []

    async def __call__(self, seconds: float) -> None:
        self.waits.append(seconds)


@pytest.fixture
def stub_client():
    return StubTextClient()


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def retry_policy(stub_client, recording_sleep):
    return RetryPolicy(stub_client, max_attempts=3, backoff_step_seconds=2.0, sleep=recording_sleep)


@pytest.fixture
def session_store():
    return SessionStore()


@pytest.fixture
async def test_engine():
    # One shared connection so every session sees the same in-memory database
    engine = build_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    await init_db(engine)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return build_session_factory(test_engine)


@pytest.fixture
async def test_db(session_factory):
    """
    Isolated, in-memory SQLite session for each test.
    Tables are created before the test and dropped afterwards.
    """
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


@pytest.fixture
async def api_client(session_factory, session_store, retry_policy):
    """
    Async HTTP client bound to the app with the database, session store and
    retry policy replaced by test doubles. Startup events are not run.
    """
    from main import app
    from deps import get_session_store, get_retry_policy

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_store] = lambda: session_store
    app.dependency_overrides[get_retry_policy] = lambda: retry_policy

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    # Cleanup: remove dependency overrides
    app.dependency_overrides.clear()
