"""
Async SQLAlchemy engine, session factory and request-scoped session dependency
for users, project submissions and saved designs.
"""
import logging
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base

from config.settings import settings, IS_PRODUCTION

logger = logging.getLogger(__name__)

Base = declarative_base()


def check_database_url(url: str, production: bool) -> str:
    """SQLite is only for development and tests; production needs a server database."""
    if not url:
        raise RuntimeError("DATABASE_URL must be set")
    if production and url.lower().startswith("sqlite"):
        raise RuntimeError("SQLite is forbidden in production. Use a PostgreSQL DATABASE_URL.")
    return url


def build_engine(url: str, **kwargs) -> AsyncEngine:
    if url.startswith("sqlite"):
        # aiosqlite hands the connection to a worker thread
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_async_engine(url, echo=False, **kwargs)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


DATABASE_URL = check_database_url(settings.database_url, IS_PRODUCTION)
engine = build_engine(DATABASE_URL)
AsyncSessionLocal = build_session_factory(engine)


async def init_db(bind: AsyncEngine = None):
    """Create the users, projects and designs tables if they do not exist."""
    import database_models  # noqa: F401  registers the models on Base

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"Tables ready: {', '.join(sorted(Base.metadata.tables))}")


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Per-request session: commit when the handler returns, roll back if it raises."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
