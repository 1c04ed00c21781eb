import logging
import os

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from hrfleet.config import settings

logger = logging.getLogger(__name__)


def _get_database_url() -> str:
    url = settings.database_url
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+asyncpg://", 1)
    elif url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


def _is_sqlite() -> bool:
    return settings.database_url.startswith("sqlite")


_database_url = _get_database_url()

_engine_kwargs: dict = {"echo": settings.db_echo}
if _is_sqlite():
    # aiosqlite connections are cheap; a fresh one per session keeps them off shared event loops
    _engine_kwargs.update(poolclass=NullPool)
else:
    _engine_kwargs.update(pool_size=5, max_overflow=10, pool_pre_ping=True)

engine = create_async_engine(_database_url, **_engine_kwargs)
async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

if _is_sqlite():
    @event.listens_for(engine.sync_engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class Base(DeclarativeBase):
    pass


def _ensure_sqlite_dir() -> None:
    database = make_url(_database_url).database
    if not database or database == ":memory:":
        return
    directory = os.path.dirname(database)
    if directory:
        os.makedirs(directory, exist_ok=True)


async def create_tables():
    async with engine.begin() as conn:
        from hrfleet.models import employee, vehicle  # noqa: F401
        await conn.run_sync(Base.metadata.create_all)


async def init_db() -> None:
    """Open the store once, log where we are connected and create the tables.

    Raises whatever the driver raises when the store is unreachable; the
    caller decides that this is fatal.
    """
    if _is_sqlite():
        _ensure_sqlite_dir()
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    url = make_url(_database_url)
    logger.info("Database connected: %s", url.host or url.database)
    await create_tables()


async def get_db():
    async with async_session() as session:
        yield session
