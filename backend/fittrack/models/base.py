"""Declarative base, async engine and session dependencies."""
import logging
import uuid
from datetime import datetime

from sqlalchemy import MetaData, DateTime, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.engine.url import make_url
from sqlalchemy.ext.asyncio import AsyncAttrs, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from fittrack.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

# Constraint names must stay stable for the migrations
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(AsyncAttrs, DeclarativeBase):
    """Base class for FitTrack records: UUID key plus server-side timestamps."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id}>"


def build_engine_params(database_url: str) -> tuple[str, dict]:
    """
    Split libpq-style URL options into asyncpg connect arguments.

    Hosted Postgres URLs often carry ``sslmode`` and ``channel_binding``,
    which asyncpg rejects as keyword arguments.

    Returns:
        (url without those options, connect_args)
    """
    url = make_url(database_url)
    query = dict(url.query)
    connect_args: dict = {}

    sslmode = query.pop("sslmode", None)
    if sslmode and sslmode.lower() != "disable":
        connect_args["ssl"] = True
    query.pop("channel_binding", None)

    return url.set(query=query).render_as_string(hide_password=False), connect_args


_url, _connect_args = build_engine_params(settings.database_url)
engine = create_async_engine(
    _url,
    echo=settings.database_echo,
    pool_pre_ping=True,
    pool_size=settings.database_pool_size,
    max_overflow=settings.database_max_overflow,
    connect_args=_connect_args,
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db():
    """Request-scoped session: commit on success, roll back on any error."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            logger.warning("Rolling back database session after an error")
            await session.rollback()
            raise


def get_session_factory() -> async_sessionmaker:
    """Dependency returning the session factory for concurrent reads."""
    return AsyncSessionLocal


async def init_db():
    """Create missing tables. Migrations are the normal path."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
