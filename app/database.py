import asyncio
import contextlib
from contextlib import asynccontextmanager

from fastapi import Request
from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    pass


def _is_memory_sqlite(url: URL) -> bool:
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def create_engine(database_url: str) -> AsyncEngine:
    url = make_url(database_url)
    if _is_memory_sqlite(url):
        # An in-memory database only lives as long as its connection, so all sessions share one
        return create_async_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_async_engine(url, echo=False)


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


def create_session_lock(database_url: str) -> asyncio.Lock | contextlib.nullcontext:
    """One session at a time when every session shares the same connection.

    Sessions on a shared connection would otherwise interleave their
    transactions, and closing one rolls back the other's uncommitted writes.
    """
    if _is_memory_sqlite(make_url(database_url)):
        return asyncio.Lock()
    return contextlib.nullcontext()


@asynccontextmanager
async def session_scope(state):
    """Open a session from ``app.state``, holding its session lock until it closes."""
    async with state.session_lock:
        async with state.sessionmaker() as session:
            yield session


async def get_db(request: Request):
    async with session_scope(request.app.state) as session:
        yield session
