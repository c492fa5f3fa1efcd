from collections.abc import AsyncIterator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker


def build_engine(db_url: str) -> AsyncEngine:
    return create_async_engine(db_url, echo=False)


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    # La factoría de sesiones vive en app.state (se crea en el lifespan)
    async with request.app.state.sessionmaker() as s:
        yield s
