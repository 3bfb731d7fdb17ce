from contextlib import AsyncExitStack, asynccontextmanager
from typing import AsyncIterator, List
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def get_session_factory() -> sessionmaker:
    """Factory for handlers that fan out reads (one session per concurrent slice)"""
    return AsyncSessionLocal


@asynccontextmanager
async def open_sessions(session_factory: sessionmaker, count: int) -> AsyncIterator[List[AsyncSession]]:
    async with AsyncExitStack() as stack:
        yield [await stack.enter_async_context(session_factory()) for _ in range(count)]
