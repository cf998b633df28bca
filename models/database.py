from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from config import get_settings
from models.models import Base


def create_engine_from_settings() -> AsyncEngine:
    settings = get_settings()
    options = {"echo": settings.db_echo}
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=True,
        )
    return create_async_engine(settings.database_url, **options)


engine = create_engine_from_settings()
async_session_maker = async_sessionmaker(engine, expire_on_commit=False)


async def init_db():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db():
    await engine.dispose()
