import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI

from lineup.config import settings
from lineup.core.middleware import setup_middleware

logger = logging.getLogger(__name__)

_tables_created = False


async def ensure_tables():
    """Create DB tables if they haven't been created yet."""
    global _tables_created
    if _tables_created:
        return
    try:
        from lineup.db.engine import engine
        from lineup.db.base import Base
        import lineup.models  # noqa: F401

        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        _tables_created = True
    except Exception as e:
        logger.warning(f"Table creation skipped: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # Startup: create tables and start the feed refresher
    await ensure_tables()

    if settings.FEED_REFRESH_ENABLED:
        try:
            from lineup.services.feed_refresh import start_feed_refresher
            await start_feed_refresher()
        except Exception as e:
            logger.warning(f"Feed refresher failed to start: {e}")

    yield

    if settings.FEED_REFRESH_ENABLED:
        try:
            from lineup.services.feed_refresh import stop_feed_refresher
            await stop_feed_refresher()
        except Exception as e:
            logger.warning(f"Feed refresher failed to stop: {e}")


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Radio Lineup API",
        version="0.1.0",
        description="Weekly show grid, lineups, producer assignments and schedule feeds",
        debug=settings.APP_DEBUG,
        lifespan=lifespan,
    )

    setup_middleware(app)

    @app.get("/health")
    async def health_check():
        return {"status": "ok"}

    from lineup.api.v1 import router as api_v1_router
    app.include_router(api_v1_router, prefix="/api/v1")

    return app


app = create_app()
