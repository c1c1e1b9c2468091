import logging
from contextlib import asynccontextmanager

import redis.asyncio as redis
import sentry_sdk
from fastapi import FastAPI
from sqlalchemy import text

from focusforest.config import settings
from focusforest.database import engine
from focusforest.middleware.error_handler import register_error_handlers
from focusforest.middleware.rate_limit import RateLimitMiddleware
from focusforest.routers.categories import router as categories_router
from focusforest.routers.legacy import router as legacy_router
from focusforest.routers.sessions import router as sessions_router
from focusforest.routers.stats import router as stats_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        traces_sample_rate=0.2 if settings.ENVIRONMENT == "production" else 1.0,
        send_default_pii=False,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: verify DB connection and connect Redis
    async with engine.begin() as conn:
        await conn.execute(text("SELECT 1"))

    app.state.redis = redis.from_url(settings.REDIS_URL, decode_responses=True)
    try:
        await app.state.redis.ping()
    except redis.RedisError as exc:
        logger.warning("Redis unreachable at startup, rate limiting disabled: %s", exc)
        await app.state.redis.close()
        app.state.redis = None

    logger.info(
        "Focus Forest API started (timezone=%s, first_weekday=%d)",
        settings.TIMEZONE,
        settings.FIRST_WEEKDAY,
    )
    yield

    # Shutdown
    if app.state.redis is not None:
        await app.state.redis.close()
    await engine.dispose()


app = FastAPI(
    title="Focus Forest API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(RateLimitMiddleware)
register_error_handlers(app)

app.include_router(sessions_router)
app.include_router(categories_router)
app.include_router(stats_router)
app.include_router(legacy_router)


@app.get("/health")
async def health():
    return {"status": "ok"}
