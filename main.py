from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI

from core.scheduler import Scheduler
from routes import dashboard, health
from services.dashboard import refresh_dashboard
from utils.logger import configure_logging
from utils.settings import get_settings

settings = get_settings()
logger = configure_logging(settings.log_level.upper())


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    scheduler = Scheduler()
    if settings.refresh_in_background:
        scheduler.register("dashboard-refresh", refresh_dashboard, settings.page_cache_ttl)
        scheduler.start_background()
    else:
        logger.info("Background refresh disabled; snapshots rebuild on request")
    app.state.scheduler = scheduler
    try:
        yield
    finally:
        await scheduler.stop()


def create_app() -> FastAPI:
    app = FastAPI(title="AI 24h Radar", version="0.1.0", lifespan=lifespan)
    app.include_router(health.router)
    app.include_router(dashboard.router)
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000)
