# dental_api/main.py
from __future__ import annotations

# Load .env early so os.getenv works everywhere
from dotenv import load_dotenv
load_dotenv()

from contextlib import asynccontextmanager
from typing import Optional

import sqlalchemy as sa
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession

from dental_api.core.config import Settings, get_settings
from dental_api.core.errors import register_exception_handlers
from dental_api.core.logging import LoggingMiddleware, get_logger, setup_logging
from dental_api.crud.content import ensure_about
from dental_api.db.session import Database, get_session

# Routers
from dental_api.api.routes.admin import router as admin_router
from dental_api.api.routes.admin_content import router as admin_content_router
from dental_api.api.routes.auth import router as auth_router
from dental_api.api.routes.consultations import router as consultations_router
from dental_api.api.routes.content import router as content_router
from dental_api.api.routes.posts import router as posts_router
from dental_api.api.routes.reservations import router as reservations_router
from dental_api.api.routes.schedule import router as schedule_router

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Build the application. Tests pass their own ``settings`` and an in-memory
    ``database``; production reads both from the environment.
    """
    settings = settings or get_settings()
    setup_logging(
        debug=settings.is_development,
        level=settings.LOG_LEVEL,
        max_log_length=settings.MAX_LOG_LENGTH,
    )
    if settings.has_default_secret:
        logger.warning("jwt_secret_is_default", app_env=settings.APP_ENV)

    db = database or Database(settings.async_db_uri, echo=settings.DB_ECHO)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.DB_AUTO_CREATE:
            await db.create_all()
        async with db.session() as session:
            await ensure_about(session)
        logger.info("app_started", app_env=settings.APP_ENV)
        try:
            yield
        finally:
            await db.dispose()
            logger.info("app_stopped")

    app = FastAPI(
        title="Dental Clinic API",
        description="Clinic website backend: appointments, forum, consultations and site content",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db = db

    app.middleware("http")(LoggingMiddleware(log_requests=settings.LOG_REQUESTS))
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # -------- Health / readiness (public) --------
    @app.get("/healthz", include_in_schema=False)
    async def healthz():
        return {"ok": True}

    @app.get("/readyz", include_in_schema=False)
    async def readyz(session: AsyncSession = Depends(get_session)):
        await session.execute(sa.text("SELECT 1"))
        return {"db": "ok"}

    app.include_router(reservations_router)
    app.include_router(schedule_router)
    app.include_router(auth_router)
    app.include_router(posts_router)
    app.include_router(consultations_router)
    app.include_router(content_router)
    app.include_router(admin_router)
    app.include_router(admin_content_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("dental_api.main:app", host="0.0.0.0", port=8000)
