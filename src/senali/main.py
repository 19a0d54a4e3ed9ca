"""
Senali API application.

`create_application` assembles the app from settings; the module-level
`app` is what uvicorn serves:

    uvicorn senali.main:app
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from senali import __version__
from senali.api.middleware import (
    ErrorHandlerMiddleware,
    RateLimitMiddleware,
    register_exception_handlers,
)
from senali.api.middleware.rate_limiter import RateLimitConfig
from senali.api.v1.router import api_router
from senali.config import Settings, get_settings
from senali.config.logging_config import configure_logging, get_logger
from senali.infrastructure.database import get_db_manager
from senali.infrastructure.metrics import metrics_router, update_system_info
from senali.infrastructure.monitoring import init_sentry

settings = get_settings()
configure_logging(settings)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    app_settings: Settings = app.state.settings
    logger.info("Senali starting", env=app_settings.env, version=__version__)

    init_sentry(
        dsn=app_settings.sentry.dsn,
        environment=app_settings.env,
        traces_sample_rate=app_settings.sentry.traces_sample_rate,
    )
    update_system_info(app_settings.env)

    db = get_db_manager()
    await db.initialize()
    try:
        if app_settings.env == "development":
            await db.create_all()
        yield
    finally:
        await db.close()
        logger.info("Senali stopped")


def create_application(app_settings: Optional[Settings] = None) -> FastAPI:
    """Build the app. Tests pass their own settings."""
    app_settings = app_settings or settings
    show_docs = not app_settings.is_production()

    app = FastAPI(
        title="Senali API",
        description="AI parenting support for families of neurodivergent children",
        version=__version__,
        docs_url="/docs" if show_docs else None,
        redoc_url="/redoc" if show_docs else None,
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    # add_middleware wraps: the last one added runs first
    if app_settings.rate_limit.rate_limit_enabled:
        app.add_middleware(
            RateLimitMiddleware,
            config=RateLimitConfig.from_settings(app_settings.rate_limit),
            api_prefix=app_settings.api_prefix,
        )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(ErrorHandlerMiddleware)
    register_exception_handlers(app)

    app.include_router(api_router, prefix=app_settings.api_prefix)
    app.include_router(metrics_router)

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        return {"name": "Senali API", "version": __version__, "status": "operational"}

    return app


app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "senali.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.env == "development",
        log_level=settings.log_level.lower(),
    )
