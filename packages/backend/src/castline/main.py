"""FastAPI application factory.

create_app() returns a configured FastAPI instance. Lifespan logs startup
and disposes the database engine on shutdown. Middleware, CORS, and
routers are all registered here.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from castline import __version__
from castline.api import api_router
from castline.config import settings
from castline.middleware.request_id import RequestIdMiddleware
from castline.middleware.security import SecurityHeadersMiddleware

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    logger.info(
        "castline.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
        token_header=settings.token_header,
    )

    yield

    logger.info("castline.shutdown")

    from castline.db.engine import engine
    await engine.dispose()


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(
        title="Castline",
        description="Podcast catalogue backend",
        version=__version__,
        lifespan=lifespan,
    )

    # Starlette runs middleware in reverse registration order:
    # RequestId → Security → CORS → handler
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIdMiddleware)

    app.include_router(api_router)

    return app


# Default app instance (used by uvicorn: castline.main:app)
app = create_app()
