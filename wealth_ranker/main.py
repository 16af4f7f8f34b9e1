import logging
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core import errors
from .core.config import Settings, get_settings
from .core.logging import init_logging, request_context_middleware
from .routers import countries, health, ranking, rates
from .services.context import AppContext

logger = logging.getLogger("wealth_ranker")


def create_app(
    settings_override: Optional[Settings] = None,
    *,
    context: Optional[AppContext] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment. Falls back to cached get_settings().
    context / transport: inject a prepared AppContext, or an httpx transport
    used for every upstream call (tests pass httpx.MockTransport).
    """
    settings = settings_override or get_settings()
    # Initialize logging early
    init_logging(debug=settings.debug)

    app = FastAPI(
        title=settings.app_name, debug=settings.debug, version=settings.version
    )
    app.state.context = context or AppContext(settings, transport=transport)

    # Middleware (request id / structured logging)
    app.middleware("http")(request_context_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Error handlers
    app.add_exception_handler(errors.WealthRankerError, errors.domain_error_handler)
    app.add_exception_handler(StarletteHTTPException, errors.not_found_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    # Routers
    app.include_router(health.router)
    app.include_router(rates.router)
    app.include_router(countries.router)
    app.include_router(ranking.router)

    @app.get("/")
    def root():
        return {"message": settings.app_name, "version": settings.version}

    return app


app = create_app()
