"""FastAPI application factory.

The API serves the expense tracker web client:
- ``/api/auth``: accounts, tokens and password reset
- ``/api/projects``, ``/api/expenses``, ``/api/users/employees``,
  ``/api/estimates``: per-user records
- ``/api/dashboard``, ``/api/export``: aggregate figures and downloads
- ``/health``: liveness probe

Each request runs inside a LogContext carrying a correlation id, taken
from the ``X-Correlation-ID`` request header when present and echoed on
the response.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from expense_tracker import __version__
from expense_tracker.api.error_handlers import register_error_handlers
from expense_tracker.api.routes import api_router
from expense_tracker.config.settings import TrackerConfig, get_config
from expense_tracker.db.session import init_db
from expense_tracker.utils.logging_utils import LogContext, generate_correlation_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Expense tracker API started")
    yield
    logger.info("Expense tracker API stopped")


def create_app(config: Optional[TrackerConfig] = None) -> FastAPI:
    """Build the API application.

    Args:
        config: Settings to use; defaults to the global configuration

    Returns:
        Configured FastAPI instance
    """
    config = config or get_config()
    app = FastAPI(
        title="Expense Tracker API",
        version=__version__,
        debug=config.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition", CORRELATION_HEADER],
    )

    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next):
        correlation_id = request.headers.get(CORRELATION_HEADER) or generate_correlation_id()
        with LogContext(
            correlation_id=correlation_id,
            route=f"{request.method} {request.url.path}",
        ):
            response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response

    register_error_handlers(app)
    app.include_router(api_router)

    @app.get("/health")
    def health():
        """Liveness probe: ``{"status": "ok", "service": "expense-tracker"}``."""
        return {"status": "ok", "service": "expense-tracker"}

    return app
