"""FastAPI application for the dashboard backend.

Two routes:

- POST /api/neon-query  body {action, params}; {data} on success,
  {error} with 400 for an unknown or missing action, 500 for anything else
- GET  /api/health      {ok: true} once bootstrap is done and the database
  answers, {ok: false, error} with 500 otherwise
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from fastapi import Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from aeon_dashboard.actions import ActionDispatcher
from aeon_dashboard.config.settings import AppSettings, get_settings
from aeon_dashboard.core import DashboardService
from aeon_dashboard.errors import ActionError, UnknownActionError

logger = logging.getLogger(__name__)


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def create_app(
    settings: AppSettings | None = None,
    service: DashboardService | None = None,
    dispatcher: ActionDispatcher | None = None,
) -> FastAPI:
    """Build the application.

    Args:
        settings: Application settings; get_settings() if None
        service: Prebuilt service (tests); built from settings at startup
            and disposed at shutdown if None
        dispatcher: Prebuilt dispatcher; bound to the service if None

    Returns:
        FastAPI application
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        owned = service is None
        app.state.service = service or DashboardService(settings)
        app.state.dispatcher = dispatcher or ActionDispatcher(app.state.service)
        try:
            yield
        finally:
            if owned:
                await app.state.service.close()

    app = FastAPI(title="Aeon Dashboard API", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error("Request body must be a JSON object", 400)

    @app.post("/api/neon-query")
    async def neon_query(
        request: Request, payload: dict[str, Any] = Body(default_factory=dict)
    ) -> Any:
        action = payload.get("action")
        if not action:
            return _error("Missing action", 400)

        params = payload.get("params")
        if params is not None and not isinstance(params, dict):
            return _error("params must be an object", 500)

        try:
            data = await request.app.state.dispatcher.dispatch(action, params)
        except UnknownActionError as e:
            return _error(str(e), 400)
        except ActionError as e:
            logger.info(f"{action}: {e}")
            return _error(str(e), 500)
        except Exception as e:
            logger.error(f"{action} failed: {e}")
            return _error(str(e) or e.__class__.__name__, 500)

        return {"data": data}

    @app.get("/api/health")
    async def health(request: Request) -> Any:
        try:
            await request.app.state.service.health()
        except Exception as e:
            logger.warning(f"Health check failed: {e}")
            return JSONResponse({"ok": False, "error": str(e)}, status_code=500)
        return {"ok": True}

    return app
