"""Project Store API - Main Application Module.

This module initializes the FastAPI application that exposes the local-first
project store to a local UI: routing, exception handlers, and the lifecycle
of the per-process store context.
"""

import logging
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from projectstore.core.config import Settings, settings as default_settings
from projectstore.core.context import StoreContext, build_context
from projectstore.core.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None, context: Optional[StoreContext] = None
) -> FastAPI:
    """Create and configure the FastAPI application.

    A prebuilt ``context`` is used as-is and left open on shutdown;
    otherwise one is built from ``settings`` at startup and closed at exit.
    """
    settings = settings or default_settings
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_context = context is None
        app.state.context = context or build_context(settings)
        logger.info("Starting %s (%s)", settings.app_name, settings.environment.value)

        yield

        if owns_context:
            await app.state.context.aclose()
        logger.info("%s stopped", settings.app_name)

    app = FastAPI(
        title=settings.app_name,
        description="Local-first project store with session overlay and cloud upload",
        version=settings.version,
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )
    if context is not None:
        app.state.context = context

    setup_middleware(app, settings)
    setup_exception_handlers(app)
    setup_routers(app, settings)

    return app


def setup_middleware(app: FastAPI, settings: Settings):
    """Configure application middleware."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request ID middleware
    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def setup_exception_handlers(app: FastAPI):
    """Configure global exception handlers."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # Handle custom exceptions that have structured detail
        if isinstance(exc.detail, dict) and "message" in exc.detail:
            message = exc.detail["message"]
            error_code = exc.detail.get("error_code", "HTTP_ERROR")
            details = exc.detail.get("details")
        else:
            message = str(exc.detail) if exc.detail else "An error occurred"
            error_code = "HTTP_ERROR"
            details = None

        return JSONResponse(
            status_code=exc.status_code,
            content={
                "status": "error",
                "message": message,
                "error_code": error_code,
                "details": details,
                "timestamp": _timestamp(),
                "request_id": getattr(request.state, "request_id", None),
            },
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        # Convert errors to JSON-serializable format
        errors = []
        for error in exc.errors():
            error_dict = {
                "loc": error.get("loc", []),
                "msg": str(error.get("msg", "Validation error")),
                "type": error.get("type", "value_error"),
            }
            if "input" in error:
                error_dict["input"] = str(error["input"])
            errors.append(error_dict)

        return JSONResponse(
            status_code=422,
            content={
                "status": "error",
                "message": "Validation error",
                "details": errors,
                "timestamp": _timestamp(),
                "request_id": getattr(request.state, "request_id", None),
            },
        )


def setup_routers(app: FastAPI, settings: Settings):
    """Configure application routers."""
    from projectstore.domains.copilot.controller import router as copilot_router
    from projectstore.domains.marketing_plan.controller import router as marketing_plan_router
    from projectstore.domains.milestone.controller import router as milestone_router
    from projectstore.domains.project.controller import router as project_router
    from projectstore.domains.session.controller import router as session_router
    from projectstore.domains.todo.controller import router as todo_router

    @app.get("/health")
    async def health_check(request: Request):
        """Report whether the store is ready and who it is acting for."""
        ctx: Optional[StoreContext] = getattr(request.app.state, "context", None)
        return {
            "status": "healthy" if ctx is not None else "starting",
            "version": settings.version,
            "environment": settings.environment.value,
            "timestamp": _timestamp(),
            "authenticated": bool(ctx and ctx.auth.is_authenticated),
            "local_projects": ctx.state.local_projects_count if ctx else 0,
        }

    app.include_router(project_router)
    app.include_router(todo_router)
    app.include_router(milestone_router)
    app.include_router(marketing_plan_router)
    app.include_router(copilot_router)
    app.include_router(session_router)


def main():
    """Entry point for running the application directly."""
    import uvicorn

    uvicorn.run(
        "projectstore.main:create_app",
        factory=True,
        host=default_settings.host,
        port=default_settings.port,
        reload=default_settings.is_development,
        log_level=default_settings.log_level.value.lower(),
    )


if __name__ == "__main__":
    main()
