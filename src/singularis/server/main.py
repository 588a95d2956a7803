"""FastAPI application for the SINGULARIS PRIME playground.

Routes are organized into modules under singularis/server/routes/:
- language: Parse, execute, tokens, completions
- quantum: Quantum operations and circuits
- geometry: Quantum geometric spaces
- optimization: Optimization directives
- ai: Negotiation, governance, self-documentation
- analysis: Code analysis, explainability, code generation
- glyph: G.L.Y.P.H. rituals
- monitor: AI monitoring WebSocket
- misc: Health
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from singularis import __version__
from singularis.config import get_config
from singularis.core.errors import ErrorCode, SingularisError
from singularis.server.monitor import AIMonitor, set_monitor
from singularis.server.routes import (
    ai_router,
    analysis_router,
    geometry_router,
    glyph_router,
    language_router,
    misc_router,
    monitor_router,
    optimization_router,
    quantum_router,
)

logger = logging.getLogger(__name__)

_CLIENT_ERROR_CATEGORIES = frozenset({"validation", "quantum"})
_NOT_FOUND_CODES = frozenset({ErrorCode.FILE_NOT_FOUND, ErrorCode.RESOURCE_NOT_FOUND})


def error_status(error: SingularisError) -> int:
    """HTTP status for a domain error."""
    if error.code in _NOT_FOUND_CODES:
        return 404
    if error.category in _CLIENT_ERROR_CATEGORIES:
        return 400
    return 500


async def _handle_singularis_error(request: Request, exc: SingularisError) -> JSONResponse:
    status = error_status(exc)
    if status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=status,
        content={"message": exc.message, "error": exc.to_dict()},
    )


def create_app(*, dev_mode: bool = False, monitor: AIMonitor | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        dev_mode: If True, enable CORS for the configured dev origins.
        monitor: AI monitor to install. If None, one is built from config.

    Returns:
        Configured FastAPI application.
    """
    config = get_config()

    if monitor is None:
        monitor = AIMonitor(
            auth_required=config.monitor.auth_required,
            max_connections=config.monitor.max_connections,
            send_timeout=config.monitor.send_timeout,
            heartbeat_interval=config.monitor.heartbeat_interval,
        )
    set_monitor(monitor)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        monitor.start_heartbeat()
        yield
        await monitor.stop_heartbeat()

    app = FastAPI(
        title="SINGULARIS PRIME",
        description="Quantum and AI-native language playground",
        version=__version__,
        lifespan=lifespan,
    )

    app.include_router(language_router)
    app.include_router(quantum_router)
    app.include_router(geometry_router)
    app.include_router(optimization_router)
    app.include_router(ai_router)
    app.include_router(analysis_router)
    app.include_router(glyph_router)
    app.include_router(monitor_router)
    app.include_router(misc_router)

    app.add_exception_handler(SingularisError, _handle_singularis_error)

    if dev_mode or config.server.dev_mode:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(config.server.cors_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    return app
