"""FastAPI application exposing the AMM engine."""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from amm_engine import __version__
from amm_engine.api.endpoints import router
from amm_engine.errors import AmmError, ConcurrencyError, StateError
from amm_engine.models.api import ErrorResponse

logger = structlog.get_logger()

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("AMM_HOST", "127.0.0.1")
PORT = int(os.environ.get("AMM_PORT", "8000"))
DEBUG = os.environ.get("AMM_DEBUG", "false").lower() in ("true", "1", "yes")

# Maximum request body size (64 KB); every request body is a handful of fields
MAX_REQUEST_SIZE = 64 * 1024

app = FastAPI(
    title="AMM Engine",
    description="Constant-product automated market maker",
    version=__version__,
)


def status_for(error: AmmError) -> int:
    """HTTP status for an engine error category."""
    if isinstance(error, (StateError, ConcurrencyError)):
        return 409
    return 400


@app.exception_handler(AmmError)
async def amm_error_handler(request: Request, exc: AmmError) -> JSONResponse:
    status_code = status_for(exc)
    logger.info(
        "request_rejected",
        path=request.url.path,
        error=type(exc).__name__,
        reason=exc.reason,
        status_code=status_code,
    )
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=type(exc).__name__, detail=exc.reason).model_dump(),
    )


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the API server.

    Configuration via environment variables:
    - AMM_HOST: Host to bind to (default: 127.0.0.1)
    - AMM_PORT: Port to bind to (default: 8000)
    - AMM_DEBUG: Enable debug/reload mode (default: false)
    - AMM_* engine settings, see EngineConfig.from_env
    """
    uvicorn.run(
        "amm_engine.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
