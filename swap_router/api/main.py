"""FastAPI application for the swap router.

Note: Rate limiting is intentionally not implemented at the application level.
It belongs at the infrastructure layer (reverse proxy / load balancer).
"""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from swap_router import __version__
from swap_router.api.endpoints import router
from swap_router.config import EngineConfig
from swap_router.errors import RouterError
from swap_router.logging import configure_logging

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("SWAP_ROUTER_HOST", "0.0.0.0")
PORT = int(os.environ.get("SWAP_ROUTER_PORT", "8000"))
DEBUG = os.environ.get("SWAP_ROUTER_DEBUG", "false").lower() in ("true", "1", "yes")

# Maximum request body size (64 KB); a quote request is a few hundred bytes
MAX_REQUEST_SIZE = 64 * 1024

logger = structlog.get_logger()

app = FastAPI(
    title="Swap Router",
    description="Best-route quoting over constant-product pools",
    version=__version__,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


@app.exception_handler(RouterError)
async def router_error_handler(request: Request, exc: RouterError) -> JSONResponse:
    """Render routing errors with their own status code."""
    logger.info(
        "quote_failed",
        path=request.url.path,
        error=type(exc).__name__,
        status_code=exc.status_code,
        detail=str(exc),
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": type(exc).__name__, "detail": str(exc)},
    )


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the swap router API server.

    Configuration via environment variables:
    - SWAP_ROUTER_HOST: Host to bind to (default: 0.0.0.0)
    - SWAP_ROUTER_PORT: Port to bind to (default: 8000)
    - SWAP_ROUTER_DEBUG: Enable debug/reload mode (default: false)
    - SWAP_ROUTER_LOG_LEVEL / SWAP_ROUTER_LOG_JSON: Log output
    - Engine settings: see swap_router.config.EngineConfig.from_env
    """
    config = EngineConfig.from_env()
    configure_logging(config.log_level, json=config.log_json)
    uvicorn.run(
        "swap_router.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
