"""
Main FastAPI Application - GPX generator service
"""

from __future__ import annotations
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse

from gpxgen import __version__
from gpxgen.api.models.gpx import GpxErrorResponse
from gpxgen.common.config import load_service_config
from gpxgen.routes.api_gpx import router as gpx_router
from gpxgen.routes.api_health import router as health_router

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT, level=getattr(logging, level, logging.INFO))


def create_app(config: Optional[Dict[str, Any]] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Parsed service config (defaults to load_service_config())
    """
    config = config or load_service_config()
    http_config = config.get("http", {})
    cors = http_config.get("cors", {})
    max_body_bytes = int(http_config["max_body_bytes"])

    app = FastAPI(
        title="gpxgen",
        description="Generate GPX 1.1 tracks with synthesized timestamps",
        version=__version__,
    )

    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > max_body_bytes:
            logger.warning(f"Rejected {request.url.path}: body of {content_length} bytes exceeds {max_body_bytes}")
            return JSONResponse(
                status_code=413,
                content=GpxErrorResponse(
                    message=f"Request body exceeds limit of {max_body_bytes} bytes"
                ).model_dump(exclude_none=True),
            )
        return await call_next(request)

    # Added last so it wraps the body limit and 413s still carry CORS headers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors.get("allow_origins", ["*"]),
        allow_credentials=cors.get("allow_credentials", False),
        allow_methods=cors.get("allow_methods", ["*"]),
        allow_headers=cors.get("allow_headers", ["*"]),
    )

    app.include_router(gpx_router)
    app.include_router(health_router)

    logger.info(f"gpxgen {__version__} ready (max body {max_body_bytes} bytes, CORS origins {cors.get('allow_origins', ['*'])})")
    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    config = load_service_config()
    service = config["service"]
    configure_logging(service["log_level"])
    logger.info(f"GPX generator listening on http://{service['host']}:{service['port']}")
    uvicorn.run(create_app(config), host=service["host"], port=service["port"])


if __name__ == "__main__":
    run()
