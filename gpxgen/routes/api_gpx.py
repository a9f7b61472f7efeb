"""
API Routes for GPX generation

POST /generate-gpx turns points + activity details into a downloadable
GPX 1.1 file. GET / is a plain-text liveness banner.
"""

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.concurrency import run_in_threadpool
import logging

from gpxgen.api.models.gpx import GpxErrorResponse
from gpxgen.core.gpx import SynthesisError, ValidationError, generate_gpx

router = APIRouter()
logger = logging.getLogger(__name__)

SYNTHESIS_FAILURE_MESSAGE = "Failed to generate GPX file due to a server error."
BANNER = "Backend GPX Generator is running. Use POST /generate-gpx to generate GPX files."


@router.get("/", response_class=PlainTextResponse)
async def root():
    return BANNER


@router.post(
    "/generate-gpx",
    summary="Generate a GPX track",
    description="Synthesize per-point timestamps from speed and distance and return a GPX 1.1 file",
    responses={
        200: {"content": {"application/gpx+xml": {}}, "description": "GPX document"},
        400: {"model": GpxErrorResponse, "description": "Malformed request"},
        500: {"model": GpxErrorResponse, "description": "Server-side generation failure"},
    },
)
async def generate_gpx_file(request: Request):
    """
    Generate a GPX file from the JSON request body.

    Returns:
        GPX XML as an attachment, or a GpxErrorResponse with 400/500
    """
    logger.info("Received /generate-gpx request")
    try:
        payload = await request.json()
    except ValueError as e:
        logger.warning(f"Request body is not valid JSON: {e}")
        payload = None
    logger.debug(f"Parsed body: {payload!r}")

    try:
        document = await run_in_threadpool(generate_gpx, payload)
    except ValidationError as e:
        return JSONResponse(
            status_code=e.code,
            content=GpxErrorResponse(message=e.message).model_dump(exclude_none=True),
        )
    except SynthesisError as e:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=GpxErrorResponse(message=SYNTHESIS_FAILURE_MESSAGE, error=e.detail).model_dump(),
        )

    return Response(
        content=document.xml,
        media_type=document.media_type,
        headers={"Content-Disposition": f'attachment; filename="{document.filename}"'},
    )
