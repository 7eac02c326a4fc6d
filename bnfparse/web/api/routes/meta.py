"""Static page and API description endpoints"""

import logging
import os

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import FileResponse

router = APIRouter()
logger = logging.getLogger("bnfparse.web.api.meta")


def _serve(path: str, media_type: str) -> FileResponse:
    if not os.path.isfile(path):
        logger.error(f"Static file not found: {path}")
        raise HTTPException(status_code=404, detail="Not found")
    return FileResponse(path, media_type=media_type)


@router.get("/", response_class=FileResponse)
async def index(request: Request):
    """Serve the grammar playground page."""
    return _serve(request.app.state.config.webpage_path, "text/html")


@router.get("/meta-data/api-spec", response_class=FileResponse)
async def api_spec(request: Request):
    """Serve the OpenAPI description of this service."""
    return _serve(request.app.state.config.api_spec_path, "application/yaml")
