"""FastAPI router for saving the site content document."""
import json
import logging
import math

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..config import get_config
from .service import ConfigWriteError, SiteConfigWriter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["site-config"])


def get_site_config_writer() -> SiteConfigWriter:
    return SiteConfigWriter.get_instance()


def _reject_constant(name: str):
    # NaN / Infinity are not JSON; the admin UI could not read them back.
    raise ValueError(f"Non-standard JSON constant: {name}")


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"Number out of range: {text}")
    return value


@router.post("/save-config")
async def save_config(
    request: Request,
    writer: SiteConfigWriter = Depends(get_site_config_writer),
) -> JSONResponse:
    """Replace the site content document with the JSON request body.

    Returns:
        ``{"ok": true}``; 413 if the body exceeds ``storage.max_config_bytes``,
        400 if it is not valid JSON, 500 ``write_failed`` if it cannot be saved.
    """
    limit = get_config().storage.max_config_bytes
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        logger.warning("Rejected site config: Content-Length %s exceeds limit of %d", declared, limit)
        return JSONResponse({"error": "payload_too_large"}, status_code=413)

    body = await request.body()
    if len(body) > limit:
        logger.warning("Rejected site config: %d bytes exceeds limit of %d", len(body), limit)
        return JSONResponse({"error": "payload_too_large"}, status_code=413)

    try:
        document = json.loads(body, parse_constant=_reject_constant, parse_float=_parse_finite_float)
    except ValueError as e:
        logger.warning("Rejected site config: invalid JSON (%s)", e)
        return JSONResponse({"error": "invalid_json"}, status_code=400)

    try:
        writer.write(document)
    except ConfigWriteError as e:
        logger.error("Saving site config failed: %s", e)
        return JSONResponse({"error": "write_failed"}, status_code=500)

    return JSONResponse({"ok": True})
