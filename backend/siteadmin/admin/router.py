"""FastAPI router for admin UI support endpoints.

Endpoints:
    GET /admin/creds — Contents of the admin credentials file
    GET /admin/ping  — Liveness check with server time
"""
import json
import logging
import time

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..config import get_config

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/creds")
async def get_creds() -> JSONResponse:
    """Return the admin credentials file as JSON.

    Passwords in the file are expected to be base64 encoded; they are
    passed through as-is.

    Returns:
        The parsed file, 404 ``not_found`` if it does not exist, or
        500 ``invalid`` if it cannot be read or parsed.
    """
    src = get_config().storage.creds_file
    if not src.exists():
        return JSONResponse({"error": "not_found"}, status_code=404)

    try:
        data = json.loads(src.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.error("Reading admin credentials from %s failed: %s", src, e)
        return JSONResponse({"error": "invalid"}, status_code=500)

    return JSONResponse(data)


@router.get("/ping")
async def ping() -> dict:
    """Liveness check.

    Returns:
        dict: ``ok`` flag and the server time in epoch milliseconds.
    """
    return {"ok": True, "now": int(time.time() * 1000)}
