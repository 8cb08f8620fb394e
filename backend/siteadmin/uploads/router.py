"""FastAPI router for image upload endpoints."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.responses import JSONResponse

from .naming import is_accepted_image_type, resolve_cover_filename, resolve_event_filename
from .schemas import UploadResponse
from .storage import StorageError, UploadStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["uploads"])


def get_upload_storage() -> UploadStorage:
    return UploadStorage.get_instance()


def _no_file() -> JSONResponse:
    return JSONResponse({"error": "no file"}, status_code=400)


def _write_failed() -> JSONResponse:
    return JSONResponse({"error": "write_failed"}, status_code=500)


@router.post("/upload-cover", response_model=UploadResponse)
async def upload_cover(
    cover: Optional[UploadFile] = File(None),
    storage: UploadStorage = Depends(get_upload_storage),
):
    """Upload the site cover image.

    The file is always stored as ``fmi.<ext>``, replacing the previous cover.

    Returns:
        UploadResponse with the stored filename, or 400 ``no file``.
    """
    if cover is None:
        return _no_file()

    resolved = resolve_cover_filename(cover.filename, cover.content_type)
    try:
        storage.save(resolved.name, cover.file)
    except StorageError as e:
        logger.error("Cover upload failed: %s", e)
        return _write_failed()

    return UploadResponse(file=resolved.name)


@router.post("/upload-event", response_model=UploadResponse)
async def upload_event(
    image: Optional[UploadFile] = File(None),
    query_filename: Optional[str] = Query(None, alias="filename"),
    form_filename: Optional[str] = Form(None, alias="filename"),
    storage: UploadStorage = Depends(get_upload_storage),
):
    """Upload an event image under a client-suggested name.

    The name comes from the ``filename`` query parameter, then the
    ``filename`` form field, then the uploaded file's own name, and is
    sanitized before use. Only JPEG and PNG uploads are accepted; the
    type is checked before anything is written.

    Returns:
        UploadResponse with the stored filename, or 400 ``no file`` /
        ``invalid_type``.
    """
    if image is None:
        return _no_file()

    if not is_accepted_image_type(image.content_type):
        logger.warning("Rejected event upload %r: mimetype=%s", image.filename, image.content_type)
        return JSONResponse({"error": "invalid_type"}, status_code=400)

    resolved = resolve_event_filename(
        image.filename,
        image.content_type,
        query_hint=query_filename,
        form_hint=form_filename,
    )
    try:
        path = storage.save(resolved.name, image.file)
    except StorageError as e:
        logger.error("Event upload failed: %s", e)
        return _write_failed()

    logger.info(
        "Uploaded event file: path=%s filename=%s mimetype=%s",
        path,
        resolved.name,
        image.content_type,
    )
    return UploadResponse(file=resolved.name)
