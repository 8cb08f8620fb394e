"""Pydantic schemas for the upload endpoints."""
from pydantic import BaseModel, Field


class UploadResponse(BaseModel):
    """Response after an image has been stored."""
    ok: bool = Field(True, description="Always true on success")
    file: str = Field(..., description="Resolved filename inside the storage root")
