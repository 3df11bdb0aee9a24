"""
Pydantic Schemas for API - Request/response models for OpenAPI.

Error Codes:
- INVALID_UPLOAD: A file was not a PNG named image_<n>.png or flashka.png
- NO_FILES: The upload request carried no files
- SHUFFLE_FAILED: Image rotation failed (missing file, permissions)
- NOT_FOUND: Page or tracking event does not exist
"""

from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field


class ErrorCode(str, Enum):
    """Structured error codes."""
    INVALID_UPLOAD = "INVALID_UPLOAD"
    NO_FILES = "NO_FILES"
    SHUFFLE_FAILED = "SHUFFLE_FAILED"
    NOT_FOUND = "NOT_FOUND"


class TrackEvent(str, Enum):
    """Events the kiosk reports."""
    PLAY = "play"
    WIN = "win"


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class UploadResponse(BaseModel):
    """Response after storing uploaded images."""
    message: str
    files: list[str] = Field(default_factory=list, description="Stored file names")


class ShuffleResponse(BaseModel):
    """Response after rotating image positions."""
    message: str
    order: list[str] = Field(
        default_factory=list,
        description="order[i] is the file that now lives at image_<i+1>.png",
    )


class AdPackResponse(BaseModel):
    """Artwork URLs for the chosen pack."""
    base: str = Field(..., description="Pack folder, e.g. /ad3")
    front: str = Field(..., description="Card back / logo image")
    images: list[str] = Field(default_factory=list)
    faces: dict[int, str] = Field(
        default_factory=dict,
        description="Card identifier -> face image URL for the board size",
    )


class TrackResponse(BaseModel):
    """Acknowledgement of a tracking call."""
    event: TrackEvent
    count: int


class TrackStatsResponse(BaseModel):
    """Tallies of tracking calls since the server started."""
    counts: dict[str, int] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
    public_dir_ok: bool = True
