"""Data models for photo-organizer."""

from photo_organizer.models.enums import (
    IMAGE_EXTENSIONS,
    VIDEO_EXTENSIONS,
    MediaKind,
    OutcomeStatus,
)
from photo_organizer.models.record import Fingerprint, MediaRecord

__all__ = [
    "IMAGE_EXTENSIONS",
    "VIDEO_EXTENSIONS",
    "Fingerprint",
    "MediaKind",
    "MediaRecord",
    "OutcomeStatus",
]
