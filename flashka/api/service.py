"""
Admin Service - File operations behind the kiosk's admin endpoints.

The service:
1. Validates and stores uploaded card images
2. Rotates image_1.png .. image_N.png into a new random order
3. Locates the admin page
4. Tallies tracking calls from kiosks

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
import logging
import os
import random
import re
import shutil
import threading

from ..engine_core.deck import shuffle_in_place

logger = logging.getLogger(__name__)

UPLOAD_NAME_PATTERN = re.compile(r"(image_\d+|flashka)\.png")
UPLOAD_CONTENT_TYPE = "image/png"
UPLOAD_RULE = "Only PNG files named image_1.png to image_10.png or flashka.png are allowed"
ADMIN_PAGE = "admin.html"


class UploadRejected(ValueError):
    """An uploaded file failed the name/type filter."""


@dataclass
class AdminService:
    """
    Admin operations over the public directory.

    Usage:
        service = AdminService(public_dir=Path("public"))
        service.validate_upload("image_3.png", "image/png")
        service.save_upload("image_3.png", data)
        order = service.shuffle_images()
    """
    public_dir: Path
    image_count: int = 10
    rng: random.Random = field(default_factory=random.Random)

    _track_counts: Counter = field(default_factory=Counter)
    _track_lock: threading.Lock = field(default_factory=threading.Lock)

    def __post_init__(self):
        self.public_dir = Path(self.public_dir)

    def public_dir_ok(self) -> bool:
        """True if the public directory exists and is readable and writable."""
        ok = self.public_dir.is_dir() and os.access(self.public_dir, os.R_OK | os.W_OK)
        if not ok:
            logger.error("Cannot access public directory: %s", self.public_dir)
        return ok

    # =========================================================================
    # Uploads
    # =========================================================================

    def validate_upload(self, filename: str | None, content_type: str | None):
        """Raise UploadRejected unless the file is an allowed PNG."""
        if content_type != UPLOAD_CONTENT_TYPE or not filename or not UPLOAD_NAME_PATTERN.fullmatch(filename):
            raise UploadRejected(UPLOAD_RULE)

    def save_upload(self, filename: str, data: bytes) -> Path:
        """Write an upload into the public directory under its own name."""
        self.validate_upload(filename, UPLOAD_CONTENT_TYPE)
        target = self.public_dir / filename
        target.write_bytes(data)
        logger.info("Stored upload %s (%d bytes)", target, len(data))
        return target

    # =========================================================================
    # Shuffle
    # =========================================================================

    def image_names(self) -> list[str]:
        return [f"image_{i + 1}.png" for i in range(self.image_count)]

    def shuffle_images(self) -> list[str]:
        """
        Move the numbered images into a new random order.

        Every source is copied to a temp name first, then the temps are
        renamed onto the final names, so no file is overwritten before it
        has been copied. Returns the new order: order[i] now lives at
        image_<i+1>.png. Raises OSError if a file is missing.
        """
        order = shuffle_in_place(self.image_names(), self.rng)
        temp_names = [f"temp_{index}_{name}" for index, name in enumerate(order)]

        try:
            for name, temp in zip(order, temp_names):
                shutil.copyfile(self.public_dir / name, self.public_dir / temp)
                logger.debug("Copied %s to %s", name, temp)

            for index, temp in enumerate(temp_names):
                dest = self.public_dir / f"image_{index + 1}.png"
                os.replace(self.public_dir / temp, dest)
                logger.debug("Renamed %s to %s", temp, dest.name)
        except OSError:
            self._remove_temps(temp_names)
            raise

        logger.info("Shuffled %d images", len(order))
        return order

    def _remove_temps(self, temp_names: list[str]):
        for temp in temp_names:
            (self.public_dir / temp).unlink(missing_ok=True)

    # =========================================================================
    # Pages
    # =========================================================================

    def admin_page(self) -> Path | None:
        """Path of the admin page, None if it is missing or unreadable."""
        path = self.public_dir / ADMIN_PAGE
        if path.is_file() and os.access(path, os.R_OK):
            return path
        logger.error("Cannot access %s", path)
        return None

    # =========================================================================
    # Tracking tallies
    # =========================================================================

    def record_event(self, event: str) -> int:
        """Count one tracking call. Returns the running total for the event."""
        with self._track_lock:
            self._track_counts[event] += 1
            count = self._track_counts[event]
        logger.info("Tracking event %s (total %d)", event, count)
        return count

    def track_counts(self) -> dict[str, int]:
        with self._track_lock:
            return dict(self._track_counts)
