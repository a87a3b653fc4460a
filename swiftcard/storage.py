"""
Card image storage.

Saves uploaded card images under a local folder and hands back the URL
they are served from.
"""

import logging
import re
from pathlib import Path
from typing import Optional

from .exceptions import ImageUploadError
from .result import Failure, Result, Success

logger = logging.getLogger(__name__)

SAFE_NAME = re.compile(r"^[A-Za-z0-9_\-]+$")


class ImageStore:
    """Local folder image store returning public URLs."""

    def __init__(self, folder: str = "uploads", base_url: str = "/api/images"):
        self.folder = Path(folder)
        self.folder.mkdir(parents=True, exist_ok=True)
        self.base_url = base_url.rstrip("/")

    def filename_for(self, card_id: str, extension: str = "jpg") -> str:
        return f"{card_id}.{extension.lower().lstrip('.')}"

    def upload(self, data: Optional[bytes], card_id: str, extension: str = "jpg") -> Result:
        """Store image bytes for a card.

        Args:
            data: Raw image bytes
            card_id: Id of the (already saved) card
            extension: File extension to store under

        Returns:
            Success with the image URL, or Failure with an ImageUploadError
        """
        if not data:
            return Failure(ImageUploadError("No image data provided"))
        if not card_id or not SAFE_NAME.match(card_id):
            return Failure(ImageUploadError("Invalid card id for image upload", {"card_id": card_id}))
        if not SAFE_NAME.match(extension.lstrip(".")):
            return Failure(ImageUploadError("Invalid image extension", {"extension": extension}))

        filename = self.filename_for(card_id, extension)
        try:
            (self.folder / filename).write_bytes(data)
        except OSError as e:
            logger.error(f"Failed to store image for {card_id}: {e}")
            return Failure(ImageUploadError(f"Failed to store image: {e}", {"card_id": card_id}))

        url = f"{self.base_url}/{filename}"
        logger.info(f"Stored image for card {card_id} at {url}")
        return Success(url)

    def path_for(self, filename: str) -> Optional[Path]:
        path = self.folder / filename
        return path if path.is_file() else None
