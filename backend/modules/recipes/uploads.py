"""
Asset uploader implementations.

The recipe core never inspects image bytes beyond type and size; it
hands them to an uploader and keeps the URL it gets back.
"""

import re
import time
import uuid
from typing import Any

from .exceptions import ImageTooLargeError, InvalidImageError
from .models import ImageUpload

ALLOWED_IMAGE_TYPES = frozenset({"image/jpeg", "image/png", "image/webp", "image/gif"})


def check_image(image: ImageUpload, max_bytes: int) -> None:
    """
    Reject uploads that are not images or are too large.

    Raises:
        InvalidImageError: For a disallowed content type
        ImageTooLargeError: For more than max_bytes of data
    """
    if image.content_type not in ALLOWED_IMAGE_TYPES:
        raise InvalidImageError(image.content_type)
    if len(image.data) > max_bytes:
        raise ImageTooLargeError(max_bytes)


def safe_object_name(filename: str) -> str:
    """Timestamped, whitespace-free object name."""
    base = re.sub(r"\s+", "-", filename.strip()) or "image"
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}-{base}"


class InMemoryAssetUploader:
    """Keeps uploads in memory and returns /uploads/<name> reference URLs."""

    def __init__(self, base_url: str = "/uploads") -> None:
        self._base_url = base_url.rstrip("/")
        self.objects: dict[str, ImageUpload] = {}

    async def upload(self, image: ImageUpload) -> str:
        name = safe_object_name(image.filename)
        self.objects[name] = image
        return f"{self._base_url}/{name}"


class SupabaseStorageUploader:
    """Stores uploads in a Supabase Storage bucket and returns the public URL."""

    def __init__(self, client: Any, bucket: str) -> None:
        self._client = client
        self._bucket = bucket

    async def upload(self, image: ImageUpload) -> str:
        name = safe_object_name(image.filename)
        storage = self._client.storage.from_(self._bucket)
        storage.upload(name, image.data, {"content-type": image.content_type})
        return storage.get_public_url(name)
