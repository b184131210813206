"""
Taskie Backend - File Storage Service
=======================================

What:  Validates uploaded images and writes them under the storage root.
How:   Checks extension, declared content type and size, then stores the bytes
       under a purpose directory with a timestamp + random suffix filename.
Who:   Called by the user service (avatars, proofs) and the task service
       (task images, payment proofs).
When:  After the multipart body is read, before the owning row is written.

Directory Structure:
    uploads/
    ├── avatars/   avatar-1718000000000-123456789.png
    ├── proofs/    proof-...
    ├── tasks/     task-...
    └── payments/  payment-...

Stored files are referenced as `/uploads/<purpose>/<filename>` and are never
deleted when the owning user or task goes away.
"""

import logging
import os
import random
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

import aiofiles
from fastapi import UploadFile

from taskie.config import settings
from taskie.exceptions import FileStorageError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

# ── Allowed File Types ────────────────────────────────────────────────────
ALLOWED_EXTENSIONS = {".png", ".jpg", ".jpeg"}
ALLOWED_CONTENT_TYPES = {"image/png", "image/jpeg", "image/jpg"}

INVALID_TYPE_MESSAGE = "Only image files (JPEG, JPG, PNG) are allowed"

# purpose directory -> filename prefix
PURPOSES = {
    "avatars": "avatar",
    "proofs": "proof",
    "tasks": "task",
    "payments": "payment",
}

URL_PREFIX = "/uploads"


@dataclass
class UploadedImage:
    """An upload already read into memory."""

    filename: str
    content: bytes
    content_type: Optional[str] = None


async def read_upload(upload: UploadFile) -> UploadedImage:
    try:
        content = await upload.read()
    finally:
        await upload.close()
    return UploadedImage(
        filename=upload.filename or "",
        content=content,
        content_type=upload.content_type,
    )


class FileService:
    """
    Manages image validation and the on-disk layout of uploads.

    Lifecycle of an uploaded image:
        1. Route reads the multipart part into an UploadedImage
        2. validate() checks extension, content type, size
        3. store() writes it to <storage_root>/<purpose>/<prefix>-<ms>-<rand><ext>
        4. The returned /uploads/... URL is saved on the owning row
    """

    def __init__(self, storage_root: Optional[str] = None):
        """
        Args:
            storage_root: Override the default storage path (used in tests).
        """
        self.storage_root = Path(storage_root or settings.storage_root).resolve()
        self.ensure_directories()

    def ensure_directories(self) -> None:
        for purpose in PURPOSES:
            (self.storage_root / purpose).mkdir(parents=True, exist_ok=True)

    def validate_extension(self, filename: str) -> str:
        """Returns the lower-cased extension, or raises ValidationError."""
        ext = Path(filename).suffix.lower()
        if ext not in ALLOWED_EXTENSIONS:
            raise ValidationError(
                message=INVALID_TYPE_MESSAGE,
                field="file",
                context={"extension": ext},
            )
        return ext

    def validate_content_type(self, content_type: Optional[str]) -> None:
        # Checked in addition to the extension
        if (content_type or "").lower() not in ALLOWED_CONTENT_TYPES:
            raise ValidationError(
                message=INVALID_TYPE_MESSAGE,
                field="file",
                context={"content_type": content_type},
            )

    def validate_size(self, actual_size: int) -> None:
        max_mb = settings.max_file_size / (1024 * 1024)
        if actual_size > settings.max_file_size:
            raise ValidationError(
                message=f"File size exceeds maximum of {max_mb:.0f}MB",
                field="file",
                context={"max_size_mb": max_mb, "actual_size": actual_size},
            )
        if actual_size == 0:
            raise ValidationError(message="Uploaded file is empty", field="file")

    def validate(self, image: UploadedImage) -> str:
        ext = self.validate_extension(image.filename)
        self.validate_content_type(image.content_type)
        self.validate_size(len(image.content))
        return ext

    def _generate_filename(self, purpose: str, extension: str) -> str:
        epoch_ms = int(time.time() * 1000)
        suffix = random.randint(0, 999_999_999)
        return f"{PURPOSES[purpose]}-{epoch_ms}-{suffix}{extension}"

    async def store(self, purpose: str, image: UploadedImage) -> str:
        """
        Validate and write one image.

        Returns:
            Relative URL, e.g. /uploads/tasks/task-1718000000000-42.png

        Raises:
            ValidationError: bad type or size
            FileStorageError: directory or write failure
        """
        if purpose not in PURPOSES:
            raise ValueError(f"Unknown upload purpose '{purpose}'")

        ext = self.validate(image)
        filename = self._generate_filename(purpose, ext)
        absolute_path = self.storage_root / purpose / filename

        try:
            absolute_path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(absolute_path, "wb") as f:
                await f.write(image.content)
        except OSError as e:
            logger.error("Failed to store file at %s: %s", absolute_path, str(e))
            raise FileStorageError(
                message="Failed to save uploaded image. Please try again.",
                context={"path": str(absolute_path), "os_error": str(e)},
            )

        logger.info("File stored: %s/%s (%d bytes)", purpose, filename, len(image.content))
        return f"{URL_PREFIX}/{purpose}/{filename}"

    async def store_many(self, purpose: str, images: Iterable[UploadedImage]) -> List[str]:
        """
        Validate every image first, then write them all.

        Nothing is written when any image is rejected. If a write fails midway
        the images already written are removed.
        """
        images = list(images)
        for image in images:
            self.validate(image)

        urls: List[str] = []
        try:
            for image in images:
                urls.append(await self.store(purpose, image))
        except FileStorageError:
            await self.cleanup(urls)
            raise
        return urls

    def resolve(self, relative_path: str) -> Path:
        """
        Map a path below /uploads/ to a file on disk.

        Raises:
            ValidationError: path escapes the storage root
            NotFoundError: no such file
        """
        full_path = (self.storage_root / relative_path).resolve()
        if not full_path.is_relative_to(self.storage_root):
            raise ValidationError(message="Invalid file path")
        if not full_path.is_file():
            raise NotFoundError(resource="file", resource_id=relative_path)
        return full_path

    async def cleanup(self, urls: Iterable[str]) -> None:
        """
        Best-effort removal of files written during a request that then failed.

        Missing files are ignored; other failures are logged, not raised.
        """
        for url in urls:
            relative = url[len(URL_PREFIX) + 1:] if url.startswith(URL_PREFIX + "/") else url
            path = self.storage_root / relative
            try:
                if path.exists():
                    os.remove(path)
                    logger.info("Cleaned up file: %s", path.name)
            except OSError as e:
                logger.warning("Failed to clean up file %s: %s", path, str(e))


# ── Singleton Instance ────────────────────────────────────────────────────
file_service = FileService()
