"""Local-disk storage for trade screenshots.

Images are written under ``settings.upload_dir`` and served back to their
owner under ``settings.upload_url_prefix``. The stored reference is the public URL; its
last path segment is the storage key used for deletion.
"""

import asyncio
import logging
import time
import uuid
from pathlib import Path

from fastapi import UploadFile

from journal.config import settings
from journal.utils.constants import ALLOWED_SCREENSHOT_TYPES

logger = logging.getLogger(__name__)


class ScreenshotError(ValueError):
    """Upload rejected: wrong content type, empty or too large."""


def has_content(upload: UploadFile | None) -> bool:
    # Browsers submit an empty file part when no file was picked
    return upload is not None and bool(upload.filename)


def _new_key(extension: str) -> str:
    return f"trade-{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}.{extension}"


def key_from_url(url: str) -> str | None:
    key = url.rstrip("/").rsplit("/", 1)[-1]
    # Reject anything that could escape the upload directory
    if not key or key in (".", "..") or "\\" in key:
        return None
    return key


def _upload_dir() -> Path:
    path = Path(settings.upload_dir)
    path.mkdir(parents=True, exist_ok=True)
    return path


async def save_screenshot(upload: UploadFile) -> str:
    """Validate and store an uploaded image. Returns its public URL."""
    extension = ALLOWED_SCREENSHOT_TYPES.get(upload.content_type or "")
    if extension is None:
        raise ScreenshotError(f"Unsupported screenshot type: {upload.content_type}")

    data = await upload.read(settings.max_upload_bytes + 1)
    if not data:
        raise ScreenshotError("Screenshot is empty")
    if len(data) > settings.max_upload_bytes:
        raise ScreenshotError(
            f"Screenshot exceeds {settings.max_upload_bytes // 1024} KiB limit"
        )

    key = _new_key(extension)
    path = _upload_dir() / key
    await asyncio.get_event_loop().run_in_executor(None, path.write_bytes, data)
    logger.info(f"Stored screenshot {key} ({len(data)} bytes)")
    return url_for_key(key)


def delete_screenshot(url: str) -> bool:
    """Remove a stored screenshot. Returns False if nothing was deleted."""
    key = key_from_url(url)
    if key is None:
        logger.warning(f"Cannot derive screenshot key from {url!r}")
        return False
    path = _upload_dir() / key
    if not path.is_file():
        logger.warning(f"Screenshot {key} not found on disk")
        return False
    path.unlink()
    logger.info(f"Deleted screenshot {key}")
    return True


def screenshot_path(url: str) -> Path | None:
    """Location on disk of a stored screenshot, or None if it is not there."""
    key = key_from_url(url)
    if key is None:
        return None
    path = _upload_dir() / key
    return path if path.is_file() else None


def url_for_key(key: str) -> str:
    return f"{settings.upload_url_prefix.rstrip('/')}/{key}"
