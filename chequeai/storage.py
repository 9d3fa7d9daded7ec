"""
Cheque image storage on local disk.
"""
from __future__ import annotations

import logging
import os
import uuid
from pathlib import Path
from typing import Optional

from chequeai.config import settings

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_EXTENSIONS = {".jpeg", ".jpg", ".png", ".gif", ".bmp"}
ALLOWED_IMAGE_TYPES = {"jpeg", "jpg", "png", "gif", "bmp"}


def upload_dir() -> Path:
    path = Path(settings.UPLOAD_DIR)
    path.mkdir(parents=True, exist_ok=True)
    return path


def allowed_image(filename: Optional[str], content_type: Optional[str]) -> bool:
    """Both the extension and the MIME subtype must name an image format."""
    if not filename or "." not in filename:
        return False
    ext = os.path.splitext(filename)[1].lower()
    if ext not in ALLOWED_IMAGE_EXTENSIONS:
        return False
    subtype = (content_type or "").split("/")[-1].lower()
    return subtype in ALLOWED_IMAGE_TYPES


def save_image(data: bytes, original_name: str) -> str:
    """Write *data* under a unique name and return that name."""
    ext = os.path.splitext(original_name)[1].lower() or ".bin"
    stored_name = f"file-{uuid.uuid4().hex}{ext}"
    (upload_dir() / stored_name).write_bytes(data)
    logger.info("Stored image %s (%d bytes)", stored_name, len(data))
    return stored_name


def image_path(filename: str) -> Path:
    # basename only; stored names never contain directories
    return upload_dir() / Path(filename).name


def delete_image(filename: Optional[str]) -> bool:
    """Remove a stored image if it is still there. Missing files are not an error."""
    if not filename:
        return False
    path = image_path(filename)
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError as e:
        logger.warning("Failed to delete image %s: %s", filename, e)
        return False
    logger.info("Deleted image %s", filename)
    return True
