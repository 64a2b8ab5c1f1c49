# backend/huddle/utils/uploads.py

import logging
import os
import random
import time

from fastapi import UploadFile

from ..core.config import get_settings

logger = logging.getLogger(__name__)


async def save_image(upload: UploadFile | None, field: str = "image") -> str | None:
    """
    Stores an uploaded image under the public images directory.

    The filename is <field>-<epoch ms>-<random int><original ext>.
    Returns the URL the browser can fetch it from, or None when no file came.
    """
    if upload is None or not upload.filename:
        return None

    settings = get_settings()
    ext = os.path.splitext(upload.filename)[1].lower()
    filename = f"{field}-{int(time.time() * 1000)}-{random.randint(0, 10**9)}{ext}"

    os.makedirs(settings.IMAGES_DIR, exist_ok=True)
    dest_path = os.path.join(settings.IMAGES_DIR, filename)

    data = await upload.read()
    with open(dest_path, "wb") as f:
        f.write(data)

    logger.info(f"Saved upload {upload.filename!r} as {dest_path}")
    return f"{settings.IMAGES_URL}/{filename}"


def discard_image(url: str | None) -> None:
    """Removes an image saved by save_image whose row never got written."""
    if not url:
        return

    settings = get_settings()
    path = os.path.join(settings.IMAGES_DIR, os.path.basename(url))
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not remove orphaned upload {path}: {e}")
