import logging
from dataclasses import dataclass
from typing import Optional

import requests

from app.config import settings

logger = logging.getLogger("app.images")

UPLOAD_TIMEOUT = 30


class ImageUploadError(Exception):
    pass


@dataclass
class ImageUploadResult:
    url: str
    delete_url: Optional[str]
    filename: str


def validate_image(content_type: Optional[str], size: int):
    if not (content_type or "").startswith("image/"):
        raise ImageUploadError("Only image files are allowed")
    if size > settings.IMAGE_MAX_BYTES:
        max_mb = settings.IMAGE_MAX_BYTES // (1024 * 1024)
        raise ImageUploadError(f"Image must be smaller than {max_mb}MB")


def upload_image(content: bytes, filename: str, content_type: Optional[str]) -> ImageUploadResult:
    validate_image(content_type, len(content))

    try:
        resp = requests.post(
            settings.IMGBB_UPLOAD_URL,
            data={"key": settings.IMGBB_API_KEY},
            files={"image": (filename, content, content_type)},
            timeout=UPLOAD_TIMEOUT,
        )
    except requests.RequestException as e:
        logger.warning("Image host unreachable: %s", e)
        raise ImageUploadError("Network error during upload") from e

    if not resp.ok:
        raise ImageUploadError(f"Upload failed: {resp.status_code} {resp.reason}")

    try:
        body = resp.json()
        if not body.get("success"):
            message = (body.get("error") or {}).get("message") or "Upload failed"
            raise ImageUploadError(message)

        data = body["data"]
        result = ImageUploadResult(
            url=data["url"],
            delete_url=data.get("delete_url"),
            filename=(data.get("image") or {}).get("filename") or filename,
        )
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        logger.warning("Unexpected response from image host: %s", e)
        raise ImageUploadError("Unexpected response from image host") from e

    logger.info("Uploaded image %s -> %s", filename, result.url)
    return result


def delete_image(delete_url: Optional[str]) -> bool:
    """Best effort; a stale image on the host is not worth failing a profile update."""
    if not delete_url:
        return False
    try:
        resp = requests.delete(delete_url, timeout=UPLOAD_TIMEOUT)
    except requests.RequestException:
        logger.exception("Failed to delete image %s", delete_url)
        return False
    if not resp.ok:
        logger.warning("Image delete returned %s for %s", resp.status_code, delete_url)
    return resp.ok
