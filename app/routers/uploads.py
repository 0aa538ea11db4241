from fastapi import APIRouter, Depends, File, UploadFile

from app.schemas.misc import ImageUploadOut
from app.utils.auth import Principal, require_staff
from app.utils.i18n import get_language, http_error
from app.utils.image_upload import ImageUploadError, ImageUploadResult, upload_image, validate_image

import logging
logger = logging.getLogger("app.uploads")


router = APIRouter(prefix="/uploads", tags=["Uploads"])


def upload_or_raise(file: UploadFile, lang: str) -> ImageUploadResult:
    """400 for a file we refuse, 502 when the image host fails."""
    content = file.file.read()
    try:
        validate_image(file.content_type, len(content))
    except ImageUploadError as e:
        raise http_error(400, "image.upload_failed", lang, reason=str(e))

    try:
        return upload_image(content, file.filename or "image", file.content_type)
    except ImageUploadError as e:
        logger.warning("Image upload failed: %s", e)
        raise http_error(502, "image.upload_failed", lang, reason=str(e))


@router.post("/image", response_model=ImageUploadOut)
def upload_any_image(
    file: UploadFile = File(...),
    principal: Principal = Depends(require_staff),
    lang: str = Depends(get_language),
):
    result = upload_or_raise(file, lang)
    logger.info("%s %s uploaded %s", principal.role, principal.id, result.filename)
    return ImageUploadOut(url=result.url, delete_url=result.delete_url, filename=result.filename)
