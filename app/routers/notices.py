from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.notice import Notice
from app.schemas.notice import (
    NoticeCreate,
    NoticeListOut,
    NoticeOut,
    NoticeType,
    NoticeUpdate,
)
from app.utils.auth import require_manager
from app.utils.i18n import get_language, http_error

import logging
logger = logging.getLogger("app.admin")

router = APIRouter(prefix="/notices", tags=["Notices"])


def _get_notice(db: Session, notice_id: int, lang: str) -> Notice:
    notice = db.query(Notice).filter(Notice.id == notice_id).first()
    if not notice:
        raise http_error(404, "not_found.notice", lang)
    return notice


@router.get("", response_model=NoticeListOut)
def list_notices(
    db: Session = Depends(get_db),
    type: Optional[NoticeType] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
):
    query = db.query(Notice)

    if type:
        query = query.filter(Notice.type == type)

    total = query.count()

    rows = (
        query.order_by(Notice.created_at.desc(), Notice.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )

    return NoticeListOut(
        items=[NoticeOut.model_validate(r) for r in rows],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/{notice_id}", response_model=NoticeOut)
def get_notice(
    notice_id: int,
    db: Session = Depends(get_db),
    lang: str = Depends(get_language),
):
    return _get_notice(db, notice_id, lang)


@router.post("", response_model=NoticeOut, status_code=201)
def create_notice(
    body: NoticeCreate,
    db: Session = Depends(get_db),
    admin=Depends(require_manager),
    lang: str = Depends(get_language),
):
    if body.type == "image" and not (body.image_url or "").strip():
        raise http_error(400, "validation.image_url_required", lang)

    notice = Notice(
        title=body.title.strip(),
        content=body.content,
        type=body.type,
        image_url=body.image_url,
    )
    db.add(notice)
    db.commit()
    db.refresh(notice)

    logger.info("Admin %s published notice %s (%s)", admin.id, notice.id, notice.type)
    return notice


@router.put("/{notice_id}", response_model=NoticeOut)
def update_notice(
    notice_id: int,
    body: NoticeUpdate,
    db: Session = Depends(get_db),
    admin=Depends(require_manager),
    lang: str = Depends(get_language),
):
    notice = _get_notice(db, notice_id, lang)

    data = body.model_dump(exclude_unset=True)
    new_type = data.get("type") or notice.type
    new_image = data["image_url"] if "image_url" in data else notice.image_url
    if new_type == "image" and not (new_image or "").strip():
        raise http_error(400, "validation.image_url_required", lang)

    for k, v in data.items():
        if k in ("title", "content", "type") and v is None:
            continue
        setattr(notice, k, v)

    db.commit()
    db.refresh(notice)
    return notice


@router.delete("/{notice_id}")
def delete_notice(
    notice_id: int,
    db: Session = Depends(get_db),
    admin=Depends(require_manager),
    lang: str = Depends(get_language),
):
    notice = _get_notice(db, notice_id, lang)
    db.delete(notice)
    db.commit()
    logger.info("Admin %s deleted notice %s", admin.id, notice_id)
    return {"detail": "deleted"}
