from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import String, cast, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.models.teacher import Teacher
from app.schemas.student import BulkIdsIn
from app.schemas.teacher import (
    REQUIRED_TEACHER_FIELDS,
    ContactLinkOut,
    Gender,
    TeacherAdminUpdateIn,
    TeacherCategory,
    TeacherCreateIn,
    TeacherListOut,
    TeacherOut,
)
from app.utils.auth import require_admin, require_manager
from app.utils.i18n import get_language, http_error
from app.utils.teacher_fields import prepare_teacher_data, sent_required
from app.utils.whatsapp import build_link, teacher_contact_message

import logging
logger = logging.getLogger("app.admin")


router = APIRouter(prefix="/admin/teachers", tags=["Admin Teachers"])


def _get_teacher(db: Session, teacher_id: int, lang: str) -> Teacher:
    teacher = db.query(Teacher).filter(Teacher.id == teacher_id).first()
    if not teacher:
        raise http_error(404, "not_found.teacher", lang)
    return teacher


@router.get("", response_model=TeacherListOut)
def admin_list_teachers(
    db: Session = Depends(get_db),
    admin=Depends(require_admin),

    q: Optional[str] = Query(None, description="name, email, subject or town"),
    is_approved: Optional[bool] = Query(None),
    category: Optional[TeacherCategory] = Query(None),
    gender: Optional[Gender] = Query(None),

    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=200),
):
    query = db.query(Teacher)

    if q and q.strip():
        k = f"%{q.strip()}%"
        query = query.filter(
            or_(
                Teacher.full_name.ilike(k),
                Teacher.email.ilike(k),
                cast(Teacher.subjects, String).ilike(k),
                Teacher.town.ilike(k),
            )
        )

    if is_approved is not None:
        query = query.filter(Teacher.is_approved.is_(is_approved))

    if category:
        query = query.filter(Teacher.category == category)

    if gender:
        query = query.filter(Teacher.gender == gender)

    total = query.count()

    rows = (
        query.order_by(Teacher.created_at.desc(), Teacher.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return TeacherListOut(
        items=[TeacherOut.model_validate(r) for r in rows],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.post("/bulk-delete")
def bulk_delete_teachers(
    body: BulkIdsIn,
    db: Session = Depends(get_db),
    admin=Depends(require_manager),
):
    teachers = db.query(Teacher).filter(Teacher.id.in_(body.ids)).all()
    # one by one so relations, payments and comments cascade
    for t in teachers:
        db.delete(t)
    db.commit()
    logger.info("Admin %s deleted teachers %s", admin.id, [t.id for t in teachers])
    return {"deleted": len(teachers)}


def _bulk_set_approval(db: Session, ids: list[int], approved: bool) -> int:
    count = (
        db.query(Teacher)
        .filter(Teacher.id.in_(ids))
        .update({Teacher.is_approved: approved}, synchronize_session=False)
    )
    db.commit()
    return count


@router.post("/bulk-approve")
def bulk_approve_teachers(
    body: BulkIdsIn,
    db: Session = Depends(get_db),
    admin=Depends(require_manager),
):
    return {"updated": _bulk_set_approval(db, body.ids, True)}


@router.post("/bulk-reject")
def bulk_reject_teachers(
    body: BulkIdsIn,
    db: Session = Depends(get_db),
    admin=Depends(require_manager),
):
    return {"updated": _bulk_set_approval(db, body.ids, False)}


@router.get("/{teacher_id}", response_model=TeacherOut)
def admin_get_teacher(
    teacher_id: int,
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
    lang: str = Depends(get_language),
):
    return _get_teacher(db, teacher_id, lang)


@router.post("", response_model=TeacherOut, status_code=201)
def admin_create_teacher(
    body: TeacherCreateIn,
    db: Session = Depends(get_db),
    admin=Depends(require_manager),
    lang: str = Depends(get_language),
):
    data = prepare_teacher_data(db, body.model_dump(), lang, REQUIRED_TEACHER_FIELDS)

    teacher = Teacher(**data)
    db.add(teacher)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Admin %s could not create teacher %s: duplicate user", admin.id, data["user"])
        raise http_error(409, "validation.username_taken", lang)
    db.refresh(teacher)

    logger.info("Admin %s created teacher %s", admin.id, teacher.id)
    return teacher


@router.put("/{teacher_id}", response_model=TeacherOut)
def admin_update_teacher(
    teacher_id: int,
    body: TeacherAdminUpdateIn,
    db: Session = Depends(get_db),
    admin=Depends(require_manager),
    lang: str = Depends(get_language),
):
    teacher = _get_teacher(db, teacher_id, lang)
    data = body.model_dump(exclude_unset=True)
    data = prepare_teacher_data(db, data, lang, sent_required(data), exclude_id=teacher.id)

    for k, v in data.items():
        setattr(teacher, k, v)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise http_error(409, "validation.username_taken", lang)
    db.refresh(teacher)
    return teacher


@router.delete("/{teacher_id}")
def admin_delete_teacher(
    teacher_id: int,
    db: Session = Depends(get_db),
    admin=Depends(require_manager),
    lang: str = Depends(get_language),
):
    teacher = _get_teacher(db, teacher_id, lang)
    db.delete(teacher)
    db.commit()
    logger.info("Admin %s deleted teacher %s", admin.id, teacher_id)
    return {"detail": "deleted"}


@router.post("/{teacher_id}/approve", response_model=TeacherOut)
def approve_teacher(
    teacher_id: int,
    db: Session = Depends(get_db),
    admin=Depends(require_manager),
    lang: str = Depends(get_language),
):
    teacher = _get_teacher(db, teacher_id, lang)
    teacher.is_approved = True
    db.commit()
    db.refresh(teacher)
    logger.info("Admin %s approved teacher %s", admin.id, teacher_id)
    return teacher


@router.post("/{teacher_id}/reject", response_model=TeacherOut)
def reject_teacher(
    teacher_id: int,
    db: Session = Depends(get_db),
    admin=Depends(require_manager),
    lang: str = Depends(get_language),
):
    teacher = _get_teacher(db, teacher_id, lang)
    teacher.is_approved = False
    db.commit()
    db.refresh(teacher)
    logger.info("Admin %s rejected teacher %s", admin.id, teacher_id)
    return teacher


@router.get("/{teacher_id}/contact-link", response_model=ContactLinkOut)
def teacher_contact_link(
    teacher_id: int,
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
    lang: str = Depends(get_language),
):
    teacher = _get_teacher(db, teacher_id, lang)
    message = teacher_contact_message(teacher.full_name, teacher.gender, lang, settings.COMPANY_NAME)
    return ContactLinkOut(url=build_link(teacher.contact, message), message=message)
