from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy import String, cast, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.comment import Comment
from app.models.payment import Payment
from app.models.student import Student
from app.models.student_teacher_relation import StudentTeacherRelation
from app.models.teacher import Teacher
from app.schemas.payment import PaymentOut
from app.schemas.student import StudentWithPaymentsOut
from app.schemas.teacher import (
    REQUIRED_TEACHER_FIELDS,
    Gender,
    TeacherCategory,
    TeacherCommentOut,
    TeacherDetailOut,
    TeacherOut,
    TeacherPublicListOut,
    TeacherPublicOut,
    TeacherRegisterIn,
    TeacherSelfUpdateIn,
)
from app.utils.auth import require_teacher
from app.utils.i18n import get_language, http_error
from app.routers.uploads import upload_or_raise
from app.utils.image_upload import delete_image
from app.utils.teacher_fields import prepare_teacher_data, sent_required

import logging
logger = logging.getLogger("app.teachers")


router = APIRouter(prefix="/teachers", tags=["Teachers"])


def teacher_comments(db: Session, teacher_id: int) -> list[TeacherCommentOut]:
    rows = (
        db.query(Comment, Student.full_name.label("student_name"))
        .outerjoin(Student, Student.id == Comment.student_id)
        .filter(Comment.teacher_id == teacher_id)
        .order_by(Comment.created_at.desc(), Comment.id.desc())
        .all()
    )
    return [
        TeacherCommentOut(
            id=c.id,
            teacher_id=c.teacher_id,
            student_id=c.student_id,
            student_name=student_name,
            content=c.content,
            rating=c.rating,
            created_at=c.created_at,
        )
        for c, student_name in rows
    ]


def _get_approved(db: Session, teacher_id: int, lang: str) -> Teacher:
    teacher = (
        db.query(Teacher)
        .filter(Teacher.id == teacher_id, Teacher.is_approved.is_(True))
        .first()
    )
    if not teacher:
        raise http_error(404, "not_found.teacher", lang)
    return teacher


@router.get("", response_model=TeacherPublicListOut)
def list_teachers(
    db: Session = Depends(get_db),
    q: Optional[str] = Query(None, description="name, subject, location or current work"),
    gender: Optional[Gender] = Query(None),
    category: Optional[TeacherCategory] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(24, ge=1, le=100),
):
    query = db.query(Teacher).filter(Teacher.is_approved.is_(True))

    if q and q.strip():
        k = f"%{q.strip()}%"
        query = query.filter(
            or_(
                Teacher.full_name.ilike(k),
                cast(Teacher.subjects, String).ilike(k),
                cast(Teacher.location, String).ilike(k),
                Teacher.current_work.ilike(k),
            )
        )

    if gender:
        query = query.filter(Teacher.gender == gender)

    if category:
        query = query.filter(Teacher.category == category)

    total = query.count()

    rows = (
        query.order_by(Teacher.success_rate.desc(), Teacher.created_at.asc(), Teacher.id.asc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )

    return TeacherPublicListOut(
        items=[TeacherPublicOut.model_validate(r) for r in rows],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.post("/register", response_model=TeacherOut, status_code=201)
def register_teacher(
    body: TeacherRegisterIn,
    db: Session = Depends(get_db),
    lang: str = Depends(get_language),
):
    data = prepare_teacher_data(db, body.model_dump(), lang, REQUIRED_TEACHER_FIELDS)

    teacher = Teacher(**data, is_approved=False, success_rate=0)
    db.add(teacher)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Teacher registration lost a race on user %s", data["user"])
        raise http_error(409, "validation.username_taken", lang)
    db.refresh(teacher)

    logger.info("Teacher %s registered as %s, awaiting approval", teacher.id, teacher.user)
    return teacher


@router.get("/me", response_model=TeacherOut)
def get_my_profile(teacher: Teacher = Depends(require_teacher)):
    return teacher


@router.put("/me", response_model=TeacherOut)
def update_my_profile(
    body: TeacherSelfUpdateIn,
    db: Session = Depends(get_db),
    teacher: Teacher = Depends(require_teacher),
    lang: str = Depends(get_language),
):
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


@router.post("/me/photo", response_model=TeacherOut)
def upload_my_photo(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    teacher: Teacher = Depends(require_teacher),
    lang: str = Depends(get_language),
):
    result = upload_or_raise(file, lang)

    previous_delete_url = teacher.profile_image_delete_url
    teacher.profile_image_url = result.url
    teacher.profile_image_delete_url = result.delete_url
    db.commit()
    db.refresh(teacher)

    if previous_delete_url:
        delete_image(previous_delete_url)
    return teacher


@router.get("/me/students", response_model=list[StudentWithPaymentsOut])
def my_students(
    db: Session = Depends(get_db),
    teacher: Teacher = Depends(require_teacher),
):
    students = (
        db.query(Student)
        .join(StudentTeacherRelation, StudentTeacherRelation.student_id == Student.id)
        .filter(StudentTeacherRelation.teacher_id == teacher.id)
        .order_by(Student.full_name.asc())
        .all()
    )
    if not students:
        return []

    payments = (
        db.query(Payment)
        .filter(Payment.teacher_id == teacher.id, Payment.student_id.in_([s.id for s in students]))
        .order_by(Payment.payment_date.desc())
        .all()
    )
    by_student: dict[int, list[PaymentOut]] = {s.id: [] for s in students}
    for p in payments:
        by_student[p.student_id].append(PaymentOut.model_validate(p))

    return [
        StudentWithPaymentsOut(
            id=s.id,
            identifier=s.identifier,
            full_name=s.full_name,
            guardian_name=s.guardian_name,
            guardian_phone=s.guardian_phone,
            class_name=s.class_name,
            quarter=s.quarter,
            categories=s.categories,
            created_at=s.created_at,
            payments=by_student[s.id],
        )
        for s in students
    ]


@router.get("/me/payments", response_model=list[PaymentOut])
def my_payments(
    db: Session = Depends(get_db),
    teacher: Teacher = Depends(require_teacher),
):
    return (
        db.query(Payment)
        .filter(Payment.teacher_id == teacher.id)
        .order_by(Payment.payment_date.desc(), Payment.id.desc())
        .all()
    )


@router.get("/{teacher_id}", response_model=TeacherDetailOut)
def get_teacher(
    teacher_id: int,
    db: Session = Depends(get_db),
    lang: str = Depends(get_language),
):
    teacher = _get_approved(db, teacher_id, lang)
    base = TeacherPublicOut.model_validate(teacher)
    return TeacherDetailOut(**base.model_dump(), comments=teacher_comments(db, teacher.id))


@router.get("/{teacher_id}/comments", response_model=list[TeacherCommentOut])
def list_teacher_comments(
    teacher_id: int,
    db: Session = Depends(get_db),
    lang: str = Depends(get_language),
):
    _get_approved(db, teacher_id, lang)
    return teacher_comments(db, teacher_id)
