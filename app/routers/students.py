from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.comment import Comment
from app.models.payment import Payment
from app.models.student import Student
from app.models.student_teacher_relation import StudentTeacherRelation
from app.models.teacher import Teacher
from app.schemas.payment import PaymentDetailOut, PaymentOut
from app.schemas.student import (
    CommentCreateIn,
    StudentOut,
    StudentProfileOut,
    StudentTeacherOut,
)
from app.schemas.teacher import TeacherCommentOut
from app.routers.payments import payments_with_names, to_detail
from app.utils.auth import require_student
from app.utils.i18n import get_language, http_error
from app.utils.pdf_export import teachers_pdf_bytes

import logging
logger = logging.getLogger("app.students")


router = APIRouter(prefix="/students", tags=["Students"])

# Teacher.payments holds every student's payments, so it is never read here
TEACHER_CARD_FIELDS = [f for f in StudentTeacherOut.model_fields if f != "payments"]


def my_teachers(db: Session, student_id: int) -> list[Teacher]:
    return (
        db.query(Teacher)
        .join(StudentTeacherRelation, StudentTeacherRelation.teacher_id == Teacher.id)
        .filter(StudentTeacherRelation.student_id == student_id)
        .order_by(Teacher.full_name.asc())
        .all()
    )


def _my_teacher(db: Session, student_id: int, teacher_id: int, lang: str) -> Teacher:
    teacher = (
        db.query(Teacher)
        .join(StudentTeacherRelation, StudentTeacherRelation.teacher_id == Teacher.id)
        .filter(StudentTeacherRelation.student_id == student_id, Teacher.id == teacher_id)
        .first()
    )
    if not teacher:
        raise http_error(404, "not_found.teacher", lang)
    return teacher


def _pdf_response(content: bytes, filename: str) -> Response:
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/me", response_model=StudentProfileOut)
def my_profile(
    db: Session = Depends(get_db),
    student: Student = Depends(require_student),
):
    teachers = my_teachers(db, student.id)

    payments = (
        db.query(Payment)
        .filter(Payment.student_id == student.id)
        .order_by(Payment.payment_date.desc(), Payment.id.desc())
        .all()
    )
    # only the payments between this student and each teacher
    by_teacher: dict[int, list[PaymentOut]] = {t.id: [] for t in teachers}
    for p in payments:
        if p.teacher_id in by_teacher:
            by_teacher[p.teacher_id].append(PaymentOut.model_validate(p))

    base = StudentOut.model_validate(student)
    return StudentProfileOut(
        **base.model_dump(),
        teachers=[
            StudentTeacherOut(
                **{f: getattr(t, f) for f in TEACHER_CARD_FIELDS},
                payments=by_teacher[t.id],
            )
            for t in teachers
        ],
    )


@router.get("/me/payments", response_model=list[PaymentDetailOut])
def my_payments(
    db: Session = Depends(get_db),
    student: Student = Depends(require_student),
):
    rows = (
        payments_with_names(db)
        .filter(Payment.student_id == student.id)
        .order_by(Payment.payment_date.desc(), Payment.id.desc())
        .all()
    )
    return [to_detail(p, s, t) for p, s, t in rows]


@router.post("/me/comments", response_model=TeacherCommentOut, status_code=201)
def comment_on_teacher(
    body: CommentCreateIn,
    db: Session = Depends(get_db),
    student: Student = Depends(require_student),
    lang: str = Depends(get_language),
):
    linked = (
        db.query(StudentTeacherRelation.id)
        .filter(
            StudentTeacherRelation.student_id == student.id,
            StudentTeacherRelation.teacher_id == body.teacher_id,
        )
        .first()
    )
    if not linked:
        raise http_error(403, "validation.not_your_teacher", lang)

    comment = Comment(
        teacher_id=body.teacher_id,
        student_id=student.id,
        content=body.content.strip(),
        rating=body.rating,
    )
    db.add(comment)
    db.flush()

    count = db.query(func.count(Comment.id)).filter(Comment.teacher_id == body.teacher_id).scalar()
    db.query(Teacher).filter(Teacher.id == body.teacher_id).update(
        {Teacher.number_reviews: count}, synchronize_session=False
    )
    db.commit()
    db.refresh(comment)

    logger.info("Student %s reviewed teacher %s (%s/5)", student.id, body.teacher_id, body.rating)
    return TeacherCommentOut(
        id=comment.id,
        teacher_id=comment.teacher_id,
        student_id=comment.student_id,
        student_name=student.full_name,
        content=comment.content,
        rating=comment.rating,
        created_at=comment.created_at,
    )


@router.get("/me/teachers.pdf")
def my_teachers_pdf(
    db: Session = Depends(get_db),
    student: Student = Depends(require_student),
    lang: str = Depends(get_language),
):
    teachers = my_teachers(db, student.id)
    if not teachers:
        raise http_error(404, "not_found.teacher", lang)
    content = teachers_pdf_bytes(student, teachers, lang)
    return _pdf_response(content, f"teachers_{student.identifier}.pdf")


@router.get("/me/teachers/{teacher_id}.pdf")
def my_teacher_pdf(
    teacher_id: int,
    db: Session = Depends(get_db),
    student: Student = Depends(require_student),
    lang: str = Depends(get_language),
):
    teacher = _my_teacher(db, student.id, teacher_id, lang)
    content = teachers_pdf_bytes(student, [teacher], lang)
    return _pdf_response(content, f"teacher_{teacher.id}_{student.identifier}.pdf")
