from datetime import date
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.payment import Payment
from app.models.student import Student
from app.models.student_teacher_relation import StudentTeacherRelation
from app.models.teacher import Teacher
from app.schemas.payment import PaymentDetailOut
from app.schemas.student import (
    BulkIdsIn,
    NextIdentifierOut,
    PaymentPlanIn,
    StudentCategory,
    StudentCreateIn,
    StudentListOut,
    StudentOut,
    StudentPatchIn,
    StudentUpdateIn,
)
from app.utils.auth import require_admin
from app.utils.dates import add_months
from app.utils.i18n import get_language, http_error
from app.utils.student_ids import CATEGORY_PREFIXES, next_identifier
from app.utils.teacher_fields import missing_fields

import logging
logger = logging.getLogger("app.admin")


router = APIRouter(prefix="/admin/students", tags=["Admin Students"])

STUDENT_TEXT_FIELDS = ("full_name", "guardian_name", "guardian_phone", "class_name", "quarter")
REQUIRED_STUDENT_FIELDS = ("full_name", "guardian_name", "guardian_phone")


def _get_student(db: Session, student_id: int, lang: str) -> Student:
    student = db.query(Student).filter(Student.id == student_id).first()
    if not student:
        raise http_error(404, "not_found.student", lang)
    return student


def generate_identifier(db: Session, category: str) -> str:
    prefix = CATEGORY_PREFIXES[category]
    existing = db.query(Student.identifier).filter(Student.identifier.like(f"{prefix}%")).all()
    return next_identifier(category, [row[0] for row in existing])


def _load_teachers(db: Session, teacher_ids: List[int], lang: str) -> Dict[int, Teacher]:
    teachers = {t.id: t for t in db.query(Teacher).filter(Teacher.id.in_(teacher_ids)).all()}
    if len(teachers) != len(set(teacher_ids)):
        raise http_error(404, "not_found.teacher", lang)
    return teachers


def _check_payment_plans(
    teacher_ids: List[int],
    plans: Dict[int, PaymentPlanIn],
    teachers: Dict[int, Teacher],
    lang: str,
    require_all: bool,
) -> None:
    for tid in teacher_ids if require_all else plans.keys():
        plan = plans.get(tid)
        if plan is None or plan.amount <= 0:
            name = teachers[tid].full_name if tid in teachers else str(tid)
            raise http_error(400, "validation.payment_amount", lang, name=name)


def _new_payment(student_id: int, teacher_id: int, plan: PaymentPlanIn) -> Payment:
    paid_on = plan.payment_date or date.today()
    return Payment(
        student_id=student_id,
        teacher_id=teacher_id,
        amount=plan.amount,
        payment_date=paid_on,
        next_payment_due=plan.next_payment_due or add_months(paid_on, 1),
        status="pending",
    )


def _unique_ids(ids: List[int]) -> List[int]:
    return list(dict.fromkeys(ids))


def _reject_blanked(data: dict, lang: str) -> None:
    sent = {k: data[k] for k in REQUIRED_STUDENT_FIELDS if k in data}
    blanked = missing_fields(sent, sent.keys())
    if blanked:
        raise http_error(400, "validation.missing_fields", lang, fields=", ".join(blanked))


@router.get("", response_model=StudentListOut)
def admin_list_students(
    db: Session = Depends(get_db),
    admin=Depends(require_admin),

    q: Optional[str] = Query(None, description="name, guardian, class, quarter or identifier"),
    categories: Optional[StudentCategory] = Query(None),

    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=200),
):
    query = db.query(Student)

    if q and q.strip():
        k = f"%{q.strip()}%"
        query = query.filter(
            or_(
                Student.full_name.ilike(k),
                Student.guardian_name.ilike(k),
                Student.class_name.ilike(k),
                Student.quarter.ilike(k),
                Student.identifier.ilike(k),
            )
        )

    if categories:
        query = query.filter(Student.categories == categories)

    total = query.count()

    rows = (
        query.order_by(Student.created_at.desc(), Student.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return StudentListOut(
        items=[StudentOut.model_validate(r) for r in rows],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/next-identifier", response_model=NextIdentifierOut)
def preview_next_identifier(
    category: StudentCategory = Query(...),
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
):
    return NextIdentifierOut(category=category, identifier=generate_identifier(db, category))


@router.post("", response_model=StudentOut, status_code=201)
def admin_create_student(
    body: StudentCreateIn,
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
    lang: str = Depends(get_language),
):
    data = body.model_dump()
    missing = missing_fields(data, ("full_name", "guardian_name", "guardian_phone", "categories"))
    if missing:
        raise http_error(400, "validation.missing_fields", lang, fields=", ".join(missing))

    teacher_ids = _unique_ids(body.teacher_ids)
    if not teacher_ids:
        raise http_error(400, "validation.no_teacher_selected", lang)

    teachers = _load_teachers(db, teacher_ids, lang)
    _check_payment_plans(teacher_ids, body.payments, teachers, lang, require_all=True)

    identifier = generate_identifier(db, body.categories)
    student = Student(
        identifier=identifier,
        user=identifier,
        full_name=body.full_name.strip(),
        guardian_name=body.guardian_name.strip(),
        guardian_phone=body.guardian_phone.strip(),
        class_name=(body.class_name or "").strip() or None,
        quarter=(body.quarter or "").strip() or None,
        days_per_week=body.days_per_week,
        categories=body.categories,
    )

    # student, relations and first payments land together or not at all
    try:
        db.add(student)
        db.flush()
        for tid in teacher_ids:
            db.add(StudentTeacherRelation(student_id=student.id, teacher_id=tid))
            db.add(_new_payment(student.id, tid, body.payments[tid]))
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.exception("Student creation failed for identifier %s", identifier)
        raise http_error(409, "validation.username_taken", lang)

    db.refresh(student)
    logger.info("Admin %s created student %s (%s) with teachers %s", admin.id, student.id, identifier, teacher_ids)
    return student


@router.post("/bulk-delete")
def bulk_delete_students(
    body: BulkIdsIn,
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
):
    students = db.query(Student).filter(Student.id.in_(body.ids)).all()
    for s in students:
        db.delete(s)
    db.commit()
    logger.info("Admin %s deleted students %s", admin.id, [s.id for s in students])
    return {"deleted": len(students)}


@router.get("/{student_id}", response_model=StudentOut)
def admin_get_student(
    student_id: int,
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
    lang: str = Depends(get_language),
):
    return _get_student(db, student_id, lang)


@router.put("/{student_id}", response_model=StudentOut)
def admin_update_student(
    student_id: int,
    body: StudentUpdateIn,
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
    lang: str = Depends(get_language),
):
    """
    Full edit form save:
    - student fields that were sent are updated
    - teacher_ids (when sent) replaces the set of linked teachers
    - every entry in payments records a new payment with that teacher
    One transaction.
    """
    student = _get_student(db, student_id, lang)

    data = body.model_dump(exclude_unset=True)
    _reject_blanked(data, lang)
    for k in STUDENT_TEXT_FIELDS:
        if data.get(k) is not None:
            setattr(student, k, data[k].strip())
    if data.get("days_per_week") is not None:
        student.days_per_week = data["days_per_week"]

    current = {
        r.teacher_id: r
        for r in db.query(StudentTeacherRelation).filter(StudentTeacherRelation.student_id == student.id)
    }

    if "teacher_ids" in body.model_fields_set:
        wanted = _unique_ids(body.teacher_ids)
        if not wanted:
            raise http_error(400, "validation.no_teacher_selected", lang)
        teachers = _load_teachers(db, wanted, lang)
        for tid, rel in current.items():
            if tid not in teachers:
                db.delete(rel)
        for tid in wanted:
            if tid not in current:
                db.add(StudentTeacherRelation(student_id=student.id, teacher_id=tid))
        linked = set(wanted)
    else:
        teachers = _load_teachers(db, list(current), lang) if current else {}
        linked = set(current)

    for tid in body.payments:
        if tid not in linked:
            raise http_error(400, "validation.teacher_not_linked", lang)
    _check_payment_plans(list(body.payments), body.payments, teachers, lang, require_all=False)
    for tid, plan in body.payments.items():
        db.add(_new_payment(student.id, tid, plan))

    db.commit()
    db.refresh(student)
    logger.info("Admin %s updated student %s", admin.id, student.id)
    return student


@router.patch("/{student_id}", response_model=StudentOut)
def admin_patch_student(
    student_id: int,
    body: StudentPatchIn,
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
    lang: str = Depends(get_language),
):
    student = _get_student(db, student_id, lang)

    data = body.model_dump(exclude_unset=True)
    _reject_blanked(data, lang)
    for k, v in data.items():
        if k == "days_per_week" and v is None:
            continue
        setattr(student, k, v.strip() if isinstance(v, str) else v)

    db.commit()
    db.refresh(student)
    return student


@router.delete("/{student_id}")
def admin_delete_student(
    student_id: int,
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
    lang: str = Depends(get_language),
):
    student = _get_student(db, student_id, lang)
    db.delete(student)
    db.commit()
    logger.info("Admin %s deleted student %s", admin.id, student_id)
    return {"detail": "deleted"}


@router.get("/{student_id}/payments", response_model=list[PaymentDetailOut])
def admin_student_payments(
    student_id: int,
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
    lang: str = Depends(get_language),
):
    student = _get_student(db, student_id, lang)
    rows = (
        db.query(Payment, Teacher.full_name.label("teacher_name"))
        .outerjoin(Teacher, Teacher.id == Payment.teacher_id)
        .filter(Payment.student_id == student.id)
        .order_by(Payment.payment_date.desc(), Payment.id.desc())
        .all()
    )
    return [
        PaymentDetailOut.model_validate(p).model_copy(
            update={"student_name": student.full_name, "teacher_name": teacher_name}
        )
        for p, teacher_name in rows
    ]
