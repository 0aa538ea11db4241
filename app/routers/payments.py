from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.payment import Payment
from app.models.student import Student
from app.models.teacher import Teacher
from app.schemas.payment import (
    PaymentCreateIn,
    PaymentDetailOut,
    PaymentOut,
    PaymentStatus,
    PaymentUpdateIn,
)
from app.utils.auth import require_admin
from app.utils.dates import add_months
from app.utils.i18n import get_language, http_error

import logging
logger = logging.getLogger("app.payments")


router = APIRouter(prefix="/admin/payments", tags=["Admin Payments"])


def payments_with_names(db: Session):
    """Payment rows joined with the student's and teacher's names."""
    return (
        db.query(
            Payment,
            Student.full_name.label("student_name"),
            Teacher.full_name.label("teacher_name"),
        )
        .outerjoin(Student, Student.id == Payment.student_id)
        .outerjoin(Teacher, Teacher.id == Payment.teacher_id)
    )


def to_detail(payment: Payment, student_name: Optional[str], teacher_name: Optional[str]) -> PaymentDetailOut:
    return PaymentDetailOut.model_validate(payment).model_copy(
        update={"student_name": student_name, "teacher_name": teacher_name}
    )


def _get_payment(db: Session, payment_id: int, lang: str) -> Payment:
    payment = db.query(Payment).filter(Payment.id == payment_id).first()
    if not payment:
        raise http_error(404, "not_found.payment", lang)
    return payment


@router.get("", response_model=list[PaymentDetailOut])
def list_payments(
    db: Session = Depends(get_db),
    admin=Depends(require_admin),

    teacher_id: Optional[int] = Query(None),
    student_id: Optional[int] = Query(None),
    status: Optional[PaymentStatus] = Query(None),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
):
    query = payments_with_names(db)

    if teacher_id is not None:
        query = query.filter(Payment.teacher_id == teacher_id)
    if student_id is not None:
        query = query.filter(Payment.student_id == student_id)
    if status:
        query = query.filter(Payment.status == status)
    if date_from:
        query = query.filter(Payment.payment_date >= date_from)
    if date_to:
        query = query.filter(Payment.payment_date <= date_to)

    rows = query.order_by(Payment.payment_date.desc(), Payment.id.desc()).all()
    return [to_detail(p, s, t) for p, s, t in rows]


@router.post("", response_model=PaymentOut, status_code=201)
def create_payment(
    body: PaymentCreateIn,
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
    lang: str = Depends(get_language),
):
    if not db.query(Student.id).filter(Student.id == body.student_id).first():
        raise http_error(404, "not_found.student", lang)
    if not db.query(Teacher.id).filter(Teacher.id == body.teacher_id).first():
        raise http_error(404, "not_found.teacher", lang)

    payment = Payment(
        student_id=body.student_id,
        teacher_id=body.teacher_id,
        amount=body.amount,
        payment_date=body.payment_date,
        next_payment_due=body.next_payment_due or add_months(body.payment_date, 1),
        status=body.status,
    )
    db.add(payment)
    db.commit()
    db.refresh(payment)

    logger.info("Admin %s recorded payment %s (%s FCFA)", admin.id, payment.id, payment.amount)
    return payment


@router.get("/{payment_id}", response_model=PaymentDetailOut)
def get_payment(
    payment_id: int,
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
    lang: str = Depends(get_language),
):
    row = payments_with_names(db).filter(Payment.id == payment_id).first()
    if not row:
        raise http_error(404, "not_found.payment", lang)
    return to_detail(*row)


@router.put("/{payment_id}", response_model=PaymentOut)
def update_payment(
    payment_id: int,
    body: PaymentUpdateIn,
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
    lang: str = Depends(get_language),
):
    payment = _get_payment(db, payment_id, lang)

    for k, v in body.model_dump(exclude_unset=True).items():
        if v is not None:
            setattr(payment, k, v)

    db.commit()
    db.refresh(payment)
    return payment


@router.delete("/{payment_id}")
def delete_payment(
    payment_id: int,
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
    lang: str = Depends(get_language),
):
    payment = _get_payment(db, payment_id, lang)
    db.delete(payment)
    db.commit()
    logger.info("Admin %s deleted payment %s", admin.id, payment_id)
    return {"detail": "deleted"}
