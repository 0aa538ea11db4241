from collections import OrderedDict, defaultdict
from typing import Literal

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.payment import Payment
from app.models.student import Student
from app.models.student_teacher_relation import StudentTeacherRelation
from app.models.teacher import Teacher
from app.routers.payments import payments_with_names
from app.utils.auth import require_admin
from app.utils.dates import is_overdue
from app.utils.excel_export import make_filename, rows_to_csv_bytes, rows_to_xlsx_bytes

import logging
logger = logging.getLogger("app.admin")

router = APIRouter(prefix="/admin/exports", tags=["Admin Exports"])

ExportFormat = Literal["xlsx", "csv"]

MEDIA_TYPES = {
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "csv": "text/csv; charset=utf-8",
}


def _file_response(rows, prefix: str, fmt: str, sheet_name: str) -> StreamingResponse:
    if fmt == "csv":
        content = rows_to_csv_bytes(rows)
    else:
        content = rows_to_xlsx_bytes(rows, sheet_name=sheet_name)
    filename = make_filename(prefix, fmt)

    return StreamingResponse(
        iter([content]),
        media_type=MEDIA_TYPES[fmt],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def _totals(db: Session, column) -> dict:
    return dict(
        db.query(column, func.coalesce(func.sum(Payment.amount), 0))
        .group_by(column)
        .all()
    )


@router.get("/students")
def export_students(
    format: ExportFormat = Query("xlsx"),
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
):
    names = defaultdict(list)
    links = (
        db.query(StudentTeacherRelation.student_id, Teacher.full_name)
        .join(Teacher, Teacher.id == StudentTeacherRelation.teacher_id)
        .order_by(Teacher.full_name.asc())
        .all()
    )
    for student_id, teacher_name in links:
        names[student_id].append(teacher_name)
    paid = _totals(db, Payment.student_id)

    rows = []
    for s in db.query(Student).order_by(Student.created_at.desc(), Student.id.desc()).all():
        rows.append(OrderedDict([
            ("identifier", s.identifier),
            ("full_name", s.full_name),
            ("guardian_name", s.guardian_name),
            ("guardian_phone", s.guardian_phone),
            ("class", s.class_name or ""),
            ("quarter", s.quarter or ""),
            ("category", s.categories),
            ("days_per_week", s.days_per_week),
            ("teachers", names[s.id]),
            ("total_paid", paid.get(s.id, 0)),
            ("created_at", s.created_at),
        ]))

    logger.info("Admin %s exported %s students as %s", admin.id, len(rows), format)
    return _file_response(rows, "students", format, "Students")


@router.get("/teachers")
def export_teachers(
    format: ExportFormat = Query("xlsx"),
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
):
    student_counts = dict(
        db.query(StudentTeacherRelation.teacher_id, func.count(StudentTeacherRelation.id))
        .group_by(StudentTeacherRelation.teacher_id)
        .all()
    )
    received = _totals(db, Payment.teacher_id)

    rows = []
    for t in db.query(Teacher).order_by(Teacher.created_at.desc(), Teacher.id.desc()).all():
        rows.append(OrderedDict([
            ("id", t.id),
            ("full_name", t.full_name),
            ("user", t.user),
            ("email", t.email),
            ("contact", t.contact),
            ("town", t.town),
            ("gender", t.gender),
            ("category", t.category),
            ("subjects", t.subjects or []),
            ("location", t.location or []),
            ("years_experience", t.years_experience),
            ("is_approved", "yes" if t.is_approved else "no"),
            ("success_rate", t.success_rate),
            ("number_reviews", t.number_reviews),
            ("students", student_counts.get(t.id, 0)),
            ("total_received", received.get(t.id, 0)),
            ("created_at", t.created_at),
        ]))

    logger.info("Admin %s exported %s teachers as %s", admin.id, len(rows), format)
    return _file_response(rows, "teachers", format, "Teachers")


@router.get("/payments")
def export_payments(
    format: ExportFormat = Query("xlsx"),
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
):
    rows = []
    results = payments_with_names(db).order_by(Payment.payment_date.desc(), Payment.id.desc()).all()
    for p, student_name, teacher_name in results:
        rows.append(OrderedDict([
            ("id", p.id),
            ("student", student_name or ""),
            ("teacher", teacher_name or ""),
            ("amount", p.amount),
            ("payment_date", p.payment_date),
            ("next_payment_due", p.next_payment_due),
            ("status", p.status),
            ("overdue", "yes" if is_overdue(p.next_payment_due, p.status) else "no"),
        ]))

    logger.info("Admin %s exported %s payments as %s", admin.id, len(rows), format)
    return _file_response(rows, "payments", format, "Payments")
