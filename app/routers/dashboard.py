from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.notice import Notice
from app.models.payment import Payment
from app.models.student import Student
from app.models.teacher import Teacher
from app.routers.payments import payments_with_names
from app.schemas.dashboard import (
    DashboardStatsOut,
    RecentActivityOut,
    RecentPayment,
    RecentStudent,
    RecentTeacher,
)
from app.utils.auth import require_admin

router = APIRouter(prefix="/admin/dashboard", tags=["Admin Dashboard"])

RECENT_LIMIT = 5


@router.get("/stats", response_model=DashboardStatsOut)
def dashboard_stats(
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
):
    total_teachers = db.query(func.count(Teacher.id)).scalar() or 0
    approved = db.query(func.count(Teacher.id)).filter(Teacher.is_approved.is_(True)).scalar() or 0

    return DashboardStatsOut(
        totalStudents=db.query(func.count(Student.id)).scalar() or 0,
        totalTeachers=total_teachers,
        approvedTeachers=approved,
        pendingTeachers=total_teachers - approved,
        totalRevenue=db.query(func.coalesce(func.sum(Payment.amount), 0)).scalar() or 0,
        totalNotices=db.query(func.count(Notice.id)).scalar() or 0,
    )


@router.get("/recent", response_model=RecentActivityOut)
def dashboard_recent(
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
):
    students = (
        db.query(Student)
        .order_by(Student.created_at.desc(), Student.id.desc())
        .limit(RECENT_LIMIT)
        .all()
    )
    payments = (
        payments_with_names(db)
        .order_by(Payment.created_at.desc(), Payment.id.desc())
        .limit(RECENT_LIMIT)
        .all()
    )
    teachers = (
        db.query(Teacher)
        .order_by(Teacher.created_at.desc(), Teacher.id.desc())
        .limit(RECENT_LIMIT)
        .all()
    )

    return RecentActivityOut(
        recentStudents=[
            RecentStudent(id=s.id, full_name=s.full_name, created_at=s.created_at) for s in students
        ],
        recentPayments=[
            RecentPayment(
                id=p.id,
                amount=p.amount,
                payment_date=p.payment_date,
                student_name=student_name,
                teacher_name=teacher_name,
            )
            for p, student_name, teacher_name in payments
        ],
        recentTeachers=[
            RecentTeacher(id=t.id, full_name=t.full_name, created_at=t.created_at, is_approved=t.is_approved)
            for t in teachers
        ],
    )
