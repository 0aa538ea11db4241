from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel


class DashboardStatsOut(BaseModel):
    totalStudents: int
    totalTeachers: int
    approvedTeachers: int
    pendingTeachers: int
    totalRevenue: int
    totalNotices: int


class RecentStudent(BaseModel):
    id: int
    full_name: str
    created_at: datetime


class RecentPayment(BaseModel):
    id: int
    amount: int
    payment_date: date
    student_name: Optional[str] = None
    teacher_name: Optional[str] = None


class RecentTeacher(BaseModel):
    id: int
    full_name: str
    created_at: datetime
    is_approved: bool


class RecentActivityOut(BaseModel):
    recentStudents: List[RecentStudent]
    recentPayments: List[RecentPayment]
    recentTeachers: List[RecentTeacher]
