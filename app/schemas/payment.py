from typing import Literal, Optional
from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, Field, computed_field

from app.utils.dates import is_overdue as _is_overdue

PaymentStatus = Literal["pending", "completed", "failed", "overdue"]


class PaymentCreateIn(BaseModel):
    student_id: int
    teacher_id: int
    amount: int = Field(..., gt=0)
    payment_date: date
    # defaults to payment_date + 1 month
    next_payment_due: Optional[date] = None
    status: PaymentStatus = "pending"


class PaymentUpdateIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    amount: Optional[int] = Field(None, gt=0)
    payment_date: Optional[date] = None
    next_payment_due: Optional[date] = None
    status: Optional[PaymentStatus] = None


class PaymentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    student_id: int
    teacher_id: int
    amount: int
    payment_date: date
    next_payment_due: date
    status: PaymentStatus
    created_at: datetime

    @computed_field
    @property
    def is_overdue(self) -> bool:
        return _is_overdue(self.next_payment_due, self.status)


class PaymentDetailOut(PaymentOut):
    student_name: Optional[str] = None
    teacher_name: Optional[str] = None
