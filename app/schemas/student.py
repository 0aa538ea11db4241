from typing import Dict, List, Literal, Optional
from datetime import date, datetime
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from app.schemas.payment import PaymentOut

StudentCategory = Literal["anglo", "franco", "bilingue"]

# "class" is a keyword, the field is class_name and travels as "class"
def class_field():
    return Field(
        None,
        validation_alias=AliasChoices("class", "class_name"),
        serialization_alias="class",
    )


class PaymentPlanIn(BaseModel):
    amount: int = 0
    payment_date: Optional[date] = None
    next_payment_due: Optional[date] = None


class StudentCreateIn(BaseModel):
    full_name: str = ""
    guardian_name: str = ""
    guardian_phone: str = ""
    class_name: Optional[str] = class_field()
    quarter: Optional[str] = None
    days_per_week: int = Field(3, ge=1, le=7)
    categories: Optional[StudentCategory] = None

    teacher_ids: List[int] = Field(default_factory=list)
    # teacher id -> first payment with that teacher
    payments: Dict[int, PaymentPlanIn] = Field(default_factory=dict)


class StudentUpdateIn(BaseModel):
    full_name: Optional[str] = None
    guardian_name: Optional[str] = None
    guardian_phone: Optional[str] = None
    class_name: Optional[str] = class_field()
    quarter: Optional[str] = None
    days_per_week: Optional[int] = Field(None, ge=1, le=7)

    teacher_ids: List[int] = Field(default_factory=list)
    payments: Dict[int, PaymentPlanIn] = Field(default_factory=dict)


class StudentPatchIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    full_name: Optional[str] = None
    guardian_name: Optional[str] = None
    guardian_phone: Optional[str] = None
    class_name: Optional[str] = class_field()
    quarter: Optional[str] = None
    days_per_week: Optional[int] = Field(None, ge=1, le=7)


class StudentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    identifier: str
    user: str
    full_name: str
    guardian_name: str
    guardian_phone: str
    class_name: Optional[str] = class_field()
    quarter: Optional[str] = None
    days_per_week: int
    categories: StudentCategory
    last_login: Optional[datetime] = None
    created_at: datetime


class StudentListOut(BaseModel):
    items: List[StudentOut]
    total: int
    page: int
    page_size: int


class StudentTeacherOut(BaseModel):
    """A teacher as seen from the student dashboard, with the payments between the two."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    full_name: str
    email: str
    contact: str
    available_days: List[str] = []
    current_work: Optional[str] = None
    success_rate: int = 0
    subjects: List[str] = []
    highest_diploma: Optional[str] = None
    years_experience: int = 0
    about_me: Optional[str] = None
    profile_image_url: Optional[str] = None
    location: List[str] = []
    payments: List[PaymentOut] = []


class StudentProfileOut(StudentOut):
    teachers: List[StudentTeacherOut] = []


class StudentWithPaymentsOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    identifier: str
    full_name: str
    guardian_name: str
    guardian_phone: str
    class_name: Optional[str] = class_field()
    quarter: Optional[str] = None
    categories: StudentCategory
    created_at: datetime
    payments: List[PaymentOut] = []


class NextIdentifierOut(BaseModel):
    category: StudentCategory
    identifier: str


class RelationIn(BaseModel):
    student_id: int
    teacher_id: int


class RelationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    student_id: int
    teacher_id: int
    created_at: datetime


class BulkIdsIn(BaseModel):
    ids: List[int] = Field(..., min_length=1)


class CommentCreateIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    teacher_id: int
    content: str = Field(..., min_length=1, max_length=2000)
    rating: int = Field(..., ge=1, le=5)
