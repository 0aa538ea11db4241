from typing import List, Literal, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

Gender = Literal["male", "female"]
TeacherCategory = Literal["anglo", "franco", "bilingue"]

REQUIRED_TEACHER_FIELDS = (
    "full_name",
    "user",
    "email",
    "contact",
    "town",
    "gender",
    "category",
    "password",
    "subjects",
    "location",
    "available_days",
)


class TeacherRegisterIn(BaseModel):
    # every field optional here, missing ones are reported together (bilingual)
    full_name: Optional[str] = None
    user: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    contact: Optional[str] = None
    town: Optional[str] = None
    gender: Optional[Gender] = None
    category: Optional[TeacherCategory] = None
    subjects: List[str] = Field(default_factory=list)
    location: List[str] = Field(default_factory=list)
    available_days: List[str] = Field(default_factory=list)

    highest_diploma: Optional[str] = None
    years_experience: int = Field(0, ge=0, le=80)
    about_me: Optional[str] = None
    current_work: Optional[str] = None
    profile_image_url: Optional[str] = None


class TeacherCreateIn(TeacherRegisterIn):
    is_approved: bool = False
    success_rate: int = Field(0, ge=0, le=100)


class TeacherSelfUpdateIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    full_name: Optional[str] = None
    user: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    contact: Optional[str] = None
    town: Optional[str] = None
    gender: Optional[Gender] = None
    category: Optional[TeacherCategory] = None
    subjects: Optional[List[str]] = None
    location: Optional[List[str]] = None
    available_days: Optional[List[str]] = None
    highest_diploma: Optional[str] = None
    years_experience: Optional[int] = Field(None, ge=0, le=80)
    about_me: Optional[str] = None
    current_work: Optional[str] = None
    profile_image_url: Optional[str] = None


class TeacherAdminUpdateIn(TeacherSelfUpdateIn):
    is_approved: Optional[bool] = None
    success_rate: Optional[int] = Field(None, ge=0, le=100)


class TeacherPublicOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    full_name: str
    about_me: Optional[str] = None
    years_experience: int = 0
    highest_diploma: Optional[str] = None
    town: str
    current_work: Optional[str] = None
    subjects: List[str] = []
    location: List[str] = []
    available_days: List[str] = []
    gender: Gender
    category: TeacherCategory
    profile_image_url: Optional[str] = None
    success_rate: int = 0
    number_reviews: int = 0
    created_at: datetime


class TeacherOut(TeacherPublicOut):
    user: str
    email: str
    contact: str
    is_approved: bool
    last_login: Optional[datetime] = None
    updated_at: datetime


class TeacherCommentOut(BaseModel):
    id: int
    teacher_id: int
    student_id: int
    student_name: Optional[str] = None
    content: str
    rating: int
    created_at: datetime


class TeacherDetailOut(TeacherPublicOut):
    comments: List[TeacherCommentOut] = []


class TeacherPublicListOut(BaseModel):
    items: List[TeacherPublicOut]
    total: int
    page: int
    page_size: int


class TeacherListOut(BaseModel):
    items: List[TeacherOut]
    total: int
    page: int
    page_size: int


class ContactLinkOut(BaseModel):
    url: str
    message: str
