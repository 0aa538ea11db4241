from datetime import datetime
from typing import Optional, Literal
from pydantic import BaseModel, ConfigDict, Field

AdminRole = Literal["promoteur", "chef coordonateur", "coordonateur", "IT supervisor"]


class AdminCreateIn(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=120)
    role: AdminRole = "coordonateur"
    email: str = Field(..., min_length=3, max_length=120)
    user: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., max_length=72)
    about_me: Optional[str] = None
    current_work: Optional[str] = None
    profile_image_url: Optional[str] = None
    whatsapp_number: Optional[str] = None


class AdminUpdateIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    full_name: Optional[str] = None
    role: Optional[AdminRole] = None
    email: Optional[str] = None
    user: Optional[str] = None
    password: Optional[str] = Field(None, max_length=72)
    about_me: Optional[str] = None
    current_work: Optional[str] = None
    profile_image_url: Optional[str] = None
    whatsapp_number: Optional[str] = None


class AdminOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    full_name: str
    role: AdminRole
    email: str
    user: str
    about_me: Optional[str] = None
    current_work: Optional[str] = None
    profile_image_url: Optional[str] = None
    whatsapp_number: Optional[str] = None
    last_login: Optional[datetime] = None
    created_at: datetime
