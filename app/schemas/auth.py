from typing import Literal, Union
from pydantic import BaseModel

from app.schemas.admin import AdminOut
from app.schemas.student import StudentOut
from app.schemas.teacher import TeacherOut

Role = Literal["admin", "teacher", "student"]


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: Role


class MeOut(BaseModel):
    role: Role
    profile: Union[AdminOut, TeacherOut, StudentOut]
