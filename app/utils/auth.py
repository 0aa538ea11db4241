from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.models.admin import Admin
from app.models.student import Student
from app.models.teacher import Teacher
from app.utils.i18n import get_language, http_error

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

ROLE_MODELS = {"admin": Admin, "teacher": Teacher, "student": Student}
MANAGER_ROLES = ("promoteur", "chef coordonateur")


@dataclass
class Principal:
    role: str
    profile: Any

    @property
    def id(self) -> int:
        return self.profile.id


def create_access_token(subject_id: int, role: str, expires_minutes: Optional[int] = None):
    minutes = expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES
    expire = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    to_encode = {"sub": str(subject_id), "role": role, "exp": expire}
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)

def get_current_principal(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
    lang: str = Depends(get_language),
) -> Principal:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise http_error(401, "auth.invalid_token", lang)

    role = payload.get("role")
    sub = payload.get("sub")
    model = ROLE_MODELS.get(role)
    if model is None or sub is None:
        raise http_error(401, "auth.invalid_token", lang)

    profile = db.query(model).filter(model.id == int(sub)).first()
    if not profile:
        raise http_error(401, "auth.user_not_found", lang)
    # an approval revoked after login closes the session
    if role == "teacher" and not profile.is_approved:
        raise http_error(403, "auth.forbidden_role", lang)

    return Principal(role=role, profile=profile)


def _require_role(role: str):
    def dependency(
        principal: Principal = Depends(get_current_principal),
        lang: str = Depends(get_language),
    ):
        if principal.role != role:
            raise http_error(403, "auth.forbidden_role", lang)
        return principal.profile
    return dependency


require_admin = _require_role("admin")
require_teacher = _require_role("teacher")
require_student = _require_role("student")


def is_manager(admin: Admin) -> bool:
    return getattr(admin, "role", None) in MANAGER_ROLES

def require_manager(admin: Admin = Depends(require_admin), lang: str = Depends(get_language)):
    if not is_manager(admin):
        raise http_error(403, "auth.managers_only", lang)
    return admin


def require_staff(principal: Principal = Depends(get_current_principal), lang: str = Depends(get_language)):
    """Admins and teachers, the roles that upload images."""
    if principal.role not in ("admin", "teacher"):
        raise http_error(403, "auth.forbidden_role", lang)
    return principal
