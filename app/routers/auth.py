from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.admin import Admin
from app.models.student import Student
from app.models.teacher import Teacher
from app.schemas.admin import AdminOut
from app.schemas.auth import MeOut, TokenOut
from app.schemas.student import StudentOut
from app.schemas.teacher import TeacherOut
from app.utils.auth import Principal, create_access_token, get_current_principal
from app.utils.hashing import verify_password
from app.utils.i18n import get_language, http_error

import logging
logger = logging.getLogger("app.auth")


router = APIRouter(prefix="/auth", tags=["Auth"])

PROFILE_SCHEMAS = {"admin": AdminOut, "teacher": TeacherOut, "student": StudentOut}


def _clean(identifier: str) -> str:
    return (identifier or "").strip().lower()


def _stamp_login(db: Session, profile) -> None:
    profile.last_login = datetime.now(timezone.utc)
    db.commit()


# teachers and students share one login form
@router.post("/login", response_model=TokenOut)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
    lang: str = Depends(get_language),
):
    ident = _clean(form_data.username)

    # approved teachers first, by email or username
    teacher = (
        db.query(Teacher)
        .filter(or_(func.lower(Teacher.email) == ident, func.lower(Teacher.user) == ident))
        .filter(Teacher.is_approved.is_(True))
        .order_by(Teacher.id.asc())
        .first()
    )
    if teacher:
        if not verify_password(form_data.password, teacher.password):
            logger.info("Teacher login rejected for %s", ident)
            raise http_error(401, "auth.invalid_password", lang)
        _stamp_login(db, teacher)
        logger.info("Teacher %s logged in", teacher.id)
        return TokenOut(access_token=create_access_token(teacher.id, "teacher"), role="teacher")

    # students: generated identifier + guardian name
    student = db.query(Student).filter(func.lower(Student.user) == ident).first()
    if student:
        if _clean(student.guardian_name) != _clean(form_data.password):
            logger.info("Student login rejected for %s", ident)
            raise http_error(401, "auth.guardian_mismatch", lang)
        _stamp_login(db, student)
        logger.info("Student %s logged in", student.id)
        return TokenOut(access_token=create_access_token(student.id, "student"), role="student")

    raise http_error(401, "auth.user_not_found", lang)


@router.post("/admin/login", response_model=TokenOut)
def admin_login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
    lang: str = Depends(get_language),
):
    ident = _clean(form_data.username)

    admin = (
        db.query(Admin)
        .filter(or_(func.lower(Admin.email) == ident, func.lower(Admin.user) == ident))
        .first()
    )
    if not admin:
        raise http_error(401, "auth.admin_not_found", lang)
    if not verify_password(form_data.password, admin.password):
        logger.warning("Admin login rejected for %s", ident)
        raise http_error(401, "auth.invalid_password", lang)

    _stamp_login(db, admin)
    logger.info("Admin %s (%s) logged in", admin.id, admin.role)
    return TokenOut(access_token=create_access_token(admin.id, "admin"), role="admin")


@router.get("/me", response_model=MeOut)
def get_me(principal: Principal = Depends(get_current_principal)):
    schema = PROFILE_SCHEMAS[principal.role]
    return MeOut(role=principal.role, profile=schema.model_validate(principal.profile))
