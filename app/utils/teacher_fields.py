import re
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.models.student import Student
from app.models.teacher import Teacher
from app.schemas.teacher import REQUIRED_TEACHER_FIELDS
from app.utils.hashing import hash_password
from app.utils.i18n import http_error
from app.utils.whatsapp import normalize_phone

LIST_FIELDS = ("subjects", "location", "available_days")
TEXT_FIELDS = (
    "full_name", "user", "email", "town", "current_work",
    "about_me", "highest_diploma",
)
# optional on edit forms but never stored as NULL
NOT_NULL_FIELDS = ("years_experience", "is_approved", "success_rate")

# generated student logins share the teacher login form
STUDENT_LOGIN_PATTERN = re.compile(r"^ST00[AFB]\d+$", re.IGNORECASE)


def missing_fields(data: Dict[str, Any], required: Iterable[str]) -> List[str]:
    missing = []
    for field in required:
        v = data.get(field)
        if v is None or (isinstance(v, str) and not v.strip()) or (isinstance(v, list) and not v):
            missing.append(field)
    return missing


def clean_teacher_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Normalise a teacher payload in place of the raw form values:
    strings trimmed, blank list items dropped, contact as +237...
    Only keys present in `data` are touched. The password stays plain here.
    """
    out = dict(data)
    for k in TEXT_FIELDS:
        if k in out and isinstance(out[k], str):
            out[k] = out[k].strip()
    if "email" in out and out["email"]:
        out["email"] = out["email"].lower()
    for k in LIST_FIELDS:
        if k in out and out[k] is not None:
            out[k] = [s.strip() for s in out[k] if s and s.strip()]
    for k in NOT_NULL_FIELDS:
        if k in out and out[k] is None:
            out.pop(k)
    if "contact" in out and out["contact"] is not None:
        out["contact"] = normalize_phone(out["contact"])
    if "password" in out and not out["password"]:
        # empty password on an edit form means "keep the current one"
        out.pop("password")
    return out


def ensure_credentials_free(
    db: Session,
    lang: str,
    user: Optional[str] = None,
    email: Optional[str] = None,
    exclude_id: Optional[int] = None,
) -> None:
    """
    Teachers and students log in through the same form, so a teacher
    username or email must not match any teacher login or student login.
    """
    if user and STUDENT_LOGIN_PATTERN.match(user.strip()):
        raise http_error(409, "validation.username_reserved", lang)

    for value, key in ((user, "validation.username_taken"), (email, "validation.email_taken")):
        if not value:
            continue
        v = value.strip().lower()
        q = db.query(Teacher.id).filter(or_(func.lower(Teacher.user) == v, func.lower(Teacher.email) == v))
        if exclude_id is not None:
            q = q.filter(Teacher.id != exclude_id)
        if q.first() or db.query(Student.id).filter(func.lower(Student.user) == v).first():
            raise http_error(409, key, lang)


def prepare_teacher_data(
    db: Session,
    data: Dict[str, Any],
    lang: str,
    required: Iterable[str],
    exclude_id: Optional[int] = None,
) -> Dict[str, Any]:
    """clean -> required check -> login uniqueness -> password hash"""
    out = clean_teacher_data(data)

    missing = missing_fields(out, required)
    if missing:
        raise http_error(400, "validation.missing_fields", lang, fields=", ".join(missing))

    ensure_credentials_free(db, lang, user=out.get("user"), email=out.get("email"), exclude_id=exclude_id)

    if "password" in out:
        out["password"] = hash_password(out["password"], lang)
    return out


def sent_required(data: Dict[str, Any]) -> List[str]:
    # required columns cannot be blanked from an edit form
    return [k for k in REQUIRED_TEACHER_FIELDS if k in data and k != "password"]
