from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.admin import Admin
from app.schemas.admin import AdminCreateIn, AdminOut, AdminUpdateIn
from app.utils.auth import is_manager, require_admin, require_manager
from app.utils.hashing import hash_password
from app.utils.i18n import get_language, http_error

import logging
logger = logging.getLogger("app.admin")


router = APIRouter(prefix="/admin/admins", tags=["Admins"])


def _get_admin(db: Session, admin_id: int, lang: str) -> Admin:
    row = db.query(Admin).filter(Admin.id == admin_id).first()
    if not row:
        raise http_error(404, "not_found.admin", lang)
    return row


def _ensure_unique(db: Session, lang: str, user=None, email=None, exclude_id=None) -> None:
    if user:
        q = db.query(Admin.id).filter(func.lower(Admin.user) == user.strip().lower())
        if exclude_id is not None:
            q = q.filter(Admin.id != exclude_id)
        if q.first():
            raise http_error(409, "validation.username_taken", lang)
    if email:
        q = db.query(Admin.id).filter(func.lower(Admin.email) == email.strip().lower())
        if exclude_id is not None:
            q = q.filter(Admin.id != exclude_id)
        if q.first():
            raise http_error(409, "validation.email_taken", lang)


@router.get("", response_model=list[AdminOut])
def list_admins(
    db: Session = Depends(get_db),
    admin: Admin = Depends(require_admin),
):
    return db.query(Admin).order_by(Admin.created_at.asc(), Admin.id.asc()).all()


@router.get("/me", response_model=AdminOut)
def get_my_admin_profile(admin: Admin = Depends(require_admin)):
    return admin


@router.get("/{admin_id}", response_model=AdminOut)
def get_admin(
    admin_id: int,
    db: Session = Depends(get_db),
    admin: Admin = Depends(require_admin),
    lang: str = Depends(get_language),
):
    return _get_admin(db, admin_id, lang)


@router.post("", response_model=AdminOut, status_code=201)
def create_admin(
    body: AdminCreateIn,
    db: Session = Depends(get_db),
    admin: Admin = Depends(require_manager),
    lang: str = Depends(get_language),
):
    if body.role == "promoteur" and admin.role != "promoteur":
        raise http_error(403, "validation.promoteur_only", lang)

    _ensure_unique(db, lang, user=body.user, email=body.email)

    new_admin = Admin(
        full_name=body.full_name.strip(),
        role=body.role,
        email=body.email.strip().lower(),
        user=body.user.strip(),
        password=hash_password(body.password, lang),
        about_me=body.about_me,
        current_work=body.current_work,
        profile_image_url=body.profile_image_url,
        whatsapp_number=body.whatsapp_number,
    )
    db.add(new_admin)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Admin %s could not create admin %s: duplicate user or email", admin.id, body.user)
        raise http_error(409, "validation.username_taken", lang)
    db.refresh(new_admin)

    logger.info("Admin %s created admin %s (%s)", admin.id, new_admin.id, new_admin.role)
    return new_admin


@router.put("/{admin_id}", response_model=AdminOut)
def update_admin(
    admin_id: int,
    body: AdminUpdateIn,
    db: Session = Depends(get_db),
    admin: Admin = Depends(require_admin),
    lang: str = Depends(get_language),
):
    manager = is_manager(admin)
    if admin_id != admin.id and not manager:
        raise http_error(403, "auth.managers_only", lang)

    target = _get_admin(db, admin_id, lang)
    data = body.model_dump(exclude_unset=True)

    # a promoteur account is only touched by a promoteur, and only they hand the role out
    if admin.role != "promoteur" and (target.role == "promoteur" or data.get("role") == "promoteur"):
        raise http_error(403, "validation.promoteur_only", lang)

    if "role" in data and data["role"] != target.role and not manager:
        raise http_error(403, "auth.managers_only", lang)

    _ensure_unique(db, lang, user=data.get("user"), email=data.get("email"), exclude_id=target.id)

    if data.get("password"):
        data["password"] = hash_password(data["password"], lang)
    else:
        data.pop("password", None)
    if data.get("email"):
        data["email"] = data["email"].strip().lower()

    for k, v in data.items():
        if k in ("full_name", "email", "user", "role") and not v:
            continue
        setattr(target, k, v.strip() if isinstance(v, str) and k != "password" else v)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise http_error(409, "validation.username_taken", lang)
    db.refresh(target)
    return target


@router.delete("/{admin_id}")
def delete_admin(
    admin_id: int,
    db: Session = Depends(get_db),
    admin: Admin = Depends(require_manager),
    lang: str = Depends(get_language),
):
    if admin_id == admin.id:
        raise http_error(400, "validation.cannot_delete_self", lang)

    target = _get_admin(db, admin_id, lang)
    if target.role == "promoteur" and admin.role != "promoteur":
        raise http_error(403, "validation.promoteur_only", lang)

    db.delete(target)
    db.commit()
    logger.info("Admin %s deleted admin %s", admin.id, admin_id)
    return {"detail": "deleted"}
