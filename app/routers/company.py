from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.models.company_info import CompanyInfo
from app.models.teacher import Teacher
from app.schemas.company import CompanyInfoOut, CompanyInfoUpdate, WhatsAppLinkOut
from app.utils.auth import require_manager
from app.utils.i18n import get_language, http_error
from app.utils.whatsapp import build_link, company_message

import logging
logger = logging.getLogger("app.admin")

router = APIRouter(prefix="/company", tags=["Company"])

Topic = Literal[
    "home_tutoring",
    "online_courses",
    "vip_tutoring",
    "teacher_interest",
    "no_tutor_in_area",
    "default",
]


def get_company(db: Session) -> Optional[CompanyInfo]:
    # single row table
    return db.query(CompanyInfo).order_by(CompanyInfo.id.asc()).first()


def _company_out(company: CompanyInfo, lang: str) -> CompanyInfoOut:
    out = CompanyInfoOut.model_validate(company)
    about = company.about_us_en if lang == "en" else company.about_us_fr
    return out.model_copy(update={"about_us": about})


@router.get("", response_model=CompanyInfoOut)
def read_company(
    db: Session = Depends(get_db),
    lang: str = Depends(get_language),
):
    company = get_company(db)
    if not company:
        raise http_error(404, "not_found.company", lang)
    return _company_out(company, lang)


@router.put("", response_model=CompanyInfoOut)
def update_company(
    body: CompanyInfoUpdate,
    db: Session = Depends(get_db),
    admin=Depends(require_manager),
    lang: str = Depends(get_language),
):
    company = get_company(db)
    if not company:
        company = CompanyInfo(name=settings.COMPANY_NAME)
        db.add(company)

    for k, v in body.model_dump(exclude_unset=True).items():
        if k == "name" and not (v or "").strip():
            continue
        setattr(company, k, v.strip() if isinstance(v, str) else v)

    db.commit()
    db.refresh(company)
    logger.info("Admin %s updated company information", admin.id)
    return _company_out(company, lang)


@router.get("/whatsapp-link", response_model=WhatsAppLinkOut)
def company_whatsapp_link(
    topic: Topic = Query("default"),
    teacher_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    lang: str = Depends(get_language),
):
    company = get_company(db)
    number = company.whatsapp_number if company else None
    if not number:
        raise http_error(404, "validation.no_whatsapp", lang)

    teacher_name = None
    if topic == "teacher_interest":
        if teacher_id is None:
            raise http_error(400, "validation.teacher_required", lang)
        teacher = (
            db.query(Teacher)
            .filter(Teacher.id == teacher_id, Teacher.is_approved.is_(True))
            .first()
        )
        if not teacher:
            raise http_error(404, "not_found.teacher", lang)
        teacher_name = teacher.full_name

    message = company_message(topic, lang, company.name or settings.COMPANY_NAME, teacher_name)
    return WhatsAppLinkOut(topic=topic, url=build_link(number, message), message=message)
