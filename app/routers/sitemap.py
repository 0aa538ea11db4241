from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.models.teacher import Teacher
from app.utils.sitemap import build_sitemap

router = APIRouter(tags=["Sitemap"])


def approved_teacher_ids(db: Session) -> list[int]:
    rows = db.query(Teacher.id).filter(Teacher.is_approved.is_(True)).order_by(Teacher.id.asc()).all()
    return [r[0] for r in rows]


@router.get("/sitemap.xml", include_in_schema=False)
def sitemap(db: Session = Depends(get_db)):
    xml = build_sitemap(approved_teacher_ids(db), settings.SITE_BASE_URL)
    return Response(content=xml, media_type="application/xml")
