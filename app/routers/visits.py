from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.visit import Visit
from app.schemas.misc import VisitIn, VisitOut

router = APIRouter(prefix="/visits", tags=["Visits"])


@router.post("", response_model=VisitOut, status_code=201)
def record_visit(body: VisitIn, db: Session = Depends(get_db)):
    visit = Visit(visitor_id=body.visitor_id.strip(), location=body.location.strip())
    db.add(visit)
    db.commit()
    db.refresh(visit)
    return visit
