from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.student import Student
from app.models.student_teacher_relation import StudentTeacherRelation
from app.models.teacher import Teacher
from app.schemas.student import RelationIn, RelationOut
from app.utils.auth import require_admin
from app.utils.i18n import get_language, http_error

import logging
logger = logging.getLogger("app.admin")


router = APIRouter(prefix="/admin/relations", tags=["Admin Relations"])


@router.get("", response_model=list[RelationOut])
def list_relations(
    student_id: Optional[int] = Query(None),
    teacher_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
):
    query = db.query(StudentTeacherRelation)
    if student_id is not None:
        query = query.filter(StudentTeacherRelation.student_id == student_id)
    if teacher_id is not None:
        query = query.filter(StudentTeacherRelation.teacher_id == teacher_id)
    return query.order_by(StudentTeacherRelation.id.asc()).all()


@router.post("", response_model=RelationOut, status_code=201)
def create_relation(
    body: RelationIn,
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
    lang: str = Depends(get_language),
):
    if not db.query(Student.id).filter(Student.id == body.student_id).first():
        raise http_error(404, "not_found.student", lang)
    if not db.query(Teacher.id).filter(Teacher.id == body.teacher_id).first():
        raise http_error(404, "not_found.teacher", lang)

    exists = (
        db.query(StudentTeacherRelation.id)
        .filter(
            StudentTeacherRelation.student_id == body.student_id,
            StudentTeacherRelation.teacher_id == body.teacher_id,
        )
        .first()
    )
    if exists:
        raise http_error(409, "validation.relation_exists", lang)

    rel = StudentTeacherRelation(student_id=body.student_id, teacher_id=body.teacher_id)
    db.add(rel)
    db.commit()
    db.refresh(rel)
    logger.info("Admin %s linked student %s to teacher %s", admin.id, rel.student_id, rel.teacher_id)
    return rel


@router.delete("/{relation_id}")
def delete_relation(
    relation_id: int,
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
    lang: str = Depends(get_language),
):
    rel = db.query(StudentTeacherRelation).filter(StudentTeacherRelation.id == relation_id).first()
    if not rel:
        raise http_error(404, "not_found.relation", lang)
    db.delete(rel)
    db.commit()
    return {"detail": "deleted"}
