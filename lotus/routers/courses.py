import logging
from fastapi import APIRouter, Depends, Path, Query, Response
from typing import Literal, Optional
from ..models import QuizAnswers
from ..dependencies import require_admin
from ..errors import WorkflowError
from ..firebase_client import get_db
from .. import catalog

logger = logging.getLogger(__name__)

router = APIRouter(tags=["courses"])


@router.get("/courses")
def list_courses(
    category: Optional[Literal["all", "easy", "medium", "hard"]] = Query(None),
    q: Optional[str] = Query(None, description="Texto a buscar en título o descripción"),
    db=Depends(get_db),
):
    return catalog.list_approved(db, category=category, search=q)


@router.get("/courses/{course_id}")
def get_course(course_id: str = Path(...), db=Depends(get_db)):
    course = catalog.get_course(db, course_id)
    return {"success": True, "data": course}


@router.post("/courses/{course_id}/views", status_code=204)
def increment_views(course_id: str = Path(...), db=Depends(get_db)):
    # El contador es orientativo: el cliente no espera respuesta útil
    try:
        catalog.increment_view(db, course_id)
    except WorkflowError as e:
        logger.warning("[courses] vista no contada para %s: %s", course_id, e.message)
    return Response(status_code=204)


@router.post("/courses/{course_id}/quiz/score")
def score_quiz(
    body: QuizAnswers,
    course_id: str = Path(...),
    db=Depends(get_db),
):
    course = catalog.get_course(db, course_id)
    result = catalog.score_quiz(course, body.answers)
    return {"success": True, "data": result.model_dump()}


@router.get("/admin/courses")
def list_all_courses(
    admin_id: str = Depends(require_admin),
    db=Depends(get_db),
):
    return catalog.list_all(db)


@router.delete("/admin/courses/{course_id}")
def delete_course(
    course_id: str = Path(...),
    admin_id: str = Depends(require_admin),
    db=Depends(get_db),
):
    catalog.delete_course(db, course_id, admin_id)
    return {"success": True}
