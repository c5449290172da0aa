import logging
import math
from typing import List, Optional

from firebase_admin import firestore
from google.api_core.exceptions import GoogleAPIError, NotFound
from google.cloud.firestore_v1.base_query import FieldFilter

from .audit import record_admin_action
from .errors import NotFoundError, StoreError
from .firebase_client import COURSES, snapshot_to_dict
from .models import CourseStatus, QuestionResult, QuizResult
from .utils import newest_first

logger = logging.getLogger(__name__)


def filter_courses(
    courses: List[dict],
    category: Optional[str] = None,
    search: Optional[str] = None,
) -> List[dict]:
    """
    Filtro en memoria sobre cursos ya cargados: categoría exacta ("all" o
    vacío no filtra) y búsqueda sin distinguir mayúsculas en título o
    descripción.
    """
    term = (search or "").strip().lower()
    result = []
    for course in courses:
        if category and category != "all" and course.get("category") != category:
            continue
        if term and term not in (course.get("title") or "").lower() \
                and term not in (course.get("description") or "").lower():
            continue
        result.append(course)
    return result


def list_approved(db, category: Optional[str] = None, search: Optional[str] = None) -> List[dict]:
    query = db.collection(COURSES).where(
        filter=FieldFilter("status", "==", CourseStatus.approved.value)
    )
    try:
        courses = [snapshot_to_dict(doc) for doc in query.stream()]
    except GoogleAPIError as e:
        logger.error("[catalog] error listando cursos aprobados", exc_info=True)
        raise StoreError() from e
    return filter_courses(newest_first(courses), category, search)


def list_all(db) -> List[dict]:
    query = db.collection(COURSES).order_by("createdAt", direction=firestore.Query.DESCENDING)
    try:
        courses = [snapshot_to_dict(doc) for doc in query.stream()]
    except GoogleAPIError as e:
        logger.error("[catalog] error listando cursos", exc_info=True)
        raise StoreError() from e
    logger.info("[catalog] %d cursos en total", len(courses))
    return courses


def get_course(db, course_id: str, approved_only: bool = True) -> dict:
    try:
        doc = db.collection(COURSES).document(course_id).get()
    except GoogleAPIError as e:
        logger.error("[catalog] error leyendo curso %s", course_id, exc_info=True)
        raise StoreError() from e
    if not doc.exists:
        raise NotFoundError("Curso no encontrado")
    course = snapshot_to_dict(doc)
    if approved_only and course.get("status") != CourseStatus.approved.value:
        raise NotFoundError("Curso no encontrado")
    return course


def increment_view(db, course_id: str) -> None:
    # Increment es atómico en Firestore: no hay lectura previa
    try:
        db.collection(COURSES).document(course_id).update({"views": firestore.Increment(1)})
    except NotFound as e:
        raise NotFoundError("Curso no encontrado") from e
    except GoogleAPIError as e:
        logger.error("[catalog] error sumando vista a %s", course_id, exc_info=True)
        raise StoreError() from e


def delete_course(db, course_id: str, admin_id: str) -> None:
    course = get_course(db, course_id, approved_only=False)
    try:
        db.collection(COURSES).document(course_id).delete()
    except GoogleAPIError as e:
        logger.error("[catalog] error borrando curso %s", course_id, exc_info=True)
        raise StoreError("No se pudo borrar el curso") from e

    record_admin_action(db, admin_id, "delete", course_id, {
        "title": course.get("title"),
        "status": course.get("status"),
        "category": course.get("category"),
        "deletionReason": "Borrado manual por un administrador",
    })
    logger.info("[catalog] curso %s borrado", course_id)


def score_quiz(course: dict, answers: List[Optional[int]]) -> QuizResult:
    questions = course.get("quizQuestions") or []
    results = []
    for idx, question in enumerate(questions):
        selected = answers[idx] if idx < len(answers) else None
        correct_answer = question.get("correctAnswer")
        results.append(QuestionResult(
            index=idx,
            selected=selected,
            correctAnswer=correct_answer,
            correct=selected is not None and selected == correct_answer,
            explanation=question.get("explanation"),
        ))
    score = sum(1 for r in results if r.correct)
    total = len(questions)
    percentage = math.floor(score * 100 / total + 0.5) if total else 0
    return QuizResult(score=score, total=total, percentage=percentage, results=results)
