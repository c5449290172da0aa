import logging
import uuid
from datetime import datetime, timezone

from google.api_core.exceptions import GoogleAPIError
from google.cloud.firestore_v1.base_query import FieldFilter

from .audit import record_admin_action
from .errors import DraftAlreadyPublishedError, NotFoundError, StoreError
from .firebase_client import COURSES, DRAFTS, snapshot_to_dict
from .models import CourseStatus, DraftStatus
from .utils import newest_first

logger = logging.getLogger(__name__)

# Campos de contenido que pasan tal cual del draft al curso
CONTENT_FIELDS = (
    "title",
    "description",
    "videoUrl",
    "thumbnailUrl",
    "category",
    "duration",
    "submittedBy",
)


def list_pending(db) -> list[dict]:
    query = db.collection(DRAFTS).where(
        filter=FieldFilter("status", "==", DraftStatus.pending.value)
    )
    try:
        drafts = [snapshot_to_dict(doc) for doc in query.stream()]
    except GoogleAPIError as e:
        logger.error("[moderation] error listando drafts", exc_info=True)
        raise StoreError() from e
    logger.info("[moderation] %d drafts pendientes", len(drafts))
    return newest_first(drafts)


def approve_draft(db, draft_id: str, admin_id: str) -> dict:
    """
    Publica un draft: crea un curso nuevo (id propio, status approved,
    views 0) y marca el draft como published.

    Si falla la creación del curso el draft queda intacto. Si el curso se
    crea pero no se puede marcar el draft, la aprobación se da por buena
    y solo se deja un warning: repetirla duplicaría el curso.
    """
    draft_ref = db.collection(DRAFTS).document(draft_id)
    try:
        draft_doc = draft_ref.get()
    except GoogleAPIError as e:
        logger.error("[moderation] error leyendo draft %s", draft_id, exc_info=True)
        raise StoreError() from e
    if not draft_doc.exists:
        raise NotFoundError("Draft no encontrado")
    draft = draft_doc.to_dict()
    if draft.get("status") == DraftStatus.published.value:
        raise DraftAlreadyPublishedError()

    course_id = str(uuid.uuid4())
    now = datetime.now(timezone.utc)
    course = {field: draft.get(field) for field in CONTENT_FIELDS}
    course.update({
        "quizQuestions": draft.get("quizQuestions") or [],
        "status": CourseStatus.approved.value,
        "views": 0,
        "createdAt": now,
    })
    try:
        db.collection(COURSES).document(course_id).set(course)
    except GoogleAPIError as e:
        logger.error("[moderation] error creando curso para draft %s", draft_id, exc_info=True)
        raise StoreError("No se pudo publicar el draft") from e

    try:
        draft_ref.update({
            "status": DraftStatus.published.value,
            "publishedAt": now,
            "courseId": course_id,
            "updatedAt": now,
        })
    except GoogleAPIError:
        logger.warning(
            "[moderation] curso %s creado pero el draft %s no se pudo marcar como publicado",
            course_id, draft_id, exc_info=True,
        )

    record_admin_action(db, admin_id, "approve", course_id, {
        "draftId": draft_id,
        "title": course["title"],
        "previousStatus": DraftStatus.pending.value,
        "newStatus": CourseStatus.approved.value,
    })
    logger.info("[moderation] draft %s aprobado como curso %s", draft_id, course_id)
    return {"id": course_id, **course}


def reject_draft(db, draft_id: str) -> None:
    # Borrar un draft que ya no existe no es un error
    try:
        db.collection(DRAFTS).document(draft_id).delete()
    except GoogleAPIError as e:
        logger.error("[moderation] error rechazando draft %s", draft_id, exc_info=True)
        raise StoreError("No se pudo rechazar el draft") from e
    logger.info("[moderation] draft %s rechazado", draft_id)


def purge_published_drafts(db) -> int:
    """Borra los drafts ya marcados como publicados. Devuelve cuántos."""
    query = db.collection(DRAFTS).where(
        filter=FieldFilter("status", "==", DraftStatus.published.value)
    )
    purged = 0
    try:
        for doc in query.stream():
            doc.reference.delete()
            purged += 1
    except GoogleAPIError as e:
        logger.error("[moderation] limpieza interrumpida tras %d drafts", purged, exc_info=True)
        raise StoreError() from e
    logger.info("[moderation] %d drafts publicados eliminados", purged)
    return purged
