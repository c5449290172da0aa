import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from google.api_core.exceptions import GoogleAPIError

from .errors import IntakeError
from .firebase_client import DRAFTS
from .models import DraftStatus, DraftSubmission
from .utils import youtube_thumbnail

logger = logging.getLogger(__name__)


def submit_draft(db, submission: DraftSubmission, submitted_by: Optional[str] = None) -> dict:
    """
    Guarda un envío como draft pendiente de revisión. Nunca escribe en
    courses: el contenido solo se publica al aprobarlo un administrador.
    """
    draft_id = str(uuid.uuid4())
    now = datetime.now(timezone.utc)
    draft = {
        "title": submission.title,
        "description": submission.description,
        "videoUrl": submission.videoUrl,
        "thumbnailUrl": submission.thumbnailUrl or youtube_thumbnail(submission.videoUrl),
        "category": submission.category.value,
        "duration": submission.duration,
        "quizQuestions": [q.model_dump() for q in submission.quizQuestions],
        "submittedBy": submitted_by,
        "status": DraftStatus.pending.value,
        "createdAt": now,
        "updatedAt": now,
    }
    try:
        db.collection(DRAFTS).document(draft_id).set(draft)
    except GoogleAPIError as e:
        logger.error("[intake] error guardando draft '%s'", submission.title, exc_info=True)
        raise IntakeError() from e

    logger.info("[intake] draft %s guardado, pendiente de aprobación", draft_id)
    return {"id": draft_id, **draft}
