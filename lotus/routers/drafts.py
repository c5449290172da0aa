from fastapi import APIRouter, Depends, Path
from typing import Optional
from ..models import DraftSubmission
from ..dependencies import get_optional_user, require_admin
from ..firebase_client import get_db
from .. import intake, moderation

router = APIRouter(tags=["drafts"])


@router.post("/drafts", status_code=201)
def submit_draft(
    submission: DraftSubmission,
    auth_data: Optional[dict] = Depends(get_optional_user),
    db=Depends(get_db),
):
    uid = auth_data.get("uid") if auth_data else None
    draft = intake.submit_draft(db, submission, submitted_by=uid)
    return {"success": True, "data": draft}


# Cola de moderación: todo lo de abajo exige sesión de admin
@router.get("/admin/drafts")
def list_pending_drafts(
    admin_id: str = Depends(require_admin),
    db=Depends(get_db),
):
    return moderation.list_pending(db)


@router.post("/admin/drafts/purge-published")
def purge_published_drafts(
    admin_id: str = Depends(require_admin),
    db=Depends(get_db),
):
    purged = moderation.purge_published_drafts(db)
    return {"success": True, "data": {"purged": purged}}


@router.post("/admin/drafts/{draft_id}/approve")
def approve_draft(
    draft_id: str = Path(...),
    admin_id: str = Depends(require_admin),
    db=Depends(get_db),
):
    course = moderation.approve_draft(db, draft_id, admin_id)
    return {"success": True, "data": course}


@router.post("/admin/drafts/{draft_id}/reject")
@router.delete("/admin/drafts/{draft_id}")
def reject_draft(
    draft_id: str = Path(...),
    admin_id: str = Depends(require_admin),
    db=Depends(get_db),
):
    moderation.reject_draft(db, draft_id)
    return {"success": True}
