import logging
from datetime import datetime, timezone
from typing import Any, Optional

from google.api_core.exceptions import GoogleAPIError

from .firebase_client import AUDIT_LOGS

logger = logging.getLogger(__name__)


def record_admin_action(
    db,
    admin_id: str,
    action: str,
    resource_id: str,
    metadata: Optional[dict[str, Any]] = None,
    resource_type: str = "course",
) -> None:
    """
    Añade una entrada a admin_audit_logs. El log es solo de escritura;
    si falla, la acción ya está hecha y solo se registra el error.
    """
    entry = {
        "adminId": admin_id,
        "action": action,
        "resourceType": resource_type,
        "resourceId": resource_id,
        "timestamp": datetime.now(timezone.utc),
        "metadata": metadata or {},
    }
    try:
        db.collection(AUDIT_LOGS).add(entry)
    except GoogleAPIError:
        logger.error(
            "[audit] no se pudo registrar %s sobre %s/%s",
            action, resource_type, resource_id, exc_info=True,
        )
