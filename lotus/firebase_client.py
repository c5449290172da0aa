import logging
from functools import lru_cache

import firebase_admin
from firebase_admin import credentials, auth as firebase_auth, firestore

from .config import get_settings

logger = logging.getLogger(__name__)


def init_firebase() -> None:
    # Inicializa Firebase Admin una sola vez
    if firebase_admin._apps:
        return
    cred_path = get_settings().firebase_service_account
    if cred_path:
        cred = credentials.Certificate(cred_path)
        firebase_admin.initialize_app(cred)
    else:
        firebase_admin.initialize_app()
    logger.info("Firebase inicializado (service account: %s)", bool(cred_path))


@lru_cache
def get_db():
    """Cliente de Firestore compartido; se crea en la primera petición."""
    init_firebase()
    return firestore.client()


def verify_firebase_token(id_token: str) -> dict:
    init_firebase()
    try:
        decoded = firebase_auth.verify_id_token(id_token)
        return decoded
    except Exception as e:
        raise ValueError(f"Token inválido: {e}")


DRAFTS = "drafts"
COURSES = "courses"
AUDIT_LOGS = "admin_audit_logs"


def snapshot_to_dict(doc) -> dict:
    data = doc.to_dict() or {}
    data["id"] = doc.id
    return data
