import hmac
from datetime import datetime, timedelta, timezone

import jwt

from .config import Settings
from .errors import AuthorizationError

ALGORITHM = "HS256"
ADMIN_ROLE = "admin"


def check_access_key(settings: Settings, access_key: str) -> bool:
    if not settings.admin_enabled:
        return False
    return hmac.compare_digest(access_key.encode(), settings.admin_key.encode())


def create_admin_token(settings: Settings, admin_id: str = ADMIN_ROLE) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": admin_id,
        "role": ADMIN_ROLE,
        "iat": now,
        "exp": now + timedelta(seconds=settings.session_max_age),
    }
    return jwt.encode(payload, settings.session_secret, algorithm=ALGORITHM)


def decode_admin_token(settings: Settings, token: str) -> dict:
    """Valida firma y expiración de la sesión de admin; devuelve el payload."""
    if not settings.admin_enabled:
        raise AuthorizationError("Acceso de administrador no configurado")
    try:
        payload = jwt.decode(token, settings.session_secret, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthorizationError("La sesión de administrador ha expirado")
    except jwt.PyJWTError:
        raise AuthorizationError("Sesión de administrador inválida")
    if payload.get("role") != ADMIN_ROLE or not payload.get("sub"):
        raise AuthorizationError("Sesión de administrador inválida")
    return payload
