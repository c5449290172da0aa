from fastapi import Header, HTTPException, Depends, Request
from typing import Optional
from .config import Settings, get_settings
from .errors import AuthorizationError
from .firebase_client import verify_firebase_token
from .security import decode_admin_token

def get_current_user(authorization: Optional[str] = Header(None)):
    if not authorization:
        raise HTTPException(status_code=401, detail="Authorization header missing")
    if not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="Invalid auth header format")
    token = authorization.split(" ", 1)[1]
    try:
        decoded = verify_firebase_token(token)
        return decoded  # contiene uid, email, etc.
    except ValueError as e:
        raise HTTPException(status_code=401, detail=str(e))

def get_optional_user(authorization: Optional[str] = Header(None)) -> Optional[dict]:
    # Los envíos anónimos están permitidos; un token presente tiene que ser válido
    if not authorization:
        return None
    return get_current_user(authorization)

def require_admin(request: Request, settings: Settings = Depends(get_settings)) -> str:
    """Comprueba la cookie de sesión de admin y devuelve el id del admin."""
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        raise AuthorizationError()
    payload = decode_admin_token(settings, token)
    return payload["sub"]
