import logging
from fastapi import APIRouter, Depends, Request, Response
from ..models import AdminLoginRequest
from ..config import Settings, get_settings
from ..errors import AuthorizationError
from ..security import check_access_key, create_admin_token, decode_admin_token

logger = logging.getLogger(__name__)

router = APIRouter(tags=["admin"])


@router.post("/admin/session")
def admin_login(
    body: AdminLoginRequest,
    response: Response,
    settings: Settings = Depends(get_settings),
):
    if not check_access_key(settings, body.accessKey):
        logger.warning("[admin] intento de acceso con clave inválida")
        raise AuthorizationError("Clave de acceso inválida")

    response.set_cookie(
        settings.session_cookie_name,
        create_admin_token(settings),
        max_age=settings.session_max_age,
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )
    logger.info("[admin] sesión de administrador iniciada")
    return {"success": True, "message": "Acceso concedido"}


@router.get("/admin/session")
def admin_session(request: Request, settings: Settings = Depends(get_settings)):
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        return {"authenticated": False}
    try:
        decode_admin_token(settings, token)
    except AuthorizationError:
        return {"authenticated": False}
    return {"authenticated": True}


@router.delete("/admin/session")
def admin_logout(response: Response, settings: Settings = Depends(get_settings)):
    response.delete_cookie(settings.session_cookie_name, samesite="strict")
    return {"success": True}
