"""
Session authentication dependencies.

Reads the session token from the auth cookie or the Authorization header
and verifies it through the auth service.
"""

from typing import Optional
from fastapi import Depends, Request

from shared.config import get_settings
from shared.exceptions import FundsEdgeError
from shared.models import SessionClaims
from modules.auth.exceptions import InsufficientPermissionsError
from modules.auth.interfaces import IAuthService

from ..dependencies import get_auth_service


def extract_token(request: Request) -> Optional[str]:
    """
    Find the session token on a request.

    The auth cookie wins over an ``Authorization: Bearer`` header.
    """
    cookie = request.cookies.get(get_settings().session_cookie_name)
    if cookie:
        return cookie

    header = request.headers.get("authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None


async def get_current_session(
    request: Request,
    auth: IAuthService = Depends(get_auth_service),
) -> SessionClaims:
    """
    Dependency that requires a valid session.

    Usage:
        @router.get("/protected")
        async def protected_route(claims: SessionClaims = Depends(get_current_session)):
            return {"user_id": claims.user_id}
    """
    return auth.verify_session(extract_token(request))


async def get_optional_session(
    request: Request,
    auth: IAuthService = Depends(get_auth_service),
) -> Optional[SessionClaims]:
    """
    Dependency that extracts the session if there is a valid one.

    Missing, malformed and expired tokens all yield None, as does an
    unconfigured session secret.
    """
    token = extract_token(request)
    if not token:
        return None
    try:
        return auth.verify_session(token)
    except FundsEdgeError:
        return None


async def require_admin(
    claims: SessionClaims = Depends(get_current_session),
    auth: IAuthService = Depends(get_auth_service),
) -> SessionClaims:
    """
    Dependency that requires an admin session.

    The admin claim in the token is a snapshot; when it is false the live
    user record decides, so users promoted after sign-in need not re-login.
    """
    if claims.is_admin:
        return claims
    if await auth.is_admin(claims.user_id):
        return claims
    raise InsufficientPermissionsError()
