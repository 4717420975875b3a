"""
Authentication API endpoints.

Google/Apple sign-in, email sign-up/sign-in, current user and logout.
Every successful sign-in sets the session cookie and also returns the
token in the body for non-cookie clients.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import get_auth_service
from api.middleware.auth import get_current_session
from shared.config import Settings, get_settings
from shared.models import SessionClaims

from .exceptions import UserNotFoundError
from .interfaces import IAuthService
from .models import (
    AppleAuthRequest,
    AuthProvider,
    AuthResponse,
    CurrentUserResponse,
    EmailSigninRequest,
    EmailSignupRequest,
    ExternalAssertion,
    GoogleAuthRequest,
    User,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def session_response(
    user: User,
    auth: IAuthService,
    settings: Settings,
    status_code: int = 200,
) -> JSONResponse:
    """Mint a session for the user and deliver it as cookie and body."""
    credential = auth.issue_session(user)
    body = AuthResponse(user=user, token=credential.token)
    response = JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))
    response.set_cookie(
        key=settings.session_cookie_name,
        value=credential.token,
        max_age=credential.max_age,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
    return response


@router.post("/google", response_model=AuthResponse)
async def google_sign_in(
    request: GoogleAuthRequest,
    auth: IAuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """Sign in with a Google ID token."""
    user = await auth.authenticate_external(
        AuthProvider.GOOGLE,
        ExternalAssertion(token=request.credential),
    )
    return session_response(user, auth, settings)


@router.post("/apple", response_model=AuthResponse)
async def apple_sign_in(
    request: AppleAuthRequest,
    auth: IAuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """Sign in with an Apple identity token."""
    user = await auth.authenticate_external(
        AuthProvider.APPLE,
        ExternalAssertion(token=request.id_token, user=request.user),
    )
    return session_response(user, auth, settings)


@router.get("/me", response_model=CurrentUserResponse)
async def get_me(
    claims: SessionClaims = Depends(get_current_session),
    auth: IAuthService = Depends(get_auth_service),
) -> CurrentUserResponse:
    """
    Get the current user's live record.

    Requires authentication.
    """
    user = await auth.get_user(claims.user_id)
    if user is None:
        raise UserNotFoundError(claims.user_id)
    return CurrentUserResponse(user=user)


@router.post("/logout")
async def logout(settings: Settings = Depends(get_settings)) -> JSONResponse:
    response = JSONResponse(content={"ok": True})
    response.delete_cookie(settings.session_cookie_name)
    return response


@router.post("/email/signup", response_model=AuthResponse, status_code=201)
async def email_sign_up(
    request: EmailSignupRequest,
    auth: IAuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """
    Create an email/password account and sign it in.

    Passwords must be at least 8 characters. Returns 409 if the email
    is already registered with any provider.
    """
    user = await auth.register_local(request.email, request.password, request.name)
    return session_response(user, auth, settings, status_code=201)


@router.post("/email/signin", response_model=AuthResponse)
async def email_sign_in(
    request: EmailSigninRequest,
    auth: IAuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """Sign in with email and password."""
    user = await auth.authenticate_local(request.email, request.password)
    return session_response(user, auth, settings)
