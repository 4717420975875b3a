"""
Public site lock endpoints.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from api.dependencies import get_sitelock_service
from shared.config import Settings, get_settings

from .interfaces import ISiteLockService
from .models import SiteLockStatus, UnlockRequest, UnlockResponse

router = APIRouter()


@router.get("", response_model=SiteLockStatus)
async def get_lock_status(
    request: Request,
    service: ISiteLockService = Depends(get_sitelock_service),
    settings: Settings = Depends(get_settings),
) -> SiteLockStatus:
    """Lock status for the current visitor. Never fails."""
    return await service.get_status(request.cookies.get(settings.sitelock_cookie_name))


@router.post("/unlock", response_model=UnlockResponse)
async def unlock_site(
    body: UnlockRequest,
    service: ISiteLockService = Depends(get_sitelock_service),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """Exchange the unlock password for a bypass cookie."""
    cookie_value = await service.unlock(body.password)
    response = JSONResponse(UnlockResponse().model_dump())
    response.set_cookie(
        key=settings.sitelock_cookie_name,
        value=cookie_value,
        max_age=settings.sitelock_bypass_days * 24 * 60 * 60,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
    return response
