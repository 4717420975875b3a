"""
Admin API endpoints.

Every route sits behind the admin gate.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_admin_service
from api.middleware.auth import require_admin
from modules.features.models import FeatureToggleRequest
from modules.sitelock.models import SiteLockSettings, SiteLockSettingsUpdate

from .interfaces import IAdminService
from .models import (
    AdminUserPatch,
    FeatureListResponse,
    FeatureUpdatedResponse,
    UserListResponse,
    UserUpdatedResponse,
)

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/users", response_model=UserListResponse)
async def list_users(
    service: IAdminService = Depends(get_admin_service),
) -> UserListResponse:
    return UserListResponse(users=await service.list_users())


@router.patch("/users/{user_id}", response_model=UserUpdatedResponse)
async def update_user(
    user_id: int,
    body: AdminUserPatch,
    service: IAdminService = Depends(get_admin_service),
) -> UserUpdatedResponse:
    """Set subscription tier, admin flag or book entitlement."""
    return UserUpdatedResponse(user=await service.update_user(user_id, body))


@router.get("/features", response_model=FeatureListResponse)
async def list_features(
    service: IAdminService = Depends(get_admin_service),
) -> FeatureListResponse:
    return FeatureListResponse(features=await service.list_features())


@router.patch("/features/{key}", response_model=FeatureUpdatedResponse)
async def toggle_feature(
    key: str,
    body: FeatureToggleRequest,
    service: IAdminService = Depends(get_admin_service),
) -> FeatureUpdatedResponse:
    return FeatureUpdatedResponse(feature=await service.set_feature_enabled(key, body.enabled))


@router.get("/settings", response_model=SiteLockSettings)
async def get_settings(
    service: IAdminService = Depends(get_admin_service),
) -> SiteLockSettings:
    return await service.get_settings()


@router.post("/settings", response_model=SiteLockSettings)
async def save_settings(
    body: SiteLockSettingsUpdate,
    service: IAdminService = Depends(get_admin_service),
) -> SiteLockSettings:
    """Update the site lock. A new unlock password is stored hashed."""
    return await service.save_settings(body)
