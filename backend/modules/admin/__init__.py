"""
Admin module.

User management, feature toggles and site lock settings for admins.

Public API:
- IAdminService: Interface for admin operations
- AdminUserPatch: Admin-editable user fields
"""

from .interfaces import IAdminService
from .models import AdminUserPatch

__all__ = [
    "IAdminService",
    "AdminUserPatch",
]
