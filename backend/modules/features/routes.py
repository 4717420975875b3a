"""
Public feature visibility endpoint.
"""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_feature_repository

from .interfaces import IFeatureRepository
from .models import FeatureMapResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=FeatureMapResponse)
async def get_feature_map(
    features: IFeatureRepository = Depends(get_feature_repository),
) -> FeatureMapResponse:
    """
    Map of feature key to enabled flag. No auth required.

    Returns an empty map when the store is unavailable, which the
    frontend treats as "show everything".
    """
    try:
        rows = await features.list_features()
    except Exception as e:
        logger.warning(f"Feature map unavailable: {e}")
        return FeatureMapResponse()
    return FeatureMapResponse(features={f.key: f.enabled for f in rows})
