"""
Feature flag module.

Public API:
- IFeatureRepository: Interface for feature persistence
- Feature: Feature flag record
- DEFAULT_FEATURES: Rows seeded on first boot
- FeatureNotFoundError: Unknown feature key
"""

from .interfaces import IFeatureRepository
from .exceptions import FeatureNotFoundError
from .models import Feature, FeatureToggleRequest, FeatureMapResponse, DEFAULT_FEATURES

__all__ = [
    "IFeatureRepository",
    "Feature",
    "FeatureToggleRequest",
    "FeatureMapResponse",
    "DEFAULT_FEATURES",
    "FeatureNotFoundError",
]
