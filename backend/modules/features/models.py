"""
Feature flag data models.

Feature flags control which premium pages the frontend shows. The
default set is seeded on first boot and toggled only by admins.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, StrictBool


class Feature(BaseModel):
    """A feature flag row."""

    key: str = Field(..., description="Stable identifier")
    label: str = Field(..., description="Display label")
    icon: str = Field(default="◈", description="Display icon")
    url: str = Field(..., description="Target page")
    enabled: bool = Field(default=True, description="Whether the feature is visible")
    updated_at: Optional[datetime] = Field(None, description="Last toggle time")


# Default feature rows (seeded without overwriting existing settings)
DEFAULT_FEATURES = [
    Feature(key="health-score", label="Financial Health Score", icon="🎯", url="premium-01-health-score.html"),
    Feature(key="market-dashboard", label="Market Dashboard", icon="📊", url="premium-02-market-dashboard.html"),
    Feature(key="education-library", label="Education Library", icon="📚", url="premium-03-education-library.html"),
    Feature(key="scenario-comparison", label="Scenario Comparison", icon="↔", url="premium-04-scenario-comparison.html"),
    Feature(key="checklists", label="Financial Checklists", icon="✅", url="premium-05-checklists.html"),
    Feature(key="calendar", label="Financial Calendar", icon="📅", url="premium-06-calendar.html"),
    Feature(key="community", label="Community Q&A", icon="💬", url="premium-07-community.html"),
    Feature(key="newsletter", label="Newsletter", icon="📬", url="premium-08-newsletter.html"),
    Feature(key="advisor-directory", label="Advisor Directory", icon="🤝", url="premium-09-advisor-directory.html"),
]


class FeatureToggleRequest(BaseModel):
    """Request to enable or disable a feature."""

    enabled: StrictBool


class FeatureMapResponse(BaseModel):
    """Public visibility map: feature key → enabled."""

    features: dict[str, bool] = Field(default_factory=dict)
