"""
API Response Schemas

This module defines all Pydantic models for API responses.
Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model serializing field names in camelCase."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(CamelModel, Generic[T]):
    """Envelope used by every analytics endpoint."""
    success: bool = True
    data: T


class ErrorResponse(CamelModel):
    success: bool = False
    message: str


class ClickEventRead(CamelModel):
    """One click with its raw and derived fields."""
    id: int
    link_id: int
    ip: Optional[str] = None
    user_agent: Optional[str] = None
    referer: Optional[str] = None
    device_type: Optional[str] = None
    device_vendor: Optional[str] = None
    device_model: Optional[str] = None
    browser: Optional[str] = None
    browser_version: Optional[str] = None
    os: Optional[str] = None
    os_version: Optional[str] = None
    country: Optional[str] = None
    region: Optional[str] = None
    city: Optional[str] = None
    timezone: Optional[str] = None
    clicked_at: datetime


class AnalyticsBreakdown(CamelModel):
    total_clicks: int
    device_breakdown: dict[str, int] = Field(default_factory=dict)
    browser_breakdown: dict[str, int] = Field(default_factory=dict)
    os_breakdown: dict[str, int] = Field(default_factory=dict)
    country_breakdown: dict[str, int] = Field(default_factory=dict)
    region_breakdown: dict[str, int] = Field(default_factory=dict)
    clicks_by_date: dict[str, int] = Field(default_factory=dict)
    referrer_breakdown: dict[str, int] = Field(default_factory=dict)


class LinkAnalytics(CamelModel):
    """Analytics summary of one link."""
    link_id: int
    short_code: str
    url: str
    total_clicks: int
    analytics: AnalyticsBreakdown
    recent_clicks: list[ClickEventRead]


class PeriodAnalytics(CamelModel):
    period: str
    total_clicks: int
    clicks: list[ClickEventRead]


class MostClickedLink(CamelModel):
    id: int
    short_code: str
    url: str
    clicks: int


class OverallStats(CamelModel):
    total_links: int
    total_clicks: int
    active_links: int
    inactive_links: int
    most_clicked_link: Optional[MostClickedLink] = None
