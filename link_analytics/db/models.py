"""
Database Models for the Link Analytics Service

This module defines the SQLModel database schemas for:
- Link: A short code owned by one user and its destination URL
- ClickEvent: One immutable record per successful redirect

Design Decisions:
- Separate click_events table, append-only, removed only by cascade
- click_count denormalized on Link for cheap roll-ups; reconciled by the
  analytics aggregator
- Indexes on short_code (redirect path) and on (link_id, clicked_at)
  (analytics path)
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Integer, String, Text
from sqlmodel import Column, Field, Index, SQLModel

from link_analytics.core.clock import utc_now


class Link(SQLModel, table=True):
    """
    Short link owned by exactly one user.

    Fields:
    - short_code: Unique public slug used in the redirect path
    - destination_url: Where the redirect points
    - owner_user_id: Id issued by the auth service
    - expires_at: Optional expiry; a past value makes the link "expired"
    - is_active: False makes the link "inactive"
    - click_count: Cached count of click events (may lag, never negative)
    """
    __tablename__ = "short_links"
    __table_args__ = (
        CheckConstraint("click_count >= 0", name="ck_short_links_click_count_non_negative"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    short_code: str = Field(
        sa_column=Column(String(50), nullable=False, unique=True, index=True),
        max_length=50
    )
    destination_url: str = Field(sa_column=Column(Text, nullable=False))
    owner_user_id: int = Field(sa_column=Column(Integer, nullable=False, index=True))
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
    expires_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True)
    )
    is_active: bool = Field(default=True, sa_column=Column(Boolean, nullable=False, default=True))
    click_count: int = Field(default=0, sa_column=Column(Integer, nullable=False, default=0))


class ClickEvent(SQLModel, table=True):
    """
    One recorded redirect.

    Raw request fields are stored as received; derived device and location
    fields are null when derivation failed. Rows are never updated.
    """
    __tablename__ = "click_events"
    __table_args__ = (
        Index("ix_click_events_link_id_clicked_at", "link_id", "clicked_at"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    link_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("short_links.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )

    # Request information
    # Raw header values, stored untruncated
    ip: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    user_agent: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    referer: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    # Device information
    device_type: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))
    device_vendor: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))
    device_model: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))
    browser: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))
    browser_version: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))
    os: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))
    os_version: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))

    # Location information
    country: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))
    region: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))
    city: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))
    timezone: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))

    clicked_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True)
    )
