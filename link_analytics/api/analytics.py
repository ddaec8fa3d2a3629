"""
Analytics Endpoints

Owner-only analytics for links. Every endpoint requires an authenticated
user; link-scoped endpoints additionally check ownership before any click
data is read.
"""

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from link_analytics.api.schemas import (
    ApiResponse,
    ErrorResponse,
    LinkAnalytics,
    OverallStats,
    PeriodAnalytics,
)
from link_analytics.core.auth import require_user_id
from link_analytics.core.exceptions import LinkNotFoundError
from link_analytics.core.rate_limit import RATE_LIMITS, limiter
from link_analytics.db.session import get_session
from link_analytics.services.analytics_service import AnalyticsService
from link_analytics.services.stats_service import StatsService

router = APIRouter(
    prefix="/api/analytics",
    responses={
        401: {"model": ErrorResponse, "description": "Missing or invalid access token"},
        403: {"model": ErrorResponse, "description": "Link owned by another user"},
        404: {"model": ErrorResponse, "description": "Unknown link"},
    },
)


@router.get(
    "/link/{link_id}",
    response_model=ApiResponse[LinkAnalytics],
    summary="Analytics for one link",
)
@limiter.limit(RATE_LIMITS["analytics"])
async def get_link_analytics(
    link_id: int,
    request: Request,
    user_id: int = Depends(require_user_id),
    session: AsyncSession = Depends(get_session),
):
    service = AnalyticsService(session)
    await service.get_owned_link(link_id, user_id)

    summary = await service.summarize(link_id)
    if summary is None:
        raise LinkNotFoundError(link_id)

    return {"success": True, "data": summary}


@router.get(
    "/link/{link_id}/period",
    response_model=ApiResponse[PeriodAnalytics],
    summary="Raw clicks of one link over the last N days",
)
@limiter.limit(RATE_LIMITS["analytics"])
async def get_link_analytics_by_period(
    link_id: int,
    request: Request,
    days: int = Query(default=7, ge=1, le=3650),
    user_id: int = Depends(require_user_id),
    session: AsyncSession = Depends(get_session),
):
    service = AnalyticsService(session)
    await service.get_owned_link(link_id, user_id)

    return {"success": True, "data": await service.events_for_period(link_id, days)}


@router.get(
    "/stats",
    response_model=ApiResponse[OverallStats],
    summary="Overall statistics of the current user's links",
)
@limiter.limit(RATE_LIMITS["analytics"])
async def get_user_stats(
    request: Request,
    user_id: int = Depends(require_user_id),
    session: AsyncSession = Depends(get_session),
):
    return {"success": True, "data": await StatsService(session).rollup(user_id)}


@router.get(
    "/user",
    response_model=ApiResponse[list[LinkAnalytics]],
    summary="Analytics for every link of the current user",
)
@limiter.limit(RATE_LIMITS["analytics"])
async def get_user_analytics(
    request: Request,
    user_id: int = Depends(require_user_id),
    session: AsyncSession = Depends(get_session),
):
    return {"success": True, "data": await AnalyticsService(session).summarize_for_user(user_id)}
