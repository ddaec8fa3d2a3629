"""
Rate Limiting Configuration

This module provides rate limiting functionality for API endpoints.

Design Decisions:
- Uses slowapi for rate limiting (lightweight, FastAPI-compatible)
- Different limits for the public redirect and the analytics API
- IP-based limiting
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from link_analytics.core.setting import settings

# Uses IP address for rate limiting
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)

# Format: "count/period" (e.g., "10/minute" means 10 requests per minute)
RATE_LIMITS = {
    "redirect": "300/minute",  # Public redirects per IP
    "analytics": "60/minute",  # Analytics reads per IP
}
