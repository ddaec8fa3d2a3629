"""
Input Validators and Sanitizers

This module provides validation and sanitization functions for user inputs.
"""

from typing import Optional

MAX_SHORT_CODE_LENGTH = 50


def sanitize_short_code(short_code: str) -> Optional[str]:
    """
    Trim a short code and check its length.

    Short codes are issued by the link management service and may hold any
    characters; whether one exists is decided by the lookup.

    Args:
        short_code: The short code to sanitize

    Returns:
        Sanitized short code if valid, None otherwise
    """
    if not short_code or not isinstance(short_code, str):
        return None

    short_code = short_code.strip()

    if len(short_code) > MAX_SHORT_CODE_LENGTH:
        return None

    return short_code or None


def normalize_ip(ip: Optional[str]) -> Optional[str]:
    """
    Strip whitespace and the IPv6-mapped IPv4 prefix (``::ffff:``).

    Returns None for missing or blank input.
    """
    if not ip:
        return None
    ip = ip.strip()
    if ip.lower().startswith("::ffff:"):
        ip = ip[len("::ffff:"):]
    return ip or None
