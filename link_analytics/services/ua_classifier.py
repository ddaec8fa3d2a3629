"""
Device / User-Agent Classifier

Turns a raw User-Agent header into the device, browser and OS fields stored
on each click event. Pure function: no I/O, same output for the same input.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Optional

from user_agents import parse as parse_user_agent

logger = logging.getLogger(__name__)

DEVICE_MOBILE = "mobile"
DEVICE_TABLET = "tablet"
DEVICE_DESKTOP = "desktop"

# ua-parser reports unrecognised families as "Other"
_UNKNOWN_FAMILIES = {"", "Other"}


@dataclass(frozen=True)
class DeviceInfo:
    device_type: str = DEVICE_DESKTOP
    device_vendor: Optional[str] = None
    device_model: Optional[str] = None
    browser: Optional[str] = None
    browser_version: Optional[str] = None
    os: Optional[str] = None
    os_version: Optional[str] = None

    def as_dict(self) -> dict:
        return asdict(self)


def _clean(value, max_length: int) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    if value in _UNKNOWN_FAMILIES:
        return None
    return value[:max_length]


def classify_user_agent(user_agent: Optional[str]) -> DeviceInfo:
    """
    Classify a user-agent string.

    Tablets are checked before phones because several tablet UAs also carry
    mobile markers. Anything that is neither is reported as desktop.
    Malformed input never raises; unknown fields come back as None.
    """
    if not user_agent or not user_agent.strip():
        return DeviceInfo()

    try:
        ua = parse_user_agent(user_agent)

        if ua.is_tablet:
            device_type = DEVICE_TABLET
        elif ua.is_mobile:
            device_type = DEVICE_MOBILE
        else:
            device_type = DEVICE_DESKTOP

        return DeviceInfo(
            device_type=device_type,
            device_vendor=_clean(ua.device.brand, 100),
            device_model=_clean(ua.device.model, 100),
            browser=_clean(ua.browser.family, 50),
            browser_version=_clean(ua.browser.version_string, 50),
            os=_clean(ua.os.family, 50),
            os_version=_clean(ua.os.version_string, 50),
        )
    except Exception as e:
        logger.warning(f"User-agent parsing failed: {e}")
        return DeviceInfo()
