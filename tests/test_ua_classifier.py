"""
Tests for the user-agent classifier.
"""

from link_analytics.services.ua_classifier import DeviceInfo, classify_user_agent

IPHONE_UA = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"
)
IPAD_UA = (
    "Mozilla/5.0 (iPad; CPU OS 16_6 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/16.6 Mobile/15E148 Safari/604.1"
)
ANDROID_UA = (
    "Mozilla/5.0 (Linux; Android 14; Pixel 8) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Mobile Safari/537.36"
)
WINDOWS_CHROME_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class TestDeviceType:
    """Device type detection."""

    def test_iphone_is_mobile(self):
        info = classify_user_agent(IPHONE_UA)
        assert info.device_type == "mobile"
        assert info.os == "iOS"
        assert info.device_vendor == "Apple"

    def test_ipad_is_tablet(self):
        """Tablet UAs also carry the Mobile token; tablet must win."""
        assert classify_user_agent(IPAD_UA).device_type == "tablet"

    def test_android_phone_is_mobile(self):
        info = classify_user_agent(ANDROID_UA)
        assert info.device_type == "mobile"
        assert info.os == "Android"
        assert info.os_version == "14"

    def test_windows_chrome_is_desktop(self):
        info = classify_user_agent(WINDOWS_CHROME_UA)
        assert info.device_type == "desktop"
        assert info.browser == "Chrome"
        assert info.browser_version.startswith("120")
        assert info.os == "Windows"


class TestMalformedInput:
    """Classification never fails."""

    def test_missing_user_agent(self):
        assert classify_user_agent(None) == DeviceInfo()
        assert classify_user_agent("") == DeviceInfo()
        assert classify_user_agent("   ") == DeviceInfo()

    def test_garbage_user_agent(self):
        info = classify_user_agent("%%% definitely not a browser %%%")
        assert info.device_type == "desktop"
        assert info.browser is None
        assert info.os is None

    def test_same_input_same_output(self):
        assert classify_user_agent(ANDROID_UA) == classify_user_agent(ANDROID_UA)

    def test_as_dict_matches_click_columns(self):
        assert set(classify_user_agent(IPHONE_UA).as_dict()) == {
            "device_type", "device_vendor", "device_model",
            "browser", "browser_version", "os", "os_version",
        }
