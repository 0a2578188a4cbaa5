"""
Device Metadata

Client device details captured with sessions and activity log entries.
"""

from typing import Optional

from pydantic import BaseModel

from .entities.enums import DeviceType

MAX_DEVICE_INFO_LENGTH = 500
MAX_IP_ADDRESS_LENGTH = 45

_TABLET_MARKERS = ("ipad", "tablet", "kindle", "silk", "playbook")
_MOBILE_MARKERS = ("mobi", "iphone", "ipod", "android", "blackberry", "opera mini", "windows phone")
_DESKTOP_MARKERS = ("windows nt", "macintosh", "mac os x", "x11", "linux", "cros")


class DeviceMeta(BaseModel):
    """IP address and User-Agent of the client performing an action"""

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None

    @classmethod
    def from_headers(cls, ip_address: Optional[str], user_agent: Optional[str]) -> "DeviceMeta":
        return cls(
            ip_address=ip_address[:MAX_IP_ADDRESS_LENGTH] if ip_address else None,
            user_agent=user_agent[:MAX_DEVICE_INFO_LENGTH] if user_agent else None,
        )

    @property
    def device_info(self) -> Optional[str]:
        """Human-readable device description stored with a session."""
        if not self.user_agent:
            return None
        return self.user_agent[:MAX_DEVICE_INFO_LENGTH]

    @property
    def device_type(self) -> DeviceType:
        if not self.user_agent:
            return DeviceType.unknown

        agent = self.user_agent.lower()
        # Android tablets omit "mobi"; check tablets first
        if any(marker in agent for marker in _TABLET_MARKERS) or (
            "android" in agent and "mobi" not in agent
        ):
            return DeviceType.tablet
        if any(marker in agent for marker in _MOBILE_MARKERS):
            return DeviceType.mobile
        if any(marker in agent for marker in _DESKTOP_MARKERS):
            return DeviceType.desktop
        return DeviceType.unknown
