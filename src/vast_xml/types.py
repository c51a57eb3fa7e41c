"""Record types for the VAST Extension element and its children."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class ExtensionMode(str, Enum):
    """Serialization shape of an ``<Extension>`` element."""

    CUSTOM_TRACKING = "custom_tracking"  # <CustomTracking> child
    AD_VERIFICATIONS = "ad_verifications"  # <AdVerifications> child
    OPAQUE = "opaque"  # free-form inner XML


@dataclass
class Tracking:
    """An event name and the beacon URI fired when it occurs."""

    event: str
    uri: str = ""
    offset: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        result = {"event": self.event, "uri": self.uri}
        if self.offset:
            result["offset"] = self.offset
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Tracking":
        return cls(
            event=data.get("event", ""),
            uri=data.get("uri", ""),
            offset=data.get("offset"),
        )


@dataclass
class JavaScriptResource:
    """Verification script loaded by the player."""

    uri: str
    api_framework: str = ""
    browser_optional: bool = False

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"uri": self.uri}
        if self.api_framework:
            result["api_framework"] = self.api_framework
        if self.browser_optional:
            result["browser_optional"] = True
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "JavaScriptResource":
        return cls(
            uri=data.get("uri", ""),
            api_framework=data.get("api_framework", ""),
            browser_optional=bool(data.get("browser_optional", False)),
        )


@dataclass
class ExecutableResource:
    """Non-JavaScript verification code (VAST 4.1)."""

    uri: str
    api_framework: str = ""
    type: str = ""

    def to_dict(self) -> dict[str, Any]:
        result = {"uri": self.uri}
        if self.api_framework:
            result["api_framework"] = self.api_framework
        if self.type:
            result["type"] = self.type
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExecutableResource":
        return cls(
            uri=data.get("uri", ""),
            api_framework=data.get("api_framework", ""),
            type=data.get("type", ""),
        )


@dataclass
class Verification:
    """An Open Measurement verification vendor and its resources."""

    vendor: str = ""
    javascript_resources: list[JavaScriptResource] = field(default_factory=list)
    executable_resources: list[ExecutableResource] = field(default_factory=list)
    tracking_events: list[Tracking] = field(default_factory=list)
    verification_parameters: str = ""

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.vendor:
            result["vendor"] = self.vendor
        if self.javascript_resources:
            result["javascript_resources"] = [r.to_dict() for r in self.javascript_resources]
        if self.executable_resources:
            result["executable_resources"] = [r.to_dict() for r in self.executable_resources]
        if self.tracking_events:
            result["tracking_events"] = [t.to_dict() for t in self.tracking_events]
        if self.verification_parameters:
            result["verification_parameters"] = self.verification_parameters
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Verification":
        return cls(
            vendor=data.get("vendor", ""),
            javascript_resources=[
                JavaScriptResource.from_dict(r) for r in data.get("javascript_resources", [])
            ],
            executable_resources=[
                ExecutableResource.from_dict(r) for r in data.get("executable_resources", [])
            ],
            tracking_events=[Tracking.from_dict(t) for t in data.get("tracking_events", [])],
            verification_parameters=data.get("verification_parameters", ""),
        )


@dataclass
class Extension:
    """Arbitrary XML provided by the platform or a tracker to extend VAST.

    The same element carries one of three shapes on the wire, picked from the
    populated fields every time it is encoded:

    - ``custom_tracking`` non-empty: a ``<CustomTracking>`` child.
    - otherwise ``ad_verifications`` non-empty: an ``<AdVerifications>`` child.
    - otherwise ``data`` verbatim as the inner XML.

    ``ad_verifications`` is ``None`` when the element had no
    ``<AdVerifications>`` child and ``[]`` when it had an empty one.

    Example:
        >>> ext = Extension(type="waterfall", data="<Index>1</Index>")
        >>> ext.mode
        <ExtensionMode.OPAQUE: 'opaque'>
    """

    type: str = ""
    custom_tracking: list[Tracking] = field(default_factory=list)
    ad_verifications: Optional[list[Verification]] = None
    data: str = ""

    @property
    def mode(self) -> ExtensionMode:
        """Shape this record encodes to, in precedence order."""
        if self.custom_tracking:
            return ExtensionMode.CUSTOM_TRACKING
        if self.ad_verifications:
            return ExtensionMode.AD_VERIFICATIONS
        return ExtensionMode.OPAQUE

    @property
    def is_empty(self) -> bool:
        """True while no payload field has been assigned."""
        return (
            not self.custom_tracking
            and self.ad_verifications is None
            and not self.data
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary.

        Empty fields are omitted, except ``ad_verifications`` which is kept
        whenever it is present so ``[]`` survives the round-trip.
        """
        result: dict[str, Any] = {}
        if self.type:
            result["type"] = self.type
        if self.custom_tracking:
            result["custom_tracking"] = [t.to_dict() for t in self.custom_tracking]
        if self.ad_verifications is not None:
            result["ad_verifications"] = [v.to_dict() for v in self.ad_verifications]
        if self.data:
            result["data"] = self.data
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Extension":
        ad_verifications = data.get("ad_verifications")
        return cls(
            type=data.get("type", ""),
            custom_tracking=[Tracking.from_dict(t) for t in data.get("custom_tracking", [])],
            ad_verifications=(
                [Verification.from_dict(v) for v in ad_verifications]
                if ad_verifications is not None
                else None
            ),
            data=data.get("data", ""),
        )


__all__ = [
    "ExtensionMode",
    "Tracking",
    "JavaScriptResource",
    "ExecutableResource",
    "Verification",
    "Extension",
]
