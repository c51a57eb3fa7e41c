"""Element codec for the records carried inside an Extension.

Each ``encode_*`` function builds an lxml element (optionally attached to a
parent) and each ``decode_*`` function reads one back. Elements are matched
by local name, so documents in the ``http://www.iab.com/VAST`` namespace and
un-namespaced snippets decode the same way.
"""

from typing import Iterator, Optional

from lxml import etree

from .config import VastCodecConfig
from .types import ExecutableResource, JavaScriptResource, Tracking, Verification

_TRUE_VALUES = ("true", "1")


def local_name(element: etree._Element) -> str:
    """Return the tag of ``element`` without its namespace.

    Comments and processing instructions have no name and yield ``""``.
    """
    if not isinstance(element.tag, str):
        return ""
    return etree.QName(element.tag).localname


def iter_children(element: etree._Element, name: str) -> Iterator[etree._Element]:
    """Iterate direct children of ``element`` whose local name is ``name``."""
    for child in element:
        if local_name(child) == name:
            yield child


def _first_child(element: etree._Element, name: str) -> Optional[etree._Element]:
    return next(iter_children(element, name), None)


def _text(element: Optional[etree._Element]) -> str:
    if element is None:
        return ""
    return element.text or ""


def _new_element(
    parent: Optional[etree._Element], tag: str, attrib: Optional[dict[str, str]] = None
) -> etree._Element:
    if parent is None:
        return etree.Element(tag, attrib or {})
    return etree.SubElement(parent, tag, attrib or {})


def _set_text(element: etree._Element, value: str, cdata: bool) -> None:
    if not value:
        return
    # A literal "]]>" cannot live inside one CDATA section
    if cdata and "]]>" not in value:
        element.text = etree.CDATA(value)
    else:
        element.text = value


def _config(config: Optional[VastCodecConfig]) -> VastCodecConfig:
    return config if config is not None else VastCodecConfig()


# Tracking

def encode_tracking(
    tracking: Tracking,
    parent: Optional[etree._Element] = None,
    config: Optional[VastCodecConfig] = None,
) -> etree._Element:
    """Build ``<Tracking event="...">URI</Tracking>``."""
    attrib = {"event": tracking.event}
    if tracking.offset:
        attrib["offset"] = tracking.offset
    element = _new_element(parent, "Tracking", attrib)
    _set_text(element, tracking.uri, _config(config).cdata_uris)
    return element


def decode_tracking(element: etree._Element) -> Tracking:
    return Tracking(
        event=element.get("event", ""),
        uri=_text(element),
        offset=element.get("offset"),
    )


# Verification resources

def encode_javascript_resource(
    resource: JavaScriptResource,
    parent: Optional[etree._Element] = None,
    config: Optional[VastCodecConfig] = None,
) -> etree._Element:
    attrib = {}
    if resource.api_framework:
        attrib["apiFramework"] = resource.api_framework
    if resource.browser_optional:
        attrib["browserOptional"] = "true"
    element = _new_element(parent, "JavaScriptResource", attrib)
    _set_text(element, resource.uri, _config(config).cdata_uris)
    return element


def decode_javascript_resource(element: etree._Element) -> JavaScriptResource:
    browser_optional = element.get("browserOptional", "")
    return JavaScriptResource(
        uri=_text(element),
        api_framework=element.get("apiFramework", ""),
        browser_optional=browser_optional.strip().lower() in _TRUE_VALUES,
    )


def encode_executable_resource(
    resource: ExecutableResource,
    parent: Optional[etree._Element] = None,
    config: Optional[VastCodecConfig] = None,
) -> etree._Element:
    attrib = {}
    if resource.api_framework:
        attrib["apiFramework"] = resource.api_framework
    if resource.type:
        attrib["type"] = resource.type
    element = _new_element(parent, "ExecutableResource", attrib)
    _set_text(element, resource.uri, _config(config).cdata_uris)
    return element


def decode_executable_resource(element: etree._Element) -> ExecutableResource:
    return ExecutableResource(
        uri=_text(element),
        api_framework=element.get("apiFramework", ""),
        type=element.get("type", ""),
    )


# Verification

def encode_verification(
    verification: Verification,
    parent: Optional[etree._Element] = None,
    config: Optional[VastCodecConfig] = None,
) -> etree._Element:
    """Build a ``<Verification>`` element with children in schema order."""
    config = _config(config)
    attrib = {"vendor": verification.vendor} if verification.vendor else {}
    element = _new_element(parent, "Verification", attrib)

    for resource in verification.javascript_resources:
        encode_javascript_resource(resource, element, config)
    for resource in verification.executable_resources:
        encode_executable_resource(resource, element, config)
    if verification.tracking_events:
        events = etree.SubElement(element, "TrackingEvents")
        for tracking in verification.tracking_events:
            encode_tracking(tracking, events, config)
    if verification.verification_parameters:
        params = etree.SubElement(element, "VerificationParameters")
        _set_text(params, verification.verification_parameters, config.cdata_uris)
    return element


def decode_verification(element: etree._Element) -> Verification:
    return Verification(
        vendor=element.get("vendor", ""),
        javascript_resources=[
            decode_javascript_resource(child)
            for child in iter_children(element, "JavaScriptResource")
        ],
        executable_resources=[
            decode_executable_resource(child)
            for child in iter_children(element, "ExecutableResource")
        ],
        tracking_events=[
            decode_tracking(tracking)
            for events in iter_children(element, "TrackingEvents")
            for tracking in iter_children(events, "Tracking")
        ],
        verification_parameters=_text(_first_child(element, "VerificationParameters")),
    )


__all__ = [
    "local_name",
    "iter_children",
    "encode_tracking",
    "decode_tracking",
    "encode_javascript_resource",
    "decode_javascript_resource",
    "encode_executable_resource",
    "decode_executable_resource",
    "encode_verification",
    "decode_verification",
]
