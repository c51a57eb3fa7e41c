"""Encode and decode the VAST ``<Extension>`` element.

VAST overloads ``<Extension>``: it is either a typed container
(``<CustomTracking>`` or ``<AdVerifications>``) or a passthrough for
platform-specific XML. Exactly one shape is written per element:

    <Extension type="T"><CustomTracking><Tracking .../>...</CustomTracking></Extension>
    <Extension type="T"><AdVerifications><Verification .../>...</AdVerifications></Extension>
    <Extension type="T">any-well-formed-xml-or-text</Extension>

The opaque payload is written verbatim, so encoding returns text rather than
an lxml element.
"""

from typing import Iterable, Optional

from lxml import etree

from .codec import (
    decode_tracking,
    decode_verification,
    encode_tracking,
    encode_verification,
    iter_children,
)
from .config import VastCodecConfig
from .events import VastEvents
from .exceptions import VastEncodeError
from .log_config import get_context_logger
from .types import Extension, ExtensionMode

logger = get_context_logger("vast_extension")

# Stands in for the inner XML while lxml renders the start and end tags
_PAYLOAD_MARKER = "__vast_xml_inner_payload__"


def _wrap(tag: str, attrib: dict[str, str], payload: str) -> str:
    element = etree.Element(tag, attrib)
    element.text = _PAYLOAD_MARKER
    start, end = etree.tostring(element, encoding="unicode").rsplit(_PAYLOAD_MARKER, 1)
    return start + payload + end


def _type_attrib(extension: Extension) -> dict[str, str]:
    return {"type": extension.type} if extension.type else {}


def _build_structured(
    extension: Extension, tag: str, mode: ExtensionMode, config: VastCodecConfig
) -> etree._Element:
    element = etree.Element(tag, _type_attrib(extension))
    if mode is ExtensionMode.CUSTOM_TRACKING:
        container = etree.SubElement(element, "CustomTracking")
        for tracking in extension.custom_tracking:
            encode_tracking(tracking, container, config)
    else:
        container = etree.SubElement(element, "AdVerifications")
        for verification in extension.ad_verifications or []:
            encode_verification(verification, container, config)
    return element


def encode_extension(
    extension: Extension,
    tag: str = "Extension",
    config: Optional[VastCodecConfig] = None,
) -> str:
    """Serialize ``extension`` as an element named ``tag``.

    The shape is chosen from ``extension.mode``. In the structured shapes
    ``data`` is never written; in the opaque shape ``data`` is written
    without escaping or re-parsing.

    Args:
        extension: Record to serialize
        tag: Element name, decided by the enclosing document
        config: Codec configuration (defaults apply when omitted)

    Returns:
        Serialized element

    Raises:
        VastEncodeError: If lxml rejects the tag, an attribute or a text value
    """
    config = config if config is not None else VastCodecConfig()
    mode = extension.mode

    try:
        if mode is ExtensionMode.OPAQUE:
            output = _wrap(tag, _type_attrib(extension), extension.data)
        else:
            element = _build_structured(extension, tag, mode, config)
            output = etree.tostring(element, encoding="unicode")
    except ValueError as e:
        raise VastEncodeError(
            f"Failed to encode extension: {str(e)}",
            tag=tag,
            context={"mode": mode.value},
        ) from e

    logger.debug(
        VastEvents.EXTENSION_ENCODED,
        tag=tag,
        type=extension.type,
        mode=mode.value,
        custom_tracking_count=len(extension.custom_tracking),
        ad_verifications_count=len(extension.ad_verifications or []),
        data_length=len(extension.data) if mode is ExtensionMode.OPAQUE else 0,
    )
    return output


def encode_extensions(
    extensions: Iterable[Extension],
    tag: str = "Extensions",
    config: Optional[VastCodecConfig] = None,
) -> str:
    """Serialize ``extensions`` inside an ``<Extensions>`` container."""
    payload = "".join(encode_extension(extension, config=config) for extension in extensions)
    try:
        return _wrap(tag, {}, payload)
    except ValueError as e:
        raise VastEncodeError(f"Failed to encode extensions: {str(e)}", tag=tag) from e


def inner_xml(element: etree._Element) -> str:
    """Return the XML between the start and end tags of ``element``.

    lxml does not keep the source bytes, so the content is re-serialized.
    Child order, whitespace and comments are preserved, as are CDATA sections
    when the tree was parsed with ``strip_cdata=False``. What libxml2 rewrites
    does not come back as written: quotes and character references in text are
    resolved (``&quot;`` to ``"``, ``&#65;`` to ``A``), CRLF line ends become LF,
    ``<A></A>`` becomes ``<A/>``, single-quoted attributes are double-quoted and
    ``>`` in text is escaped.
    """
    serialized = etree.tostring(element, encoding="unicode", with_tail=False)
    # lxml escapes ">" in attribute values, so the first one closes the start tag
    start_end = serialized.index(">") + 1
    if serialized[start_end - 2:start_end] == "/>":
        return ""
    return serialized[start_end:serialized.rindex("</")]


def decode_extension(element: etree._Element) -> Extension:
    """Build an Extension from a parsed ``<Extension>`` element.

    ``type``, ``custom_tracking`` and ``ad_verifications`` are always read.
    The inner XML becomes ``data`` only when neither structured sequence has
    entries; otherwise it would repeat the structured children on re-encode.
    """
    custom_tracking = [
        decode_tracking(tracking)
        for container in iter_children(element, "CustomTracking")
        for tracking in iter_children(container, "Tracking")
    ]

    containers = list(iter_children(element, "AdVerifications"))
    ad_verifications = None
    if containers:
        ad_verifications = [
            decode_verification(verification)
            for container in containers
            for verification in iter_children(container, "Verification")
        ]

    extension = Extension(
        type=element.get("type", ""),
        custom_tracking=custom_tracking,
        ad_verifications=ad_verifications,
    )
    if not custom_tracking and not ad_verifications:
        extension.data = inner_xml(element)

    logger.debug(
        VastEvents.EXTENSION_DECODED,
        type=extension.type,
        mode=extension.mode.value,
        custom_tracking_count=len(custom_tracking),
        ad_verifications_count=len(ad_verifications or []),
        data_length=len(extension.data),
    )
    return extension


def decode_extensions(element: etree._Element) -> list[Extension]:
    """Decode every ``<Extension>`` child of an ``<Extensions>`` container."""
    return [decode_extension(child) for child in iter_children(element, "Extension")]


__all__ = [
    "encode_extension",
    "encode_extensions",
    "decode_extension",
    "decode_extensions",
    "inner_xml",
]
