"""
VAST XML Package

Encoding and decoding of the VAST (Video Ad Serving Template) ``<Extension>``
element, which carries either custom tracking, Open Measurement ad
verifications, or a free-form platform payload.

This package provides:
- Extension and its child records (Tracking, Verification, ...)
- encode_extension / decode_extension: the Extension wire contract
- ExtensionParser: snippet, document and streaming entry points
- VastCodecConfig / Settings: configuration

Usage:
    from vast_xml import Extension, Tracking, ExtensionParser, encode_extension

    ext = Extension(type="vendor", custom_tracking=[Tracking("start", "https://t.example/s")])
    xml = encode_extension(ext)

    parser = ExtensionParser()
    assert parser.parse(xml) == ext
"""

from .config import VastCodecConfig
from .extension import (
    decode_extension,
    decode_extensions,
    encode_extension,
    encode_extensions,
    inner_xml,
)
from .parser import ExtensionParser
from .settings import Settings, get_settings
from .types import (
    ExecutableResource,
    Extension,
    ExtensionMode,
    JavaScriptResource,
    Tracking,
    Verification,
)

__version__ = "1.0.0"

__all__ = [
    # Records
    "Extension",
    "ExtensionMode",
    "Tracking",
    "JavaScriptResource",
    "ExecutableResource",
    "Verification",
    # Codec
    "encode_extension",
    "encode_extensions",
    "decode_extension",
    "decode_extensions",
    "inner_xml",
    "ExtensionParser",
    # Configuration
    "VastCodecConfig",
    "Settings",
    "get_settings",
    # Package metadata
    "__version__",
]


# Package-level convenience functions
def create_codec(config=None, **kwargs):
    """Create an ExtensionParser instance.

    Args:
        config: VastCodecConfig to use; built from ``kwargs`` when omitted
        **kwargs: VastCodecConfig fields

    Returns:
        ExtensionParser: Parser instance

    Example:
        codec = create_codec(recover_on_error=True)
    """
    if config is None:
        config = VastCodecConfig(**kwargs)
    return ExtensionParser(config=config)
