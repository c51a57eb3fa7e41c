"""
VAST XML Codec Configuration Module

Provides the configuration class shared by the Extension codec and the
document parser.
"""

import codecs
from dataclasses import dataclass
from typing import TYPE_CHECKING

from lxml import etree

from .exceptions import VastConfigValidationError

if TYPE_CHECKING:
    from .settings import Settings


@dataclass
class VastCodecConfig:
    """Configuration for reading and writing VAST Extension XML."""

    # XPath selector for Extension elements inside a full VAST document
    xpath_extensions: str = ".//{*}Extensions/{*}Extension"

    # Parsing options
    encoding: str = "utf-8"
    recover_on_error: bool = False
    strip_cdata: bool = False  # CDATA must survive for verbatim inner XML
    resolve_entities: bool = False
    huge_tree: bool = False

    # Writing options
    cdata_uris: bool = True
    xml_declaration: bool = False

    def validate(self) -> "VastCodecConfig":
        """Check option values that lxml would only reject mid-document.

        Returns:
            self, to allow chaining

        Raises:
            VastConfigValidationError: If the encoding is unknown
        """
        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise VastConfigValidationError(
                f"Unknown encoding: {self.encoding}",
                config_key="encoding",
                config_value=self.encoding,
            ) from e
        return self

    def build_parser(self, encoding: str | None = None) -> etree.XMLParser:
        """Create an lxml parser honouring these options.

        Args:
            encoding: Override the document's declared encoding
        """
        return etree.XMLParser(
            encoding=encoding,
            recover=self.recover_on_error,
            strip_cdata=self.strip_cdata,
            resolve_entities=self.resolve_entities,
            huge_tree=self.huge_tree,
            remove_blank_text=False,
        )

    @classmethod
    def from_settings(cls, settings: "Settings") -> "VastCodecConfig":
        """Create configuration from application settings.

        Args:
            settings: Loaded Settings instance

        Returns:
            VastCodecConfig: Validated configuration
        """
        return cls(
            xpath_extensions=settings.xpath_extensions,
            encoding=settings.encoding,
            recover_on_error=settings.recover_on_error,
            huge_tree=settings.huge_tree,
            cdata_uris=settings.cdata_uris,
            xml_declaration=settings.xml_declaration,
        ).validate()


__all__ = ["VastCodecConfig"]
