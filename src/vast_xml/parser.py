"""Entry points for reading and writing Extension XML."""

from typing import IO, TYPE_CHECKING, Any, Iterator, Optional, Union

from lxml import etree

from .codec import local_name
from .config import VastCodecConfig
from .events import VastEvents
from .exceptions import VastElementError, VastXMLError
from .extension import decode_extension, encode_extension
from .log_config import DocumentContext, configure_logging, get_context_logger
from .types import Extension

if TYPE_CHECKING:
    from .settings import Settings


def _preview(xml: Union[str, bytes]) -> str:
    if isinstance(xml, bytes):
        return xml[:200].decode("utf-8", errors="replace")
    return xml[:200]


def _is_nested(element: etree._Element) -> bool:
    return next(element.iterancestors("{*}Extension"), None) is not None


class ExtensionParser:
    """Reads ``<Extension>`` elements from snippets, documents and streams."""

    def __init__(self, config: Optional[VastCodecConfig] = None):
        self.logger = get_context_logger("vast_xml_parser")

        if config is None:
            config = VastCodecConfig()
        self.config = config.validate()

    def _parse_root(self, xml: Union[str, bytes]) -> etree._Element:
        """Parse ``xml`` into an lxml tree.

        Raises:
            VastXMLError: If lxml cannot parse the input
        """
        self.logger.debug(VastEvents.PARSE_STARTED, xml_length=len(xml))
        try:
            if isinstance(xml, str):
                parser = self.config.build_parser(encoding=self.config.encoding)
                root = etree.fromstring(xml.encode(self.config.encoding), parser=parser)  # ruff: noqa: S320
            else:
                root = etree.fromstring(xml, parser=self.config.build_parser())  # ruff: noqa: S320
        except etree.XMLSyntaxError as e:
            self.logger.error(VastEvents.PARSE_FAILED, error=str(e), xml_preview=_preview(xml))
            raise VastXMLError(
                f"Failed to parse VAST XML: {str(e)}",
                xml_preview=_preview(xml),
                parser_error=e,
            ) from e
        except (UnicodeError, ValueError) as e:
            self.logger.error(VastEvents.PARSE_FAILED, error=str(e), xml_preview=_preview(xml))
            raise VastXMLError(
                f"Failed to decode or parse VAST XML: {str(e)}",
                xml_preview=_preview(xml),
                parser_error=e,
            ) from e

        # recover=True can hand back an empty document
        if root is None:
            self.logger.error(VastEvents.PARSE_FAILED, error="no root element")
            raise VastXMLError("VAST XML has no root element", xml_preview=_preview(xml))
        return root

    def parse(self, xml: Union[str, bytes], tag: Optional[str] = "Extension") -> Extension:
        """Parse a standalone ``<Extension>`` snippet.

        Args:
            xml: Serialized element
            tag: Expected local name of the root, or None to accept any

        Returns:
            Decoded Extension

        Raises:
            VastXMLError: If XML parsing fails
            VastElementError: If the root element has another name
        """
        root = self._parse_root(xml)
        if tag is not None and local_name(root) != tag:
            raise VastElementError(
                f"Expected <{tag}> element, got <{local_name(root)}>",
                element_tag=local_name(root),
                operation="parse",
            )
        return decode_extension(root)

    def parse_document(self, xml: Union[str, bytes]) -> list[Extension]:
        """Decode every Extension of a full VAST document, in document order.

        Args:
            xml: Raw VAST XML

        Returns:
            Decoded extensions (empty when the document has none)

        Raises:
            VastXMLError: If XML parsing fails
        """
        root = self._parse_root(xml)

        with DocumentContext(vast_version=root.get("version")):
            # Extensions carried inside another Extension's payload belong to it
            elements = [
                element
                for element in root.findall(self.config.xpath_extensions)
                if not _is_nested(element)
            ]
            self.logger.debug("Found extensions", count=len(elements))

            extensions = [decode_extension(element) for element in elements]

            self.logger.info(
                VastEvents.PARSE_COMPLETED,
                extensions_count=len(extensions),
                types=[extension.type for extension in extensions],
            )
        return extensions

    def iterparse(self, source: Union[str, IO[bytes]]) -> Iterator[Extension]:
        """Stream Extensions out of a VAST document without building the whole tree.

        Only ``<Extension>`` elements that sit directly in an ``<Extensions>``
        container and are not inside another Extension are yielded. Each is
        cleared once decoded, along with the siblings already handled.

        Args:
            source: File path or binary file object

        Yields:
            Decoded extensions in document order

        Raises:
            VastXMLError: If the stream is not well-formed
        """
        context = etree.iterparse(
            source,
            events=("end",),
            tag="{*}Extension",
            recover=self.config.recover_on_error,
            strip_cdata=self.config.strip_cdata,
            resolve_entities=self.config.resolve_entities,
            huge_tree=self.config.huge_tree,
        )
        count = 0
        try:
            for _, element in context:
                parent = element.getparent()
                if parent is None or local_name(parent) != "Extensions" or _is_nested(element):
                    self.logger.debug(VastEvents.EXTENSION_SKIPPED, line=element.sourceline)
                    continue
                yield decode_extension(element)
                count += 1
                element.clear(keep_tail=True)
                while element.getprevious() is not None:
                    del parent[0]
        except etree.XMLSyntaxError as e:
            self.logger.error(VastEvents.PARSE_FAILED, error=str(e), decoded_count=count)
            raise VastXMLError(
                f"Failed to parse VAST XML stream: {str(e)}",
                parser_error=e,
                context={"decoded_count": count},
            ) from e

        self.logger.info(VastEvents.PARSE_COMPLETED, extensions_count=count)

    def dumps(self, extension: Extension, tag: str = "Extension") -> bytes:
        """Encode ``extension`` to bytes in the configured encoding."""
        text = encode_extension(extension, tag=tag, config=self.config)
        if self.config.xml_declaration:
            text = f'<?xml version="1.0" encoding="{self.config.encoding.upper()}"?>\n{text}'
        return text.encode(self.config.encoding, errors="xmlcharrefreplace")

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "ExtensionParser":
        """Create parser from configuration dictionary.

        Args:
            config: Configuration dictionary

        Returns:
            ExtensionParser: Configured parser instance
        """
        return cls(config=VastCodecConfig(**config))

    @classmethod
    def from_settings(cls, settings: "Settings") -> "ExtensionParser":
        """Configure logging from ``settings`` and build a parser from its codec fields."""
        configure_logging(level=settings.log_level, json_output=settings.log_json)
        return cls(config=VastCodecConfig.from_settings(settings))


__all__ = ["ExtensionParser"]
