"""VAST XML codec exception hierarchy.

Provides specific exception types for the failures the Extension codec can
surface, so callers can catch all codec errors with a single except clause
while still getting structured context for logging.

Exception Hierarchy:
    VastException (base)
    ├── VastParseError
    │   ├── VastXMLError
    │   └── VastElementError
    ├── VastEncodeError
    └── VastConfigError
        └── VastConfigValidationError
"""

from typing import Optional


class VastException(Exception):
    """Base exception for all VAST XML codec errors."""

    def __init__(self, message: str, context: Optional[dict] = None):
        """Initialize VAST exception.

        Args:
            message: Error message
            context: Optional context dictionary for debugging
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return string representation with context."""
        if self.context:
            context_str = "; ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


# Parsing Errors

class VastParseError(VastException):
    """Base exception for errors raised while reading VAST XML."""

    pass


class VastXMLError(VastParseError):
    """Raised when the underlying XML reader rejects the input.

    Attributes:
        xml_preview: First 200 characters of XML that failed to parse
        parser_error: The underlying lxml parser error
    """

    def __init__(
        self,
        message: str,
        xml_preview: Optional[str] = None,
        parser_error: Optional[Exception] = None,
        context: Optional[dict] = None,
    ):
        if context is None:
            context = {}
        if xml_preview:
            context["xml_preview"] = xml_preview[:200]
        super().__init__(message, context)
        self.xml_preview = xml_preview
        self.parser_error = parser_error


class VastElementError(VastParseError):
    """Raised when an element is not the one the caller asked to decode.

    Attributes:
        element_tag: XML tag of problematic element
        operation: The operation that failed (e.g. 'parse')
    """

    def __init__(
        self,
        message: str,
        element_tag: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[dict] = None,
    ):
        if context is None:
            context = {}
        if element_tag:
            context["element_tag"] = element_tag
        if operation:
            context["operation"] = operation
        super().__init__(message, context)
        self.element_tag = element_tag
        self.operation = operation


# Encoding Errors

class VastEncodeError(VastException):
    """Raised when the XML writer refuses a value while building an element.

    Attributes:
        tag: Name of the element being written
    """

    def __init__(
        self,
        message: str,
        tag: Optional[str] = None,
        context: Optional[dict] = None,
    ):
        if context is None:
            context = {}
        if tag:
            context["tag"] = tag
        super().__init__(message, context)
        self.tag = tag


# Configuration Errors

class VastConfigError(VastException):
    """Base exception for codec configuration errors."""

    pass


class VastConfigValidationError(VastConfigError):
    """Raised when configuration validation fails.

    Attributes:
        config_key: Configuration key that failed validation
        config_value: The invalid configuration value
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[str] = None,
        context: Optional[dict] = None,
    ):
        if context is None:
            context = {}
        if config_key:
            context["config_key"] = config_key
        if config_value:
            context["config_value"] = str(config_value)[:100]
        super().__init__(message, context)
        self.config_key = config_key
        self.config_value = config_value


__all__ = [
    "VastException",
    "VastParseError",
    "VastXMLError",
    "VastElementError",
    "VastEncodeError",
    "VastConfigError",
    "VastConfigValidationError",
]
