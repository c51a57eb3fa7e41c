"""Unit tests for the exception hierarchy."""

from vast_xml.exceptions import (
    VastConfigError,
    VastConfigValidationError,
    VastElementError,
    VastEncodeError,
    VastException,
    VastParseError,
    VastXMLError,
)


class TestVastException:
    def test_str_without_context(self):
        assert str(VastException("boom")) == "boom"

    def test_str_with_context(self):
        error = VastException("boom", context={"a": 1, "b": "x"})

        assert str(error) == "boom (a=1; b=x)"

    def test_hierarchy(self):
        assert issubclass(VastXMLError, VastParseError)
        assert issubclass(VastElementError, VastParseError)
        assert issubclass(VastParseError, VastException)
        assert issubclass(VastEncodeError, VastException)
        assert issubclass(VastConfigValidationError, VastConfigError)


class TestVastXMLError:
    def test_preview_is_truncated_in_context(self):
        error = VastXMLError("bad", xml_preview="x" * 500)

        assert len(error.context["xml_preview"]) == 200
        assert len(error.xml_preview) == 500

    def test_keeps_parser_error(self):
        cause = ValueError("inner")

        assert VastXMLError("bad", parser_error=cause).parser_error is cause


class TestContextFields:
    def test_element_error(self):
        error = VastElementError("bad", element_tag="Creative", operation="parse")

        assert error.context == {"element_tag": "Creative", "operation": "parse"}

    def test_encode_error(self):
        error = VastEncodeError("bad", tag="Extension", context={"mode": "opaque"})

        assert str(error) == "bad (mode=opaque; tag=Extension)"

    def test_config_validation_error_truncates_value(self):
        error = VastConfigValidationError("bad", config_key="encoding", config_value="e" * 300)

        assert len(error.context["config_value"]) == 100
