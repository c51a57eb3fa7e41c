"""Unit tests for configuration classes."""

import pytest
from lxml import etree

from vast_xml.config import VastCodecConfig
from vast_xml.exceptions import VastConfigValidationError
from vast_xml.settings import Settings, get_settings


class TestVastCodecConfig:
    """Test VastCodecConfig dataclass."""

    def test_default_config(self):
        config = VastCodecConfig()

        assert config.xpath_extensions == ".//{*}Extensions/{*}Extension"
        assert config.encoding == "utf-8"
        assert config.recover_on_error is False
        assert config.strip_cdata is False
        assert config.resolve_entities is False
        assert config.cdata_uris is True
        assert config.xml_declaration is False

    def test_validate_returns_self(self):
        config = VastCodecConfig(encoding="iso-8859-1")

        assert config.validate() is config

    def test_validate_unknown_encoding(self):
        with pytest.raises(VastConfigValidationError) as exc_info:
            VastCodecConfig(encoding="klingon").validate()

        assert exc_info.value.config_key == "encoding"
        assert exc_info.value.config_value == "klingon"
        assert isinstance(exc_info.value.__cause__, LookupError)

    def test_build_parser_keeps_cdata(self):
        parser = VastCodecConfig().build_parser()

        root = etree.fromstring(b"<E><![CDATA[a<b]]></E>", parser=parser)

        assert etree.tostring(root) == b"<E><![CDATA[a<b]]></E>"

    def test_build_parser_strips_cdata_when_asked(self):
        parser = VastCodecConfig(strip_cdata=True).build_parser()

        root = etree.fromstring(b"<E><![CDATA[a<b]]></E>", parser=parser)

        assert etree.tostring(root) == b"<E>a&lt;b</E>"

    def test_from_settings(self):
        settings = Settings(encoding="latin-1", cdata_uris=False, recover_on_error=True)

        config = VastCodecConfig.from_settings(settings)

        assert config.encoding == "latin-1"
        assert config.cdata_uris is False
        assert config.recover_on_error is True
        assert config.strip_cdata is False

    def test_from_settings_validates(self):
        with pytest.raises(VastConfigValidationError):
            VastCodecConfig.from_settings(Settings(encoding="klingon"))


class TestSettings:
    """Test pydantic settings loading."""

    @pytest.fixture(autouse=True)
    def clear_settings_cache(self, monkeypatch):
        for name in ("VAST_XML_ENCODING", "VAST_XML_LOG_LEVEL", "VAST_XML_CDATA_URIS"):
            monkeypatch.delenv(name, raising=False)
        get_settings.cache_clear()
        yield
        get_settings.cache_clear()

    def test_defaults(self):
        settings = Settings()

        assert settings.log_level == "INFO"
        assert settings.log_json is False
        assert settings.encoding == "utf-8"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("VAST_XML_ENCODING", "utf-16")
        monkeypatch.setenv("VAST_XML_CDATA_URIS", "false")

        settings = Settings()

        assert settings.encoding == "utf-16"
        assert settings.cdata_uris is False

    def test_log_level_is_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_log_level_rejects_unknown(self):
        with pytest.raises(ValueError):
            Settings(log_level="chatty")

    def test_load_from_yaml(self, tmp_path):
        path = tmp_path / "vast_xml.yaml"
        path.write_text("encoding: latin-1\nxml_declaration: true\n")

        settings = Settings.load_from_yaml(path)

        assert settings.encoding == "latin-1"
        assert settings.xml_declaration is True

    def test_env_wins_over_yaml(self, tmp_path, monkeypatch):
        path = tmp_path / "vast_xml.yaml"
        path.write_text("encoding: latin-1\n")
        monkeypatch.setenv("VAST_XML_ENCODING", "utf-16")

        assert Settings.load_from_yaml(path).encoding == "utf-16"

    def test_load_from_missing_yaml(self, tmp_path):
        assert Settings.load_from_yaml(tmp_path / "missing.yaml") == Settings()

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_get_settings_from_file(self, tmp_path):
        path = tmp_path / "vast_xml.yaml"
        path.write_text("huge_tree: true\n")

        assert get_settings(path).huge_tree is True
