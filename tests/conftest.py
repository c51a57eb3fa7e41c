"""Pytest configuration and shared fixtures for VAST XML codec tests."""

import sys
from pathlib import Path

import pytest
import structlog


sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from vast_xml.config import VastCodecConfig
from vast_xml.parser import ExtensionParser
from vast_xml.types import Extension, Tracking


# ==================== Pytest Configuration ====================


@pytest.fixture(autouse=True)
def reset_structlog_context():
    """Keep bound contextvars from leaking between tests."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


# ==================== Configuration Fixtures ====================


@pytest.fixture
def codec_config() -> VastCodecConfig:
    """Create default codec configuration."""
    return VastCodecConfig()


@pytest.fixture
def extension_parser(codec_config) -> ExtensionParser:
    """Create parser with default configuration."""
    return ExtensionParser(config=codec_config)


# ==================== Extension XML Fixtures ====================


@pytest.fixture
def custom_tracking_xml() -> str:
    """Extension carrying two custom tracking beacons."""
    return (
        '<Extension type="testCustomTracking"><CustomTracking>'
        '<Tracking event="event.1"><![CDATA[http://event.1]]></Tracking>'
        '<Tracking event="event.2"><![CDATA[http://event.2]]></Tracking>'
        "</CustomTracking></Extension>"
    )


@pytest.fixture
def custom_tracking_extension() -> Extension:
    """Record matching ``custom_tracking_xml``."""
    return Extension(
        type="testCustomTracking",
        custom_tracking=[
            Tracking(event="event.1", uri="http://event.1"),
            Tracking(event="event.2", uri="http://event.2"),
        ],
    )


@pytest.fixture
def opaque_xml() -> str:
    """Extension carrying a platform-specific payload."""
    return '<Extension type="testCustomTracking"><SkippableAdType>Generic</SkippableAdType></Extension>'


@pytest.fixture
def ad_verification_xml() -> str:
    """Extension backporting an Open Measurement verification."""
    return """<Extension type="AdVerifications">
    <AdVerifications>
        <Verification vendor="doubleclickbygoogle.com-omid-video">
            <JavaScriptResource apiFramework="omid" browserOptional="true"><![CDATA[https://example.com/verify.js]]></JavaScriptResource>
            <VerificationParameters><![CDATA[example=1&param=2]]></VerificationParameters>
            <TrackingEvents>
                <Tracking event="verificationNotExecuted"><![CDATA[https://pagead2.googlesyndication.com/pagead/interaction/?ai=Bt7src9CCZofvMqChiM0Pi8qQkAPFnbOVRgAAABABII64hW84AVjUt8DBgwRglfrwgYwHsgETZ29vZ2xlYWRzLmdpdGh1Yi5pb7oBCjcyOHg5MF94bWzIAQXaATRodHRwczovL2dvb2dsZWFkcy5naXRodWIuaW8vZ29vZ2xlYWRzLWltYS1odG1sNS92c2kv&sigh=UTbooye19j8&label=active_view_verification_rejected&errorcode=%5BREASON%5D]]></Tracking>
            </TrackingEvents>
        </Verification>
    </AdVerifications>
</Extension>"""


@pytest.fixture
def vast_document_xml() -> str:
    """VAST 4.0 document with one Extension of each shape."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<VAST xmlns="http://www.iab.com/VAST" version="4.0">
  <Ad id="test-ad-001">
    <InLine>
      <AdSystem>Test Ad System</AdSystem>
      <AdTitle>Test Ad Title</AdTitle>
      <Impression><![CDATA[https://tracking.example.com/impression]]></Impression>
      <Creatives>
        <Creative id="creative-001" adId="ad-001">
          <Linear>
            <Duration>00:00:15</Duration>
            <TrackingEvents>
              <Tracking event="start"><![CDATA[https://tracking.example.com/start]]></Tracking>
            </TrackingEvents>
          </Linear>
        </Creative>
      </Creatives>
      <Extensions>
        <Extension type="waterfall"><WaterfallIndex>0</WaterfallIndex></Extension>
        <Extension type="tracker"><CustomTracking><Tracking event="skip"><![CDATA[https://tracking.example.com/skip]]></Tracking></CustomTracking></Extension>
        <Extension type="AdVerifications"><AdVerifications><Verification vendor="ias.com-omid"><JavaScriptResource apiFramework="omid"><![CDATA[https://ias.example.com/omid.js]]></JavaScriptResource></Verification></AdVerifications></Extension>
      </Extensions>
    </InLine>
  </Ad>
</VAST>"""


@pytest.fixture
def vast_document_path(tmp_path, vast_document_xml) -> Path:
    """The VAST document written to disk for streaming tests."""
    path = tmp_path / "vast.xml"
    path.write_bytes(vast_document_xml.encode("utf-8"))
    return path
