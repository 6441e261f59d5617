"""
Pytest configuration and fixtures for feed-mapper tests

This module provides shared fixtures for unit and integration tests.
"""
import os

import pytest

from feed_mapper import FeedManager
from feed_mapper.codec import FeedWriterOptions
from feed_mapper.core.models import Record
from feed_mapper.export import CallbackExportSink


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external services"
    )
    config.addinivalue_line(
        "markers", "integration: Tests covering the full load, apply, serialize and export flow"
    )


# =======================
# FEED FIXTURES
# =======================

SAMPLE_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<rss xmlns:g="http://base.google.com/ns/1.0" version="2.0">
  <channel>
    <title>Acme Store</title>
    <item>
      <g:id required="true" description="Unique product identifier">A1</g:id>
      <title description="Product title">Shirt</title>
      <brand>Acme</brand>
      <model>X1</model>
      <price required="true" description="USD">9.99</price>
      <description>Soft cotton &amp; linen</description>
    </item>
    <item>
      <g:id>B2</g:id>
      <title>Hat</title>
      <brand>Acme</brand>
      <price>5.00</price>
      <description></description>
    </item>
  </channel>
</rss>
"""


@pytest.fixture(scope="session")
def sample_feed_xml() -> str:
    """
    Two-item feed with namespaced ids, schema attributes and an empty field

    Returns:
        XML document text
    """
    return SAMPLE_FEED


@pytest.fixture(scope="session")
def test_data_dir() -> str:
    """
    Get path to test data fixtures directory

    Returns:
        Path to tests/fixtures directory
    """
    return os.path.join(os.path.dirname(__file__), "fixtures")


@pytest.fixture
def shirt_record() -> Record:
    """Record with the values used throughout the mapping examples"""
    return Record(original={"sku": "A1", "title": "Shirt", "brand": "Acme", "model": "X1"})


# =======================
# MANAGER FIXTURES
# =======================

@pytest.fixture
def exported() -> list:
    """Collects artifacts delivered to the callback sink"""
    return []


@pytest.fixture
def feed_manager(exported) -> FeedManager:
    """
    Empty feed manager wired to a collecting export sink

    Args:
        exported: List receiving exported artifacts

    Returns:
        FeedManager in the EMPTY state
    """
    sink = CallbackExportSink(lambda artifact: exported.append(artifact) or artifact.file_name)
    return FeedManager(export_sink=sink, writer_options=FeedWriterOptions())


@pytest.fixture
def loaded_manager(feed_manager, sample_feed_xml) -> FeedManager:
    """Feed manager with the sample feed loaded"""
    feed_manager.load(sample_feed_xml)
    return feed_manager


# =======================
# CONFIGURATION FIXTURES
# =======================

@pytest.fixture
def clean_feed_env(monkeypatch):
    """Remove feed-mapper environment variables for the duration of a test"""
    for var in ("FEED_ROOT_TAG", "FEED_CHANNEL_TAG", "FEED_INDENT", "FEED_EXPORT_DIR"):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
