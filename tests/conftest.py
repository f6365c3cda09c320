"""
Global pytest fixtures and configuration for test suite.

This module provides reusable fixtures for:
- HTTP clients
- Ambient contexts and output formats
- Sample XML payloads
"""

import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from formdata_formatter.api.app import app
from formdata_formatter.config import Settings
from formdata_formatter.models.context import OutputFormat, ResolutionContext
from formdata_formatter.models.element import DataSource
from .fixtures.documents import SAMPLE_DOCUMENTS


@pytest_asyncio.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """
    Create async HTTP client for testing FastAPI endpoints.

    Yields:
        AsyncClient instance
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def mock_settings() -> Settings:
    """Settings with test-friendly defaults."""
    return Settings(
        log_level="INFO",
        log_json=False,
        soap_version=None,
        character_set_encoding=None,
        decode_multipart_data=False,
        max_nesting_depth=64,
    )


@pytest.fixture
def context() -> ResolutionContext:
    """Context with no ambient properties set."""
    return ResolutionContext()


@pytest.fixture
def output_format() -> OutputFormat:
    """Output format with a fixed boundary for byte-exact assertions."""
    return OutputFormat(mime_boundary="AaB03x")


@pytest.fixture
def photo_source() -> DataSource:
    """Disk-backed attachment for binary leaf tests."""
    return DataSource(
        name="harbour.png",
        content_type="image/png",
        data=b"\x89PNG\r\n\x1a\n",
        on_disk=True,
    )


@pytest.fixture
def weather_xml() -> bytes:
    return SAMPLE_DOCUMENTS["weather_request"]


@pytest.fixture
def file_upload_xml() -> bytes:
    return SAMPLE_DOCUMENTS["file_upload"]


@pytest.fixture(autouse=True)
def reset_env_vars():
    """
    Reset environment variables before each test.

    This prevents test pollution from env var changes.
    """
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


def pytest_configure(config):
    """
    Configure pytest with custom markers and settings.
    """
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (API, end-to-end)"
    )
