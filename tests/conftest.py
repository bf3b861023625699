"""Pytest configuration and shared fixtures.

This module provides fixtures for testing the eansearch client, including
a client with a mocked HTTP session and sample API payloads.
"""

import os
from typing import Generator
from unittest.mock import MagicMock

import pytest

from src.eansearch.client import EANSearchClient
from src.eansearch.config import reset_config


ENV_VARS = (
    "EAN_SEARCH_API_TOKEN",
    "EAN_SEARCH_BASE_URL",
    "EAN_SEARCH_TIMEOUT",
    "EAN_SEARCH_LOG_LEVEL",
)


# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def clean_env() -> Generator[None, None, None]:
    """Isolate each test from the caller's environment and cached config."""
    saved = {name: os.environ.pop(name) for name in ENV_VARS if name in os.environ}
    reset_config()
    yield
    reset_config()
    for name in ENV_VARS:
        os.environ.pop(name, None)
    os.environ.update(saved)


# ============================================================================
# Client Fixtures
# ============================================================================


@pytest.fixture
def client() -> EANSearchClient:
    """Create a client with mocked session."""
    client = EANSearchClient("test-token")
    client._session = MagicMock()
    return client


# ============================================================================
# Sample Payloads
# ============================================================================


@pytest.fixture
def abba_payload() -> list[dict]:
    """Barcode lookup response for ABBA Gold."""
    return [
        {
            "ean": "5099750442227",
            "name": "Abba Gold",
            "categoryId": "45",
            "categoryName": "Music",
            "googleCategoryId": "855",
            "issuingCountry": "UK",
        }
    ]


@pytest.fixture
def search_payload() -> dict:
    """Product search response with two entries."""
    return {
        "page": "0",
        "moreproducts": False,
        "totalproducts": 2,
        "productlist": [
            {
                "ean": "5099750442227",
                "name": "Abba Gold",
                "categoryId": "45",
                "categoryName": "Music",
                "issuingCountry": "UK",
            },
            {
                "ean": "0731454023128",
                "name": "Bananaboat Song",
                "categoryId": "45",
                "categoryName": "Music",
                "issuingCountry": "US",
            },
        ],
    }
