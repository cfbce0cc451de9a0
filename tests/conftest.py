# Test Configuration
"""Pytest fixtures for cms_delivery tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from cms_delivery.models.binary import BinaryComponent, BinaryVariant
from cms_delivery.models.localization import Localization
from cms_delivery.services.content_client import ContentClient, ContentClientFactory


@pytest.fixture
def localization():
    return Localization(id="1065", publication_id="5")


@pytest.fixture
def other_localization():
    return Localization(id="1080", publication_id="8")


def make_component(variants=None, publish_date="03/15/2024 10:20:30"):
    """BinaryComponent with the given variants (list of (download_url, path))."""
    return BinaryComponent(
        namespace_id=1,
        publication_id=5,
        item_id=742,
        initial_publish_date=publish_date,
        variants=None if variants is None else [
            BinaryVariant(download_url=url, path=path) for url, path in variants
        ],
    )


@pytest.fixture
def png_component():
    return make_component([("http://x/y.png", "/y.png")])


@pytest.fixture
def mock_client():
    """ContentClient double with sync and async methods."""
    client = MagicMock(spec=ContentClient)
    client.get_binary_component_async = AsyncMock()
    client.download_bytes_async = AsyncMock()
    return client


@pytest.fixture
def client_factory(mock_client):
    factory = MagicMock(spec=ContentClientFactory)
    factory.create_client.return_value = mock_client
    return factory


@pytest.fixture
def component_factory():
    return make_component
