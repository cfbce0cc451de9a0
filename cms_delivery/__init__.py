"""
Content delivery integration layer.

Provides per-localization content-access factories (pages, component
presentations, components, binaries) and binary retrieval from the
content delivery service.

Usage:
    from cms_delivery import BinaryRetriever, FactoryRegistry, Localization

    localization = Localization(id="1", publication_id="5")
    registry = FactoryRegistry()
    page = registry.get_page_factory(localization).find_page("/index.html")

    binary = BinaryRetriever().get_binary(localization, "/media/logo.png")
"""

from cms_delivery.config import Settings, settings
from cms_delivery.errors import (
    BinaryDateParseError,
    ContentDeliveryError,
    ContentServiceError,
    ItemNotFoundError,
)
from cms_delivery.factories import FactoryRegistry
from cms_delivery.logging_setup import configure_logging
from cms_delivery.models import (
    BinaryComponent,
    BinaryData,
    BinaryVariant,
    ContentNamespace,
    FactoryKind,
    Localization,
)
from cms_delivery.services import (
    MIN_PUBLISH_DATE,
    BinaryRetriever,
    ContentClient,
    ContentClientFactory,
    ServiceOverrides,
)

__all__ = [
    "BinaryComponent",
    "BinaryData",
    "BinaryDateParseError",
    "BinaryRetriever",
    "BinaryVariant",
    "ContentClient",
    "ContentClientFactory",
    "ContentDeliveryError",
    "ContentNamespace",
    "ContentServiceError",
    "FactoryKind",
    "FactoryRegistry",
    "ItemNotFoundError",
    "Localization",
    "MIN_PUBLISH_DATE",
    "ServiceOverrides",
    "Settings",
    "configure_logging",
    "settings",
]

__version__ = "1.0.0"
