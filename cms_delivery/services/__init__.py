# Services package
"""Content service client, override lookup and binary retrieval."""

from cms_delivery.services.binary_retriever import (
    DATE_TIME_FORMAT,
    MIN_PUBLISH_DATE,
    BinaryRetriever,
)
from cms_delivery.services.content_client import ContentClient, ContentClientFactory
from cms_delivery.services.overrides import OverrideProvider, ServiceOverrides

__all__ = [
    "BinaryRetriever",
    "ContentClient",
    "ContentClientFactory",
    "DATE_TIME_FORMAT",
    "MIN_PUBLISH_DATE",
    "OverrideProvider",
    "ServiceOverrides",
]
