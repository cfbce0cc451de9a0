# Models package
"""Data models for the content delivery layer."""

from cms_delivery.models.binary import BinaryComponent, BinaryData, BinaryVariant
from cms_delivery.models.factory_kind import FactoryKind
from cms_delivery.models.localization import ContentNamespace, Localization

__all__ = [
    "BinaryComponent",
    "BinaryData",
    "BinaryVariant",
    "ContentNamespace",
    "FactoryKind",
    "Localization",
]
