# Factories package
"""Per-localization content-access factories and their registry."""

from cms_delivery.factories.cache import CacheAgent
from cms_delivery.factories.common import (
    FactoryCommonServices,
    ProvidersCommonServices,
    PublicationResolver,
)
from cms_delivery.factories.factories import (
    BinaryFactory,
    ComponentFactory,
    ComponentPresentationFactory,
    PageFactory,
)
from cms_delivery.factories.providers import (
    BinaryProvider,
    ComponentPresentationProvider,
    PageProvider,
)
from cms_delivery.factories.registry import FACTORY_TYPES, FactoryRegistry

__all__ = [
    "BinaryFactory",
    "BinaryProvider",
    "CacheAgent",
    "ComponentFactory",
    "ComponentPresentationFactory",
    "ComponentPresentationProvider",
    "FACTORY_TYPES",
    "FactoryCommonServices",
    "FactoryRegistry",
    "PageFactory",
    "PageProvider",
    "ProvidersCommonServices",
    "PublicationResolver",
]
