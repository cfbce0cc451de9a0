# cms_delivery/factories/registry.py
"""
Factory registry: one content-access factory per (kind, localization).

The registry is created once at application start-up and shared by all
callers. Factories are built lazily on first request and then kept for the
lifetime of the registry.

Usage:
    registry = FactoryRegistry(overrides=ServiceOverrides())
    page_factory = registry.get_page_factory(localization)
    content = page_factory.find_page("/index.html")
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Mapping, Optional, Type

from cms_delivery.config import Settings, settings as default_settings
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
from cms_delivery.models.factory_kind import FactoryKind
from cms_delivery.models.localization import Localization
from cms_delivery.services.binary_retriever import BinaryRetriever
from cms_delivery.services.content_client import ContentClientFactory
from cms_delivery.services.overrides import OverrideProvider

logger = logging.getLogger("cms_delivery.factories.registry")

FactoryBuilder = Callable[[Localization], Any]

# Service type looked up in the override provider for each kind
FACTORY_TYPES: Dict[FactoryKind, type] = {
    FactoryKind.PAGE: PageFactory,
    FactoryKind.COMPONENT_PRESENTATION: ComponentPresentationFactory,
    FactoryKind.COMPONENT: ComponentFactory,
    FactoryKind.BINARY: BinaryFactory,
}


class FactoryRegistry:
    """
    Keyed cache of content-access factories.

    Each FactoryKind has its own dict and its own lock. The lock is held for
    the whole check-build-insert sequence, so concurrent requests for the
    same localization build exactly one factory. Lock order is always
    Page/Component before ComponentPresentation.

    Args:
        overrides: Optional provider of pre-built factories and services
        settings: Configuration handed to the default dependency chain
        client_factory: Creates the content clients used by providers
        builders: Replacement builders per kind, called with the localization
    """

    def __init__(
        self,
        overrides: Optional[OverrideProvider] = None,
        settings: Optional[Settings] = None,
        client_factory: Optional[ContentClientFactory] = None,
        builders: Optional[Mapping[FactoryKind, FactoryBuilder]] = None,
    ):
        self._overrides = overrides
        self._settings = settings or default_settings
        self._client_factory = client_factory or ContentClientFactory(self._settings, overrides)
        self._default_cache_agent = CacheAgent(ttl=self._settings.factory_cache_ttl)

        self._factories: Dict[FactoryKind, Dict[str, Any]] = {kind: {} for kind in FactoryKind}
        self._locks: Dict[FactoryKind, threading.Lock] = {
            kind: threading.Lock() for kind in FactoryKind
        }
        self._builders: Dict[FactoryKind, FactoryBuilder] = {
            FactoryKind.PAGE: self._build_page_factory,
            FactoryKind.COMPONENT_PRESENTATION: self._build_component_presentation_factory,
            FactoryKind.COMPONENT: self._build_component_factory,
            FactoryKind.BINARY: self._build_binary_factory,
        }
        if builders:
            self._builders.update(builders)

    # ------------------------------------------------------------------
    # Override lookup
    # ------------------------------------------------------------------

    def _try_resolve(self, service_type: Type) -> Optional[Any]:
        """Look up an override; lookup failures count as "no override"."""
        if self._overrides is None:
            return None
        try:
            return self._overrides.try_resolve(service_type)
        except Exception as e:
            logger.debug("Override lookup for %s failed: %s", service_type.__name__, e)
            return None

    def _resolve_or(self, service_type: Type, default: Any) -> Any:
        instance = self._try_resolve(service_type)
        return default if instance is None else instance

    def configuration(self) -> Settings:
        return self._resolve_or(Settings, self._settings)

    def logger(self) -> logging.Logger:
        return self._resolve_or(logging.Logger, logger)

    def cache_agent(self) -> CacheAgent:
        return self._resolve_or(CacheAgent, self._default_cache_agent)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_factory(self, kind: FactoryKind, localization: Localization) -> Any:
        """
        Return the factory of ``kind`` for ``localization``, building it on first use.

        Raises:
            Whatever the dependency chain raises; nothing is cached in that case
        """
        factories = self._factories[kind]
        with self._locks[kind]:
            factory = factories.get(localization.id)
            if factory is not None:
                return factory

            factory = self._try_resolve(FACTORY_TYPES[kind])
            if factory is None:
                logger.debug(
                    "Creating %s factory for Localization [%s]", kind.value, localization.id
                )
                factory = self._builders[kind](localization)
            else:
                logger.debug(
                    "Using override %s factory for Localization [%s]", kind.value, localization.id
                )

            factories[localization.id] = factory
            return factory

    def get_page_factory(self, localization: Localization) -> PageFactory:
        return self.get_factory(FactoryKind.PAGE, localization)

    def get_component_presentation_factory(
        self, localization: Localization
    ) -> ComponentPresentationFactory:
        return self.get_factory(FactoryKind.COMPONENT_PRESENTATION, localization)

    def get_component_factory(self, localization: Localization) -> ComponentFactory:
        return self.get_factory(FactoryKind.COMPONENT, localization)

    def get_binary_factory(self, localization: Localization) -> BinaryFactory:
        return self.get_factory(FactoryKind.BINARY, localization)

    def cached_ids(self, kind: FactoryKind) -> List[str]:
        """Localization ids that currently have a factory of ``kind``."""
        with self._locks[kind]:
            return list(self._factories[kind].keys())

    # ------------------------------------------------------------------
    # Default dependency chains
    # ------------------------------------------------------------------

    def _providers_services(self, resolver: PublicationResolver) -> ProvidersCommonServices:
        return ProvidersCommonServices(resolver, self.logger(), self.configuration())

    def _factory_services(self, resolver: PublicationResolver) -> FactoryCommonServices:
        return FactoryCommonServices(
            resolver, self.logger(), self.configuration(), self.cache_agent()
        )

    def _build_page_factory(self, localization: Localization) -> PageFactory:
        resolver = PublicationResolver(localization)
        return PageFactory(
            PageProvider(self._providers_services(resolver), self._client_factory),
            self.get_component_presentation_factory(localization),
            self._factory_services(resolver),
        )

    def _build_component_presentation_factory(
        self, localization: Localization
    ) -> ComponentPresentationFactory:
        resolver = PublicationResolver(localization)
        return ComponentPresentationFactory(
            ComponentPresentationProvider(self._providers_services(resolver), self._client_factory),
            self._factory_services(resolver),
        )

    def _build_component_factory(self, localization: Localization) -> ComponentFactory:
        resolver = PublicationResolver(localization)
        return ComponentFactory(
            self.get_component_presentation_factory(localization),
            self._factory_services(resolver),
        )

    def _build_binary_factory(self, localization: Localization) -> BinaryFactory:
        resolver = PublicationResolver(localization)
        provider = BinaryProvider(
            self._providers_services(resolver),
            self._client_factory,
            BinaryRetriever(self._client_factory),
        )
        return BinaryFactory(provider, self._factory_services(resolver))
