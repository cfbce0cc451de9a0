# cms_delivery/factories/factories.py
"""
Content-access factories.

One instance of each factory exists per localization; instances are created
and shared by the FactoryRegistry. Page and component presentation lookups go
through the registry's CacheAgent.
"""

from datetime import datetime
from typing import Optional

from cms_delivery.errors import ItemNotFoundError
from cms_delivery.factories.common import FactoryCommonServices
from cms_delivery.factories.providers import (
    BinaryProvider,
    ComponentPresentationProvider,
    PageProvider,
)
from cms_delivery.models.binary import BinaryData
from cms_delivery.services.content_client import BinaryRef


class ComponentPresentationFactory:
    def __init__(self, provider: ComponentPresentationProvider, services: FactoryCommonServices):
        self.provider = provider
        self.services = services

    def get_component_presentation(
        self, component_id: int, template_id: Optional[int] = None
    ) -> Optional[str]:
        """Return the raw component presentation content, or None when not published."""
        publication_id = self.services.publication_resolver.resolve_publication_id()
        cache_key = f"cp:{publication_id}:{component_id}:{'' if template_id is None else template_id}"
        cached = self.services.cache_agent.load(cache_key)
        if cached is not None:
            return cached

        content = self.provider.get_content(component_id, template_id)
        if content is None:
            self.services.logger.debug(
                "Component presentation %s not found in publication %s",
                component_id, publication_id,
            )
            return None
        self.services.cache_agent.store(cache_key, content)
        return content


class ComponentFactory:
    """Components are read through their (default template) component presentation."""

    def __init__(
        self,
        component_presentation_factory: ComponentPresentationFactory,
        services: FactoryCommonServices,
    ):
        self.component_presentation_factory = component_presentation_factory
        self.services = services

    def get_component(self, component_id: int, template_id: Optional[int] = None) -> Optional[str]:
        return self.component_presentation_factory.get_component_presentation(
            component_id, template_id
        )


class PageFactory:
    def __init__(
        self,
        provider: PageProvider,
        component_presentation_factory: ComponentPresentationFactory,
        services: FactoryCommonServices,
    ):
        self.provider = provider
        self.component_presentation_factory = component_presentation_factory
        self.services = services

    def find_page(self, url: str) -> Optional[str]:
        """Return the raw content of the page at ``url``, or None when not published."""
        publication_id = self.services.publication_resolver.resolve_publication_id()
        cache_key = f"page:{publication_id}:{url}"
        cached = self.services.cache_agent.load(cache_key)
        if cached is not None:
            return cached

        content = self.provider.get_content_by_url(url)
        if content is None:
            self.services.logger.debug("Page '%s' not found in publication %s", url, publication_id)
            return None
        self.services.cache_agent.store(cache_key, content)
        return content


class BinaryFactory:
    """Binary lookups that report a missing binary as None instead of raising."""

    def __init__(self, provider: BinaryProvider, services: FactoryCommonServices):
        self.provider = provider
        self.services = services

    def find_binary(self, url: str) -> Optional[BinaryData]:
        return self._get(url)

    def get_binary(self, binary_id: int) -> Optional[BinaryData]:
        return self._get(binary_id)

    async def find_binary_async(self, url: str) -> Optional[BinaryData]:
        return await self._get_async(url)

    async def get_binary_async(self, binary_id: int) -> Optional[BinaryData]:
        return await self._get_async(binary_id)

    def get_last_published_date(self, ref: BinaryRef) -> datetime:
        return self.provider.get_last_published_date(ref)

    async def get_last_published_date_async(self, ref: BinaryRef) -> datetime:
        return await self.provider.get_last_published_date_async(ref)

    def _get(self, ref: BinaryRef) -> Optional[BinaryData]:
        try:
            return self.provider.get_binary(ref)
        except ItemNotFoundError as e:
            self.services.logger.debug(str(e))
            return None

    async def _get_async(self, ref: BinaryRef) -> Optional[BinaryData]:
        try:
            return await self.provider.get_binary_async(ref)
        except ItemNotFoundError as e:
            self.services.logger.debug(str(e))
            return None
