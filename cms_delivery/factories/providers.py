# cms_delivery/factories/providers.py
"""Providers: thin adapters between the factories and the content service."""

from datetime import datetime
from typing import Optional

from cms_delivery.factories.common import ProvidersCommonServices
from cms_delivery.models.binary import BinaryData
from cms_delivery.services.binary_retriever import BinaryRetriever
from cms_delivery.services.content_client import BinaryRef, ContentClientFactory


class BaseProvider:
    """Common plumbing for providers bound to one localization."""

    def __init__(
        self,
        services: ProvidersCommonServices,
        client_factory: ContentClientFactory,
    ):
        self.services = services
        self.client_factory = client_factory

    @property
    def localization(self):
        return self.services.publication_resolver.localization

    @property
    def publication_id(self) -> str:
        return self.services.publication_resolver.resolve_publication_id()


class PageProvider(BaseProvider):
    def get_content_by_url(self, url: str) -> Optional[str]:
        """Raw page content published at ``url``, or None."""
        self.services.logger.debug(
            "Fetching page '%s' for publication %s", url, self.publication_id
        )
        client = self.client_factory.create_client()
        return client.get_page_content(self.localization.namespace, self.publication_id, url)


class ComponentPresentationProvider(BaseProvider):
    def get_content(self, component_id: int, template_id: Optional[int] = None) -> Optional[str]:
        """Raw component presentation content, or None."""
        self.services.logger.debug(
            "Fetching component presentation %s/%s for publication %s",
            component_id, template_id, self.publication_id,
        )
        client = self.client_factory.create_client()
        return client.get_component_presentation(
            self.localization.namespace, self.publication_id, component_id, template_id
        )


class BinaryProvider(BaseProvider):
    """Binary access for one localization, backed by a BinaryRetriever."""

    def __init__(
        self,
        services: ProvidersCommonServices,
        client_factory: ContentClientFactory,
        retriever: Optional[BinaryRetriever] = None,
    ):
        super().__init__(services, client_factory)
        self.retriever = retriever or BinaryRetriever(client_factory)

    def get_binary(self, ref: BinaryRef) -> BinaryData:
        return self.retriever.get_binary(self.localization, ref)

    async def get_binary_async(self, ref: BinaryRef) -> BinaryData:
        return await self.retriever.get_binary_async(self.localization, ref)

    def get_last_published_date(self, ref: BinaryRef) -> datetime:
        return self.retriever.get_last_published_date(self.localization, ref)

    async def get_last_published_date_async(self, ref: BinaryRef) -> datetime:
        return await self.retriever.get_last_published_date_async(self.localization, ref)
