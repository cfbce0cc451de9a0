# cms_delivery/factories/common.py
"""Services shared by the providers and factories of one localization."""

import logging
from dataclasses import dataclass

from cms_delivery.config import Settings
from cms_delivery.factories.cache import CacheAgent
from cms_delivery.models.localization import Localization


class PublicationResolver:
    """Resolves the publication a localization's content lives in."""

    def __init__(self, localization: Localization):
        self.localization = localization

    def resolve_publication_id(self) -> str:
        return self.localization.publication_id


@dataclass
class ProvidersCommonServices:
    publication_resolver: PublicationResolver
    logger: logging.Logger
    configuration: Settings


@dataclass
class FactoryCommonServices:
    publication_resolver: PublicationResolver
    logger: logging.Logger
    configuration: Settings
    cache_agent: CacheAgent
