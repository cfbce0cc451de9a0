# cms_delivery/services/binary_retriever.py
"""
Binary retrieval.

Resolves a binary reference (numeric binary id or URL path) to its metadata
on the content service, picks the first variant and downloads its bytes.

Callers see one of three outcomes:
- a BinaryData / datetime result
- ItemNotFoundError (no metadata, no usable variant, or a transport failure)
- asyncio.CancelledError when an async call is cancelled
"""

import logging
from datetime import datetime
from typing import Optional

from cms_delivery.errors import BinaryDateParseError, ItemNotFoundError
from cms_delivery.models.binary import BinaryComponent, BinaryData, BinaryVariant
from cms_delivery.models.localization import Localization
from cms_delivery.services.content_client import (
    BinaryRef,
    ContentClient,
    ContentClientFactory,
    validate_binary_ref,
)

logger = logging.getLogger("cms_delivery.services.binary_retriever")

DATE_TIME_FORMAT = "%m/%d/%Y %H:%M:%S"

# Returned when the content service has no metadata for a binary
MIN_PUBLISH_DATE = datetime.min


def parse_publish_date(binary_component: Optional[BinaryComponent]) -> datetime:
    """
    Parse the initial publish date of a binary component.

    Returns:
        The publish date, or MIN_PUBLISH_DATE when there is no component

    Raises:
        BinaryDateParseError: If the date does not match DATE_TIME_FORMAT
    """
    if binary_component is None:
        return MIN_PUBLISH_DATE
    value = binary_component.initial_publish_date
    try:
        return datetime.strptime(value, DATE_TIME_FORMAT)
    except (TypeError, ValueError) as e:
        raise BinaryDateParseError(value, DATE_TIME_FORMAT) from e


def select_variant(binary_component: BinaryComponent) -> Optional[BinaryVariant]:
    """
    Pick the variant to download: the first one, if it has a download URL.

    Logs and returns None when there is nothing downloadable.
    """
    if binary_component.variants is None:
        logger.error(
            "Unable to get binary data for CmUri (Variants null): %s",
            binary_component.cm_uri,
        )
        return None
    if len(binary_component.variants) == 0:
        logger.error(
            "Empty variants returned by content service for binary component: %s",
            binary_component.cm_uri,
        )
        return None

    variant = binary_component.variants[0]
    if not variant.download_url:
        logger.error(
            "Binary variant download Url is missing for binary component: %s",
            binary_component.cm_uri,
        )
        return None
    return variant


class BinaryRetriever:
    """Fetches binary publish dates and content for a localization."""

    def __init__(self, client_factory: Optional[ContentClientFactory] = None):
        self._client_factory = client_factory or ContentClientFactory()

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def _fetch_metadata(
        self, client: ContentClient, localization: Localization, ref: BinaryRef
    ) -> Optional[BinaryComponent]:
        try:
            return client.get_binary_component(
                localization.namespace, localization.publication_id, ref
            )
        except Exception as e:
            logger.error(
                "Unable to get binary metadata for '%s' in Localization '%s'",
                ref, localization.id, exc_info=True,
            )
            raise ItemNotFoundError(ref, localization.id) from e

    async def _fetch_metadata_async(
        self, client: ContentClient, localization: Localization, ref: BinaryRef
    ) -> Optional[BinaryComponent]:
        try:
            return await client.get_binary_component_async(
                localization.namespace, localization.publication_id, ref
            )
        except Exception as e:
            logger.error(
                "Unable to get binary metadata for '%s' in Localization '%s'",
                ref, localization.id, exc_info=True,
            )
            raise ItemNotFoundError(ref, localization.id) from e

    # ------------------------------------------------------------------
    # Publish date
    # ------------------------------------------------------------------

    def get_last_published_date(self, localization: Localization, ref: BinaryRef) -> datetime:
        """
        Get the publish date of a binary.

        Args:
            localization: Localization the binary belongs to
            ref: Binary id or URL path

        Returns:
            The publish date, or MIN_PUBLISH_DATE if the binary is unknown

        Raises:
            BinaryDateParseError: If the service returned a malformed date
            ItemNotFoundError: If the metadata lookup failed
        """
        validate_binary_ref(ref)
        client = self._client_factory.create_client()
        return parse_publish_date(self._fetch_metadata(client, localization, ref))

    async def get_last_published_date_async(
        self, localization: Localization, ref: BinaryRef
    ) -> datetime:
        """Async variant of :meth:`get_last_published_date`."""
        validate_binary_ref(ref)
        client = self._client_factory.create_client()
        return parse_publish_date(await self._fetch_metadata_async(client, localization, ref))

    # ------------------------------------------------------------------
    # Binary content
    # ------------------------------------------------------------------

    def _get_binary_data(
        self, client: ContentClient, binary_component: Optional[BinaryComponent]
    ) -> Optional[BinaryData]:
        if binary_component is None:
            return None
        try:
            variant = select_variant(binary_component)
            if variant is None:
                return None
            logger.debug("Attempting to get binary at : %s", variant.download_url)
            content = client.download_bytes(variant.download_url)
            return BinaryData(content, variant.path)
        except Exception:
            logger.exception("Unable to get binary data for CmUri: %s", binary_component.cm_uri)
            return None

    async def _get_binary_data_async(
        self, client: ContentClient, binary_component: Optional[BinaryComponent]
    ) -> Optional[BinaryData]:
        if binary_component is None:
            return None
        try:
            variant = select_variant(binary_component)
            if variant is None:
                return None
            logger.debug("Attempting to get binary at : %s", variant.download_url)
            content = await client.download_bytes_async(variant.download_url)
            return BinaryData(content, variant.path)
        except Exception:
            logger.exception("Unable to get binary data for CmUri: %s", binary_component.cm_uri)
            return None

    def get_binary(self, localization: Localization, ref: BinaryRef) -> BinaryData:
        """
        Download a binary.

        Args:
            localization: Localization the binary belongs to
            ref: Binary id or URL path

        Returns:
            BinaryData with the bytes of the first variant and its path

        Raises:
            ItemNotFoundError: If the binary cannot be resolved or downloaded
        """
        validate_binary_ref(ref)
        client = self._client_factory.create_client()
        binary_component = self._fetch_metadata(client, localization, ref)
        data = self._get_binary_data(client, binary_component)
        if data is None:
            raise ItemNotFoundError(ref, localization.id)
        return data

    async def get_binary_async(self, localization: Localization, ref: BinaryRef) -> BinaryData:
        """
        Async variant of :meth:`get_binary`.

        Cancelling the awaiting task aborts the metadata request or the
        download and propagates asyncio.CancelledError unchanged.
        """
        validate_binary_ref(ref)
        client = self._client_factory.create_client()
        binary_component = await self._fetch_metadata_async(client, localization, ref)
        data = await self._get_binary_data_async(client, binary_component)
        if data is None:
            raise ItemNotFoundError(ref, localization.id)
        return data
