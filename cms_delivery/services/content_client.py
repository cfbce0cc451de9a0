# cms_delivery/services/content_client.py
"""HTTP client for the content delivery GraphQL service."""

import logging
from typing import Any, Dict, Optional, Union

import httpx

from cms_delivery.config import Settings, settings as default_settings
from cms_delivery.errors import ContentServiceError
from cms_delivery.models.binary import BinaryComponent
from cms_delivery.models.localization import ContentNamespace
from cms_delivery.services.overrides import OverrideProvider

logger = logging.getLogger("cms_delivery.services.content_client")

BinaryRef = Union[int, str]

_BINARY_FIELDS = """
    namespaceId
    publicationId
    itemId
    title
    initialPublishDate
    lastPublishDate
    variants {
      edges {
        node {
          binaryId
          variantId
          type
          path
          downloadUrl
        }
      }
    }
"""

BINARY_BY_ID_QUERY = """
query binaryComponentById($namespaceId: Int!, $publicationId: Int!, $binaryId: Int!) {
  binaryComponent(namespaceId: $namespaceId, publicationId: $publicationId, binaryId: $binaryId) {%s}
}
""" % _BINARY_FIELDS

BINARY_BY_URL_QUERY = """
query binaryComponentByUrl($namespaceId: Int!, $publicationId: Int!, $url: String!) {
  binaryComponent(namespaceId: $namespaceId, publicationId: $publicationId, url: $url) {%s}
}
""" % _BINARY_FIELDS

PAGE_CONTENT_QUERY = """
query page($namespaceId: Int!, $publicationId: Int!, $url: String!) {
  page(namespaceId: $namespaceId, publicationId: $publicationId, url: $url) {
    rawContent(renderContent: false) { data }
  }
}
"""

COMPONENT_PRESENTATION_QUERY = """
query componentPresentation($namespaceId: Int!, $publicationId: Int!, $componentId: Int!, $templateId: Int) {
  componentPresentation(namespaceId: $namespaceId, publicationId: $publicationId,
                        componentId: $componentId, templateId: $templateId) {
    rawContent(renderContent: false) { data }
  }
}
"""


def validate_binary_ref(ref: Any) -> None:
    """Reject anything that is neither a numeric binary id nor a URL path."""
    # bool is an int subclass but never a valid binary id
    if isinstance(ref, bool) or not isinstance(ref, (int, str)):
        raise TypeError(
            f"Binary reference must be an int id or a str URL path, got {type(ref).__name__}"
        )


def _binary_query(
    namespace: ContentNamespace, publication_id: Union[int, str], ref: BinaryRef
) -> Dict[str, Any]:
    """Build the GraphQL request body for a binary lookup by id or URL path."""
    validate_binary_ref(ref)
    variables: Dict[str, Any] = {
        "namespaceId": int(namespace),
        "publicationId": int(publication_id),
    }
    if isinstance(ref, int):
        variables["binaryId"] = ref
        return {"query": BINARY_BY_ID_QUERY, "variables": variables}
    variables["url"] = ref
    return {"query": BINARY_BY_URL_QUERY, "variables": variables}


def _raw_content(node: Optional[Dict[str, Any]]) -> Optional[str]:
    if not node:
        return None
    raw = node.get("rawContent") or {}
    return raw.get("data")


class ContentClient:
    """
    Stateless handle on the content service.

    Each request opens and closes its own httpx client, so a ContentClient is
    cheap to create per call and safe to share between threads.
    """

    def __init__(
        self,
        endpoint: Optional[str] = None,
        timeout: Optional[float] = None,
        verify_ssl: Optional[bool] = None,
        token: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
        async_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.endpoint = endpoint or default_settings.content_service_url
        self.timeout = timeout or default_settings.content_service_timeout
        self.verify_ssl = default_settings.content_service_verify_ssl if verify_ssl is None else verify_ssl
        self.token = token or default_settings.content_service_token
        self._transport = transport
        self._async_transport = async_transport

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout),
            verify=self.verify_ssl,
            follow_redirects=True,
            transport=self._transport,
        )

    def _async_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            verify=self.verify_ssl,
            follow_redirects=True,
            transport=self._async_transport,
        )

    @staticmethod
    def _data(response: httpx.Response) -> Dict[str, Any]:
        """Extract the ``data`` member of a GraphQL response, raising on GraphQL errors."""
        response.raise_for_status()
        body = response.json()
        errors = body.get("errors")
        if errors:
            message = "; ".join(str(e.get("message", e)) for e in errors)
            raise ContentServiceError(f"Content service returned errors: {message}", errors)
        return body.get("data") or {}

    # ------------------------------------------------------------------
    # GraphQL
    # ------------------------------------------------------------------

    def execute(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """Run a GraphQL request and return its ``data`` member."""
        with self._client() as client:
            response = client.post(self.endpoint, json=body, headers=self._headers())
            return self._data(response)

    async def execute_async(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """Async variant of :meth:`execute`."""
        async with self._async_client() as client:
            response = await client.post(self.endpoint, json=body, headers=self._headers())
            return self._data(response)

    def get_binary_component(
        self, namespace: ContentNamespace, publication_id: Union[int, str], ref: BinaryRef
    ) -> Optional[BinaryComponent]:
        """
        Fetch binary metadata by binary id or URL path.

        Returns:
            BinaryComponent, or None when the service knows no such binary
        """
        data = self.execute(_binary_query(namespace, publication_id, ref))
        node = data.get("binaryComponent")
        return BinaryComponent.from_graphql(node) if node else None

    async def get_binary_component_async(
        self, namespace: ContentNamespace, publication_id: Union[int, str], ref: BinaryRef
    ) -> Optional[BinaryComponent]:
        data = await self.execute_async(_binary_query(namespace, publication_id, ref))
        node = data.get("binaryComponent")
        return BinaryComponent.from_graphql(node) if node else None

    def get_page_content(
        self, namespace: ContentNamespace, publication_id: Union[int, str], url: str
    ) -> Optional[str]:
        """Fetch the raw (unrendered) content of the page published at ``url``."""
        data = self.execute({
            "query": PAGE_CONTENT_QUERY,
            "variables": {
                "namespaceId": int(namespace),
                "publicationId": int(publication_id),
                "url": url,
            },
        })
        return _raw_content(data.get("page"))

    def get_component_presentation(
        self,
        namespace: ContentNamespace,
        publication_id: Union[int, str],
        component_id: int,
        template_id: Optional[int] = None,
    ) -> Optional[str]:
        """Fetch the raw content of a component presentation."""
        data = self.execute({
            "query": COMPONENT_PRESENTATION_QUERY,
            "variables": {
                "namespaceId": int(namespace),
                "publicationId": int(publication_id),
                "componentId": component_id,
                "templateId": template_id,
            },
        })
        return _raw_content(data.get("componentPresentation"))

    # ------------------------------------------------------------------
    # Raw downloads
    # ------------------------------------------------------------------

    def download_bytes(self, url: str) -> bytes:
        """HTTP GET an absolute URL and return the response body."""
        with self._client() as client:
            response = client.get(url, headers=self._headers())
            response.raise_for_status()
            return response.content

    async def download_bytes_async(self, url: str) -> bytes:
        async with self._async_client() as client:
            response = await client.get(url, headers=self._headers())
            response.raise_for_status()
            return response.content


class ContentClientFactory:
    """Creates ContentClient instances, preferring an override when one is registered."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        overrides: Optional[OverrideProvider] = None,
    ):
        self.settings = settings or default_settings
        self._overrides = overrides

    def create_client(self) -> ContentClient:
        if self._overrides is not None:
            try:
                client = self._overrides.try_resolve(ContentClient)
            except Exception as e:
                logger.debug("ContentClient override lookup failed: %s", e)
                client = None
            if client is not None:
                return client

        return ContentClient(
            endpoint=self.settings.content_service_url,
            timeout=self.settings.content_service_timeout,
            verify_ssl=self.settings.content_service_verify_ssl,
            token=self.settings.content_service_token,
        )
