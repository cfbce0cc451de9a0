# cms_delivery/models/binary.py
"""Models for binary components returned by the content service."""

from typing import Any, Dict, List, NamedTuple, Optional

from pydantic import BaseModel, Field, field_validator

from cms_delivery.models.localization import ContentNamespace


class BinaryVariant(BaseModel):
    """One downloadable rendition of a binary component."""

    download_url: str = Field(default="", alias="downloadUrl")
    path: str = Field(default="")
    binary_id: Optional[int] = Field(default=None, alias="binaryId")
    variant_id: Optional[str] = Field(default=None, alias="variantId")
    type: Optional[str] = Field(default=None)

    @field_validator("download_url", "path", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        # The service sends null for variants that are not downloadable
        return "" if value is None else value

    class Config:
        populate_by_name = True


class BinaryComponent(BaseModel):
    """
    Binary metadata as returned by the content service.

    ``variants`` is None when the service returned no variants connection at
    all and an empty list when the connection has no edges; both are treated
    as "no data" by the binary retriever.
    """

    namespace_id: int = Field(default=ContentNamespace.SITES, alias="namespaceId")
    publication_id: int = Field(default=0, alias="publicationId")
    item_id: int = Field(default=0, alias="itemId")
    title: Optional[str] = None
    initial_publish_date: Optional[str] = Field(default=None, alias="initialPublishDate")
    last_publish_date: Optional[str] = Field(default=None, alias="lastPublishDate")
    variants: Optional[List[BinaryVariant]] = None

    class Config:
        populate_by_name = True

    @property
    def cm_uri(self) -> str:
        """CM URI of the binary, used in diagnostics."""
        try:
            prefix = ContentNamespace(self.namespace_id).prefix
        except ValueError:
            prefix = "tcm"
        return f"{prefix}:{self.publication_id}-{self.item_id}"

    @classmethod
    def from_graphql(cls, data: Dict[str, Any]) -> "BinaryComponent":
        """Build a BinaryComponent from a GraphQL ``binaryComponent`` node."""
        payload = dict(data)
        connection = payload.pop("variants", None)
        variants = None
        if connection is not None:
            edges = connection.get("edges")
            if edges is not None:
                variants = [
                    BinaryVariant.model_validate(edge.get("node") or {})
                    for edge in edges
                ]
        return cls.model_validate({**payload, "variants": variants})


class BinaryData(NamedTuple):
    """Downloaded binary content and the logical path of its variant."""

    content: bytes
    path: str
