# cms_delivery/models/localization.py
"""Localization: the tenant / content partition every content call is scoped to."""

from dataclasses import dataclass
from enum import IntEnum


class ContentNamespace(IntEnum):
    """Content namespaces known to the content service."""

    SITES = 1
    DOCS = 2

    @property
    def prefix(self) -> str:
        """CM URI scheme of the namespace."""
        return "ish" if self is ContentNamespace.DOCS else "tcm"


@dataclass(frozen=True)
class Localization:
    """
    A content partition (publication) of the CMS.

    Attributes:
        id: Stable identifier, used as the key of all per-localization caches
        publication_id: Publication identifier on the content service
        namespace: Content namespace the publication lives in
    """

    id: str
    publication_id: str
    namespace: ContentNamespace = ContentNamespace.SITES

    def __post_init__(self):
        if not self.id:
            raise ValueError("Localization id must not be empty")

    @property
    def cm_uri_prefix(self) -> str:
        return f"{self.namespace.prefix}:{self.publication_id}"
