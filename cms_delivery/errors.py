# cms_delivery/errors.py
"""Exceptions raised by the content delivery layer."""

from typing import Union


class ContentDeliveryError(RuntimeError):
    """Base class for content delivery failures."""


class ItemNotFoundError(ContentDeliveryError):
    """Raised when an item reference cannot be resolved for a localization."""

    def __init__(self, item_id: Union[int, str], localization_id: str):
        super().__init__(
            f"Item '{item_id}' not found for Localization '{localization_id}'"
        )
        self.item_id = item_id
        self.localization_id = localization_id


class BinaryDateParseError(ContentDeliveryError, ValueError):
    """Raised when a binary's publish date does not match the expected format."""

    def __init__(self, value: str, date_format: str):
        super().__init__(
            f"Unable to parse publish date '{value}' with format '{date_format}'"
        )
        self.value = value
        self.date_format = date_format


class ContentServiceError(ContentDeliveryError):
    """Raised when the content service answers with GraphQL errors."""

    def __init__(self, message: str, errors=None):
        super().__init__(message)
        self.errors = errors or []
