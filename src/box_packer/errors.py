"""Exceptions raised by the packer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .models import Item


class PackingError(Exception):
    """Base class for packing failures."""


class ItemTooLargeError(PackingError):
    """No box type in the catalog can take the item."""

    def __init__(self, item: "Item"):
        self.item = item
        super().__init__(f"Item {item.description} is too large to fit into any box")


class InvalidItemInputError(PackingError, TypeError):
    """Item set replacement was given something that is not a list of items."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Not a valid list of items: {type(value).__name__}")
