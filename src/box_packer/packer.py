"""Packer: owns the items and box catalog and runs the packing steps in order."""

from __future__ import annotations

import logging
from typing import Any

from box_packer.errors import InvalidItemInputError
from box_packer.lists import BoxList, ItemList, PackedBoxList
from box_packer.models import Box, Item
from box_packer.observers import PackingObserver
from box_packer.packing.redistribute import redistribute_weight
from box_packer.packing.volume import volume_pack

logger = logging.getLogger(__name__)


class Packer:
    """
    Usage:
        packer = Packer()
        packer.add_box(Box(...))
        packer.add_item(Item(...), qty=3)
        packed_boxes = packer.pack()
    """

    def __init__(
        self,
        observer: PackingObserver | None = None,
        redistribute: bool = True,
        max_redistribution_passes: int | None = None,
    ):
        self.items = ItemList()
        self.boxes = BoxList()
        self.observer = observer
        self.redistribute = redistribute
        self.max_redistribution_passes = max_redistribution_passes

    def add_item(self, item: Item, qty: int = 1) -> None:
        for _ in range(qty):
            self.items.insert(item)
        logger.info(f"added {qty} x {item.description}")

    def set_items(self, items: Any) -> None:
        """Replace all items with an ItemList (copied) or a list/tuple of Item."""
        if isinstance(items, ItemList):
            self.items = items.clone()
        elif isinstance(items, (list, tuple)) and all(isinstance(i, Item) for i in items):
            self.items = ItemList(items)
        else:
            raise InvalidItemInputError(items)

    def add_box(self, box: Box) -> None:
        self.boxes.insert(box)
        logger.info(f"added box {box.reference}")

    def set_boxes(self, boxes: BoxList) -> None:
        self.boxes = boxes.clone()

    def do_volume_packing(self) -> PackedBoxList:
        return volume_pack(self.items, self.boxes, self.observer)

    def redistribute_weight(self, packed_boxes: PackedBoxList) -> PackedBoxList:
        return redistribute_weight(
            packed_boxes,
            self.boxes,
            self.observer,
            max_passes=self.max_redistribution_passes,
        )

    def pack(self) -> PackedBoxList:
        """
        Pack all items, then even out weights if more than one box was needed.

        Raises ItemTooLargeError when an item fits no box type.
        """
        packed_boxes = self.do_volume_packing()

        if self.redistribute and len(packed_boxes) > 1:
            packed_boxes = self.redistribute_weight(packed_boxes)

        logger.info(f"packing completed, {len(packed_boxes)} boxes")
        return packed_boxes
