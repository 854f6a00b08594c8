# src/box_packer/packing/volume.py

from __future__ import annotations

from box_packer.errors import ItemTooLargeError
from box_packer.lists import BoxList, ItemList, PackedBoxList
from box_packer.models import PackedBox
from box_packer.observers import NULL_OBSERVER, PackingObserver
from box_packer.packing.layer import pack_box


def volume_pack(items: ItemList, boxes: BoxList, observer: PackingObserver | None = None) -> PackedBoxList:
    """
    Pack items into boxes, largest volume item first.

    Each round tries every box type (smallest first) against the items still
    unpacked and keeps the box that takes the most of them. Rounds repeat
    until everything is packed. Neither `items` nor `boxes` is modified.

    Raises ItemTooLargeError if some round cannot place a single item.
    """
    observer = observer or NULL_OBSERVER

    remaining = items.clone()
    packed_boxes = PackedBoxList()

    while not remaining.is_empty():
        boxes_to_evaluate = boxes.clone()
        candidates = PackedBoxList()

        while not boxes_to_evaluate.is_empty():
            box = boxes_to_evaluate.extract()
            packed_items = pack_box(box, remaining.clone(), observer)
            observer.box_evaluated(box, len(packed_items))

            if len(packed_items):
                candidates.insert(PackedBox(box=box, items=tuple(packed_items)))

                # One box holds everything that is left
                if len(packed_items) == len(remaining):
                    break

        if candidates.is_empty():
            raise ItemTooLargeError(remaining.top())

        best = candidates.top()
        # Packed items are always a prefix of the largest-first order
        for _ in range(best.item_count):
            remaining.extract()
        packed_boxes.insert(best)

    return packed_boxes
