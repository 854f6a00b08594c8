"""Ordered collections of items, box types and packed boxes.

ItemList yields the largest item first, BoxList the smallest box first.
Both are value-like: `clone()` gives an independent copy that can be consumed
by a trial packing without touching the original.
"""

from __future__ import annotations

from bisect import insort_right
from typing import Iterable, Iterator

from box_packer.metrics import mean_weight, weight_variance
from box_packer.models import Box, Item, PackedBox


def item_sort_key(item: Item) -> tuple[float, float]:
    # Largest volume first, heavier first on ties
    return (-item.volume, -float(item.weight))


def box_sort_key(box: Box) -> tuple[float, float]:
    return (box.inner_volume, float(box.empty_weight))


class ItemList:
    """Items ordered largest first; equal keys keep insertion order."""

    def __init__(self, items: Iterable[Item] = ()):
        self._items: list[Item] = []
        for item in items:
            self.insert(item)

    @classmethod
    def from_items(cls, items: Iterable[Item]) -> "ItemList":
        return cls(items)

    def insert(self, item: Item) -> None:
        insort_right(self._items, item, key=item_sort_key)

    def top(self) -> Item:
        if not self._items:
            raise IndexError("top from empty ItemList")
        return self._items[0]

    def extract(self) -> Item:
        if not self._items:
            raise IndexError("extract from empty ItemList")
        return self._items.pop(0)

    def is_empty(self) -> bool:
        return not self._items

    def clone(self) -> "ItemList":
        copy = ItemList()
        copy._items = list(self._items)
        return copy

    def as_list(self) -> list[Item]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(list(self._items))

    def __repr__(self) -> str:
        return f"ItemList({len(self._items)} items)"


class BoxList:
    """Box types ordered by inner volume, smallest first."""

    def __init__(self, boxes: Iterable[Box] = ()):
        self._boxes: list[Box] = []
        for box in boxes:
            self.insert(box)

    def insert(self, box: Box) -> None:
        insort_right(self._boxes, box, key=box_sort_key)

    def top(self) -> Box:
        if not self._boxes:
            raise IndexError("top from empty BoxList")
        return self._boxes[0]

    def extract(self) -> Box:
        if not self._boxes:
            raise IndexError("extract from empty BoxList")
        return self._boxes.pop(0)

    def is_empty(self) -> bool:
        return not self._boxes

    def clone(self) -> "BoxList":
        copy = BoxList()
        copy._boxes = list(self._boxes)
        return copy

    def as_list(self) -> list[Box]:
        return list(self._boxes)

    def __len__(self) -> int:
        return len(self._boxes)

    def __iter__(self) -> Iterator[Box]:
        return iter(list(self._boxes))

    def __repr__(self) -> str:
        return f"BoxList({len(self._boxes)} boxes)"


def packed_box_rank(packed_box: PackedBox) -> tuple[int, float]:
    """Higher ranks better: more items, then the smaller box."""
    return (packed_box.item_count, -packed_box.box.inner_volume)


class PackedBoxList:
    """
    Packed boxes of a solution.

    Iteration follows insertion order. `top()` / `extract()` return the best
    box by `packed_box_rank`, the earliest inserted one winning ties.
    """

    def __init__(self, packed_boxes: Iterable[PackedBox] = ()):
        self._packed_boxes: list[PackedBox] = list(packed_boxes)

    def insert(self, packed_box: PackedBox) -> None:
        self._packed_boxes.append(packed_box)

    def insert_from_list(self, packed_boxes: Iterable[PackedBox]) -> None:
        self._packed_boxes.extend(packed_boxes)

    def _best_index(self) -> int:
        if not self._packed_boxes:
            raise IndexError("empty PackedBoxList")
        best = 0
        for i, packed_box in enumerate(self._packed_boxes):
            if packed_box_rank(packed_box) > packed_box_rank(self._packed_boxes[best]):
                best = i
        return best

    def top(self) -> PackedBox:
        return self._packed_boxes[self._best_index()]

    def extract(self) -> PackedBox:
        return self._packed_boxes.pop(self._best_index())

    def is_empty(self) -> bool:
        return not self._packed_boxes

    def mean_weight(self) -> float:
        return mean_weight(self._packed_boxes)

    def weight_variance(self) -> float:
        return weight_variance(self._packed_boxes)

    def as_list(self) -> list[PackedBox]:
        return list(self._packed_boxes)

    def __len__(self) -> int:
        return len(self._packed_boxes)

    def __iter__(self) -> Iterator[PackedBox]:
        return iter(list(self._packed_boxes))

    def __repr__(self) -> str:
        return f"PackedBoxList({len(self._packed_boxes)} boxes)"
