from __future__ import annotations

import pytest

from box_packer.errors import ItemTooLargeError
from box_packer.lists import BoxList, ItemList
from box_packer.models import Box, Item
from box_packer.packing.layer import pack_box
from box_packer.packing.volume import volume_pack

BOX_A = Box(reference="A", inner_width=10, inner_length=10, inner_depth=10, max_weight=50)
BOX_B = Box(reference="B", inner_width=20, inner_length=20, inner_depth=20, max_weight=100)
CUBE = Item(description="cube", width=5, length=5, depth=5, weight=4)


def test_single_large_box_takes_everything() -> None:
    """12 cubes of weight 4 all go into box B in the first round; A is never used."""
    packed_boxes = volume_pack(ItemList([CUBE] * 12), BoxList([BOX_A, BOX_B]))

    assert len(packed_boxes) == 1
    packed_box = packed_boxes.top()
    assert packed_box.box.reference == "B"
    assert packed_box.item_count == 12
    assert packed_box.weight == 48


def test_smallest_box_that_holds_everything_wins() -> None:
    bigger = Box(reference="C", inner_width=12, inner_length=12, inner_depth=12, max_weight=50)
    packed_boxes = volume_pack(ItemList([CUBE] * 2), BoxList([bigger, BOX_A]))

    assert [p.box.reference for p in packed_boxes] == ["A"]


def test_items_split_over_several_boxes() -> None:
    """Box A holds 6 cubes (3 per layer, 2 layers)."""
    packed_boxes = volume_pack(ItemList([CUBE] * 8), BoxList([BOX_A]))

    assert [p.item_count for p in packed_boxes] == [6, 2]
    assert [p.weight for p in packed_boxes] == [24, 8]


def test_weight_limit_splits_boxes() -> None:
    light = Box(reference="light", inner_width=10, inner_length=10, inner_depth=10, max_weight=10)
    packed_boxes = volume_pack(ItemList([CUBE] * 5), BoxList([light]))

    assert [p.item_count for p in packed_boxes] == [2, 2, 1]


def test_inputs_are_not_modified() -> None:
    items = ItemList([CUBE] * 8)
    boxes = BoxList([BOX_A, BOX_B])
    volume_pack(items, boxes)

    assert len(items) == 8
    assert len(boxes) == 2


def test_item_too_large_for_any_box() -> None:
    """An item deeper than every box fails the whole packing."""
    tall = Item(description="tall", width=1, length=1, depth=30, weight=1)

    with pytest.raises(ItemTooLargeError) as exc_info:
        volume_pack(ItemList([tall]), BoxList([BOX_A, BOX_B]))

    assert exc_info.value.item == tall
    assert "tall" in str(exc_info.value)


def test_error_names_largest_unpacked_item() -> None:
    huge = Item(description="huge", width=30, length=30, depth=30, weight=1)
    with pytest.raises(ItemTooLargeError) as exc_info:
        volume_pack(ItemList([CUBE, huge]), BoxList([BOX_A, BOX_B]))
    assert exc_info.value.item.description == "huge"


def test_every_item_is_packed_once() -> None:
    items = (
        [Item(description="brick", width=4, length=8, depth=3, weight=6)] * 5
        + [Item(description="tile", width=9, length=9, depth=1, weight=2)] * 4
        + [CUBE] * 7
    )
    packed_boxes = volume_pack(ItemList(items), BoxList([BOX_A, BOX_B]))

    packed = sorted(i.description for p in packed_boxes for i in p.items)
    assert packed == sorted(i.description for i in items)


def test_packed_boxes_respect_limits_and_replay() -> None:
    items = (
        [Item(description="brick", width=4, length=8, depth=3, weight=6)] * 9
        + [CUBE] * 10
    )
    packed_boxes = volume_pack(ItemList(items), BoxList([BOX_A, BOX_B]))

    for packed_box in packed_boxes:
        assert packed_box.item_weight <= packed_box.box.payload_weight
        replay = pack_box(packed_box.box, ItemList(packed_box.items))
        assert len(replay) == packed_box.item_count
