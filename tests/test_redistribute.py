"""Tests for weight redistribution between packed boxes."""

from __future__ import annotations

import random

import pytest

from box_packer.lists import BoxList, ItemList, PackedBoxList
from box_packer.models import Box, Item, PackedBox
from box_packer.packing.layer import pack_box
from box_packer.packing.redistribute import redistribute_weight
from box_packer.packing.volume import volume_pack

SMALL = Box(reference="S", inner_width=10, inner_length=10, inner_depth=10, max_weight=100)
LARGE = Box(reference="L", inner_width=20, inner_length=20, inner_depth=20, max_weight=200)
CATALOG = BoxList([SMALL, LARGE])

HEAVY = Item(description="heavy", width=5, length=5, depth=5, weight=15)
LIGHT = Item(description="light", width=5, length=5, depth=5, weight=10)


def heavy_and_light() -> PackedBoxList:
    """Boxes at 90 and 10, mean 50."""
    return PackedBoxList([
        PackedBox(box=SMALL, items=(HEAVY,) * 6),
        PackedBox(box=SMALL, items=(LIGHT,)),
    ])


def contents(packed_boxes: PackedBoxList) -> list[tuple[float, tuple[str, ...]]]:
    return sorted((p.weight, tuple(sorted(i.description for i in p.items))) for p in packed_boxes)


def test_weights_move_towards_mean() -> None:
    """90/10 becomes 45/55: three heavy items move to the light box."""
    result = redistribute_weight(heavy_and_light(), CATALOG)

    assert len(result) == 2
    assert sorted(p.weight for p in result) == [45, 55]
    assert sum(p.item_count for p in result) == 7
    for packed_box in result:
        assert abs(packed_box.weight - 50) < 40


def test_result_order_is_overweight_then_underweight() -> None:
    result = redistribute_weight(heavy_and_light(), CATALOG)
    # Final split is around the mean of the result, heaviest first
    assert [p.weight for p in result] == [55, 45]


def test_variance_does_not_increase() -> None:
    original = heavy_and_light()
    result = redistribute_weight(original, CATALOG)
    assert result.weight_variance() <= original.weight_variance()
    assert result.weight_variance() == 25


def random_solution(rng: random.Random) -> tuple[PackedBoxList, BoxList, list[Item]]:
    """Volume-packed random items; every item fits every box type on its own."""
    catalog = BoxList(
        Box(
            reference=f"box{b}",
            inner_width=rng.randint(8, 20),
            inner_length=rng.randint(8, 20),
            inner_depth=rng.randint(8, 20),
            max_weight=rng.randint(30, 80),
            empty_weight=rng.randint(0, 5),
        )
        for b in range(rng.randint(1, 3))
    )
    smallest_side = min(min(b.inner_width, b.inner_length, b.inner_depth) for b in catalog)
    lightest_payload = min(int(b.payload_weight) for b in catalog)
    items = [
        Item(
            description=f"item{i}",
            width=rng.randint(1, int(smallest_side)),
            length=rng.randint(1, int(smallest_side)),
            depth=rng.randint(1, int(smallest_side)),
            weight=rng.randint(1, lightest_payload),
        )
        for i in range(rng.randint(3, 15))
    ]
    return volume_pack(ItemList(items), catalog), catalog, items


@pytest.mark.parametrize("seed", range(40))
def test_redistribution_is_a_fixed_point(seed: int) -> None:
    """A second call finds nothing left to move, even after boxes crossed the mean."""
    packed_boxes, catalog, items = random_solution(random.Random(seed))

    once = redistribute_weight(packed_boxes, catalog)
    twice = redistribute_weight(once, catalog)

    assert contents(twice) == contents(once)
    assert len(once) <= len(packed_boxes)
    assert once.weight_variance() <= packed_boxes.weight_variance() + 1e-9
    assert sorted(i.description for p in once for i in p.items) == sorted(i.description for i in items)
    for packed_box in once:
        assert packed_box.item_weight <= packed_box.box.payload_weight


def test_boxes_that_cross_the_mean_are_rebalanced() -> None:
    """
    10/32 first becomes 30/12, which puts the light box above the mean;
    a fresh split around the mean then moves the ten back for 22/20.
    """
    ten = Item(description="ten", width=1, length=1, depth=1, weight=10)
    twelve = Item(description="twelve", width=1, length=1, depth=1, weight=12)
    twenty = Item(description="twenty", width=1, length=1, depth=1, weight=20)
    packed_boxes = PackedBoxList([
        PackedBox(box=SMALL, items=(ten,)),
        PackedBox(box=SMALL, items=(twenty, twelve)),
    ])

    result = redistribute_weight(packed_boxes, CATALOG)

    assert contents(result) == [(20, ("twenty",)), (22, ("ten", "twelve"))]
    assert [p.weight for p in result] == [22, 20]
    assert contents(redistribute_weight(result, CATALOG)) == contents(result)


def test_no_move_when_nothing_helps() -> None:
    """Moving the only heavy item would overshoot the target further."""
    packed_boxes = PackedBoxList([
        PackedBox(box=SMALL, items=(Item(description="anvil", width=5, length=5, depth=5, weight=60),)),
        PackedBox(box=SMALL, items=(LIGHT,)),
    ])
    result = redistribute_weight(packed_boxes, CATALOG)

    assert contents(result) == contents(packed_boxes)


def test_box_count_can_shrink_but_never_grow() -> None:
    """Emptying a box drops it from the solution."""
    thirty = Item(description="thirty", width=5, length=5, depth=5, weight=30)
    five = Item(description="five", width=5, length=5, depth=5, weight=5)
    packed_boxes = PackedBoxList([
        PackedBox(box=SMALL, items=(thirty,)),
        PackedBox(box=SMALL, items=(thirty,)),
        PackedBox(box=SMALL, items=(five,)),
    ])
    result = redistribute_weight(packed_boxes, CATALOG)

    assert len(result) == 2
    assert sorted(p.weight for p in result) == [30, 35]
    assert sorted(i.description for p in result for i in p.items) == ["five", "thirty", "thirty"]


def test_lighter_box_may_upsize() -> None:
    """A move that overflows the small box is accepted in a larger box type."""
    slab = Item(description="slab", width=10, length=10, depth=6, weight=30)
    packed_boxes = PackedBoxList([
        PackedBox(box=SMALL, items=(slab,)),
        PackedBox(box=SMALL, items=(slab,)),
        PackedBox(box=SMALL, items=(slab,)),
        PackedBox(box=SMALL, items=(LIGHT,)),
    ])
    result = redistribute_weight(packed_boxes, CATALOG)

    moved = [p for p in result if p.item_count == 2]
    assert len(moved) == 1
    assert moved[0].box.reference == "L"
    assert sum(p.item_count for p in result) == 4


def test_every_box_still_packs() -> None:
    result = redistribute_weight(heavy_and_light(), CATALOG)
    for packed_box in result:
        assert packed_box.item_weight <= packed_box.box.payload_weight
        assert len(pack_box(packed_box.box, ItemList(packed_box.items))) == packed_box.item_count


def test_pass_cap_limits_moves() -> None:
    result = redistribute_weight(heavy_and_light(), CATALOG, max_passes=1)
    assert sorted(p.weight for p in result) == [25, 75]


def test_input_is_left_untouched() -> None:
    original = heavy_and_light()
    before = original.as_list()
    redistribute_weight(original, CATALOG)
    assert original.as_list() == before
