# src/box_packer/packing/redistribute.py

from __future__ import annotations

import logging
from typing import Optional

from box_packer.lists import BoxList, ItemList, PackedBoxList
from box_packer.metrics import mean_weight, weight_variance
from box_packer.models import PackedBox
from box_packer.observers import NULL_OBSERVER, PackingObserver
from box_packer.packing.volume import volume_pack

logger = logging.getLogger(__name__)

EPSILON = 1e-9


def _by_weight_desc(packed_boxes: list[PackedBox]) -> list[PackedBox]:
    return sorted(packed_boxes, key=lambda p: p.weight, reverse=True)


def _repack_single(items: ItemList, boxes: BoxList, observer: PackingObserver) -> Optional[PackedBox]:
    """Re-solve `items` over the whole catalog; None unless one box takes them all."""
    packed = volume_pack(items, boxes, observer)
    if len(packed) != 1:
        return None
    return packed.top()


def _partition(
    packed_boxes: list[PackedBox],
    target_weight: float,
) -> tuple[list[PackedBox], list[PackedBox], list[PackedBox]]:
    """Split into (at target, overweight, underweight)."""
    at_target: list[PackedBox] = []
    over_weight: list[PackedBox] = []
    under_weight: list[PackedBox] = []
    for packed_box in packed_boxes:
        if packed_box.weight > target_weight:
            over_weight.append(packed_box)
        elif packed_box.weight < target_weight:
            under_weight.append(packed_box)
        else:
            at_target.append(packed_box)
    return at_target, over_weight, under_weight


def redistribute_weight(
    packed_boxes: PackedBoxList,
    boxes: BoxList,
    observer: PackingObserver | None = None,
    max_passes: int | None = None,
) -> PackedBoxList:
    """
    Even out box weights by moving single items from heavier to lighter boxes.

    First-improvement local search around the mean weight: the first move that
    brings a lighter box closer to the target, still packs (either box may
    change size) and lowers the weight variance is applied, then the scan
    restarts. A round ends when a full pass finds nothing; the next round
    re-takes the mean and re-splits the boxes around it. Stops after a round
    with no move, so the result is its own fixed point, or after `max_passes`
    accepted moves in total when a cap is given.

    Returns a new list: boxes at target, then overweight, then underweight,
    each group by descending weight. The box count never grows.
    """
    observer = observer or NULL_OBSERVER

    current = packed_boxes.as_list()
    logger.debug(f"repacking for weight distribution, weight variance {weight_variance(current)}")

    moves = 0
    capped = False
    while True:
        target_weight = mean_weight(current)
        at_target, over_weight, under_weight = _partition(current, target_weight)
        logger.debug(
            f"target weight {target_weight}, boxes under/over target: {len(under_weight)}/{len(over_weight)}"
        )

        round_moves = 0
        while True:
            if max_passes and moves >= max_passes:
                logger.warning(f"weight redistribution stopped after {moves} moves")
                capped = True
                break

            move = _find_move(target_weight, at_target, over_weight, under_weight, boxes, observer)
            if move is None:
                break

            u, o, lighter, heavier = move
            under_weight[u] = lighter
            if heavier is None:
                del over_weight[o]
            else:
                over_weight[o] = heavier

            over_weight = _by_weight_desc(over_weight)
            under_weight = _by_weight_desc(under_weight)
            moves += 1
            round_moves += 1

        current = at_target + over_weight + under_weight
        if capped or round_moves == 0:
            break

    result = PackedBoxList(_by_weight_desc(at_target))
    result.insert_from_list(_by_weight_desc(over_weight))
    result.insert_from_list(_by_weight_desc(under_weight))
    logger.debug(f"weight variance after redistribution {result.weight_variance()} ({moves} moves)")
    return result


def _find_move(
    target_weight: float,
    at_target: list[PackedBox],
    over_weight: list[PackedBox],
    under_weight: list[PackedBox],
    boxes: BoxList,
    observer: PackingObserver,
) -> Optional[tuple[int, int, PackedBox, Optional[PackedBox]]]:
    """First acceptable (lighter index, heavier index, new lighter, new heavier) move, if any."""
    current_variance = weight_variance(at_target + over_weight + under_weight)

    for u, under_box in enumerate(under_weight):
        for o, over_box in enumerate(over_weight):
            over_items = list(over_box.items)

            for i, item in enumerate(over_items):
                old_distance = abs(target_weight - under_box.weight)
                new_distance = abs(target_weight - (under_box.weight + item.weight))
                if new_distance > old_distance:
                    continue

                lighter_items = ItemList(under_box.items)
                lighter_items.insert(item)
                lighter = _repack_single(lighter_items, boxes, observer)
                if lighter is None:
                    observer.move_rejected(item, "does not fit alongside the lighter box's items")
                    continue

                residue = over_items[:i] + over_items[i + 1:]
                heavier = None
                if residue:
                    heavier = _repack_single(ItemList(residue), boxes, observer)
                    if heavier is None:
                        observer.move_rejected(item, "remaining items no longer fit one box")
                        continue

                others = [p for j, p in enumerate(under_weight) if j != u]
                others += [p for j, p in enumerate(over_weight) if j != o]
                candidate = at_target + others + [lighter]
                if heavier is not None:
                    candidate.append(heavier)
                if weight_variance(candidate) >= current_variance - EPSILON:
                    observer.move_rejected(item, "weight variance would not decrease")
                    continue

                observer.move_accepted(item, heavier if heavier is not None else over_box, lighter)
                return u, o, lighter, heavier

    return None
