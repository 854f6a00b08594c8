# src/box_packer/packing/layer.py

from __future__ import annotations

from box_packer.geometry import fit_rotated, fit_unrotated, normalise_footprint, prefer_unrotated
from box_packer.lists import ItemList
from box_packer.models import Box
from box_packer.observers import NULL_OBSERVER, PackingObserver


def pack_box(box: Box, items: ItemList, observer: PackingObserver | None = None) -> ItemList:
    """
    Pack as many items as possible into one box, in horizontal layers.

    - Items are taken largest first from `items`, which is consumed
      (pass a clone to keep the original)
    - Within a layer each item goes on the shelf axis with the smaller
      leftover gap, rotated 90 degrees if that leaves a tighter fit
    - An item that does not fit closes the layer; the next layer starts
      on top of the deepest item of the closed one
    - Stops at the first item that exceeds the remaining depth or weight,
      or that does not fit even an empty layer

    Returns the packed items in placement order.
    """
    observer = observer or NULL_OBSERVER

    packed_items = ItemList()
    remaining_depth = float(box.inner_depth)
    remaining_weight = box.payload_weight

    remaining_width, remaining_length = normalise_footprint(box.inner_width, box.inner_length)

    layer_width = layer_length = layer_depth = 0.0

    while not items.is_empty():
        item = items.top()

        # Depth/weight exhaustion is final for this box
        if item.depth > remaining_depth or item.weight > remaining_weight:
            break

        item_width, item_length = normalise_footprint(item.width, item.length)

        unrotated = fit_unrotated(remaining_width, remaining_length, item_width, item_length)
        rotated = fit_rotated(remaining_width, remaining_length, item_width, item_length)

        if not (unrotated.fits or rotated.fits):
            if layer_width == 0:
                # Does not fit an empty layer either
                break

            remaining_depth -= layer_depth
            observer.layer_closed(box, layer_depth, remaining_depth)
            # Later layers start from the box as given, not normalised
            remaining_width, remaining_length = float(box.inner_width), float(box.inner_length)
            layer_width = layer_length = layer_depth = 0.0
            continue

        packed_items.insert(items.extract())
        remaining_weight -= item.weight

        if prefer_unrotated(unrotated, rotated):
            if unrotated.gap_width <= unrotated.gap_length:
                remaining_length -= item_length
            else:
                remaining_width -= item_width
            layer_width += item_width
            layer_length += item_length
            observer.item_placed(box, item, rotated=False)
        else:
            if rotated.gap_width <= rotated.gap_length:
                remaining_length -= item_width
            else:
                remaining_width -= item_length
            layer_width += item_length
            layer_length += item_width
            observer.item_placed(box, item, rotated=True)

        layer_depth = max(layer_depth, float(item.depth))

    return packed_items
