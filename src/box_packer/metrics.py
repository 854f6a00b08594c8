from __future__ import annotations

from typing import Any, Iterable

from box_packer.models import PackedBox


def mean_weight(packed_boxes: Iterable[PackedBox]) -> float:
    weights = [p.weight for p in packed_boxes]
    return 0.0 if not weights else sum(weights) / len(weights)


def weight_variance(packed_boxes: Iterable[PackedBox]) -> float:
    """Population variance of the gross box weights."""
    weights = [p.weight for p in packed_boxes]
    if not weights:
        return 0.0
    mean = sum(weights) / len(weights)
    return sum((w - mean) ** 2 for w in weights) / len(weights)


def volume_utilisation(packed_box: PackedBox) -> float:
    return packed_box.volume_utilisation


def summarise(packed_boxes: Iterable[PackedBox]) -> dict[str, Any]:
    packed_boxes = list(packed_boxes)
    box_count = len(packed_boxes)
    utilisations = [volume_utilisation(p) for p in packed_boxes]
    return {
        "box_count": box_count,
        "item_count": sum(p.item_count for p in packed_boxes),
        "total_weight": sum(p.weight for p in packed_boxes),
        "mean_weight": mean_weight(packed_boxes),
        "weight_variance": weight_variance(packed_boxes),
        "mean_volume_utilisation": 0.0 if box_count == 0 else sum(utilisations) / box_count,
    }
