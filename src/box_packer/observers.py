"""Hooks called at packing checkpoints. Observers only watch: they never change a result."""

from __future__ import annotations

import logging

from box_packer.models import Box, Item, PackedBox


class PackingObserver:
    """No-op base; override the hooks you need."""

    def box_evaluated(self, box: Box, packed_count: int) -> None:
        pass

    def item_placed(self, box: Box, item: Item, rotated: bool) -> None:
        pass

    def layer_closed(self, box: Box, layer_depth: float, remaining_depth: float) -> None:
        pass

    def move_accepted(self, item: Item, from_box: PackedBox, to_box: PackedBox) -> None:
        pass

    def move_rejected(self, item: Item, reason: str) -> None:
        pass


NULL_OBSERVER = PackingObserver()


class LoggingObserver(PackingObserver):
    """Writes every checkpoint to a logger at DEBUG level."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger("box_packer.trace")

    def box_evaluated(self, box: Box, packed_count: int) -> None:
        self.logger.debug(f"evaluated box {box.reference}: {packed_count} items fit")

    def item_placed(self, box: Box, item: Item, rotated: bool) -> None:
        orientation = "rotated" if rotated else "unrotated"
        self.logger.debug(
            f"placed {item.description} ({item.width} {item.length} {item.depth}) in {box.reference}, {orientation}"
        )

    def layer_closed(self, box: Box, layer_depth: float, remaining_depth: float) -> None:
        self.logger.debug(
            f"closed layer of depth {layer_depth} in {box.reference}, remaining depth {remaining_depth}"
        )

    def move_accepted(self, item: Item, from_box: PackedBox, to_box: PackedBox) -> None:
        self.logger.debug(
            f"moved {item.description} from {from_box.box.reference} ({from_box.weight}) "
            f"to {to_box.box.reference} ({to_box.weight})"
        )

    def move_rejected(self, item: Item, reason: str) -> None:
        self.logger.debug(f"kept {item.description} in place: {reason}")
