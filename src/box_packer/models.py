from __future__ import annotations

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Item(BaseModel):
    """Item to be packed, dimensions in any consistent unit."""

    model_config = ConfigDict(frozen=True)

    description: str = Field(description="Free-text label of the item")
    width: float = Field(gt=0, description="Width of the item")
    length: float = Field(gt=0, description="Length of the item")
    depth: float = Field(gt=0, description="Depth (height) of the item")
    weight: float = Field(ge=0, description="Weight of the item")

    @property
    def volume(self) -> float:
        return float(self.width) * float(self.length) * float(self.depth)


class Box(BaseModel):
    """Box type available for packing. Inner dims bound the payload."""

    model_config = ConfigDict(frozen=True)

    reference: str = Field(description="Reference label of the box type")
    inner_width: float = Field(gt=0, description="Interior width")
    inner_length: float = Field(gt=0, description="Interior length")
    inner_depth: float = Field(gt=0, description="Interior depth")
    max_weight: float = Field(gt=0, description="Maximum total weight, box included")
    empty_weight: float = Field(default=0.0, ge=0, description="Tare weight of the empty box")

    # Outer dims are informational only, packing uses the interior
    outer_width: Optional[float] = Field(default=None, gt=0)
    outer_length: Optional[float] = Field(default=None, gt=0)
    outer_depth: Optional[float] = Field(default=None, gt=0)

    @model_validator(mode="after")
    def _check_weights(self) -> "Box":
        if self.empty_weight > self.max_weight:
            raise ValueError(
                f"empty_weight ({self.empty_weight}) exceeds max_weight ({self.max_weight}) for box {self.reference}"
            )
        return self

    @property
    def inner_volume(self) -> float:
        return float(self.inner_width) * float(self.inner_length) * float(self.inner_depth)

    @property
    def payload_weight(self) -> float:
        return float(self.max_weight) - float(self.empty_weight)


class PackedBox(BaseModel):
    """A box together with the items assigned to it, in placement order."""

    model_config = ConfigDict(frozen=True)

    box: Box
    items: Tuple[Item, ...] = Field(default_factory=tuple)

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def item_weight(self) -> float:
        return sum(float(item.weight) for item in self.items)

    @property
    def weight(self) -> float:
        """Gross weight: tare plus contents."""
        return float(self.box.empty_weight) + self.item_weight

    @property
    def remaining_weight(self) -> float:
        return self.box.payload_weight - self.item_weight

    @property
    def used_volume(self) -> float:
        return sum(item.volume for item in self.items)

    @property
    def volume_utilisation(self) -> float:
        box_volume = self.box.inner_volume
        return 0.0 if box_volume == 0 else self.used_volume / box_volume
