"""Data schemas for input/output operations."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from box_packer.lists import PackedBoxList
from box_packer.metrics import summarise
from box_packer.models import Box, Item, PackedBox
from box_packer.observers import PackingObserver
from box_packer.packer import Packer


class ItemSchema(BaseModel):
    """Schema for an item line; `quantity` expands to that many items."""
    description: str = Field(description="Label of the item")
    width: float = Field(gt=0, description="Width of the item")
    length: float = Field(gt=0, description="Length of the item")
    depth: float = Field(gt=0, description="Depth of the item")
    weight: float = Field(ge=0, default=0.0, description="Weight of the item")
    quantity: int = Field(ge=1, default=1, description="Number of identical items")


class BoxSchema(BaseModel):
    """Schema for a box type."""
    reference: str = Field(description="Reference of the box type")
    inner_width: float = Field(gt=0)
    inner_length: float = Field(gt=0)
    inner_depth: float = Field(gt=0)
    max_weight: float = Field(gt=0, description="Maximum total weight including the box")
    empty_weight: float = Field(ge=0, default=0.0, description="Tare weight")
    outer_width: Optional[float] = Field(None, gt=0)
    outer_length: Optional[float] = Field(None, gt=0)
    outer_depth: Optional[float] = Field(None, gt=0)


class PackingRequestSchema(BaseModel):
    """Schema for a packing request."""
    boxes: List[BoxSchema] = Field(min_length=1, description="Available box types")
    items: List[ItemSchema] = Field(min_length=1, description="Items to pack")
    redistribute: Optional[bool] = Field(None, description="Override the redistribution setting")


class PackedBoxSchema(BaseModel):
    """Schema for one packed box."""
    reference: str
    weight: float
    item_count: int
    volume_utilisation: float = Field(ge=0, le=1)
    items: List[str] = Field(description="Descriptions of the packed items, in placement order")


class PackingResultSchema(BaseModel):
    """Schema for a packing result."""
    packed_boxes: List[PackedBoxSchema]
    summary: Dict[str, Any]


def build_packer(
    request: PackingRequestSchema,
    redistribute: bool = True,
    max_redistribution_passes: Optional[int] = None,
    observer: Optional[PackingObserver] = None,
) -> Packer:
    if request.redistribute is not None:
        redistribute = request.redistribute
    packer = Packer(
        observer=observer,
        redistribute=redistribute,
        max_redistribution_passes=max_redistribution_passes,
    )
    for box in request.boxes:
        packer.add_box(Box(**box.model_dump()))
    for line in request.items:
        item = Item(**line.model_dump(exclude={"quantity"}))
        packer.add_item(item, line.quantity)
    return packer


def to_packed_box_schema(packed_box: PackedBox) -> PackedBoxSchema:
    return PackedBoxSchema(
        reference=packed_box.box.reference,
        weight=packed_box.weight,
        item_count=packed_box.item_count,
        volume_utilisation=min(packed_box.volume_utilisation, 1.0),
        items=[item.description for item in packed_box.items],
    )


def to_result(packed_boxes: PackedBoxList) -> PackingResultSchema:
    return PackingResultSchema(
        packed_boxes=[to_packed_box_schema(p) for p in packed_boxes],
        summary=summarise(packed_boxes),
    )
