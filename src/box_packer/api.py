"""FastAPI service exposing the packer."""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Response

from box_packer.config import get_settings
from box_packer.errors import ItemTooLargeError
from box_packer.io.schemas import PackingRequestSchema, PackingResultSchema, build_packer, to_result

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Box Packer API",
    description="Packs items into the fewest boxes and evens out box weights",
)


@app.post("/pack", response_model=PackingResultSchema)
def pack(request: PackingRequestSchema) -> Any:
    """
    Pack items into boxes.

    Input (request body):
        {
            "boxes": [{"reference": "B", "inner_width": 20, "inner_length": 20,
                       "inner_depth": 20, "max_weight": 100}],
            "items": [{"description": "cube", "width": 5, "length": 5,
                       "depth": 5, "weight": 4, "quantity": 12}]
        }
    """
    settings = get_settings()
    try:
        packer = build_packer(
            request,
            redistribute=settings.redistribute,
            max_redistribution_passes=settings.max_redistribution_passes,
        )
        packed_boxes = packer.pack()
    except ItemTooLargeError as e:
        error_response = {
            "error": "ITEM_TOO_LARGE",
            "summary": str(e),
            "details": {"item": e.item.model_dump()},
        }
        return Response(
            content=json.dumps(error_response),
            status_code=422,
            media_type="application/json",
        )
    except Exception as e:
        logger.error(f"ERROR in /pack endpoint: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))

    result = to_result(packed_boxes)
    logger.info(
        f"boxes={result.summary['box_count']}, "
        f"items={result.summary['item_count']}, "
        f"weight_variance={result.summary['weight_variance']}"
    )
    return result


@app.get("/health")
async def health() -> dict[str, Any]:
    """Health check endpoint."""
    return {"ok": True}
