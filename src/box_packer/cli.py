from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from box_packer.config import get_settings
from box_packer.errors import ItemTooLargeError
from box_packer.io.schemas import PackingRequestSchema, build_packer, to_result
from box_packer.observers import LoggingObserver

logger = logging.getLogger(__name__)


def load_input(path: Path) -> PackingRequestSchema:
    """
    Read a packing request JSON file:
        {"boxes": [{"reference": ..., "inner_width": ..., ...}],
         "items": [{"description": ..., "width": ..., "quantity": 3}]}
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    return PackingRequestSchema.model_validate(data)


def write_plan(plan: dict, path: str = "plan.json") -> None:
    """
    Write a plan dictionary to a JSON file.

    Creates parent folders if needed, writes JSON with indent=2 and sort_keys=True,
    and overwrites the file on every run.
    """
    output_path = Path(path).resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    logger.debug(f"write_plan: writing to {output_path}")
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(plan, f, indent=2, sort_keys=True)


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Box Packer CLI")
    parser.add_argument("--input", required=True, help="Input packing request JSON file")
    parser.add_argument("--output", required=True, help="Output plan JSON file")
    parser.add_argument(
        "--no-redistribute",
        action="store_true",
        help="Keep the volume packing result, skip weight redistribution",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Logging level (DEBUG also traces every packing step)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    observer = LoggingObserver() if args.log_level.upper() == "DEBUG" else None

    try:
        request = load_input(Path(args.input))
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        print(f"Invalid input {args.input}: {e}", file=sys.stderr)
        return 2

    packer = build_packer(
        request,
        redistribute=settings.redistribute and not args.no_redistribute,
        max_redistribution_passes=settings.max_redistribution_passes,
        observer=observer,
    )

    try:
        packed_boxes = packer.pack()
    except ItemTooLargeError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    result = to_result(packed_boxes)
    write_plan(result.model_dump(), args.output)
    print(json.dumps(result.summary, indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    sys.exit(main())
