from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from heatbuilder.excel_importer import ExcelImportError, import_excel
from heatbuilder.settings import get_settings
from heatbuilder.start_list import (
    build_start_list_text,
    export_start_lists_xlsx,
    generate_start_lists,
    save_start_list_text,
)

logger = logging.getLogger("heatbuilder")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="heatbuilder", description="Seed heats and lanes from an Excel start list.")
    parser.add_argument("startlist", type=Path, help=".xlsx file, one worksheet per event")
    parser.add_argument("--lanes", type=int, default=None, help="lanes per heat (default from HEATBUILDER_LANES)")
    parser.add_argument("--xlsx", type=Path, default=None, help="write all start lists to this workbook")
    parser.add_argument("--save", action="store_true", help="write one text start list per event")
    parser.add_argument("--text-dir", type=Path, default=None, help="directory for --save (default HEATBUILDER_OUTPUT_DIR)")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.lanes is not None and args.lanes < 1:
        parser.error("--lanes must be at least 1")
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = get_settings()
    lanes = args.lanes if args.lanes is not None else settings.lanes_per_heat
    text_dir = args.text_dir or settings.output_dir

    try:
        events = import_excel(args.startlist)
    except ExcelImportError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    start_lists = generate_start_lists(events, lanes)
    for event_number, (event_name, heats) in enumerate(start_lists.items(), start=1):
        print(build_start_list_text(event_name, heats, lanes))
        print()
        if args.save:
            save_start_list_text(event_name, heats, lanes, text_dir / f"event-{event_number}-start-list.txt")

    if args.xlsx is not None:
        export_start_lists_xlsx(start_lists, lanes, args.xlsx)
    logger.info("seeded %d events", len(start_lists))
    return 0


if __name__ == "__main__":
    sys.exit(main())
