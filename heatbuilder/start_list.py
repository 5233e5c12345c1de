from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font

from heatbuilder.models import Entrant, Heat, Swimmer
from heatbuilder.seeding import generate_heats
from heatbuilder.time_utils import format_seed_time

logger = logging.getLogger(__name__)

COLUMNS = ["Lane", "Name", "Team", "Seed time"]
COLUMN_WIDTHS = {"A": 10, "B": 35, "C": 30, "D": 20}


def _swimmer_cells(entrant: Entrant | None) -> tuple[str, str, str]:
    if entrant is None:
        return "-", "-", "-"
    swimmer = entrant.payload
    if isinstance(swimmer, Swimmer):
        name, team = swimmer.full_name, swimmer.team or "-"
    else:
        name, team = entrant.entrant_id, "-"
    return name, team, format_seed_time(entrant.seed_time_ms)


def generate_start_lists(events: Mapping[str, Sequence[Entrant]], lanes_per_heat: int) -> dict[str, list[Heat]]:
    return {name: generate_heats(entries, lanes_per_heat) for name, entries in events.items()}


def build_start_list_text(event_name: str, heats: Sequence[Heat], lanes_per_heat: int) -> str:
    lines = [f"Start list: {event_name}", "=" * 80]
    if not heats:
        lines.append("No entries")
    for heat in heats:
        lanes = heat.lane_map()
        lines.append("")
        lines.append(f"Heat {heat.heat_number} of {len(heats)}")
        lines.append(" | ".join(COLUMNS))
        for lane in range(1, lanes_per_heat + 1):
            name, team, seed = _swimmer_cells(lanes.get(lane))
            lines.append(f"{lane:>4} | {name} | {team} | {seed}")
    return "\n".join(lines)


def save_start_list_text(event_name: str, heats: Sequence[Heat], lanes_per_heat: int, output: Path) -> Path:
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(build_start_list_text(event_name, heats, lanes_per_heat), encoding="utf-8")
    logger.info("wrote start list for %r to %s", event_name, output)
    return output


def export_start_lists_xlsx(events: Mapping[str, Sequence[Heat]], lanes_per_heat: int, output: Path) -> Path:
    """Write every event's heats to a single "Start list" worksheet."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Start list"
    last_col = len(COLUMNS)
    bold = Font(bold=True)

    def title_row(text: str) -> None:
        ws.append([text])
        row = ws.max_row
        ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=last_col)
        cell = ws.cell(row=row, column=1)
        cell.font = bold
        cell.alignment = Alignment(horizontal="center")

    first = True
    for event_number, (event_name, heats) in enumerate(events.items(), start=1):
        if not first:
            ws.append([])
        first = False
        title_row(f"Event {event_number}: {event_name}")
        for heat in heats:
            lanes = heat.lane_map()
            ws.append([])
            title_row(f"Heat {heat.heat_number} of {len(heats)}")
            ws.append(COLUMNS)
            for lane in range(1, lanes_per_heat + 1):
                ws.append([lane, *_swimmer_cells(lanes.get(lane))])

    for col, width in COLUMN_WIDTHS.items():
        ws.column_dimensions[col].width = width

    output.parent.mkdir(parents=True, exist_ok=True)
    wb.save(output)
    logger.info("exported %d events to %s", len(events), output)
    return output
