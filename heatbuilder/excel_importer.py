from __future__ import annotations

import logging
from pathlib import Path
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from heatbuilder.models import NO_TIME, Entrant, Swimmer
from heatbuilder.time_utils import parse_seed_time_to_ms

logger = logging.getLogger(__name__)

HEADER_ALIASES = {
    "name": {"name", "full name", "swimmer", "athlete", "team name"},
    "year": {"year", "birth year", "yob"},
    "team": {"team", "club"},
    "seed": {"seed", "seed time", "entry time", "time"},
}
HEADER_SCAN_ROWS = 10


class ExcelImportError(ValueError):
    """Raised when a start list file cannot be parsed as supported Excel."""


def _normalize(value: object) -> str:
    return str(value or "").strip().lower()


def _find_columns(header_row: list[object]) -> dict[str, int]:
    mapping: dict[str, int] = {}
    for idx, raw in enumerate(header_row):
        h = _normalize(raw)
        for key, aliases in HEADER_ALIASES.items():
            if h in aliases and key not in mapping:
                mapping[key] = idx
    return mapping


def _parse_year(value: object) -> int | None:
    if isinstance(value, (int, float)):
        return int(value)
    digits = "".join(ch for ch in str(value or "") if ch.isdigit())
    return int(digits) if len(digits) == 4 else None


def _cell(row: tuple, cols: dict[str, int], key: str) -> object:
    idx = cols.get(key)
    if idx is None or idx >= len(row):
        return None
    return row[idx]


def _validate_input_file(path: Path) -> None:
    if not path.exists():
        raise ExcelImportError(f"Start list file does not exist: {path}")
    suffix = path.suffix.lower()
    if suffix == ".xls":
        raise ExcelImportError("Legacy .xls files are not supported, save the file as .xlsx and try again.")
    if path.stat().st_size == 0:
        raise ExcelImportError(f"Start list file is empty (0 bytes): {path}")
    if suffix not in {".xlsx", ".xlsm"}:
        raise ExcelImportError("Only .xlsx and .xlsm files are supported.")


def import_excel(path: Path) -> dict[str, list[Entrant]]:
    """Read one event per worksheet into entrants keyed by sheet title."""
    path = Path(path)
    _validate_input_file(path)
    logger.debug("loading start list %s (%d bytes)", path, path.stat().st_size)

    try:
        wb = load_workbook(path, data_only=True, read_only=True)
    except (BadZipFile, InvalidFileException) as exc:
        raise ExcelImportError(f"Could not open {path.name}, check that it is a valid .xlsx/.xlsm file.") from exc

    result: dict[str, list[Entrant]] = {}
    try:
        for ws in wb.worksheets:
            rows = list(ws.iter_rows(values_only=True))
            if not rows:
                continue

            header_idx = None
            cols: dict[str, int] = {}
            for i, row in enumerate(rows[:HEADER_SCAN_ROWS]):
                cols = _find_columns(list(row))
                if "name" in cols:
                    header_idx = i
                    break
            if header_idx is None:
                logger.info("skipping sheet %r: no name column", ws.title)
                continue

            entrants: list[Entrant] = []
            for row_number, row in enumerate(rows[header_idx + 1 :], start=header_idx + 2):
                name = str(_cell(row, cols, "name") or "").strip()
                if not name:
                    continue
                team = _cell(row, cols, "team")
                seed_ms = parse_seed_time_to_ms(_cell(row, cols, "seed"))
                entrants.append(
                    Entrant(
                        entrant_id=f"{ws.title}:{row_number}",
                        seed_time_ms=seed_ms if seed_ms is not None else NO_TIME,
                        payload=Swimmer(
                            full_name=name,
                            birth_year=_parse_year(_cell(row, cols, "year")),
                            team=str(team).strip() if team is not None else None,
                        ),
                    )
                )

            if entrants:
                result[ws.title] = entrants
                logger.info("imported %d entrants for %r", len(entrants), ws.title)
    finally:
        wb.close()

    return result
