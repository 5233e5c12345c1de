import datetime
from pathlib import Path

import pytest
from openpyxl import Workbook

from heatbuilder.excel_importer import ExcelImportError, import_excel
from heatbuilder.models import NO_TIME, Swimmer


def test_import_excel_rejects_legacy_xls(tmp_path: Path):
    legacy_file = tmp_path / "startlist.xls"
    legacy_file.write_text("legacy excel")

    with pytest.raises(ExcelImportError, match=".xls"):
        import_excel(legacy_file)


def test_import_excel_rejects_missing_and_empty_files(tmp_path: Path):
    with pytest.raises(ExcelImportError, match="does not exist"):
        import_excel(tmp_path / "missing.xlsx")

    empty = tmp_path / "empty.xlsx"
    empty.write_bytes(b"")
    with pytest.raises(ExcelImportError, match="empty"):
        import_excel(empty)


def test_import_excel_wraps_corrupt_archive(tmp_path: Path):
    broken = tmp_path / "broken.xlsx"
    broken.write_text("not a zip")

    with pytest.raises(ExcelImportError, match="valid") as info:
        import_excel(broken)
    assert info.value.__cause__ is not None


def test_import_excel_reads_one_event_per_sheet(tmp_path: Path):
    file_path = tmp_path / "startlist.xlsx"
    wb = Workbook()
    ws = wb.active
    ws.title = "50m Free"
    ws.append(["Meet", "Spring Open"])
    ws.append(["Name", "Birth year", "Club", "Seed time"])
    ws.append(["Ann Lee", "2012 y.", "Sharks", "0:31.20"])
    ws.append(["", None, None, None])
    ws.append(["Bo Chen", 2011, None, "NT"])
    ws.append(["Cy Park", 2013, "Dolphins", None])
    other = wb.create_sheet("Notes")
    other.append(["just a note"])
    wb.save(file_path)

    data = import_excel(file_path)

    assert list(data) == ["50m Free"]
    ann, bo, cy = data["50m Free"]
    assert ann.entrant_id == "50m Free:3"
    assert ann.seed_time_ms == 31200
    assert ann.payload == Swimmer(full_name="Ann Lee", birth_year=2012, team="Sharks")
    assert bo.seed_time_ms == NO_TIME
    assert bo.payload.team is None
    assert bo.entrant_id == "50m Free:5"
    assert cy.seed_time_ms == NO_TIME


def test_import_excel_reads_time_formatted_seed_cells(tmp_path: Path):
    file_path = tmp_path / "startlist.xlsx"
    wb = Workbook()
    ws = wb.active
    ws.title = "100 back"
    ws.append(["Name", "Seed time"])
    ws.append(["Dee Fox", datetime.time(0, 1, 5, 320000)])
    ws["B2"].number_format = "mm:ss.00"
    wb.save(file_path)

    (dee,) = import_excel(file_path)["100 back"]
    assert dee.seed_time_ms == 65320
