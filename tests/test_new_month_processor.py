from datetime import datetime

import pytest
from openpyxl import Workbook, load_workbook

from shared_modules.locks import workbook_lock
from time_sheets.modules.errors import DuplicateSheetError, MissingOverviewSheetError
from time_sheets.modules.new_month_processor import NewMonthProcessor
from time_sheets.modules.workbook_host import WorkbookHost


@pytest.fixture
def workbook_file(config):
    WorkbookHost.create(config.workbook_path, config.time_sheet.overview_sheet_name)
    return config.workbook_path


def test_sheet_submitted_writes_workbook(config, workbook_file, empty_calendar):
    summary = NewMonthProcessor(config, empty_calendar).sheet_submitted("2024-02-01")

    assert summary.sheet_name == "February 2024"
    wb = load_workbook(workbook_file)
    assert wb.sheetnames == ["Overview", "February 2024"]

    ws = wb["February 2024"]
    assert ws["A2"].value == datetime(2024, 2, 1)
    assert ws["A30"].value == datetime(2024, 2, 29)
    assert ws["B32"].value == "Total working time"

    overview = wb["Overview"]
    assert overview["A2"].value == "February 2024"
    assert overview["B2"].value == "='February 2024'!C32"
    assert overview["E2"].value == "='February 2024'!C35"


def test_date_formats(config, workbook_file, empty_calendar):
    processor = NewMonthProcessor(config, empty_calendar)
    assert processor.sheet_submitted("2024-03").sheet_name == "March 2024"
    assert processor.sheet_submitted("15.04.2024").sheet_name == "April 2024"
    assert processor.sheet_submitted("2024-05-20T00:00:00.000Z").sheet_name == "May 2024"

    wb = load_workbook(workbook_file)
    assert wb["Overview"].max_row == 4


def test_invalid_date(config, workbook_file, empty_calendar):
    with pytest.raises(ValueError, match="Ungültiges Datum"):
        NewMonthProcessor(config, empty_calendar).sheet_submitted("irgendwann")


def test_missing_overview_leaves_file_untouched(config, empty_calendar):
    wb = Workbook()
    wb.active.title = "Notizen"
    wb.save(config.workbook_path)
    before = config.workbook_path.read_bytes()

    with pytest.raises(MissingOverviewSheetError):
        NewMonthProcessor(config, empty_calendar).sheet_submitted("2024-02")

    assert config.workbook_path.read_bytes() == before
    assert load_workbook(config.workbook_path).sheetnames == ["Notizen"]


def test_same_month_twice_fails(config, workbook_file, empty_calendar):
    processor = NewMonthProcessor(config, empty_calendar)
    processor.sheet_submitted("2024-02")
    with pytest.raises(DuplicateSheetError):
        processor.sheet_submitted("2024-02-10")
    assert load_workbook(workbook_file).sheetnames == ["Overview", "February 2024"]


def test_in_memory_host_is_not_saved(config, empty_calendar):
    host = WorkbookHost.create(None, "Overview")
    summary = NewMonthProcessor(config, empty_calendar, host=host).sheet_submitted("2024-02")

    assert host.sheet_names == ["Overview", "February 2024"]
    assert summary.overtime_ref == "C34"
    assert not config.workbook_path.exists()


def test_cancelled_picker_releases_lock(config, empty_calendar):
    host = WorkbookHost.create(None, "Overview")
    processor = NewMonthProcessor(config, empty_calendar, host=host)

    assert processor.start_new_month(lambda: None) is None
    assert processor.start_new_month(lambda: "") is None
    assert host.sheet_names == ["Overview"]

    with workbook_lock(processor.lock_name, timeout=0.05):
        pass


def test_start_new_month_with_picked_date(config, empty_calendar):
    host = WorkbookHost.create(None, "Overview")
    processor = NewMonthProcessor(config, empty_calendar, host=host)

    summary = processor.start_new_month(lambda: "2024-11")

    assert summary.sheet_name == "November 2024"
    assert host.get_sheet("Overview")["A2"].value == "November 2024"


def test_submit_waits_for_lock(make_config, empty_calendar):
    from shared_modules.locks import LockTimeoutError

    config = make_config(lock={"timeout_seconds": 0.05})
    host = WorkbookHost.create(None, "Overview")
    processor = NewMonthProcessor(config, empty_calendar, host=host)

    with workbook_lock(processor.lock_name, timeout=1):
        with pytest.raises(LockTimeoutError):
            processor.submit("2024-02")
    assert host.sheet_names == ["Overview"]
