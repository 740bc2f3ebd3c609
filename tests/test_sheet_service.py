# /tests/test_sheet_service.py

import pytest
from googleapiclient.errors import HttpError

from app.core.exceptions import ExternalServiceError
from app.services.sheet_service import ReportSheetService, grid_to_dataframe

GRID = [
    ["Name", "Registration Number", "Week 1"],
    ["Alice", "cs-001", "Done"],
    ["Bob", "CS-0011", "Pending"],
    ["Carol", "EE-002"],
]


def _sheet(mocker, grid, **kwargs):
    """A ReportSheetService whose Sheets client returns `grid`."""
    client = mocker.MagicMock()
    client.spreadsheets.return_value.values.return_value.get.return_value.execute.return_value = {"values": grid}
    return ReportSheetService(spreadsheet_id="sheet-123", client=client, **kwargs), client


def test_grid_to_dataframe_pads_short_rows():
    df = grid_to_dataframe(GRID)

    assert list(df.columns) == ["Name", "Registration Number", "Week 1"]
    assert df.iloc[2]["Week 1"] == ""


def test_find_row_matches_reg_no_column_exactly(mocker):
    sheet, client = _sheet(mocker, GRID)

    row = sheet.find_row(" CS-001 ")

    assert row == {"Name": "Alice", "Registration Number": "cs-001", "Week 1": "Done"}
    client.spreadsheets.return_value.values.return_value.get.assert_called_once_with(
        spreadsheetId="sheet-123", range=sheet.sheet_range
    )


def test_find_row_does_not_match_on_substring(mocker):
    sheet, _ = _sheet(mocker, [["Name", "Registration Number"], ["Bob", "CS-0011"]])

    assert sheet.find_row("CS-001") is None


def test_find_row_falls_back_to_whole_cell_match_in_any_column(mocker):
    grid = [["Student", "ID"], ["Alice", "cs-001"], ["Bob", "CS-0011"]]
    sheet, _ = _sheet(mocker, grid)

    assert sheet.find_row("CS-0011") == {"Student": "Bob", "ID": "CS-0011"}


def test_find_row_on_empty_sheet(mocker):
    sheet, _ = _sheet(mocker, [])

    assert sheet.find_row("CS-001") is None
    assert sheet.fetch_grid() == []


def test_missing_spreadsheet_id_is_an_external_error(mocker):
    sheet = ReportSheetService(spreadsheet_id=None, client=mocker.MagicMock())

    with pytest.raises(ExternalServiceError):
        sheet.fetch_grid()


def test_http_error_is_an_external_error(mocker):
    sheet, client = _sheet(mocker, GRID)
    response = mocker.Mock(status=500, reason="Server Error")
    client.spreadsheets.return_value.values.return_value.get.return_value.execute.side_effect = HttpError(
        response, b"{}"
    )

    with pytest.raises(ExternalServiceError):
        sheet.fetch_grid()


def test_repeated_header_cells_are_suffixed():
    df = grid_to_dataframe([["Registration Number", "Week", "Registration Number", "Week"], ["A", "1", "B", "2"]])

    assert list(df.columns) == ["Registration Number", "Week", "Registration Number.1", "Week.1"]


def test_find_row_with_a_repeated_reg_no_header(mocker):
    grid = [
        ["Registration Number", "Week", "Registration Number"],
        ["CS-001", "1", "old-001"],
        ["cs-002", "2", "old-002"],
    ]
    sheet, _ = _sheet(mocker, grid)

    row = sheet.find_row("CS-002")

    assert row == {"Registration Number": "cs-002", "Week": "2", "Registration Number.1": "old-002"}
    # Only the first column with the configured header is the key column.
    assert sheet.find_row("OLD-001") is None


def test_each_fetch_builds_its_own_client_from_shared_credentials(mocker):
    load = mocker.patch(
        "app.services.sheet_service.service_account.Credentials.from_service_account_file",
        return_value=mocker.sentinel.credentials,
    )
    build = mocker.patch("app.services.sheet_service.build")
    build.return_value.spreadsheets.return_value.values.return_value.get.return_value.execute.return_value = {
        "values": GRID
    }
    sheet = ReportSheetService(spreadsheet_id="sheet-123", credentials_path="creds.json")

    sheet.fetch_grid()
    sheet.fetch_grid()

    load.assert_called_once()
    assert build.call_count == 2
    build.assert_called_with("sheets", "v4", credentials=mocker.sentinel.credentials, cache_discovery=False)


def test_unreadable_credentials_are_an_external_error(mocker):
    mocker.patch(
        "app.services.sheet_service.service_account.Credentials.from_service_account_file",
        side_effect=OSError("missing"),
    )
    sheet = ReportSheetService(spreadsheet_id="sheet-123", credentials_path="missing.json")

    with pytest.raises(ExternalServiceError, match="authenticate"):
        sheet.fetch_grid()
