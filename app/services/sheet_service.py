# /app/services/sheet_service.py

"""
Read-only access to the external weekly-report spreadsheet.

The spreadsheet is an opaque collaborator: it returns a 2-D grid of text
cells. This module turns the grid into a pandas DataFrame and offers one
capability on top of it, a lookup of a student's row by registration number.
"""

import logging
from functools import lru_cache
from typing import Dict, List, Optional

import pandas as pd
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from app.core import config
from app.core.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]


def _normalize(value) -> str:
    return str(value).strip().upper()


def _unique_headers(header: List[str]) -> List[str]:
    """Repeated header cells get a `.1`, `.2` suffix, as `pandas.read_csv` names them."""
    seen: Dict[str, int] = {}
    unique = []
    for name in header:
        candidate = name
        while candidate in seen:
            seen[name] += 1
            candidate = f"{name}.{seen[name]}"
        seen.setdefault(candidate, 0)
        unique.append(candidate)
    return unique


def grid_to_dataframe(grid: List[List[str]]) -> pd.DataFrame:
    """
    Uses the first row as the header. Sheets omits trailing empty cells, so
    short rows are padded to the header width.
    """
    if not grid:
        return pd.DataFrame()
    header = [str(cell).strip() for cell in grid[0]]
    width = max(len(header), *(len(row) for row in grid[1:])) if len(grid) > 1 else len(header)
    header += [f"Column {i + 1}" for i in range(len(header), width)]
    header = _unique_headers(header)
    rows = [list(row) + [""] * (width - len(row)) for row in grid[1:]]
    return pd.DataFrame(rows, columns=header, dtype=str)


class ReportSheetService:
    """Lookup-by-key over the report spreadsheet."""

    def __init__(
        self,
        spreadsheet_id: Optional[str],
        sheet_range: str = config.GOOGLE_SHEETS_RANGE,
        credentials_path: str = config.GOOGLE_SHEETS_CREDENTIALS_PATH,
        reg_no_column: str = config.SHEET_REG_NO_COLUMN,
        client=None,
    ):
        self.spreadsheet_id = spreadsheet_id
        self.sheet_range = sheet_range
        self.credentials_path = credentials_path
        self.reg_no_column = reg_no_column
        self._client = client
        self._credentials = None

    def _get_credentials(self):
        if self._credentials is None:
            try:
                self._credentials = service_account.Credentials.from_service_account_file(
                    self.credentials_path, scopes=SCOPES
                )
            except (OSError, ValueError) as e:
                logger.error("Google Sheets authentication error: %s", e)
                raise ExternalServiceError("Failed to authenticate with Google Sheets")
        return self._credentials

    def _get_client(self):
        """
        A fresh Sheets resource per call: each one owns its own HTTP
        connection, which must not be shared across request threads. Only
        the credentials are reused.
        """
        if self._client is not None:
            return self._client
        return build("sheets", "v4", credentials=self._get_credentials(), cache_discovery=False)

    def fetch_grid(self) -> List[List[str]]:
        if not self.spreadsheet_id:
            logger.error("GOOGLE_SHEETS_SPREADSHEET_ID is not configured")
            raise ExternalServiceError("Server is not configured to fetch Google Sheets data.")

        try:
            response = (
                self._get_client()
                .spreadsheets()
                .values()
                .get(spreadsheetId=self.spreadsheet_id, range=self.sheet_range)
                .execute()
            )
        except HttpError as e:
            logger.error("Google Sheets request failed: %s", e)
            raise ExternalServiceError("Failed to fetch Google Sheets data. Check server logs for details.")

        values = response.get("values") or []
        if not values:
            logger.warning("No data found in Google Sheets at range: %s", self.sheet_range)
        return values

    def find_row(self, reg_no: str) -> Optional[Dict[str, str]]:
        """
        Returns the first row whose registration-number column equals
        `reg_no` (trimmed, case-insensitive). If the sheet has no such
        column, any cell may match, but always as a whole-cell match.
        """
        df = grid_to_dataframe(self.fetch_grid())
        if df.empty:
            return None

        key = _normalize(reg_no)
        if self.reg_no_column in df.columns:
            mask = df[self.reg_no_column].map(_normalize) == key
        else:
            mask = df.apply(lambda column: column.map(_normalize) == key).any(axis=1)

        matches = df[mask]
        if matches.empty:
            return None
        return {str(k): str(v) for k, v in matches.iloc[0].items()}


@lru_cache()
def get_sheet_service() -> ReportSheetService:
    """FastAPI dependency; the service (and its credentials) is shared per process."""
    return ReportSheetService(spreadsheet_id=config.GOOGLE_SHEETS_SPREADSHEET_ID)
