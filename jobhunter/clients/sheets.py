"""Google Sheets client for the candidate tab."""

from pathlib import Path
from typing import Any

import structlog
from google.oauth2 import service_account
from googleapiclient.discovery import build

log = structlog.get_logger()

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
APPLICATION_NAME = "JobHunter"

# Columns A..I, data rows start at 2; status lives in column I.
READ_RANGE = "{sheet}!A2:I"
STATUS_RANGE = "{sheet}!I{row}"


class CredentialsNotFoundError(FileNotFoundError):
    """Service-account key file is missing."""


class SheetsClient:
    """Reads candidate rows and writes status cells on one sheet tab."""

    def __init__(self, service: Any, spreadsheet_id: str, sheet_name: str):
        self.service = service
        self.spreadsheet_id = spreadsheet_id
        self.sheet_name = sheet_name

    @classmethod
    def from_credentials_file(
        cls,
        credentials_path: Path,
        spreadsheet_id: str,
        sheet_name: str,
    ) -> "SheetsClient":
        """Build a client from a service-account JSON key.

        Raises:
            CredentialsNotFoundError: if the key file does not exist.
        """
        if not credentials_path.exists():
            raise CredentialsNotFoundError(str(credentials_path))

        credentials = service_account.Credentials.from_service_account_file(
            str(credentials_path), scopes=SCOPES
        )
        service = build("sheets", "v4", credentials=credentials, cache_discovery=False)
        return cls(service, spreadsheet_id, sheet_name)

    @property
    def read_range(self) -> str:
        return READ_RANGE.format(sheet=self.sheet_name)

    def status_range(self, row_number: int) -> str:
        return STATUS_RANGE.format(sheet=self.sheet_name, row=row_number)

    def get_rows(self) -> list[list[Any]]:
        """Fetch all rows in A2:I. Empty sheet returns []."""
        result = (
            self.service.spreadsheets()
            .values()
            .get(spreadsheetId=self.spreadsheet_id, range=self.read_range)
            .execute()
        )
        return result.get("values", []) or []

    def update_status(self, row_number: int, status: str) -> dict:
        """Write a single status cell with RAW input semantics."""
        cell = self.status_range(row_number)
        result = (
            self.service.spreadsheets()
            .values()
            .update(
                spreadsheetId=self.spreadsheet_id,
                range=cell,
                valueInputOption="RAW",
                body={"values": [[status]]},
            )
            .execute()
        )
        log.info("status_cell_updated", cell=cell, status=status)
        return result
