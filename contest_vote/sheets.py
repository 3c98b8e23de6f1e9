"""
Registration source backed by the Google Form responses sheet.

The voting code only depends on the RegistrationSource protocol; the Google
client is built lazily on the first call, so the service starts without
credentials and only /api/registrations and /api/results need them.
"""
import logging
import re
from typing import List, Optional, Protocol, Sequence

import gspread
from google.oauth2.service_account import Credentials

from . import config
from .errors import RegistrationError, UpstreamAuthError, UpstreamNotFound
from .models import Registration

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]
TOKEN_URI = "https://oauth2.googleapis.com/token"

_DRIVE_FILE_ID = re.compile(r"[-\w]{25,}")


class RegistrationSource(Protocol):
    def list_registrations(self) -> List[Registration]:
        ...


def convert_drive_link(url: str) -> str:
    """
    Turn a Google Drive sharing link into a direct view link; other URLs pass through.
    """
    if "drive.google.com" in url:
        match = _DRIVE_FILE_ID.search(url)
        if match:
            return f"https://drive.google.com/uc?export=view&id={match.group(0)}"
    return url


def clean_private_key(raw: str) -> str:
    # keys pasted into env files usually carry literal "\n" and surrounding quotes
    key = raw.replace("\\n", "\n")
    if key.endswith('"'):
        key = key[:-1]
    if key.startswith('"'):
        key = key[1:]
    return key


def row_to_registration(row: Sequence[str]) -> Registration:
    cells = list(row) + [""] * (5 - len(row))
    return Registration(
        timestamp=cells[0] or "",
        fullName=cells[1] or "",
        department=cells[2] or "",
        activity=cells[3] or "",
        imageUrl=convert_drive_link(cells[4] or ""),
    )


def rows_to_registrations(rows: Sequence[Sequence[str]]) -> List[Registration]:
    """
    Map sheet rows to registrations, dropping rows without a name.
    """
    return [reg for reg in (row_to_registration(row) for row in rows) if reg.fullName]


class GoogleSheetsRegistrationSource:
    def __init__(
        self,
        spreadsheet_id: str = config.SPREADSHEET_ID,
        sheet_range: str = config.SHEET_RANGE,
        client_email: Optional[str] = config.GOOGLE_SHEETS_CLIENT_EMAIL,
        private_key: Optional[str] = config.GOOGLE_SHEETS_PRIVATE_KEY,
        project_id: str = config.GOOGLE_PROJECT_ID,
    ):
        self.spreadsheet_id = spreadsheet_id
        self.sheet_range = sheet_range
        self.client_email = client_email
        self.private_key = private_key
        self.project_id = project_id
        self._client: Optional[gspread.Client] = None

    def _authorize(self) -> gspread.Client:
        if self._client is not None:
            return self._client

        if not self.client_email or not self.private_key:
            raise RegistrationError(
                "Missing required environment variables for Google Sheets authentication"
            )

        logger.info("Authenticating to Google Sheets as %s", self.client_email)
        try:
            creds = Credentials.from_service_account_info(
                {
                    "type": "service_account",
                    "project_id": self.project_id,
                    "private_key": clean_private_key(self.private_key),
                    "client_email": self.client_email,
                    "token_uri": TOKEN_URI,
                },
                scopes=SCOPES,
            )
        except ValueError as exc:
            raise RegistrationError(
                f"Failed to initialize Google Sheets authentication: {exc}"
            ) from exc

        self._client = gspread.authorize(creds)
        return self._client

    def _open(self, client: gspread.Client) -> gspread.Spreadsheet:
        try:
            return client.open_by_key(self.spreadsheet_id)
        except gspread.exceptions.SpreadsheetNotFound as exc:
            raise UpstreamNotFound(
                f"Spreadsheet not found. Please verify the spreadsheet ID: {self.spreadsheet_id}"
            ) from exc
        except PermissionError as exc:
            raise self._access_denied() from exc
        except gspread.exceptions.APIError as exc:
            raise self._translate(exc) from exc

    def _access_denied(self) -> UpstreamAuthError:
        return UpstreamAuthError(
            "Access denied to spreadsheet. Please ensure the service account "
            f"({self.client_email}) has been granted access to the spreadsheet."
        )

    def _translate(self, exc: gspread.exceptions.APIError) -> RegistrationError:
        status = getattr(exc.response, "status_code", None)
        if status == 403:
            return self._access_denied()
        if status == 404:
            return UpstreamNotFound(
                f"Spreadsheet not found. Please verify the spreadsheet ID: {self.spreadsheet_id}"
            )
        return RegistrationError(f"Failed to fetch registration data from Google Sheets: {exc}")

    def list_registrations(self) -> List[Registration]:
        client = self._authorize()
        spreadsheet = self._open(client)

        try:
            response = spreadsheet.values_get(self.sheet_range)
        except gspread.exceptions.APIError as exc:
            raise self._translate(exc) from exc

        rows = response.get("values", [])
        if not rows:
            logger.info("No data found in spreadsheet %s", self.spreadsheet_id)
            return []

        logger.info("Fetched %d rows from spreadsheet %s", len(rows), self.spreadsheet_id)
        return rows_to_registrations(rows)
