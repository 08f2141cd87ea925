from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Mapping, Optional, Protocol, Sequence

from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..core.exceptions import PermissionDeniedError, RangeError, StoreError

logger = logging.getLogger(__name__)

SCOPES = ("https://www.googleapis.com/auth/spreadsheets",)

Rows = List[List[str]]


@dataclass(frozen=True)
class SheetsConfig:
    spreadsheet_id: str
    service_account_info: Mapping[str, str] = field(repr=False)


class SheetsGateway(Protocol):
    """What repositories need from the spreadsheet store."""

    def get_values(self, range_ref: str) -> Rows:
        raise NotImplementedError

    def append_values(self, range_ref: str, rows: Sequence[Sequence[Any]]) -> None:
        raise NotImplementedError

    def update_values(self, range_ref: str, rows: Sequence[Sequence[Any]]) -> None:
        raise NotImplementedError

    def sheet_titles(self) -> List[str]:
        raise NotImplementedError


@contextmanager
def store_call(action: str) -> Iterator[None]:
    """Translate Sheets API failures into domain errors."""
    try:
        yield
    except HttpError as exc:
        status = getattr(exc.resp, "status", None)
        message = str(exc)
        logger.error("Sheets %s failed (status=%s): %s", action, status, message)
        if "Unable to parse range" in message:
            raise RangeError("Invalid spreadsheet range", details=message) from exc
        if status == 403:
            raise PermissionDeniedError(
                "Permission denied",
                details="Ensure the service account has edit access to the spreadsheet",
            ) from exc
        raise StoreError(f"Failed to {action}", details=message) from exc
    except (GoogleAuthError, OSError, ValueError) as exc:
        logger.error("Sheets %s failed: %s", action, exc)
        raise StoreError(f"Failed to {action}", details=str(exc)) from exc


class SheetsClient(SheetsGateway):
    """Thin wrapper around the Sheets v4 ``spreadsheets`` resource.

    Note: the discovery client is built on first use so the app can start
    (and tests can run) without network access.
    """

    def __init__(self, config: SheetsConfig, *, service: Optional[Any] = None):
        self._config = config
        self._service = service

    @property
    def spreadsheet_id(self) -> str:
        return self._config.spreadsheet_id

    def _spreadsheets(self):
        if self._service is None:
            credentials = service_account.Credentials.from_service_account_info(
                dict(self._config.service_account_info), scopes=list(SCOPES)
            )
            self._service = build("sheets", "v4", credentials=credentials, cache_discovery=False)
        return self._service.spreadsheets()

    def get_values(self, range_ref: str) -> Rows:
        with store_call("fetch data from Google Sheet"):
            response = (
                self._spreadsheets()
                .values()
                .get(spreadsheetId=self.spreadsheet_id, range=range_ref)
                .execute()
            )
        return [[str(cell) for cell in row] for row in response.get("values", [])]

    def append_values(self, range_ref: str, rows: Sequence[Sequence[Any]]) -> None:
        with store_call("append row to Google Sheet"):
            (
                self._spreadsheets()
                .values()
                .append(
                    spreadsheetId=self.spreadsheet_id,
                    range=range_ref,
                    valueInputOption="RAW",
                    body={"values": [list(r) for r in rows]},
                )
                .execute()
            )

    def update_values(self, range_ref: str, rows: Sequence[Sequence[Any]]) -> None:
        with store_call("update Google Sheet"):
            (
                self._spreadsheets()
                .values()
                .update(
                    spreadsheetId=self.spreadsheet_id,
                    range=range_ref,
                    valueInputOption="RAW",
                    body={"values": [list(r) for r in rows]},
                )
                .execute()
            )

    def sheet_titles(self) -> List[str]:
        with store_call("read spreadsheet metadata"):
            response = (
                self._spreadsheets()
                .get(spreadsheetId=self.spreadsheet_id, fields="sheets.properties.title")
                .execute()
            )
        return [s.get("properties", {}).get("title", "") for s in response.get("sheets", [])]
