from __future__ import annotations

from typing import Protocol, Sequence

from ..sheets.table import TableResult
from .model import UserCredential


class UserRepository(Protocol):
    """Users sheet (read-only).

    Note: services depend on this interface, never on the Sheets client directly.
    """

    def list_credentials(self) -> Sequence[UserCredential]:
        raise NotImplementedError


class DirectoryRepository(Protocol):
    """Employee directory sheet (read-only)."""

    def dropdown_table(self) -> TableResult:
        """Directory including the Sites column, sheet headers preferred."""

        raise NotImplementedError

    def employee_table(self) -> TableResult:
        """First seven directory columns under the fixed header list."""

        raise NotImplementedError
