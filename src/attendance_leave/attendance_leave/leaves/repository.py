from __future__ import annotations

from typing import List, Protocol, Sequence

from ..sheets.table import TableResult


class LeaveRepository(Protocol):
    def read_table(self) -> TableResult:
        raise NotImplementedError

    def read_rows(self) -> List[List[str]]:
        """Raw rows, header row included, positions as in the sheet."""

        raise NotImplementedError

    def sheet_exists(self) -> bool:
        raise NotImplementedError

    def append(self, row: Sequence[str]) -> None:
        raise NotImplementedError

    def update_row(self, row_number: int, row: Sequence[str]) -> None:
        """Overwrite one absolute (1-based) sheet row in place."""

        raise NotImplementedError
