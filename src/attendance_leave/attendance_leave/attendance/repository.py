from __future__ import annotations

from typing import Protocol, Sequence

from ..sheets.table import TableResult


class AttendanceRepository(Protocol):
    def read_table(self, *, required_columns: Sequence[str] = ()) -> TableResult:
        raise NotImplementedError

    def append(self, row: Sequence[str]) -> None:
        """Append one row (append-only log)."""

        raise NotImplementedError
