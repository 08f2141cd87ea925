from __future__ import annotations

from typing import List, Sequence

from ..sheets import tables
from ..sheets.connection import SheetsGateway
from ..sheets.table import TableResult, fetch_table
from .repository import LeaveRepository


class SheetsLeaveRepository(LeaveRepository):
    def __init__(self, gateway: SheetsGateway):
        self._gateway = gateway

    def read_table(self) -> TableResult:
        return fetch_table(self._gateway, tables.LEAVE)

    def read_rows(self) -> List[List[str]]:
        return self._gateway.get_values(tables.LEAVE.range)

    def sheet_exists(self) -> bool:
        return tables.LEAVE.title in self._gateway.sheet_titles()

    def append(self, row: Sequence[str]) -> None:
        if len(row) > tables.LEAVE.width:
            raise ValueError(f"Leave row has {len(row)} cells, contract allows {tables.LEAVE.width}")
        self._gateway.append_values(tables.LEAVE.range, [list(row)])

    def update_row(self, row_number: int, row: Sequence[str]) -> None:
        if row_number < 2:
            raise ValueError("Row 1 is the header row")
        if len(row) != tables.LEAVE.width:
            raise ValueError(f"Leave row must have {tables.LEAVE.width} cells, got {len(row)}")
        self._gateway.update_values(tables.LEAVE.row_range(row_number), [list(row)])
