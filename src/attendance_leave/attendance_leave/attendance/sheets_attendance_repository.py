from __future__ import annotations

from typing import Sequence

from ..sheets import tables
from ..sheets.connection import SheetsGateway
from ..sheets.table import TableResult, fetch_table
from .repository import AttendanceRepository


class SheetsAttendanceRepository(AttendanceRepository):
    def __init__(self, gateway: SheetsGateway):
        self._gateway = gateway

    def read_table(self, *, required_columns: Sequence[str] = ()) -> TableResult:
        return fetch_table(self._gateway, tables.ATTENDANCE, required_columns=required_columns)

    def append(self, row: Sequence[str]) -> None:
        if len(row) != tables.ATTENDANCE.width:
            raise ValueError(f"Attendance row must have {tables.ATTENDANCE.width} cells, got {len(row)}")
        self._gateway.append_values(tables.ATTENDANCE.range, [list(row)])
