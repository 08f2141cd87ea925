"""Sheet contracts: tab title plus the ordered columns the app reads and writes.

The A1 range of a contract is derived from its width, so the fallback header
list and the range can never drift apart.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Tuple

_PLAIN_TITLE = re.compile(r"^[A-Za-z0-9_]+$")


def column_letter(index: int) -> str:
    """1-based column index to A1 letters (1 -> A, 27 -> AA)."""
    if index < 1:
        raise ValueError(f"column index must be >= 1, got {index}")
    letters = ""
    while index:
        index, rem = divmod(index - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


def quote_title(title: str) -> str:
    if _PLAIN_TITLE.match(title):
        return title
    return "'" + title.replace("'", "''") + "'"


@dataclass(frozen=True)
class SheetTable:
    title: str
    columns: Tuple[str, ...]

    @property
    def width(self) -> int:
        return len(self.columns)

    @property
    def last_column(self) -> str:
        return column_letter(self.width)

    @property
    def range(self) -> str:
        return f"{quote_title(self.title)}!A:{self.last_column}"

    def row_range(self, row_number: int) -> str:
        """A1 range of one absolute (1-based) sheet row across the contract width."""
        return f"{quote_title(self.title)}!A{row_number}:{self.last_column}{row_number}"

    def index_of(self, column: str) -> int:
        return self.columns.index(column)

    def narrowed(self, width: int) -> "SheetTable":
        return SheetTable(self.title, self.columns[:width])


USERS = SheetTable("Users", ("Email", "Password", "Role"))

DIRECTORY = SheetTable(
    "ALL DOER NAMES RCC/DIMENSION",
    (
        "Names",
        "EMP Code",
        "Mobile No.",
        "Email",
        "Leave Approval Manager",
        "Department",
        "Designation",
        "Sites",
    ),
)

# The employee listing predates the Sites column and always reads A:G.
EMPLOYEES = DIRECTORY.narrowed(7)

ATTENDANCE = SheetTable(
    "Attendance",
    (
        "Timestamp",
        "Email",
        "Name",
        "EmpCode",
        "Site",
        "EntryType",
        "WorkShift",
        "LocationName",
        "ImageUrl",
    ),
)

LEAVE = SheetTable(
    "LeaveFrom",
    (
        "TIMESTAMP",
        "NAME",
        "EMPCODE",
        "DEPARTMENT",
        "DATEFROM",
        "DATETO",
        "SHIFT",
        "TYPEOFLEAVE",
        "REASON",
        "APPROVEDDAY",
        "APPROVALMANAGER",
        "APPROVALSTATUS",
        "APPROVEDLEAVEDAYS",
        "APPROVALTIMESTAMP",
    ),
)

LEAVE_KEY_COLUMN = "EMPCODE"
LEAVE_STATUS_INDEX = LEAVE.index_of("APPROVALSTATUS")
LEAVE_DAYS_INDEX = LEAVE.index_of("APPROVEDLEAVEDAYS")
LEAVE_APPROVED_AT_INDEX = LEAVE.index_of("APPROVALTIMESTAMP")
