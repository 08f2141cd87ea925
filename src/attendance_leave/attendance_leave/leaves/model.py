from __future__ import annotations

from dataclasses import dataclass
from numbers import Real
from typing import Any, List

REQUIRED_FIELDS = (
    "name",
    "empCode",
    "department",
    "fromDate",
    "toDate",
    "shift",
    "typeOfLeave",
    "reason",
    "days",
    "approvalManager",
)


@dataclass(frozen=True)
class LeaveSubmission:
    """A leave application; dates stay in the DD/MM/YYYY form the client sends."""

    name: str
    emp_code: str
    department: str
    from_date: str
    to_date: str
    shift: str
    type_of_leave: str
    reason: str
    days: str
    approval_manager: str

    @classmethod
    def from_fields(cls, fields: dict) -> "LeaveSubmission":
        return cls(
            name=fields["name"],
            emp_code=fields["empCode"],
            department=fields["department"],
            from_date=fields["fromDate"],
            to_date=fields["toDate"],
            shift=fields["shift"],
            type_of_leave=fields["typeOfLeave"],
            reason=fields["reason"],
            days=_as_text(fields["days"]),
            approval_manager=fields["approvalManager"],
        )

    def to_row(self, *, timestamp: str) -> List[str]:
        return [
            timestamp,
            self.name,
            self.emp_code,
            self.department,
            self.from_date,
            self.to_date,
            self.shift,
            self.type_of_leave,
            self.reason,
            self.days,
            self.approval_manager,
        ]


def format_days(value: Real) -> str:
    """2 -> "2", 2.0 -> "2", 1.5 -> "1.5"; other values keep every digit."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _as_text(value: Any) -> str:
    if isinstance(value, Real) and not isinstance(value, bool):
        return format_days(value)
    return str(value)
