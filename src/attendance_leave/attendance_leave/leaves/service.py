from __future__ import annotations

import logging
from datetime import datetime
from numbers import Real
from typing import Any, List, Mapping, Optional

from ..common.datetime_utils import format_timestamp, now_utc
from ..common.locks import KeyedLocks
from ..common.validators import is_blank, require_fields, require_non_negative_number
from ..core.enums import ApprovalStatus
from ..core.exceptions import (
    EmptyTableError,
    NotFoundError,
    SchemaError,
    SheetConfigError,
    ValidationError,
)
from ..sheets import tables
from ..sheets.table import Record
from .model import REQUIRED_FIELDS, LeaveSubmission, format_days
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    def __init__(self, leaves: LeaveRepository, *, locks: Optional[KeyedLocks] = None):
        self._leaves = leaves
        self._locks = locks or KeyedLocks()

    def list_requests(self) -> List[Record]:
        records = self._leaves.read_table().records
        if not records:
            raise EmptyTableError("No valid data found starting from row 2")
        return records

    def submit(self, payload: Mapping[str, Any], *, now: Optional[datetime] = None) -> None:
        fields = dict(payload)
        # A numeric zero (or false) day count is as good as none.
        if _is_zero(fields.get("days")):
            fields["days"] = None
        submission = LeaveSubmission.from_fields(require_fields(fields, REQUIRED_FIELDS))

        if not self._leaves.sheet_exists():
            raise SheetConfigError(
                "Invalid spreadsheet configuration",
                details=f"Sheet '{tables.LEAVE.title}' does not exist in the spreadsheet",
            )

        now = now or now_utc()
        self._leaves.append(submission.to_row(timestamp=format_timestamp(now)))
        logger.info("Leave request recorded for %s (%s - %s)", submission.emp_code, submission.from_date, submission.to_date)

    def approve(
        self,
        *,
        emp_code: Any,
        approved: Any,
        leave_days: Any,
        now: Optional[datetime] = None,
    ) -> None:
        """Set status, approved days and approval time on the first row of ``emp_code``."""
        if is_blank(approved) or leave_days is None or is_blank(emp_code):
            raise ValidationError("Approved, leaveDays, and EMPCODE are required")
        try:
            status = ApprovalStatus(approved)
        except ValueError:
            raise ValidationError("Approved must be either 'Approved' or 'Rejected'")
        days = require_non_negative_number(leave_days, "leaveDays")
        code = str(emp_code).strip()

        with self._locks.hold(code):
            rows = self._leaves.read_rows()
            if not rows:
                raise EmptyTableError("No data found in the sheet")

            header = [str(h).strip() for h in rows[0]]
            if tables.LEAVE_KEY_COLUMN not in header:
                raise SchemaError(f"{tables.LEAVE_KEY_COLUMN} column not found in sheet")
            key_index = header.index(tables.LEAVE_KEY_COLUMN)

            match = None
            for offset, row in enumerate(rows[1:]):
                if key_index < len(row) and str(row[key_index]).strip() == code:
                    match = offset
                    break
            if match is None:
                raise NotFoundError(f"No matching row found for EMPCODE: {code}")

            updated = list(rows[match + 1])[: tables.LEAVE.width]
            updated += [""] * (tables.LEAVE.width - len(updated))
            updated[tables.LEAVE_STATUS_INDEX] = status.value
            updated[tables.LEAVE_DAYS_INDEX] = format_days(days)
            updated[tables.LEAVE_APPROVED_AT_INDEX] = format_timestamp(now or now_utc())

            # +1 for the header row, +1 because sheet rows are 1-based.
            self._leaves.update_row(match + 2, updated)
        logger.info("Leave for %s marked %s (%s days)", code, status.value, updated[tables.LEAVE_DAYS_INDEX])


def _is_zero(value: Any) -> bool:
    return isinstance(value, Real) and not value
