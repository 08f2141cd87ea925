import threading
import time
from datetime import datetime, timezone

import pytest

from attendance_leave.common.locks import KeyedLocks
from attendance_leave.core.exceptions import (
    EmptyTableError,
    NotFoundError,
    SchemaError,
    SheetConfigError,
    ValidationError,
)
from attendance_leave.leaves.model import format_days
from attendance_leave.leaves.service import LeaveService
from attendance_leave.leaves.sheets_leave_repository import SheetsLeaveRepository
from attendance_leave.sheets.tables import LEAVE

NOW = datetime(2025, 1, 3, 4, 5, 6, 789000, tzinfo=timezone.utc)

PAYLOAD = {
    "name": "Asha Verma",
    "empCode": "E001",
    "department": "RCC",
    "fromDate": "10/01/2025",
    "toDate": "11/01/2025",
    "shift": "Full day",
    "typeOfLeave": "Personal leave",
    "reason": "Wedding",
    "days": "2",
    "approvalManager": "Subhash Patidar",
}


@pytest.fixture
def service(sheets):
    return LeaveService(SheetsLeaveRepository(sheets))


def test_list_requests_uses_sheet_headers(service):
    records = service.list_requests()

    assert [r["EMPCODE"] for r in records] == ["E001", "E002"]
    assert records[0]["APPROVALSTATUS"] == ""


def test_list_requests_header_only(make_sheets):
    with pytest.raises(EmptyTableError):
        LeaveService(SheetsLeaveRepository(make_sheets({LEAVE.title: [list(LEAVE.columns)]}))).list_requests()


def test_submit_appends_row_in_column_order(service, sheets):
    service.submit(PAYLOAD, now=NOW)

    assert sheets.appended == [
        (
            "LeaveFrom!A:N",
            [[
                "2025-01-03 04:05:06.789",
                "Asha Verma",
                "E001",
                "RCC",
                "10/01/2025",
                "11/01/2025",
                "Full day",
                "Personal leave",
                "Wedding",
                "2",
                "Subhash Patidar",
            ]],
        )
    ]


def test_submit_numeric_days_stored_as_text(service, sheets):
    service.submit(dict(PAYLOAD, days=0.5), now=NOW)

    assert sheets.appended[0][1][0][9] == "0.5"


def test_submit_lists_missing_fields(service, sheets):
    payload = dict(PAYLOAD, reason="", days=None)
    del payload["shift"]

    with pytest.raises(ValidationError) as exc:
        service.submit(payload, now=NOW)

    assert str(exc.value) == "Missing required fields: shift, reason, days"
    assert sheets.appended == []


@pytest.mark.parametrize("days", [0, 0.0, False])
def test_submit_treats_zero_days_as_missing(service, sheets, days):
    with pytest.raises(ValidationError) as exc:
        service.submit(dict(PAYLOAD, days=days), now=NOW)

    assert str(exc.value) == "Missing required fields: days"
    assert sheets.appended == []


def test_submit_requires_leave_sheet(make_sheets):
    sheets = make_sheets({"Attendance": [["Timestamp"]]})

    with pytest.raises(SheetConfigError) as exc:
        LeaveService(SheetsLeaveRepository(sheets)).submit(PAYLOAD, now=NOW)

    assert exc.value.status_code == 400
    assert "LeaveFrom" in exc.value.details


def test_approve_updates_only_approval_columns(service, sheets, sheet_data):
    before = list(sheet_data[LEAVE.title][2])

    service.approve(emp_code="E002", approved="Approved", leave_days=2, now=NOW)

    range_ref, rows = sheets.updated[0]
    assert range_ref == "LeaveFrom!A3:N3"
    row = rows[0]
    assert row[:11] == before
    assert row[11:] == ["Approved", "2", "2025-01-03 04:05:06.789"]
    assert sheets.tabs[LEAVE.title][1] == sheet_data[LEAVE.title][1]


def test_approve_first_match_wins(make_sheets):
    sheets = make_sheets(
        {LEAVE.title: [list(LEAVE.columns), ["t1", "A", "E001"], ["t2", "B", "E002"], ["t3", "C", "E001"]]}
    )

    LeaveService(SheetsLeaveRepository(sheets)).approve(emp_code="E001", approved="Rejected", leave_days=0, now=NOW)

    assert sheets.updated[0][0] == "LeaveFrom!A2:N2"
    assert sheets.updated[0][1][0][11:13] == ["Rejected", "0"]


def test_approve_keeps_every_digit_of_leave_days(service, sheets):
    service.approve(emp_code="E001", approved="Approved", leave_days=1234567.5, now=NOW)

    assert sheets.updated[0][1][0][12] == "1234567.5"


class SlowLeaves:
    """Wraps a repository and records how many approvals overlap."""

    def __init__(self, inner):
        self._inner = inner
        self._guard = threading.Lock()
        self.active = 0
        self.peak = 0

    def read_rows(self):
        with self._guard:
            self.active += 1
            self.peak = max(self.peak, self.active)
        time.sleep(0.05)
        return self._inner.read_rows()

    def update_row(self, row_number, row):
        self._inner.update_row(row_number, row)
        with self._guard:
            self.active -= 1


def test_approvals_of_one_code_do_not_overlap(sheets):
    leaves = SlowLeaves(SheetsLeaveRepository(sheets))
    locks = KeyedLocks()
    service = LeaveService(leaves, locks=locks)

    threads = [
        threading.Thread(
            target=service.approve,
            kwargs={"emp_code": "E001", "approved": status, "leave_days": 1, "now": NOW},
        )
        for status in ("Approved", "Rejected")
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join(5)

    assert leaves.peak == 1
    assert len(sheets.updated) == 2
    assert len(locks) == 0


def test_unknown_codes_leave_no_locks_behind(sheets):
    locks = KeyedLocks()
    service = LeaveService(SheetsLeaveRepository(sheets), locks=locks)

    for i in range(20):
        with pytest.raises(NotFoundError):
            service.approve(emp_code=f"X{i}", approved="Approved", leave_days=1, now=NOW)

    assert len(locks) == 0


def test_approve_unknown_code_is_not_found(service, sheets):
    with pytest.raises(NotFoundError) as exc:
        service.approve(emp_code="E404", approved="Approved", leave_days=1, now=NOW)

    assert exc.value.status_code == 404
    assert sheets.updated == []


def test_approve_without_key_column_is_schema_error(make_sheets):
    sheets = make_sheets({LEAVE.title: [["TIMESTAMP", "NAME", "CODE"], ["t", "A", "E001"]]})

    with pytest.raises(SchemaError):
        LeaveService(SheetsLeaveRepository(sheets)).approve(emp_code="E001", approved="Approved", leave_days=1)


def test_approve_empty_sheet(make_sheets):
    with pytest.raises(EmptyTableError):
        LeaveService(SheetsLeaveRepository(make_sheets({}))).approve(emp_code="E001", approved="Approved", leave_days=1)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"emp_code": "E001", "approved": "Maybe", "leave_days": 1},
        {"emp_code": "E001", "approved": "Approved", "leave_days": -1},
        {"emp_code": "E001", "approved": "Approved", "leave_days": "2"},
        {"emp_code": "E001", "approved": "Approved", "leave_days": None},
        {"emp_code": "", "approved": "Approved", "leave_days": 1},
        {"emp_code": "E001", "approved": None, "leave_days": 1},
    ],
)
def test_approve_validates_input(service, sheets, kwargs):
    with pytest.raises(ValidationError):
        service.approve(**kwargs)

    assert sheets.updated == []


@pytest.mark.parametrize(
    "value,text",
    [
        (2, "2"),
        (2.0, "2"),
        (1.5, "1.5"),
        (0, "0"),
        (1234567.5, "1234567.5"),
        (0.1234567, "0.1234567"),
    ],
)
def test_format_days(value, text):
    assert format_days(value) == text
