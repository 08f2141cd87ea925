from __future__ import annotations

import re
from typing import Dict, List, Optional

import pytest

from attendance_leave.config.settings import load_settings
from attendance_leave.config.testing import ENV_DEFAULTS
from attendance_leave.container import build_container
from attendance_leave.main import create_app
from attendance_leave.sheets.tables import ATTENDANCE, DIRECTORY, LEAVE, USERS

_A1 = re.compile(r"^([A-Z]+)(\d*):([A-Z]+)(\d*)$")


def _col_index(letters: str) -> int:
    n = 0
    for ch in letters:
        n = n * 26 + (ord(ch) - ord("A") + 1)
    return n


def _split_range(range_ref: str):
    title, _, cells = range_ref.rpartition("!")
    if title.startswith("'") and title.endswith("'"):
        title = title[1:-1].replace("''", "'")
    m = _A1.match(cells)
    assert m, f"unsupported range {range_ref!r}"
    first, first_row, last, last_row = m.groups()
    return title, _col_index(first), _col_index(last), int(first_row or 0), int(last_row or 0)


class FakeSheets:
    """In-memory stand-in for the Sheets API, shaped like its values responses."""

    def __init__(self, tabs: Optional[Dict[str, List[List[str]]]] = None):
        self.tabs: Dict[str, List[List[str]]] = {k: [list(r) for r in v] for k, v in (tabs or {}).items()}
        self.appended: List[tuple] = []
        self.updated: List[tuple] = []
        self.fail_with: Optional[Exception] = None

    def _check(self):
        if self.fail_with is not None:
            raise self.fail_with

    def get_values(self, range_ref):
        self._check()
        title, first, last, _, _ = _split_range(range_ref)
        out = []
        for row in self.tabs.get(title, []):
            cut = list(row[first - 1 : last])
            while cut and cut[-1] == "":
                cut.pop()
            out.append(cut)
        while out and not out[-1]:
            out.pop()
        return out

    def append_values(self, range_ref, rows):
        self._check()
        title, *_ = _split_range(range_ref)
        self.appended.append((range_ref, [list(r) for r in rows]))
        self.tabs.setdefault(title, []).extend(list(r) for r in rows)

    def update_values(self, range_ref, rows):
        self._check()
        title, _, _, row_number, _ = _split_range(range_ref)
        self.updated.append((range_ref, [list(r) for r in rows]))
        sheet = self.tabs.setdefault(title, [])
        while len(sheet) < row_number:
            sheet.append([])
        sheet[row_number - 1] = list(rows[0])

    def sheet_titles(self):
        self._check()
        return list(self.tabs)


class FakeImageStore:
    def __init__(self, url: str = "https://res.cloudinary.com/test/image/upload/a.jpg"):
        self.url = url
        self.uploads: List[tuple] = []
        self.fail_with: Optional[Exception] = None

    def upload(self, data, *, public_id):
        if self.fail_with is not None:
            raise self.fail_with
        self.uploads.append((data, public_id))
        return self.url


@pytest.fixture
def sheet_data():
    return {
        USERS.title: [
            list(USERS.columns),
            ["admin@example.com", "secret", "Admin"],
            ["guest@example.com", "guest", "Visitor"],
        ],
        DIRECTORY.title: [
            list(DIRECTORY.columns),
            ["Asha Verma", "E001", "9999900001", "asha@example.com", "Subhash Patidar", "RCC", "Engineer", "Indore"],
            ["Ravi Kumar", "E002", "9999900002", "ravi@example.com", "Admin", "Dimension", "Supervisor", "Bhopal"],
        ],
        ATTENDANCE.title: [
            list(ATTENDANCE.columns),
            ["2025-01-01 09:00:00.000", "asha@example.com", "Asha Verma", "E001", "Indore", "Check In", "Day", "Gate 1", ""],
            ["2025-01-01 18:00:00.000", "ravi@example.com", "Ravi Kumar", "E002", "Bhopal", "Check Out", "Day", "Gate 2", ""],
            ["2025-01-02 09:05:00.000", "asha@example.com", "Asha Verma", "E001", "Indore", "Check In", "Day", "Gate 1", ""],
        ],
        LEAVE.title: [
            list(LEAVE.columns),
            ["2025-01-01 10:00:00.000", "Asha Verma", "E001", "RCC", "05/01/2025", "06/01/2025", "Full day", "Personal leave", "Family", "2", "Subhash Patidar"],
            ["2025-01-02 10:00:00.000", "Ravi Kumar", "E002", "Dimension", "07/01/2025", "07/01/2025", "Full day", "Sick leave", "Fever", "1", "Admin"],
        ],
    }


@pytest.fixture
def sheets(sheet_data):
    return FakeSheets(sheet_data)


@pytest.fixture
def images():
    return FakeImageStore()


@pytest.fixture
def settings():
    return load_settings(ENV_DEFAULTS)


@pytest.fixture
def container(settings, sheets, images):
    return build_container(settings=settings, sheets=sheets, images=images)


@pytest.fixture
def client(container):
    app = create_app(container)
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture
def make_sheets():
    return FakeSheets
