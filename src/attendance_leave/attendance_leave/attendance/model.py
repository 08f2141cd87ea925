from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

# Payload keys of an attendance submission, in sheet column order (after Timestamp).
REQUIRED_FIELDS = ("email", "name", "empCode", "site", "entryType", "workShift", "locationName")

# Columns GET /api/attendance filters on.
DAY_QUERY_COLUMNS = ("Email", "Timestamp", "EntryType", "Site")


@dataclass(frozen=True)
class AttendanceSubmission:
    """One check-in/check-out coming from the attendance form."""

    email: str
    name: str
    emp_code: str
    site: str
    entry_type: str
    work_shift: str
    location_name: str
    image: Optional[str] = None

    def to_row(self, *, timestamp: str, image_url: Optional[str]) -> List[str]:
        return [
            timestamp,
            self.email,
            self.name,
            self.emp_code,
            self.site,
            self.entry_type,
            self.work_shift,
            self.location_name,
            image_url or "",
        ]
