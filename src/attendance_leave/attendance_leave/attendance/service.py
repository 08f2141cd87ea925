from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, List, Mapping, Optional

from ..common.datetime_utils import (
    day_window,
    format_timestamp,
    now_local,
    now_utc,
    parse_query_date,
    parse_sheet_timestamp,
)
from ..common.validators import is_blank, require_fields
from ..core.exceptions import EmptyTableError, ValidationError
from ..media.image_store import ImageStore, decode_image
from ..sheets.table import Record
from .model import DAY_QUERY_COLUMNS, REQUIRED_FIELDS, AttendanceSubmission
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, images: ImageStore):
        self._attendance = attendance
        self._images = images

    def list_for_day(
        self,
        *,
        email: Optional[str] = None,
        day: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> List[Record]:
        """Records of one calendar day (server-local), optionally for one email."""
        if day:
            try:
                target = parse_query_date(day)
            except ValueError:
                raise ValidationError("Invalid date format")
        else:
            target = (now or now_local()).date()
        start, end = day_window(target)

        result = self._attendance.read_table(required_columns=DAY_QUERY_COLUMNS)
        ts_col = result.column("Timestamp")
        email_col = result.column("Email")
        wanted = email.strip().lower() if email else None

        records = []
        for record in result.records:
            stamp = parse_sheet_timestamp(record.get(ts_col, ""))
            if stamp is None or not (start <= stamp < end):
                continue
            if wanted and record.get(email_col, "").lower() != wanted:
                continue
            records.append(record)
        return records

    def list_all(self) -> List[Record]:
        records = self._attendance.read_table().records
        if not records:
            raise EmptyTableError("No valid data found starting from row 2")
        return records

    def submit(self, payload: Mapping[str, Any], *, now: Optional[datetime] = None) -> None:
        fields = require_fields(payload, REQUIRED_FIELDS, message="All required fields must be provided")
        image = payload.get("image")
        submission = AttendanceSubmission(
            email=fields["email"],
            name=fields["name"],
            emp_code=fields["empCode"],
            site=fields["site"],
            entry_type=fields["entryType"],
            work_shift=fields["workShift"],
            location_name=fields["locationName"],
            image=None if is_blank(image) else str(image),
        )
        now = now or now_utc()

        image_url = None
        if submission.image:
            data = decode_image(submission.image)
            public_id = f"attendance_{submission.email}_{int(now.timestamp() * 1000)}"
            image_url = self._images.upload(data, public_id=public_id)

        self._attendance.append(submission.to_row(timestamp=format_timestamp(now), image_url=image_url))
        logger.info("Attendance recorded for %s (%s)", submission.email, submission.entry_type)
