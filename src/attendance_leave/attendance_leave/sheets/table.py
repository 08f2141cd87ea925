"""Row-table adapter: raw sheet ranges to header-named records."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from ..core.enums import HeaderSource
from ..core.exceptions import EmptyTableError, SchemaError
from .connection import SheetsGateway
from .tables import SheetTable

logger = logging.getLogger(__name__)

Record = Dict[str, str]


@dataclass(frozen=True)
class TableResult:
    headers: Tuple[str, ...]
    records: List[Record]
    header_source: HeaderSource

    @property
    def used_fallback(self) -> bool:
        return self.header_source is HeaderSource.FALLBACK

    def column(self, name: str) -> Optional[str]:
        """Actual header matching ``name`` case-insensitively, if any."""
        wanted = name.lower()
        for header in self.headers:
            if header.lower() == wanted:
                return header
        return None


def _cell(row: Sequence[str], index: int) -> str:
    if index >= len(row) or row[index] is None:
        return ""
    return str(row[index]).strip()


def resolve_headers(candidate: Sequence[str], fallback: Sequence[str]) -> Tuple[Tuple[str, ...], HeaderSource]:
    if not candidate or any(not str(h or "").strip() for h in candidate):
        return tuple(fallback), HeaderSource.FALLBACK
    return tuple(str(h).strip() for h in candidate), HeaderSource.INFERRED


def check_required_columns(headers: Sequence[str], required: Sequence[str]) -> None:
    present = {h.lower() for h in headers}
    missing = [name for name in required if name.lower() not in present]
    if missing:
        raise SchemaError("Invalid sheet structure", details=f"Missing columns: {', '.join(missing)}")


def build_table(
    rows: Sequence[Sequence[str]],
    fallback_headers: Sequence[str],
    *,
    required_columns: Sequence[str] = (),
    infer_headers: bool = True,
    range_ref: str = "",
) -> TableResult:
    """Reshape raw rows (row 0 = header candidate) into records.

    Records where every value is empty are dropped; row order is preserved.
    """
    if not rows:
        raise EmptyTableError("No data found in the sheet", details=range_ref or None)

    if infer_headers:
        headers, source = resolve_headers(rows[0], fallback_headers)
    else:
        headers, source = tuple(fallback_headers), HeaderSource.FALLBACK
    if source is HeaderSource.FALLBACK and infer_headers:
        logger.warning("Using default headers for %s: header row is missing or has blank cells", range_ref or "range")

    if required_columns:
        check_required_columns(headers, required_columns)

    records: List[Record] = []
    for row in rows[1:]:
        record = {header: _cell(row, i) for i, header in enumerate(headers)}
        if any(record.values()):
            records.append(record)

    return TableResult(headers=headers, records=records, header_source=source)


def fetch_table(
    gateway: SheetsGateway,
    table: SheetTable,
    *,
    required_columns: Sequence[str] = (),
    infer_headers: bool = True,
) -> TableResult:
    rows = gateway.get_values(table.range)
    return build_table(
        rows,
        table.columns,
        required_columns=required_columns,
        infer_headers=infer_headers,
        range_ref=table.range,
    )
