from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles allowed to log in (value = text stored in the Users sheet)."""

    ADMIN = "Admin"
    RAVINDRA_SINGH = "Ravindra Singh"
    MAYANK_SHARMA = "Lt Col Mayank Sharma (Retd)"
    SUBHASH_PATIDAR = "Subhash Patidar"

    @classmethod
    def parse(cls, value: str) -> "Role | None":
        try:
            return cls(value)
        except ValueError:
            return None


class ApprovalStatus(str, Enum):
    APPROVED = "Approved"
    REJECTED = "Rejected"


class HeaderSource(str, Enum):
    """Where the field names of a table came from."""

    INFERRED = "inferred"
    FALLBACK = "fallback"
