from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class UserCredential:
    """One row of the Users sheet. Passwords are stored as plain text there."""

    email: str
    password: str
    role: str


@dataclass(frozen=True)
class LoginResult:
    token: str
    role: Role


@dataclass(frozen=True)
class TokenClaims:
    email: str
    role: str
