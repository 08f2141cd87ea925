from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from ..core.constants import JWT_ALGORITHM, TOKEN_TTL_SECONDS
from ..core.exceptions import InvalidTokenError
from .model import TokenClaims


class TokenService:
    """Issue/verify HS256 bearer tokens carrying ``{email, userType}``."""

    def __init__(self, secret: str, *, ttl_seconds: int = TOKEN_TTL_SECONDS):
        self._secret = secret
        self._ttl = timedelta(seconds=int(ttl_seconds))

    def issue(self, *, email: str, role: str, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        payload = {
            "email": email,
            "userType": role,
            "iat": now,
            "exp": now + self._ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def verify(self, token: Optional[str]) -> TokenClaims:
        if not token:
            raise InvalidTokenError("No token")
        try:
            decoded = jwt.decode(token, self._secret, algorithms=[JWT_ALGORITHM])
        except jwt.ExpiredSignatureError as exc:
            raise InvalidTokenError("Invalid token", details="Token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError("Invalid token") from exc

        email = decoded.get("email")
        if not email:
            raise InvalidTokenError("Invalid token")
        return TokenClaims(email=email, role=str(decoded.get("userType", "")))
