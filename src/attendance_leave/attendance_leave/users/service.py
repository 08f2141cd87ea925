from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from ..core.enums import Role
from ..core.exceptions import EmptyTableError, InvalidCredentialsError, InvalidRoleError
from ..sheets.table import Record
from .model import LoginResult
from .repository import DirectoryRepository, UserRepository
from .tokens import TokenService

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate user (login) and resolve bearer tokens."""

    def __init__(self, users: UserRepository, tokens: TokenService):
        self._users = users
        self._tokens = tokens

    def login(self, email: str, password: str, *, now: Optional[datetime] = None) -> LoginResult:
        try:
            credentials = self._users.list_credentials()
        except EmptyTableError as e:
            raise EmptyTableError("No users found in the sheet") from e

        # Exact, case-sensitive match; the first row wins.
        user = next((c for c in credentials if c.email == email and c.password == password), None)
        if user is None:
            raise InvalidCredentialsError("Invalid credentials")

        role = Role.parse(user.role)
        if role is None:
            raise InvalidRoleError("Invalid user type")

        token = self._tokens.issue(email=user.email, role=role.value, now=now)
        logger.info("Login succeeded for %s (%s)", user.email, role.value)
        return LoginResult(token=token, role=role)

    def authenticate(self, token: Optional[str]) -> str:
        return self._tokens.verify(token).email


class DirectoryService:
    """Use case: employee listings for dropdowns and the admin view."""

    def __init__(self, directory: DirectoryRepository):
        self._directory = directory

    def list_dropdown_users(self) -> List[Record]:
        result = self._directory.dropdown_table()

        sites = result.column("Sites")
        if sites is None:
            logger.warning("Sites column not found in headers. Check Google Sheet.")

        names = result.column("Names")
        if names is None:
            users = []
        else:
            users = [r for r in result.records if r.get(names)]

        if sites is not None and all(not r.get(sites) for r in users):
            logger.warning("Sites column is empty for all rows")
        return users

    def list_employees(self) -> List[Record]:
        employees = self._directory.employee_table().records
        if not employees:
            raise EmptyTableError("No valid data found starting from row 2")
        return employees
