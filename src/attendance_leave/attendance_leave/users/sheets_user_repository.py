from __future__ import annotations

from typing import List

from ..sheets import tables
from ..sheets.connection import SheetsGateway
from ..sheets.table import TableResult, fetch_table
from .model import UserCredential
from .repository import DirectoryRepository, UserRepository


class SheetsUserRepository(UserRepository):
    def __init__(self, gateway: SheetsGateway):
        self._gateway = gateway

    def list_credentials(self) -> List[UserCredential]:
        # Positional: Email, Password, Role, whatever the header cells say.
        result = fetch_table(self._gateway, tables.USERS, infer_headers=False)
        return [
            UserCredential(email=r["Email"], password=r["Password"], role=r["Role"])
            for r in result.records
        ]


class SheetsDirectoryRepository(DirectoryRepository):
    def __init__(self, gateway: SheetsGateway):
        self._gateway = gateway

    def dropdown_table(self) -> TableResult:
        return fetch_table(self._gateway, tables.DIRECTORY)

    def employee_table(self) -> TableResult:
        return fetch_table(self._gateway, tables.EMPLOYEES, infer_headers=False)
