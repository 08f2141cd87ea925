from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.service import AttendanceService
from .attendance.sheets_attendance_repository import SheetsAttendanceRepository
from .config.settings import Settings
from .leaves.service import LeaveService
from .leaves.sheets_leave_repository import SheetsLeaveRepository
from .media.image_store import CloudinaryImageStore, ImageStore
from .sheets.connection import SheetsClient, SheetsGateway
from .users.service import AuthService, DirectoryService
from .users.sheets_user_repository import SheetsDirectoryRepository, SheetsUserRepository
from .users.tokens import TokenService


@dataclass(frozen=True)
class Container:
    settings: Settings
    sheets: SheetsGateway
    images: ImageStore

    users_repo: SheetsUserRepository
    directory_repo: SheetsDirectoryRepository
    attendance_repo: SheetsAttendanceRepository
    leave_repo: SheetsLeaveRepository

    auth_service: AuthService
    directory_service: DirectoryService
    attendance_service: AttendanceService
    leave_service: LeaveService


def build_container(
    *,
    settings: Settings,
    sheets: Optional[SheetsGateway] = None,
    images: Optional[ImageStore] = None,
) -> Container:
    sheets = sheets or SheetsClient(settings.sheets)
    images = images or CloudinaryImageStore(settings.cloudinary)

    users_repo = SheetsUserRepository(sheets)
    directory_repo = SheetsDirectoryRepository(sheets)
    attendance_repo = SheetsAttendanceRepository(sheets)
    leave_repo = SheetsLeaveRepository(sheets)

    auth_service = AuthService(users_repo, TokenService(settings.jwt_secret))
    directory_service = DirectoryService(directory_repo)
    attendance_service = AttendanceService(attendance_repo, images)
    leave_service = LeaveService(leave_repo)

    return Container(
        settings=settings,
        sheets=sheets,
        images=images,
        users_repo=users_repo,
        directory_repo=directory_repo,
        attendance_repo=attendance_repo,
        leave_repo=leave_repo,
        auth_service=auth_service,
        directory_service=directory_service,
        attendance_service=attendance_service,
        leave_service=leave_service,
    )
