from __future__ import annotations

import logging

from qrdine.application.dto.responses import StaffSessionResponse, TableValidationResponse
from qrdine.application.ports.repositories import SessionRepository
from qrdine.domain.common.ids import TableId
from qrdine.domain.table.entities import is_valid_table_number

logger = logging.getLogger(__name__)

TABLE_VALID_MESSAGE = "桌号验证成功"
TABLE_INVALID_MESSAGE = "无效的桌号格式"


class InvalidStaffPasswordError(Exception):
    pass


class ValidateTable:
    """Check a scanned or typed table code and remember it when valid."""

    def __init__(self, session_repository: SessionRepository) -> None:
        self._session_repository = session_repository

    def execute(self, table_number: str) -> TableValidationResponse:
        normalized = table_number.strip()
        valid = is_valid_table_number(normalized)
        if valid:
            self._session_repository.set_table_number(TableId(normalized))
        return TableValidationResponse(
            valid=valid,
            message=TABLE_VALID_MESSAGE if valid else TABLE_INVALID_MESSAGE,
        )


class CurrentTable:
    def __init__(self, session_repository: SessionRepository) -> None:
        self._session_repository = session_repository

    def execute(self) -> str | None:
        table_number = self._session_repository.get_table_number()
        return str(table_number) if table_number else None


class StaffLogin:
    # Shared-password gate for the dashboard, not an authentication system.

    def __init__(self, session_repository: SessionRepository, password: str) -> None:
        self._session_repository = session_repository
        self._password = password

    def execute(self, password: str) -> StaffSessionResponse:
        if password != self._password:
            logger.info("staff_login_rejected")
            raise InvalidStaffPasswordError("invalid staff password")
        self._session_repository.set_staff_logged_in(True)
        return StaffSessionResponse(loggedIn=True)


class StaffLogout:
    def __init__(self, session_repository: SessionRepository) -> None:
        self._session_repository = session_repository

    def execute(self) -> StaffSessionResponse:
        self._session_repository.set_staff_logged_in(False)
        return StaffSessionResponse(loggedIn=False)


class StaffStatus:
    def __init__(self, session_repository: SessionRepository) -> None:
        self._session_repository = session_repository

    def execute(self) -> StaffSessionResponse:
        return StaffSessionResponse(loggedIn=self._session_repository.is_staff_logged_in())
