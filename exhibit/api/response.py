"""API response envelope."""
from __future__ import annotations

from typing import Any, Optional

from exhibit.stdlib.error_store import ErrorStore

SUCCESS = "success"
ERROR = "error"
ERROR_INTERNAL = "error_internal"
ERROR_VALIDATION = "error_validation"
ERROR_NOT_FOUND = "error_not_found"
ERROR_PERMISSION_DENIED = "error_permission_denied"
ERROR_BAD_REQUEST = "error_bad_request"

STATUSES = (
    SUCCESS,
    ERROR,
    ERROR_INTERNAL,
    ERROR_VALIDATION,
    ERROR_NOT_FOUND,
    ERROR_PERMISSION_DENIED,
    ERROR_BAD_REQUEST,
)


class Response:
    SUCCESS = SUCCESS
    ERROR = ERROR
    ERROR_INTERNAL = ERROR_INTERNAL
    ERROR_VALIDATION = ERROR_VALIDATION
    ERROR_NOT_FOUND = ERROR_NOT_FOUND
    ERROR_PERMISSION_DENIED = ERROR_PERMISSION_DENIED
    ERROR_BAD_REQUEST = ERROR_BAD_REQUEST

    def __init__(self, content: Any = None):
        self.content = content
        self.total_results: Optional[int] = None
        self.status = SUCCESS
        self.error_store = ErrorStore()
        self.request = None

    def set_content(self, content: Any) -> None:
        self.content = content

    def get_content(self):
        return self.content

    def set_total_results(self, total: int) -> None:
        self.total_results = int(total)

    def get_total_results(self) -> Optional[int]:
        return self.total_results

    def set_status(self, status: str) -> None:
        if status not in STATUSES:
            raise ValueError(f"Invalid response status '{status}'")
        self.status = status

    def get_status(self) -> str:
        return self.status

    def add_error(self, key: str, message: str) -> None:
        self.error_store.add_error(key, message)

    def merge_errors(self, error_store: ErrorStore) -> None:
        self.error_store.merge_errors(error_store)

    def get_errors(self):
        return self.error_store.get_errors()

    def is_success(self) -> bool:
        return self.status == SUCCESS

    def is_error(self) -> bool:
        return self.status != SUCCESS
