"""API exception hierarchy."""
from __future__ import annotations

from typing import Optional

from exhibit.stdlib.error_store import ErrorStore


class ApiException(Exception):
    """Base class for every error raised while executing an API request."""


class InvalidArgumentException(ApiException):
    pass


class InvalidRequestException(ApiException):
    pass


class BadRequestException(ApiException):
    pass


class NotFoundException(ApiException):
    pass


class PermissionDeniedException(ApiException):
    pass


class OperationNotImplementedException(ApiException):
    pass


class ValidationException(ApiException):
    def __init__(self, message: str = "Validation failed.", error_store: Optional[ErrorStore] = None):
        super().__init__(message)
        self.error_store = error_store or ErrorStore()

    def set_error_store(self, error_store: ErrorStore) -> None:
        self.error_store = error_store

    def get_error_store(self) -> ErrorStore:
        return self.error_store
