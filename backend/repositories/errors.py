"""Errors raised by the build store, mapped to HTTP responses in main.py."""

from typing import Optional


class BuildStoreError(Exception):
    """Base for store failures with a user-facing message and code."""

    status_code = 500

    def __init__(self, message: str, code: str = "store_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(BuildStoreError):
    """Payload is empty or lacks required fields."""

    status_code = 400

    def __init__(self, message: str, missing_fields: Optional[list[str]] = None):
        self.missing_fields = list(missing_fields or [])
        super().__init__(message, code="validation_error")


class NotFoundError(BuildStoreError):
    """Record is absent or already expired."""

    status_code = 404

    def __init__(self, record_id: str, message: str = "Record not found or expired"):
        self.record_id = record_id
        super().__init__(message, code="not_found")


class PersistenceError(BuildStoreError):
    status_code = 500

    def __init__(self, message: str = "Error saving build"):
        super().__init__(message, code="persistence_error")
