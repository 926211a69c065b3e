"""
utils/errors.py

Error taxonomy shared by the services and the HTTP error handlers.

- NotFound:          a lookup matched nothing (expected; most lookups return None instead)
- StoreFailure:      the record store reported a transport / constraint / permission error
- ValidationFailure: required input missing before any store call was made
"""

from typing import Iterable, List


class GradebookError(Exception):
    code = "GRADEBOOK_ERROR"


class NotFound(GradebookError):
    code = "NOT_FOUND"

    def __init__(self, resource: str, key):
        self.resource = resource
        self.key = key
        super().__init__(f"{resource} not found: {key}")


class StoreFailure(GradebookError):
    code = "STORE_FAILURE"

    def __init__(self, operation: str, detail: str = ""):
        self.operation = operation
        self.detail = detail
        message = f"store operation failed: {operation}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class ValidationFailure(GradebookError):
    code = "VALIDATION_FAILED"

    def __init__(self, missing_fields: Iterable[str]):
        self.missing_fields: List[str] = list(missing_fields)
        super().__init__("missing required fields: " + ", ".join(self.missing_fields))


def require_fields(payload: dict, fields: Iterable[str]) -> None:
    """Raise ValidationFailure listing every blank or absent field."""
    missing = []
    for name in fields:
        value = payload.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(name)
    if missing:
        raise ValidationFailure(missing)
