from __future__ import annotations
from typing import Iterable, List, Optional


class TaskStoreError(Exception):
    """Base class for every failure the task store reports to its callers."""


class ValidationError(TaskStoreError):
    """A write payload was rejected before reaching storage."""


class MissingField(ValidationError):
    def __init__(self, field: str):
        self.field = field
        super().__init__(f"{field.capitalize()} is required and cannot be empty")


class InvalidEnum(ValidationError):
    def __init__(self, field: str, allowed: Iterable[str] = ()):
        self.field = field
        self.allowed = list(allowed)
        if self.allowed:
            choices = ", ".join(self.allowed[:-1]) + f", or {self.allowed[-1]}"
            message = f"{field.capitalize()} must be {choices}"
        else:
            message = f"{field.capitalize()} has an unsupported value"
        super().__init__(message)


class SchemaViolation(ValidationError):
    """One or more fields break the record schema (length or type)."""

    def __init__(self, fields: Iterable[str], details: Optional[List[str]] = None):
        self.fields = list(dict.fromkeys(fields))
        self.details = details or [f"{f} is invalid" for f in self.fields]
        super().__init__("Validation Error: " + ", ".join(self.fields))


class NotFound(TaskStoreError):
    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__("Task not found")


class InvalidIdentifier(TaskStoreError):
    def __init__(self, value: object):
        self.value = value
        super().__init__("Invalid ID format")


class StoreUnavailable(TaskStoreError):
    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Task store unavailable during {operation}")
