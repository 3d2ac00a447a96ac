"""Errors raised while converting between sheet rows and database pages.

Every failure aborts the whole batch; nothing is retried or skipped.
"""

from typing import Any, Optional


class SheetSyncError(ValueError):
    """Base class for all conversion failures."""


class UnsupportedTypeError(SheetSyncError):
    def __init__(self, type_tag: Any, field: Optional[str] = None):
        self.type_tag = type_tag
        self.field = field
        where = f" for {field}" if field else ""
        super().__init__(f"unsupported type {type_tag!r}{where}")


class TypeMismatchError(SheetSyncError, TypeError):
    def __init__(self, type_tag: str, expected: str, value: Any):
        self.type_tag = type_tag
        self.expected = expected
        self.value = value
        super().__init__(
            f"value should be {expected} for {type_tag} but {type(value).__name__}"
        )


class ShapeError(SheetSyncError):
    """A structured value (date range) is missing or has a malformed part."""


class OptionValidationError(SheetSyncError):
    def __init__(self, field: str, values: list[str]):
        self.field = field
        self.values = values
        super().__init__(
            f"Validation Error: {','.join(values)} is not allowed for {field}"
        )


class MissingRequiredColumnError(SheetSyncError):
    def __init__(self, column: str):
        self.column = column
        super().__init__(f"required column '{column}' not found in header")


class MissingParentError(SheetSyncError):
    def __init__(self):
        super().__init__(
            "You should assign either $id on the record, or id / database_id on the schema"
        )
