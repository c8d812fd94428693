from __future__ import annotations

"""
Errors raised while turning raw CSV text into a dataset, or when a pipeline
stage is handed no rows.
"""


class DatasetError(ValueError):
    """Base class for input problems; `line` is the 1-based CSV line when known."""

    def __init__(self, message: str, line: int | None = None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class MalformedRowError(DatasetError):
    def __init__(self, line: int, n_fields: int, expected: int):
        self.n_fields = n_fields
        self.expected = expected
        super().__init__(
            f"expected at least {expected} fields, got {n_fields}", line=line
        )


class InvalidNumberError(DatasetError):
    def __init__(self, line: int, column: int, field: str):
        self.column = column
        self.field = field
        super().__init__(
            f"column {column}: cannot parse {field!r} as a finite number", line=line
        )


class MissingLabelError(DatasetError):
    def __init__(self, line: int, column: int):
        self.column = column
        super().__init__(f"column {column}: label is missing", line=line)


class UnknownLabelError(DatasetError):
    def __init__(self, line: int, value: str, known: list[str] | None = None):
        self.value = value
        self.known = list(known or [])
        message = f"unknown label {value!r}"
        if self.known:
            message += f" (expected one of {', '.join(self.known)})"
        super().__init__(message, line=line)


class EmptyDatasetError(DatasetError):
    """Raised when a stage that needs at least one row receives none."""
