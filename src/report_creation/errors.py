"""Exception types raised by report construction, validation and compilation."""

from __future__ import annotations

from dataclasses import dataclass


class ReportError(Exception):
    """Base class for report_creation errors."""


class ShapeError(ReportError, ValueError):
    """A table row does not have as many cells as the table has headers."""

    def __init__(self, row_index: int, expected: int, actual: int) -> None:
        self.row_index = row_index
        self.expected = expected
        self.actual = actual
        super().__init__(f"Row {row_index} has {actual} cells, expected {expected} to match the headers")


class CompilationError(ReportError, RuntimeError):
    """The external Typst compiler failed to produce a PDF."""

    def __init__(self, message: str, *, stderr: str = "") -> None:
        self.stderr = stderr
        super().__init__(f"{message}\n{stderr}".rstrip() if stderr else message)


@dataclass(frozen=True, slots=True)
class MarkupIssue:
    line: int
    column: int
    message: str

    def __str__(self) -> str:
        return f"{self.line}:{self.column}: {self.message}"


class MarkupSyntaxError(ReportError, ValueError):
    """Rendered markup has unbalanced delimiters."""

    def __init__(self, issues: list[MarkupIssue]) -> None:
        self.issues = issues
        details = "; ".join(str(issue) for issue in issues)
        super().__init__(f"Rendered markup has {len(issues)} syntax issue(s): {details}")


class ConfigurationError(ReportError, ValueError):
    """An environment setting has a value that cannot be used."""
