"""Result types for batch operations.

This module defines:
- Result - outcome of processing one file
- ErrorResult - Result for a file that failed
- BatchResult - Aggregate result for a batch of files
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator


@dataclass
class Result:
    """Outcome of processing one file.

    Attributes:
        success: Whether the operation succeeded
        message: Human-readable description of what happened
        path: The file the result is about
        data: Optional payload, e.g. the scanned TodoFile
    """

    success: bool
    message: str
    path: Path | None = None
    data: Any = None

    def __bool__(self) -> bool:
        return self.success

    def is_error(self) -> bool:
        """Check if this result represents an error."""
        return not self.success


@dataclass
class ErrorResult(Result):
    """Result for a failed operation.

    Attributes:
        exception: The original exception, if any
        operation: Name of the attempted operation
    """

    success: bool = field(default=False, init=False)
    exception: Exception | None = None
    operation: str = ""

    def raise_if_error(self) -> None:
        """Explicitly re-raise the exception if the caller wants to."""
        if self.exception:
            raise self.exception
        raise RuntimeError(self.message)


@dataclass
class BatchResult:
    """Aggregate result for an operation applied to many files.

    A failure for one file never stops the others from being processed.
    """

    results: list[Result] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True if all operations succeeded."""
        return all(r.success for r in self.results)

    @property
    def partial_success(self) -> bool:
        """True if at least one operation succeeded."""
        return any(r.success for r in self.results)

    @property
    def succeeded(self) -> list[Result]:
        return [r for r in self.results if r.success]

    @property
    def failed(self) -> list[Result]:
        return [r for r in self.results if not r.success]

    def append(self, result: Result) -> None:
        self.results.append(result)

    def __bool__(self) -> bool:
        return self.success

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self) -> Iterator[Result]:
        return iter(self.results)
