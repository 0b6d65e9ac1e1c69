"""Exception types raised by todor.

Every error derives from :class:`TodorError` so callers can catch the whole
family at once. Single-file operations raise these directly; batch operations
on the :class:`~todor.core.todor.TodoR` engine collect them into
:class:`~todor.core.results.ErrorResult` objects instead.
"""
from __future__ import annotations

from pathlib import Path


class TodorError(Exception):
    """Base class for all todor errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InputIsDirError(TodorError):
    """Raised when a directory is given where a file was expected."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"'{self.path}' is a directory")


class CannotAccessFileError(TodorError):
    """Raised when a file cannot be opened or read."""

    def __init__(self, path: str | Path, reason: str = "") -> None:
        self.path = Path(path)
        self.reason = reason
        message = f"cannot access file '{self.path}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InvalidExtensionError(TodorError):
    """Raised when an extension has no registered comment types."""

    def __init__(self, ext: str) -> None:
        self.ext = ext
        super().__init__(f"'{ext}' is not a registered extension")


class InvalidDefaultExtensionError(TodorError):
    """Raised when the configured default extension is not registered."""

    def __init__(self, ext: str) -> None:
        self.ext = ext
        super().__init__(
            f"default extension '{ext}' has no comment types registered for it"
        )


class FileNotTrackedError(TodorError):
    """Raised when a mutation targets a file that was never scanned."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"'{self.path}' is not tracked by todor")


class TodoNotFoundError(TodorError):
    """Raised when no TODO exists on the requested line."""

    def __init__(self, line: int) -> None:
        self.line = line
        super().__init__(f"no TODO found on line {line}")


class InvalidConfigFileError(TodorError):
    """Raised when a config file or fragment cannot be understood."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else None
        if self.path is not None:
            message = f"invalid config file '{self.path}': {message}"
        else:
            message = f"invalid config: {message}"
        super().__init__(message)


class InvalidIgnorePathError(TodorError):
    """Raised when an ignore entry is not a usable glob string."""

    def __init__(self, path: object) -> None:
        self.path = path
        super().__init__(f"invalid ignore path: {path!r}")
