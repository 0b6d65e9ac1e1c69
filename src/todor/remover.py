"""Deleting TODO comment lines from files.

A removal copies the file into a sibling temporary file, skipping one
physical line, and then renames the temporary file over the original. The
rename is the only step that changes anything: if an earlier step fails the
file on disk and the :class:`~todor.todo.TodoFile` are left as they were.
"""
from __future__ import annotations

import logging
import os
import shutil
import tempfile
from typing import BinaryIO

from todor.errors import TodoNotFoundError
from todor.todo import TodoFile

logger = logging.getLogger(__name__)


def _strip_terminator(line: bytes) -> bytes:
    if line.endswith(b"\r\n"):
        return line[:-2]
    if line.endswith(b"\n"):
        return line[:-1]
    return line


def copy_except_line(orig: BinaryIO, copy: BinaryIO, line_number: int) -> bool:
    """Copy ``orig`` to ``copy`` leaving out the 1-based ``line_number``.

    Lines are split on ``\\n`` and copied byte for byte, line endings
    included. When the skipped line is the last one and has no line ending,
    the line ending of the new last line is dropped as well so no dangling
    separator is left behind.

    Returns
    -------
    bool
        True if a line was skipped, False if ``line_number`` is past the end.
    """
    previous: bytes | None = None
    removed: bytes | None = None
    removed_is_last = False

    for number, line in enumerate(orig, 1):
        if number == line_number:
            removed = line
            removed_is_last = True
            continue

        removed_is_last = False
        if previous is not None:
            copy.write(previous)
        previous = line

    if previous is not None:
        if removed_is_last and not removed.endswith(b"\n"):
            previous = _strip_terminator(previous)
        copy.write(previous)

    return removed is not None


def _rewrite_without_line(todo_file: TodoFile, line_number: int) -> None:
    """Replace ``todo_file``'s file with a copy lacking ``line_number``."""
    filepath = todo_file.filepath
    fd, temp_name = tempfile.mkstemp(
        prefix=f".{filepath.name}.", suffix=".tmp", dir=filepath.parent
    )

    try:
        with os.fdopen(fd, "wb") as temp, open(filepath, "rb") as orig:
            if not copy_except_line(orig, temp, line_number):
                logger.debug(
                    "'%s' has no line %d, it changed since it was scanned",
                    filepath,
                    line_number,
                )
            temp.flush()
            os.fsync(temp.fileno())
        shutil.copymode(filepath, temp_name)
        os.replace(temp_name, filepath)
    except BaseException:
        try:
            os.unlink(temp_name)
        except FileNotFoundError:
            pass
        raise


def remove_todo_by_index(todo_file: TodoFile, index: int) -> None:
    """Delete the line of the TODO at ``index`` and renumber the rest.

    Every TODO after ``index`` moves up by one line.

    Raises
    ------
    IndexError
        If ``index`` is not a valid position in ``todo_file.todos``.
    OSError
        If the file cannot be rewritten. Nothing is changed in that case.
    """
    if not 0 <= index < len(todo_file.todos):
        raise IndexError(
            f"TODO index {index} out of range for {len(todo_file.todos)} TODOs"
        )

    todo_line = todo_file.todos[index].line
    logger.debug("removing content in '%s' on line %d", todo_file.filepath, todo_line)
    _rewrite_without_line(todo_file, todo_line)

    del todo_file.todos[index]
    for todo in todo_file.todos[index:]:
        todo.line -= 1


def remove_todo_by_line(todo_file: TodoFile, line: int) -> None:
    """Delete the TODO on physical ``line`` and renumber the rest.

    Raises
    ------
    TodoNotFoundError
        If no TODO was found on ``line``. The file is not touched.
    """
    for index, todo in enumerate(todo_file.todos):
        if todo.line == line:
            break
        if todo.line > line:
            raise TodoNotFoundError(line)
    else:
        raise TodoNotFoundError(line)

    remove_todo_by_index(todo_file, index)
