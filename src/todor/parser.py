"""TODO comment parser for extracting tagged comments from source lines."""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from todor.errors import CannotAccessFileError, InputIsDirError
from todor.patterns import CONTENT_GROUP, TAG_GROUP, USER_GROUP
from todor.todo import Todo

logger = logging.getLogger(__name__)


def strip_line_ending(line: str) -> str:
    """Remove one trailing ``\\n`` and then one trailing ``\\r``."""
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def iter_file_lines(file_path: Path) -> Iterator[str]:
    """Yield the physical lines of a file, decoded lossily as UTF-8.

    Lines are split on ``\\n`` only so that numbering agrees with
    :func:`todor.remover.copy_except_line`.

    Raises
    ------
    InputIsDirError
        If ``file_path`` is a directory.
    CannotAccessFileError
        If the file cannot be opened.
    """
    if file_path.is_dir():
        raise InputIsDirError(file_path)

    try:
        f = open(file_path, "rb")
    except OSError as e:
        raise CannotAccessFileError(file_path, e.strerror or str(e)) from e

    with f:
        try:
            for raw in f:
                yield strip_line_ending(raw.decode("utf-8", errors="replace"))
        except OSError as e:
            raise CannotAccessFileError(file_path, e.strerror or str(e)) from e


class TodoParser:
    """Parse TODO comments using a set of compiled comment regexes.

    Every regex is tried against every line, in order, and each match yields
    one :class:`~todor.todo.Todo`. A line matched by several regexes therefore
    yields several TODOs.

    Recognized formats (for a ``//`` comment and tag ``TODO``):

    - ``// TODO: message``
    - ``// TODO message``
    - ``// TODO(user): message``, content becomes ``@user message``
    - ``// todo: message for @user``

    Parameters
    ----------
    regexs : Sequence[re.Pattern]
        Regexes built by :func:`todor.patterns.build_parser_regexs`.

    Examples
    --------
    >>> from todor.comments import CommentTypes
    >>> from todor.patterns import build_parser_regexs
    >>> regexs = build_parser_regexs(CommentTypes().add_single("//"), ["TODO"])
    >>> parser = TodoParser(regexs)
    >>> parser.parse_line("// TODO(john): Fix this bug", 10)[0].content
    '@john Fix this bug'
    """

    def __init__(self, regexs: Sequence[re.Pattern[str]]) -> None:
        self._regexs = tuple(regexs)

    @property
    def regexs(self) -> tuple[re.Pattern[str], ...]:
        return self._regexs

    def parse_line(self, line: str, line_number: int) -> list[Todo]:
        """Parse a single line for TODO comments.

        Parameters
        ----------
        line : str
            The line to parse, without its line ending.
        line_number : int
            1-based line number.

        Returns
        -------
        list[Todo]
            One TODO per matching regex, possibly empty.
        """
        todos: list[Todo] = []

        for regex in self._regexs:
            match = regex.search(line)
            if not match:
                continue

            content = match.group(CONTENT_GROUP)
            user = match.group(USER_GROUP)
            if user is not None:
                content = f"@{user} {content}"

            todos.append(Todo(line_number, match.group(TAG_GROUP), content.strip()))

        return todos

    def parse_lines(self, lines: Iterable[str]) -> list[Todo]:
        """Parse TODO comments from a stream of physical lines."""
        todos: list[Todo] = []

        for line_number, line in enumerate(lines, 1):
            todos.extend(self.parse_line(line, line_number))

        return todos

    def parse_content(self, content: str) -> list[Todo]:
        """Parse TODO comments from a content string.

        The content is split on ``\\n``; a ``\\r`` before it is dropped.
        """
        if not content:
            return []
        lines = content.split("\n")
        if lines[-1] == "":
            lines.pop()
        return self.parse_lines(strip_line_ending(line) for line in lines)

    def parse_file(self, file_path: Path) -> list[Todo]:
        """Parse all TODO comments from a file.

        Raises
        ------
        InputIsDirError
            If ``file_path`` is a directory.
        CannotAccessFileError
            If the file cannot be opened.
        """
        logger.debug("capturing content of '%s' against %d regexes", file_path, len(self._regexs))
        return self.parse_lines(iter_file_lines(file_path))
