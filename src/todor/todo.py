"""Todo and TodoFile result types."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator

from todor.patterns import USER_PATTERN


@dataclass
class Todo:
    """A single TODO comment found in a file.

    Users are not stored separately: an explicit ``TODO(user):`` is folded
    into :attr:`content` as ``@user`` by the parser, and :meth:`users` scans
    the content for every ``@user`` mention on each call.

    Attributes
    ----------
    line : int
        1-based physical line number of the comment.
    tag : str
        Matched tag, upper-cased.
    content : str
        Text of the TODO after the tag.

    Examples
    --------
    >>> todo = Todo(3, "todo", "@alice ship it")
    >>> todo.tag
    'TODO'
    >>> todo.tags_user("alice")
    True
    """

    line: int
    tag: str
    content: str

    def __post_init__(self) -> None:
        self.tag = self.tag.upper()

    def users(self) -> list[str]:
        """All ``@user`` mentions in the content, ``@`` included."""
        return USER_PATTERN.findall(self.content)

    def tags_user(self, user: str) -> bool:
        """True if ``user`` (without ``@``) is mentioned. Case-sensitive."""
        return any(u[1:] == user for u in self.users())

    def to_dict(self) -> dict[str, Any]:
        return {
            "line": self.line,
            "tag": self.tag,
            "content": self.content,
            "users": self.users(),
        }

    def __str__(self) -> str:
        return f"line {self.line}\t{self.tag}\t{self.content}"


@dataclass
class TodoFile:
    """The TODOs found in one file, ordered by line.

    Attributes
    ----------
    filepath : Path
        Path of the scanned file.
    todos : list[Todo]
        TODOs in scan order.
    """

    filepath: Path
    todos: list[Todo] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.filepath = Path(self.filepath)

    def __len__(self) -> int:
        return len(self.todos)

    def __iter__(self) -> Iterator[Todo]:
        return iter(self.todos)

    def is_empty(self) -> bool:
        return not self.todos

    def set_todos(self, todos: list[Todo]) -> None:
        self.todos = todos

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": str(self.filepath),
            "todos": [todo.to_dict() for todo in self.todos],
        }
