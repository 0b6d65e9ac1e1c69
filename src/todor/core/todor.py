"""Main TodoR class - entry point for finding and removing TODO comments."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Iterable, Iterator

from todor.config.builder import Configuration, default_config
from todor.config.defaults import NO_EXTENSION
from todor.core.results import BatchResult, ErrorResult, Result
from todor.errors import FileNotTrackedError, TodorError
from todor.parser import TodoParser
from todor.remover import remove_todo_by_index, remove_todo_by_line
from todor.todo import Todo, TodoFile

logger = logging.getLogger(__name__)

TodoPredicate = Callable[[Todo], bool]


def file_extension(path: str | Path) -> str:
    """Extension of ``path`` without the dot, ``"sh"`` when there is none.

    The extension is used verbatim, so ``"RS"`` and ``"rs"`` differ.
    """
    suffix = Path(path).suffix
    return suffix[1:] if suffix else NO_EXTENSION


class TodoR:
    """
    Finds TODO comments in files and removes them.

    Every scanned file is tracked so its TODOs can later be removed by line
    number. Regexes are compiled once per group of extensions, on first use.

    Parameters
    ----------
    config : Configuration | None
        Resolved configuration. Built-in defaults when omitted.

    Attributes
    ----------
    config : Configuration
        The configuration in use.
    todo_files : list[TodoFile]
        Scanned files, in the order they were opened.

    Examples
    --------
    >>> todor = TodoR(TodoRBuilder().add_tag("hack").build())
    >>> todo_file = todor.open_todos("src/main.rs")
    >>> for todo in todo_file:
    ...     print(todo)
    line 2	TODO	item
    >>> todor.remove_todo("src/main.rs", 2)
    """

    def __init__(self, config: Configuration | None = None) -> None:
        self.config = config if config is not None else default_config()
        self.todo_files: list[TodoFile] = []
        self._comment_map = self.config.comment_map()

    @property
    def tags(self) -> tuple[str, ...]:
        return self.config.tags

    def parser_for(self, ext: str) -> TodoParser:
        """Parser for content with extension ``ext``."""
        return TodoParser(self._comment_map.get(ext, self.config.tags))

    # =========================================================================
    # Finding TODOs
    # =========================================================================

    def open_todos(self, path: str | Path) -> TodoFile:
        """Scan ``path`` for TODOs and start tracking it.

        Opening an already tracked path rescans it and replaces its entry.

        Raises
        ------
        InputIsDirError
            If ``path`` is a directory.
        CannotAccessFileError
            If ``path`` cannot be opened.
        """
        return self.open_filtered_todos(path, None)

    def open_filtered_todos(self, path: str | Path, pred: TodoPredicate | None) -> TodoFile:
        """Scan ``path`` keeping only TODOs for which ``pred`` is true."""
        path = Path(path)
        logger.info("looking at '%s'...", path)

        todos = self.parser_for(file_extension(path)).parse_file(path)
        if pred is not None:
            todos = [todo for todo in todos if pred(todo)]

        todo_file = TodoFile(path, todos)
        self._track(todo_file)
        return todo_file

    def open_many(
        self, paths: Iterable[str | Path], pred: TodoPredicate | None = None
    ) -> BatchResult:
        """Scan several files, continuing past files that fail.

        Returns
        -------
        BatchResult
            One Result per path; successful ones carry the TodoFile in
            ``data``, failed ones are ErrorResults.
        """
        batch = BatchResult()
        for path in paths:
            try:
                todo_file = self.open_filtered_todos(path, pred)
            except TodorError as e:
                logger.warning("%s", e)
                batch.append(
                    ErrorResult(message=str(e), path=Path(path), exception=e, operation="open_todos")
                )
                continue
            batch.append(
                Result(
                    success=True,
                    message=f"Found {len(todo_file)} TODOs in {path}",
                    path=todo_file.filepath,
                    data=todo_file,
                )
            )
        return batch

    def find_todos(self, content: str, ext: str) -> list[Todo]:
        """Find TODOs in ``content`` as if it came from a file with ``ext``."""
        return self.parser_for(ext.lstrip(".")).parse_content(content)

    def _track(self, todo_file: TodoFile) -> None:
        for i, tracked in enumerate(self.todo_files):
            if tracked.filepath == todo_file.filepath:
                self.todo_files[i] = todo_file
                return
        self.todo_files.append(todo_file)

    # =========================================================================
    # Removing TODOs
    # =========================================================================

    def get_todo_file(self, path: str | Path) -> TodoFile:
        """Return the tracked TodoFile for ``path``.

        Raises
        ------
        FileNotTrackedError
            If ``path`` was never scanned.
        """
        path = Path(path)
        for todo_file in self.todo_files:
            if todo_file.filepath == path:
                return todo_file
        raise FileNotTrackedError(path)

    def remove_todo(self, path: str | Path, line: int) -> None:
        """Delete the TODO on ``line`` of ``path``.

        Raises
        ------
        FileNotTrackedError
            If ``path`` was never scanned.
        TodoNotFoundError
            If ``path`` has no TODO on ``line``.
        """
        remove_todo_by_line(self.get_todo_file(path), line)

    def remove_todo_by_index(self, path: str | Path, index: int) -> None:
        """Delete the ``index``-th TODO of ``path``."""
        remove_todo_by_index(self.get_todo_file(path), index)

    # =========================================================================
    # Output
    # =========================================================================

    def num_files(self) -> int:
        return len(self.todo_files)

    def num_todos(self) -> int:
        return sum(len(todo_file) for todo_file in self.todo_files)

    def iter_todos(self) -> Iterator[tuple[Path, Todo]]:
        """Yield ``(filepath, todo)`` for every tracked TODO."""
        for todo_file in self.todo_files:
            for todo in todo_file.todos:
                yield todo_file.filepath, todo

    def clean_empty(self) -> None:
        """Stop tracking files that have no TODOs."""
        self.todo_files = [f for f in self.todo_files if not f.is_empty()]

    def tag_style(self, tag: str) -> Any:
        """Style configured for ``tag``, falling back to the generic tag style."""
        tag_styles = self.config.styles.get("tags") or {}
        return tag_styles.get(tag.upper(), self.config.styles.get("tag"))

    def to_dict(self) -> list[dict[str, Any]]:
        return [todo_file.to_dict() for todo_file in self.todo_files]
