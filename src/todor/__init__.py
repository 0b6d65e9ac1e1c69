"""
todor - find and remove TODO comments in source code of many languages.

todor recognizes tagged comments such as ``// TODO: item`` or
``# FIXME(alice): item`` using per-extension comment syntax, and can delete
the line of a found TODO from its file.

Classes
-------
TodoR
    Engine that scans files and removes TODOs from them.

TodoRBuilder
    Resolves defaults, config files, extra tags and overrides into a
    Configuration.

Todo
    One TODO comment: line, tag and content.

TodoFile
    The TODOs of one file.

TodoParser
    Extracts TODOs from lines using compiled comment regexes.

CommentTypes
    Ordered single-line and block comment types for an extension.

Examples
--------
>>> from todor import TodoR, TodoRBuilder
>>>
>>> config = TodoRBuilder().add_tag("hack").build()
>>> todor = TodoR(config)
>>> todo_file = todor.open_todos("src/main.rs")
>>>
>>> # Users are derived from the content
>>> mine = [t for t in todo_file if t.tags_user("alice")]
>>>
>>> # Delete the TODO on line 12; later TODOs move up a line
>>> todor.remove_todo("src/main.rs", 12)
"""
from __future__ import annotations

from todor.comments import BlockComment, CommentType, CommentTypes, SingleLineComment
from todor.config import Configuration, ConfigFragment, TodoRBuilder
from todor.core import BatchResult, ErrorResult, Result, TodoR
from todor.errors import (
    CannotAccessFileError,
    FileNotTrackedError,
    InputIsDirError,
    InvalidConfigFileError,
    InvalidDefaultExtensionError,
    InvalidExtensionError,
    InvalidIgnorePathError,
    TodoNotFoundError,
    TodorError,
)
from todor.maps import CommentRegexMultiMap
from todor.parser import TodoParser
from todor.remover import remove_todo_by_index, remove_todo_by_line
from todor.todo import Todo, TodoFile

__version__ = "0.1.0"

__all__ = [
    # Engine
    "TodoR",
    "TodoRBuilder",
    "Configuration",
    "ConfigFragment",
    # Data
    "Todo",
    "TodoFile",
    "TodoParser",
    "CommentType",
    "CommentTypes",
    "SingleLineComment",
    "BlockComment",
    "CommentRegexMultiMap",
    # Mutation
    "remove_todo_by_index",
    "remove_todo_by_line",
    # Results
    "Result",
    "ErrorResult",
    "BatchResult",
    # Errors
    "TodorError",
    "InputIsDirError",
    "CannotAccessFileError",
    "InvalidExtensionError",
    "InvalidDefaultExtensionError",
    "FileNotTrackedError",
    "TodoNotFoundError",
    "InvalidConfigFileError",
    "InvalidIgnorePathError",
]
