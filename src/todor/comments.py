"""Comment delimiter model.

A comment type is either a single-line comment, which runs to the end of the
line, or a block comment with explicit start and end tokens. Tokens are
regex-escaped once when the comment type is created; the escaped forms are
exposed as :attr:`prefix` and :attr:`suffix` and are used verbatim by
:mod:`todor.patterns`.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Mapping, Union

from todor.errors import InvalidConfigFileError


@dataclass(frozen=True)
class SingleLineComment:
    """A comment that starts with ``token`` and runs to the end of the line.

    Parameters
    ----------
    token : str
        The literal comment token, e.g. ``"//"`` or ``"#"``.

    Examples
    --------
    >>> SingleLineComment("//").prefix
    '//'
    >>> SingleLineComment("//").suffix
    '$'
    """

    token: str
    prefix: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "prefix", re.escape(self.token))

    @property
    def suffix(self) -> str:
        """End-of-line anchor."""
        return "$"

    def to_dict(self) -> dict[str, str]:
        return {"single": self.token}


@dataclass(frozen=True)
class BlockComment:
    """A comment delimited by ``start`` and ``end`` tokens on the same line.

    Parameters
    ----------
    start : str
        The literal opening token, e.g. ``"/*"``.
    end : str
        The literal closing token, e.g. ``"*/"``.

    Examples
    --------
    >>> BlockComment("/*", "*/").prefix
    '/\\\\*'
    """

    start: str
    end: str
    prefix: str = field(init=False, repr=False, compare=False)
    suffix: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "prefix", re.escape(self.start))
        object.__setattr__(self, "suffix", re.escape(self.end))

    def to_dict(self) -> dict[str, str]:
        return {"prefix": self.start, "suffix": self.end}


CommentType = Union[SingleLineComment, BlockComment]


def comment_type_from_config(entry: Any) -> CommentType:
    """Build a comment type from a decoded config entry.

    Accepted shapes are ``{"single": "#"}``, ``{"prefix": "/*", "suffix": "*/"}``
    and ``{"block": ["/*", "*/"]}``.

    Raises
    ------
    InvalidConfigFileError
        If the entry matches none of the accepted shapes.
    """
    if not isinstance(entry, Mapping):
        raise InvalidConfigFileError(f"comment type must be a table, got {entry!r}")

    if "single" in entry:
        token = entry["single"]
        if not isinstance(token, str) or not token:
            raise InvalidConfigFileError(f"invalid single-line comment token {token!r}")
        return SingleLineComment(token)

    if "block" in entry:
        tokens = entry["block"]
        if (
            not isinstance(tokens, (list, tuple))
            or len(tokens) != 2
            or not all(isinstance(t, str) and t for t in tokens)
        ):
            raise InvalidConfigFileError(f"invalid block comment tokens {tokens!r}")
        return BlockComment(tokens[0], tokens[1])

    if "prefix" in entry and "suffix" in entry:
        start, end = entry["prefix"], entry["suffix"]
        if not (isinstance(start, str) and start and isinstance(end, str) and end):
            raise InvalidConfigFileError(
                f"invalid block comment tokens {start!r}, {end!r}"
            )
        return BlockComment(start, end)

    raise InvalidConfigFileError(
        f"comment type needs 'single' or 'prefix' and 'suffix': {dict(entry)!r}"
    )


@dataclass(frozen=True)
class CommentTypes:
    """Ordered, immutable collection of the comment types for a content type.

    The order is the order in which regexes are tried on each line.

    Examples
    --------
    >>> rust = CommentTypes().add_single("//").add_block("/*", "*/")
    >>> len(rust)
    2
    """

    types: tuple[CommentType, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "types", tuple(self.types))

    @classmethod
    def from_config(cls, entries: Iterable[Any]) -> CommentTypes:
        """Build from a list of decoded comment type entries."""
        if isinstance(entries, (str, bytes, Mapping)):
            raise InvalidConfigFileError(f"comment types must be a list, got {entries!r}")
        return cls(tuple(comment_type_from_config(e) for e in entries))

    def add_single(self, token: str) -> CommentTypes:
        """Return a copy with a single-line comment type appended."""
        return CommentTypes(self.types + (SingleLineComment(token),))

    def add_block(self, start: str, end: str) -> CommentTypes:
        """Return a copy with a block comment type appended."""
        return CommentTypes(self.types + (BlockComment(start, end),))

    def __iter__(self) -> Iterator[CommentType]:
        return iter(self.types)

    def __len__(self) -> int:
        return len(self.types)

    def __bool__(self) -> bool:
        return bool(self.types)

    def to_list(self) -> list[dict[str, str]]:
        return [t.to_dict() for t in self.types]
