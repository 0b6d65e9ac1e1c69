"""Configuration fragments as decoded from config files."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from todor.comments import CommentTypes
from todor.errors import InvalidConfigFileError


@dataclass(frozen=True)
class CommentsConfig:
    """Comment types for one or more extensions.

    Attributes
    ----------
    exts : tuple[str, ...]
        Extensions the comment types apply to, without leading dots.
    types : CommentTypes
        The comment types. They replace any earlier comment types for the
        same extensions.
    """

    exts: tuple[str, ...]
    types: CommentTypes

    @classmethod
    def from_dict(cls, data: Any, path: Path | None = None) -> CommentsConfig:
        """Build from ``{"ext": ..., "exts": [...], "types": [...]}``."""
        if not isinstance(data, Mapping):
            raise InvalidConfigFileError(f"comments entry must be a table, got {data!r}", path)

        exts: list[str] = []
        if data.get("ext") is not None:
            exts.append(data["ext"])
        extra = data.get("exts")
        if extra is not None:
            if isinstance(extra, str) or not isinstance(extra, (list, tuple)):
                raise InvalidConfigFileError(f"'exts' must be a list, got {extra!r}", path)
            exts.extend(extra)

        if not exts:
            raise InvalidConfigFileError("comments entry needs 'ext' or 'exts'", path)
        for ext in exts:
            if not isinstance(ext, str) or not ext:
                raise InvalidConfigFileError(f"invalid extension {ext!r}", path)

        if "types" not in data:
            raise InvalidConfigFileError(
                f"comments entry for {', '.join(exts)} has no 'types'", path
            )

        try:
            types = CommentTypes.from_config(data["types"])
        except InvalidConfigFileError as e:
            if path is None:
                raise
            raise InvalidConfigFileError(e.message, path) from e

        return cls(tuple(ext.lstrip(".") for ext in exts), types)


def _string_list(data: Mapping[str, Any], key: str, path: Path | None) -> tuple[str, ...] | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise InvalidConfigFileError(f"'{key}' must be a list, got {value!r}", path)
    for item in value:
        if not isinstance(item, str):
            raise InvalidConfigFileError(f"'{key}' entries must be strings, got {item!r}", path)
    return tuple(value)


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, list):
        return tuple(_freeze(item) for item in value)
    return value


def freeze_styles(styles: Mapping[str, Any]) -> Mapping[str, Any]:
    """Read-only copy of ``styles``, nested tables included.

    Keys of the ``tags`` table are upper-cased so they match tags the way
    every other tag comparison does.
    """
    styles = dict(styles)
    tag_styles = styles.get("tags")
    if isinstance(tag_styles, Mapping):
        styles["tags"] = {str(tag).upper(): style for tag, style in tag_styles.items()}
    return _freeze(styles)


@dataclass(frozen=True)
class ConfigFragment:
    """One layer of configuration.

    ``None`` means the fragment leaves that field alone.

    Attributes
    ----------
    tags : tuple[str, ...] | None
        Replaces earlier tags. An empty list in the source counts as unset.
    ignore : tuple[str, ...] | None
        Replaces earlier ignore globs.
    default_ext : str | None
        Replaces the earlier default extension.
    comments : tuple[CommentsConfig, ...]
        Per-extension comment types, each replacing earlier entries for the
        same extensions.
    styles : Mapping[str, Any] | None
        Style keys; each key replaces the earlier value of the same key.
    source : Path | None
        Where the fragment was read from, for messages.
    """

    tags: tuple[str, ...] | None = None
    ignore: tuple[str, ...] | None = None
    default_ext: str | None = None
    comments: tuple[CommentsConfig, ...] = ()
    styles: Mapping[str, Any] | None = None
    source: Path | None = field(default=None, compare=False)

    @classmethod
    def from_dict(cls, data: Any, path: Path | None = None) -> ConfigFragment:
        """Build a fragment from decoded config data.

        Unknown keys are ignored. ``default_comments`` entries are applied
        before ``comments`` entries.

        Raises
        ------
        InvalidConfigFileError
            If a known key has the wrong shape.
        """
        if data is None:
            return cls(source=path)
        if not isinstance(data, Mapping):
            raise InvalidConfigFileError(f"top level must be a table, got {type(data).__name__}", path)

        default_ext = data.get("default_ext")
        if default_ext is not None and not isinstance(default_ext, str):
            raise InvalidConfigFileError(f"'default_ext' must be a string, got {default_ext!r}", path)
        if default_ext == "":
            default_ext = None

        comments: list[CommentsConfig] = []
        for key in ("default_comments", "comments"):
            entries = data.get(key)
            if entries is None:
                continue
            if isinstance(entries, (str, Mapping)) or not isinstance(entries, (list, tuple)):
                raise InvalidConfigFileError(f"'{key}' must be a list, got {entries!r}", path)
            comments.extend(CommentsConfig.from_dict(entry, path) for entry in entries)

        styles = data.get("styles")
        if styles is not None:
            if not isinstance(styles, Mapping):
                raise InvalidConfigFileError(f"'styles' must be a table, got {styles!r}", path)
            styles = freeze_styles(styles)

        return cls(
            tags=_string_list(data, "tags", path) or None,
            ignore=_string_list(data, "ignore", path),
            default_ext=default_ext.lstrip(".") if default_ext else None,
            comments=tuple(comments),
            styles=styles,
            source=path,
        )
