"""Layered configuration builder.

Configuration is resolved from four tiers, each overriding the ones before:

1. built-in defaults (:mod:`todor.config.defaults`)
2. config fragments, in the order they were added
3. additive tags (:meth:`TodoRBuilder.add_tag`)
4. overrides (:meth:`TodoRBuilder.add_override_tags` and friends)

Tiers 1 and 2 are combined with :func:`merge_fragments`, a left fold of
:func:`merge` over immutable :class:`ConfigFragment` objects. Per field:

- ``tags``, ``ignore``, ``default_ext``: a set value replaces the earlier one
- ``comments``: each entry replaces the comment types of the extensions it
  names, wholesale; entries are never merged type by type
- ``styles``: keys replace earlier keys of the same name
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import cached_property, reduce
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from todor.comments import CommentTypes
from todor.config.defaults import (
    DEFAULT_COMMENTS,
    DEFAULT_EXT,
    DEFAULT_STYLES,
    DEFAULT_TAGS,
    FALLBACK_COMMENT_TYPES,
)
from todor.config.fragment import CommentsConfig, ConfigFragment, freeze_styles
from todor.config.loader import load_config_file
from todor.errors import (
    InvalidConfigFileError,
    InvalidDefaultExtensionError,
    InvalidIgnorePathError,
)
from todor.maps import CommentRegexMultiMap

logger = logging.getLogger(__name__)

DEFAULT_FRAGMENT = ConfigFragment(
    tags=DEFAULT_TAGS,
    ignore=(),
    default_ext=DEFAULT_EXT,
    comments=tuple(CommentsConfig(exts, types) for exts, types in DEFAULT_COMMENTS),
    styles=DEFAULT_STYLES,
)


def _merge_comments(
    earlier: tuple[CommentsConfig, ...], later: tuple[CommentsConfig, ...]
) -> tuple[CommentsConfig, ...]:
    groups = list(earlier)
    for entry in later:
        replaced = set(entry.exts)
        groups = [
            CommentsConfig(tuple(e for e in g.exts if e not in replaced), g.types)
            for g in groups
        ]
        groups = [g for g in groups if g.exts]
        groups.append(entry)
    return tuple(groups)


def merge(earlier: ConfigFragment, later: ConfigFragment) -> ConfigFragment:
    """Merge two fragments, ``later`` taking precedence field by field."""
    if earlier.styles is None and later.styles is None:
        styles = None
    else:
        styles = freeze_styles({**(earlier.styles or {}), **(later.styles or {})})

    return ConfigFragment(
        tags=later.tags if later.tags is not None else earlier.tags,
        ignore=later.ignore if later.ignore is not None else earlier.ignore,
        default_ext=later.default_ext if later.default_ext is not None else earlier.default_ext,
        comments=_merge_comments(earlier.comments, later.comments),
        styles=styles,
        source=later.source,
    )


def merge_fragments(fragments: Iterable[ConfigFragment]) -> ConfigFragment:
    """Left fold of :func:`merge` over ``fragments``."""
    return reduce(merge, fragments, ConfigFragment())


def canonical_tags(tags: Iterable[str]) -> tuple[str, ...]:
    """Upper-case ``tags`` and drop repeats, keeping first occurrences."""
    seen: dict[str, None] = {}
    for tag in tags:
        seen.setdefault(tag.upper(), None)
    return tuple(seen)


@dataclass(frozen=True)
class Configuration:
    """Resolved, immutable todor configuration.

    Attributes
    ----------
    tags : tuple[str, ...]
        Upper-cased tags to search for.
    ignore : tuple[str, ...]
        Ignore globs, passed through to path filtering.
    comment_groups : tuple[CommentsConfig, ...]
        Extensions grouped by the comment types they share.
    default_ext : str
        Extension whose comment types are used for unknown extensions.
    styles : Mapping[str, Any]
        Opaque style settings, passed through to output.
    """

    tags: tuple[str, ...]
    ignore: tuple[str, ...]
    comment_groups: tuple[CommentsConfig, ...]
    default_ext: str
    styles: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @cached_property
    def ext_to_types(self) -> Mapping[str, CommentTypes]:
        """Read-only mapping of extension to comment types."""
        return MappingProxyType(
            {ext: group.types for group in self.comment_groups for ext in group.exts}
        )

    @property
    def default_comment_types(self) -> CommentTypes:
        return self.ext_to_types[self.default_ext]

    def comment_map(self) -> CommentRegexMultiMap:
        """Create a regex cache seeded with this configuration's comments."""
        cmap = CommentRegexMultiMap(FALLBACK_COMMENT_TYPES)
        for group in self.comment_groups:
            cmap.insert_keys(group.exts, group.types)
        cmap.reset_fallback(self.default_ext)
        return cmap


class TodoRBuilder:
    """Builder collecting configuration tiers into a :class:`Configuration`.

    Examples
    --------
    >>> config = (
    ...     TodoRBuilder()
    ...     .add_config_file("todor.toml")
    ...     .add_tags(["foo"])
    ...     .build()
    ... )
    """

    def __init__(self) -> None:
        self._fragments: list[ConfigFragment] = []
        self._added_tags: list[str] = []
        self._override_tags: list[str] | None = None
        self._override_ignore: list[str] | None = None
        self._override_default_ext: str | None = None
        self._no_style = False

    # =========================================================================
    # Config fragments
    # =========================================================================

    def add_config_fragment(self, fragment: ConfigFragment) -> TodoRBuilder:
        """Add a fragment on top of the ones already added."""
        self._fragments.append(fragment)
        return self

    def add_config(self, data: Mapping[str, Any]) -> TodoRBuilder:
        """Add already-decoded config data."""
        return self.add_config_fragment(ConfigFragment.from_dict(data))

    def add_config_file(self, path: str | Path, file_format: str | None = None) -> TodoRBuilder:
        """Read a config file and add it as a fragment.

        Raises
        ------
        CannotAccessFileError
            If the file cannot be read.
        InvalidConfigFileError
            If the file cannot be decoded.
        """
        logger.info("applying config file '%s'", path)
        return self.add_config_fragment(load_config_file(path, file_format))

    # =========================================================================
    # Tags, ignores and overrides
    # =========================================================================

    def add_tag(self, tag: str) -> TodoRBuilder:
        """Search for ``tag`` in addition to default and config tags."""
        self._added_tags.append(tag)
        return self

    def add_tags(self, tags: Iterable[str]) -> TodoRBuilder:
        for tag in tags:
            self.add_tag(tag)
        return self

    def add_override_tag(self, tag: str) -> TodoRBuilder:
        """Search only for override tags, ignoring every other tier."""
        if self._override_tags is None:
            self._override_tags = []
        self._override_tags.append(tag)
        return self

    def add_override_tags(self, tags: Iterable[str]) -> TodoRBuilder:
        if self._override_tags is None:
            self._override_tags = []
        self._override_tags.extend(tags)
        return self

    def add_override_ignore_path(self, path: str) -> TodoRBuilder:
        if self._override_ignore is None:
            self._override_ignore = []
        self._override_ignore.append(path)
        return self

    def add_override_ignore_paths(self, paths: Iterable[str]) -> TodoRBuilder:
        if self._override_ignore is None:
            self._override_ignore = []
        self._override_ignore.extend(paths)
        return self

    def set_override_default_ext(self, ext: str) -> TodoRBuilder:
        self._override_default_ext = ext.lstrip(".")
        return self

    def set_no_style(self) -> TodoRBuilder:
        """Drop all styles from the built configuration."""
        self._no_style = True
        return self

    # =========================================================================
    # Build
    # =========================================================================

    def build(self) -> Configuration:
        """Resolve every tier into a :class:`Configuration`.

        Raises
        ------
        InvalidDefaultExtensionError
            If the default extension has no comment types.
        InvalidIgnorePathError
            If an ignore entry is not a non-empty string.
        InvalidConfigFileError
            If no tags are left to search for.
        """
        merged = merge_fragments([DEFAULT_FRAGMENT, *self._fragments])

        if self._override_tags is not None:
            tags = canonical_tags(self._override_tags)
        else:
            tags = canonical_tags([*(merged.tags or ()), *self._added_tags])
        if not tags or not all(tags):
            raise InvalidConfigFileError(f"no usable tags to search for: {list(tags)!r}")

        ignore = self._override_ignore if self._override_ignore is not None else merged.ignore
        ignore = tuple(ignore or ())
        for path in ignore:
            if not isinstance(path, str) or not path.strip():
                raise InvalidIgnorePathError(path)

        default_ext = self._override_default_ext or merged.default_ext or DEFAULT_EXT

        config = Configuration(
            tags=tags,
            ignore=ignore,
            comment_groups=merged.comments,
            default_ext=default_ext,
            styles=MappingProxyType({}) if self._no_style else merged.styles or MappingProxyType({}),
        )
        if default_ext not in config.ext_to_types:
            raise InvalidDefaultExtensionError(default_ext)

        logger.debug(
            "built config with tags %s and %d extensions", ", ".join(tags), len(config.ext_to_types)
        )
        return config


def default_config() -> Configuration:
    """Configuration with only the built-in defaults."""
    return TodoRBuilder().build()
