"""
Tests for todor.config.builder module.

This module tests resolving configuration tiers:
- Built-in defaults
- Fragments merged in order
- Additive tags and overrides
- Validation of the resolved configuration
- Immutability of the result

Coverage targets:
- Comment entries replace earlier comment types wholesale
- Styles merge key by key
- Errors for bad default extensions, ignore paths and tags
"""
from __future__ import annotations

import dataclasses

import pytest

from todor.comments import CommentTypes
from todor.config.builder import (
    Configuration,
    TodoRBuilder,
    canonical_tags,
    default_config,
    merge,
    merge_fragments,
)
from todor.config.fragment import CommentsConfig, ConfigFragment
from todor.errors import (
    InvalidConfigFileError,
    InvalidDefaultExtensionError,
    InvalidIgnorePathError,
)

HASH = CommentTypes().add_single("#")
C_STYLE = CommentTypes().add_single("//").add_block("/*", "*/")


# =============================================================================
# Merge Tests
# =============================================================================

class TestMerge:
    """Merging two fragments."""

    def test_later_scalar_fields_win(self):
        earlier = ConfigFragment(tags=("A",), ignore=("x",), default_ext="rs")
        later = ConfigFragment(tags=("B",), default_ext="py")

        merged = merge(earlier, later)

        assert merged.tags == ("B",)
        assert merged.ignore == ("x",)
        assert merged.default_ext == "py"

    def test_comments_replace_extensions(self):
        """A later entry takes its extensions out of earlier groups."""
        earlier = ConfigFragment(comments=(CommentsConfig(("rs", "c"), C_STYLE),))
        later = ConfigFragment(comments=(CommentsConfig(("rs",), HASH),))

        merged = merge(earlier, later)

        assert merged.comments == (
            CommentsConfig(("c",), C_STYLE),
            CommentsConfig(("rs",), HASH),
        )

    def test_emptied_groups_dropped(self):
        earlier = ConfigFragment(comments=(CommentsConfig(("rs",), C_STYLE),))
        later = ConfigFragment(comments=(CommentsConfig(("rs",), HASH),))

        assert merge(earlier, later).comments == (CommentsConfig(("rs",), HASH),)

    def test_styles_merge_per_key(self):
        earlier = ConfigFragment(styles={"tag": "GREEN", "content": "CYAN"})
        later = ConfigFragment(styles={"tag": "RED"})

        assert dict(merge(earlier, later).styles) == {"tag": "RED", "content": "CYAN"}

    def test_merge_fragments_is_left_fold(self):
        fragments = [
            ConfigFragment(tags=("A",)),
            ConfigFragment(ignore=("x",)),
            ConfigFragment(tags=("C",)),
        ]

        merged = merge_fragments(fragments)

        assert merged.tags == ("C",)
        assert merged.ignore == ("x",)

    def test_merge_fragments_empty(self):
        assert merge_fragments([]) == ConfigFragment()


def test_canonical_tags():
    assert canonical_tags(["todo", "Fixme", "TODO", "foo"]) == ("TODO", "FIXME", "FOO")


# =============================================================================
# Builder Tests
# =============================================================================

class TestDefaults:
    """Configuration built from defaults alone."""

    def test_default_tags(self):
        assert default_config().tags == ("TODO", "FIXME")

    def test_default_extension(self):
        config = default_config()

        assert config.default_ext == "sh"
        assert config.default_comment_types == HASH

    def test_builtin_comment_table(self):
        ext_to_types = default_config().ext_to_types

        assert ext_to_types["rs"] == C_STYLE
        assert ext_to_types["py"] == CommentTypes().add_single("#").add_block('"""', '"""')
        assert ext_to_types["lua"] == CommentTypes().add_single("--").add_block("--[[", "]]")
        assert ext_to_types["html"] == CommentTypes().add_block("<!--", "-->")

    def test_default_ignore_empty(self):
        assert default_config().ignore == ()


class TestTags:
    """Additive and override tags."""

    def test_add_tag(self):
        config = TodoRBuilder().add_tag("foo").build()

        assert config.tags == ("TODO", "FIXME", "FOO")

    def test_added_tags_deduplicated(self):
        config = TodoRBuilder().add_tags(["todo", "hack", "HACK"]).build()

        assert config.tags == ("TODO", "FIXME", "HACK")

    def test_added_tags_extend_config_tags(self):
        config = TodoRBuilder().add_config({"tags": ["foo"]}).add_tag("bar").build()

        assert config.tags == ("FOO", "BAR")

    def test_override_tags_win(self):
        config = (
            TodoRBuilder()
            .add_config({"tags": ["foo"]})
            .add_tag("bar")
            .add_override_tag("only")
            .build()
        )

        assert config.tags == ("ONLY",)

    def test_empty_tag_rejected(self):
        with pytest.raises(InvalidConfigFileError):
            TodoRBuilder().add_override_tags([""]).build()

    def test_no_tags_rejected(self):
        with pytest.raises(InvalidConfigFileError):
            TodoRBuilder().add_override_tags([]).build()


class TestFragments:
    """Config fragments applied on top of defaults."""

    def test_config_file(self, write_file, sample_toml_config: str):
        path = write_file("todor.toml", sample_toml_config)

        config = TodoRBuilder().add_config_file(path).build()

        assert config.tags == ("FOO", "ITEM")
        assert config.ignore == ("target/*",)

    def test_comment_replacement_is_wholesale(self, write_file, sample_toml_config: str):
        """rs gets only '#'; other C-style extensions keep their comments."""
        config = TodoRBuilder().add_config_file(write_file("t.toml", sample_toml_config)).build()

        assert config.ext_to_types["rs"] == HASH
        assert config.ext_to_types["c"] == C_STYLE
        assert config.ext_to_types["h"] == C_STYLE

    def test_later_fragment_wins(self):
        config = (
            TodoRBuilder()
            .add_config({"tags": ["a"], "default_ext": "py"})
            .add_config({"tags": ["b"]})
            .build()
        )

        assert config.tags == ("B",)
        assert config.default_ext == "py"

    def test_new_extension(self):
        config = TodoRBuilder().add_config(
            {"comments": [{"ext": "zig", "types": [{"single": "//"}]}]}
        ).build()

        assert config.ext_to_types["zig"] == CommentTypes().add_single("//")

    def test_styles_merge(self):
        config = TodoRBuilder().add_config({"styles": {"tag": "RED"}}).build()

        assert config.styles["tag"] == "RED"
        assert config.styles["content"] == "CYAN"

    def test_set_no_style(self):
        config = TodoRBuilder().add_config({"styles": {"tag": "RED"}}).set_no_style().build()

        assert dict(config.styles) == {}


class TestOverrides:
    """Override tier for ignore paths and default extension."""

    def test_override_ignore(self):
        config = (
            TodoRBuilder()
            .add_config({"ignore": ["a/*"]})
            .add_override_ignore_path("b/*")
            .build()
        )

        assert config.ignore == ("b/*",)

    def test_override_default_ext(self):
        config = TodoRBuilder().set_override_default_ext(".rs").build()

        assert config.default_ext == "rs"
        assert config.default_comment_types == C_STYLE

    def test_invalid_default_ext(self):
        with pytest.raises(InvalidDefaultExtensionError) as exc_info:
            TodoRBuilder().set_override_default_ext("nope").build()

        assert exc_info.value.ext == "nope"

    def test_invalid_default_ext_from_config(self):
        with pytest.raises(InvalidDefaultExtensionError):
            TodoRBuilder().add_config({"default_ext": "nope"}).build()

    @pytest.mark.parametrize("path", ["", "   "])
    def test_invalid_ignore_path(self, path: str):
        with pytest.raises(InvalidIgnorePathError):
            TodoRBuilder().add_override_ignore_path(path).build()


# =============================================================================
# Configuration Tests
# =============================================================================

class TestConfiguration:
    """The resolved configuration object."""

    def test_is_frozen(self):
        config = default_config()

        with pytest.raises(dataclasses.FrozenInstanceError):
            config.tags = ("X",)  # type: ignore[misc]

    def test_ext_to_types_read_only(self):
        config = default_config()

        with pytest.raises(TypeError):
            config.ext_to_types["rs"] = HASH  # type: ignore[index]

    def test_styles_read_only(self):
        config = default_config()

        with pytest.raises(TypeError):
            config.styles["tag"] = "RED"  # type: ignore[index]

    def test_nested_styles_read_only(self):
        """
        Nested style tables are frozen too, so one configuration cannot
        change the built-in styles seen by configurations built later.
        """
        config = default_config()

        with pytest.raises(TypeError):
            config.styles["tags"]["FIXME"] = "RED"  # type: ignore[index]

        assert "FIXME" not in TodoRBuilder().build().styles["tags"]

    def test_config_styles_not_shared_with_source(self):
        data = {"styles": {"tags": {"FIXME": "RED"}}}
        config = TodoRBuilder().add_config(data).build()

        data["styles"]["tags"]["FIXME"] = "BLUE"

        assert config.styles["tags"]["FIXME"] == "RED"
        with pytest.raises(TypeError):
            config.styles["tags"]["TODO"] = "RED"  # type: ignore[index]

    def test_tag_style_keys_upper_cased(self):
        config = TodoRBuilder().add_config({"styles": {"tags": {"fixme": "RED"}}}).build()

        assert dict(config.styles["tags"]) == {"FIXME": "RED"}

    def test_comment_map_fallback_matches_default_ext(self):
        config = TodoRBuilder().set_override_default_ext("sql").build()
        cmap = config.comment_map()

        fallback = [r.pattern for r in cmap.get("unknown", config.tags)]
        default = [r.pattern for r in cmap.get("sql", config.tags)]

        assert fallback == default

    def test_comment_map_groups_share_slots(self):
        cmap = default_config().comment_map()

        assert cmap.slot_for("c") == cmap.slot_for("rs")
        assert cmap.slot_for("py") != cmap.slot_for("rs")

    def test_direct_construction(self):
        config = Configuration(
            tags=("TODO",),
            ignore=(),
            comment_groups=(CommentsConfig(("x",), HASH),),
            default_ext="x",
        )

        assert config.default_comment_types == HASH
        assert dict(config.styles) == {}
