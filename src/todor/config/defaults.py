"""Built-in configuration: tags, default extension and comment table."""
from __future__ import annotations

from types import MappingProxyType

from todor.comments import CommentTypes

DEFAULT_TAGS: tuple[str, ...] = ("TODO", "FIXME")

DEFAULT_EXT = "sh"

# Extension used for paths without one.
NO_EXTENSION = "sh"

FALLBACK_COMMENT_TYPES = CommentTypes().add_single("#")

_C_STYLE = CommentTypes().add_single("//").add_block("/*", "*/")
_HASH = CommentTypes().add_single("#")
_DASHES = CommentTypes().add_single("--")

# Extensions grouped by shared comment syntax. Each group becomes one slot
# in the regex cache.
DEFAULT_COMMENTS: tuple[tuple[tuple[str, ...], CommentTypes], ...] = (
    (
        ("rs", "c", "h", "cpp", "hpp", "cc", "cs", "go", "java", "js", "jsx",
         "ts", "tsx", "kt", "swift", "scala", "m", "dart", "groovy"),
        _C_STYLE,
    ),
    (("php",), CommentTypes().add_single("//").add_single("#").add_block("/*", "*/")),
    (("css", "scss"), CommentTypes().add_block("/*", "*/")),
    (("py",), CommentTypes().add_single("#").add_block('"""', '"""')),
    (("sh", "bash", "zsh", "pl", "r", "toml", "yaml", "yml", "conf", "cmake"), _HASH),
    (("rb",), CommentTypes().add_single("#").add_block("=begin", "=end")),
    (("hs", "elm"), CommentTypes().add_single("--").add_block("{-", "-}")),
    (("lua",), CommentTypes().add_single("--").add_block("--[[", "]]")),
    (("sql", "ada"), _DASHES),
    (("tex", "erl"), CommentTypes().add_single("%")),
    (("clj", "lisp", "el", "scm"), CommentTypes().add_single(";")),
    (("vim",), CommentTypes().add_single('"')),
    (("html", "xml", "md"), CommentTypes().add_block("<!--", "-->")),
    (("ml",), CommentTypes().add_block("(*", "*)")),
)

DEFAULT_STYLES = MappingProxyType(
    {
        "filepath": "U_WHITE",
        "tag": "GREEN",
        "content": "CYAN",
        "line_number": 8,
        "user": 8,
        "tags": MappingProxyType({}),
    }
)

EXAMPLE_CONFIG = """\
{
    "tags": ["todo", "fixme"],
    "ignore": [],
    "default_ext": "sh",
    "comments": [
        {
            "exts": ["c", "h", "cpp"],
            "types": [
                {"single": "//"},
                {"prefix": "/*", "suffix": "*/"}
            ]
        },
        {
            "ext": "py",
            "types": [
                {"single": "#"},
                {"prefix": "\\"\\"\\"", "suffix": "\\"\\"\\""}
            ]
        }
    ],
    "styles": {
        "filepath": "U_WHITE",
        "tag": "GREEN",
        "content": "CYAN",
        "line_number": 8,
        "user": 8,
        "tags": {
            "FIXME": "RED"
        }
    }
}
"""
