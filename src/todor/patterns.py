"""Regex synthesis for TODO comments.

Builds one pattern per comment type from the configured tag vocabulary::

    (?i)^\\s*<prefix>\\s*(<tag1>|<tag2>|...)\\s?(?:\\(@?(\\S+)\\))?[:\\s]?\\s+((?:.*?@(\\S+))?.*?)\\s*<suffix>

Capture groups:

1. the matched tag
2. an explicit user given in parentheses right after the tag, ``TODO(user):``
3. the content of the TODO
4. the first in-text ``@user`` mention inside the content
"""
from __future__ import annotations

import re
from typing import Iterable, Sequence

from todor.comments import CommentType, CommentTypes

TAG_GROUP = 1
USER_GROUP = 2
CONTENT_GROUP = 3
MENTION_GROUP = 4

USER_PATTERN = re.compile(r"(@\S+)")


def regex_string_for_comment(tags: Sequence[str], comment_type: CommentType) -> str:
    """Return the regex source matching TODOs in one kind of comment.

    Parameters
    ----------
    tags : Sequence[str]
        Tag vocabulary; matched case-insensitively.
    comment_type : CommentType
        Comment type whose escaped prefix and suffix delimit the match.

    Raises
    ------
    ValueError
        If ``tags`` is empty.
    """
    if not tags:
        raise ValueError("at least one tag is needed to build a TODO regex")

    tags_string = "|".join(re.escape(tag) for tag in tags)

    return (
        r"(?i)^\s*"
        + comment_type.prefix  # comment prefix token
        + r"\s*("
        + tags_string  # custom tags
        + r")\s?"
        + r"(?:\(@?(\S+)\))?"  # optional explicit user
        + r"[:\s]?\s+"  # optional colon and whitespace
        + r"((?:.*?@(\S+))?.*?)"  # content
        + r"\s*"
        + comment_type.suffix  # comment suffix token
    )


def regex_for_comment(tags: Sequence[str], comment_type: CommentType) -> re.Pattern[str]:
    """Compile :func:`regex_string_for_comment`."""
    return re.compile(regex_string_for_comment(tags, comment_type))


def build_parser_regexs(
    comment_types: CommentTypes | Iterable[CommentType], tags: Sequence[str]
) -> tuple[re.Pattern[str], ...]:
    """Compile one regex per comment type, in the comment types' order."""
    return tuple(regex_for_comment(tags, comment_type) for comment_type in comment_types)
