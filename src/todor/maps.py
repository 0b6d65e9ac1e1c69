"""Extension to comment-regex resolution with a build-once cache."""
from __future__ import annotations

import logging
import re
from typing import Iterable, Sequence

from todor.comments import CommentTypes
from todor.errors import InvalidExtensionError
from todor.patterns import build_parser_regexs

logger = logging.getLogger(__name__)

FALLBACK_SLOT = 0


class CommentRegexMultiMap:
    """Map of extensions to compiled regex sets, shared through slots.

    Comment types are stored once per slot and any number of extensions can
    point at the same slot, so ``c``, ``h`` and ``cpp`` share one compiled set.
    Slot 0 holds the fallback used for extensions that were never inserted.
    A slot's regexes are compiled on first lookup and then reused for the
    lifetime of the map; changing the tags afterwards has no effect on an
    already compiled slot.

    The map is not designed to remove extensions or rebind them repeatedly:
    rebinding leaves the old slot in place.

    Parameters
    ----------
    fallback : CommentTypes
        Comment types used for unknown extensions.

    Examples
    --------
    >>> cmap = CommentRegexMultiMap(CommentTypes().add_single("#"))
    >>> cmap.insert_keys(["c", "h"], CommentTypes().add_single("//"))
    >>> cmap.get("c", ["TODO"]) is cmap.get("h", ["TODO"])
    True
    """

    def __init__(self, fallback: CommentTypes) -> None:
        self._slots: dict[str, int] = {}
        self._comment_types: list[CommentTypes] = [fallback]
        self._regexs: list[tuple[re.Pattern[str], ...] | None] = [None]
        self.compilations = 0

    def __contains__(self, ext: object) -> bool:
        return ext in self._slots

    def __len__(self) -> int:
        """Number of registered extensions."""
        return len(self._slots)

    def insert(self, ext: str, comment_types: CommentTypes) -> None:
        """Register ``comment_types`` for a single extension."""
        self.insert_keys([ext], comment_types)

    def insert_keys(self, exts: Iterable[str], comment_types: CommentTypes) -> None:
        """Register ``comment_types`` once for every extension in ``exts``."""
        slot = len(self._comment_types)
        for ext in exts:
            self._slots[ext] = slot
        self._comment_types.append(comment_types)
        self._regexs.append(None)

    def slot_for(self, ext: str) -> int:
        """Slot index used for ``ext``, the fallback slot if unknown."""
        return self._slots.get(ext, FALLBACK_SLOT)

    def comment_types(self, ext: str) -> CommentTypes:
        """Comment types used for ``ext``, falling back if unknown."""
        return self._comment_types[self.slot_for(ext)]

    def get(self, ext: str, tags: Sequence[str]) -> tuple[re.Pattern[str], ...]:
        """Return the compiled regexes for ``ext``, compiling them at most once.

        Unknown extensions resolve to the fallback slot.
        """
        return self._compiled(self.slot_for(ext), tags)

    def get_without_fallback(
        self, ext: str, tags: Sequence[str]
    ) -> tuple[re.Pattern[str], ...] | None:
        """Same as :meth:`get` but returns ``None`` for unknown extensions."""
        slot = self._slots.get(ext)
        if slot is None:
            return None
        return self._compiled(slot, tags)

    def reset_fallback(self, ext: str) -> CommentTypes:
        """Use the comment types registered for ``ext`` as the fallback.

        The fallback's compiled regexes are discarded so they are rebuilt from
        the new comment types on the next lookup.

        Raises
        ------
        InvalidExtensionError
            If ``ext`` was never inserted.
        """
        slot = self._slots.get(ext)
        if slot is None:
            raise InvalidExtensionError(ext)
        if slot != FALLBACK_SLOT:
            self.reset_fallback_value(self._comment_types[slot])
        return self._comment_types[FALLBACK_SLOT]

    def reset_fallback_value(self, comment_types: CommentTypes) -> None:
        """Replace the fallback comment types and drop its compiled regexes."""
        self._comment_types[FALLBACK_SLOT] = comment_types
        self._regexs[FALLBACK_SLOT] = None

    def _compiled(self, slot: int, tags: Sequence[str]) -> tuple[re.Pattern[str], ...]:
        regexs = self._regexs[slot]
        if regexs is None:
            logger.debug("compiling %d regexes for slot %d", len(self._comment_types[slot]), slot)
            regexs = build_parser_regexs(self._comment_types[slot], tags)
            self._regexs[slot] = regexs
            self.compilations += 1
        return regexs
