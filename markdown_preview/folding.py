"""Fold state for fenced code blocks, and the ids it is keyed by."""

from __future__ import annotations

import hashlib
import logging
import threading
from collections.abc import Iterable

from .constants import CODE_BLOCK_ID_PREFIX

logger = logging.getLogger(__name__)

CONTENT_KEY_LENGTH = 10


class FoldStateStore:
    """Thread-safe mapping from code block id to its collapsed flag.

    The store is owned by the caller and may outlive any single renderer.
    Entries are created lazily (expanded) the first time a render sees a
    block id and survive re-renders. Renders prune expanded entries for
    blocks they no longer contain; folded entries are only dropped by `clear`.

    Examples:
        store = FoldStateStore()
        store.toggle("codeblock-1")  # True
        store.is_folded("codeblock-1")  # True
    """

    def __init__(self, initial: dict[str, bool] | None = None):
        self._lock = threading.Lock()
        self._folded: dict[str, bool] = dict(initial or {})

    def lookup(self, block_id: str) -> bool:
        """Return the block's flag, registering it as expanded if unseen."""
        with self._lock:
            return self._folded.setdefault(block_id, False)

    def is_folded(self, block_id: str) -> bool:
        """Return the block's flag without registering it."""
        with self._lock:
            return self._folded.get(block_id, False)

    def toggle(self, block_id: str) -> bool:
        """Flip a block's flag and return the new value.

        Unknown ids are created in the collapsed state. Callers re-render
        afterwards to see the change.
        """
        with self._lock:
            folded = not self._folded.get(block_id, False)
            self._folded[block_id] = folded
        logger.debug("Toggled %s to %s", block_id, "folded" if folded else "expanded")
        return folded

    def set(self, block_id: str, folded: bool) -> None:
        with self._lock:
            self._folded[block_id] = folded

    def prune_expanded(self, keep: Iterable[str]) -> int:
        """Drop expanded entries whose id is not in `keep`.

        Folded entries are kept. An expanded entry carries no information
        beyond the default, so dropping it does not change any render.

        Returns:
            int: Number of entries removed.
        """
        keep = set(keep)
        with self._lock:
            stale = [
                block_id
                for block_id, folded in self._folded.items()
                if not folded and block_id not in keep
            ]
            for block_id in stale:
                del self._folded[block_id]
        if stale:
            logger.debug("Pruned %d expanded fold entries", len(stale))
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._folded.clear()

    def snapshot(self) -> dict[str, bool]:
        """Return a copy of all known entries."""
        with self._lock:
            return dict(self._folded)

    def __contains__(self, block_id: object) -> bool:
        with self._lock:
            return block_id in self._folded

    def __len__(self) -> int:
        with self._lock:
            return len(self._folded)


def positional_block_id(ordinal: int) -> str:
    """Build the id of the `ordinal`-th fence (1-based) in a document.

    Examples:
        positional_block_id(1)  # "codeblock-1"
    """
    return f"{CODE_BLOCK_ID_PREFIX}{ordinal}"


def content_block_id(language_tag: str, first_line: str, occurrence: int = 1) -> str:
    """Build a block id that does not move when unrelated text is edited.

    The id hashes the language tag and the first content line. Blocks sharing
    both within one document are told apart by an occurrence suffix.

    Args:
        language_tag: Lower-cased fence info tag.
        first_line: First content line of the block (empty for empty blocks).
        occurrence: 1 for the first block with this key, 2 for the next, ...

    Returns:
        str: An id such as ``"codeblock-3f2a9c01be"`` or ``"codeblock-3f2a9c01be-2"``.

    Examples:
        content_block_id("java", "public class X {}")
    """
    digest = hashlib.sha1(f"{language_tag}\n{first_line}".encode("utf-8")).hexdigest()
    block_id = f"{CODE_BLOCK_ID_PREFIX}{digest[:CONTENT_KEY_LENGTH]}"
    if occurrence > 1:
        block_id = f"{block_id}-{occurrence}"
    return block_id
