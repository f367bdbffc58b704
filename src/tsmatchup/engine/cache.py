"""Bounded LRU store of match contexts, keyed by descriptor id."""

from __future__ import annotations

from collections import OrderedDict
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tsmatchup.engine.models import MatchContext

DEFAULT_CAPACITY = 150


class MatchResultCache:
    """LRU cache for MatchContext objects.

    Single-threaded: every access happens inside one navigation command.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._entries: OrderedDict[str, MatchContext] = OrderedDict()
        self._max = capacity

    @property
    def capacity(self) -> int:
        return self._max

    def set(self, descriptor_id: str, context: MatchContext) -> None:
        self._entries[descriptor_id] = context
        self._entries.move_to_end(descriptor_id)
        # Evict least recently used beyond capacity
        while len(self._entries) > self._max:
            self._entries.popitem(last=False)

    def get(self, descriptor_id: str) -> MatchContext | None:
        """Retrieve a context (None when unknown or evicted)."""
        context = self._entries.get(descriptor_id)
        if context is None:
            return None
        self._entries.move_to_end(descriptor_id)
        return context

    def discard_document(self, document_id: str) -> int:
        """Drop every context recorded for ``document_id``. Returns the count."""
        stale = [k for k, ctx in self._entries.items() if ctx.document_id == document_id]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, descriptor_id: object) -> bool:
        return descriptor_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)
