import asyncio
from collections.abc import Iterable


class IdentifierSet:
    """Duplicate-free, lock-guarded collection shared by all workers of one run."""

    def __init__(self) -> None:
        self._items: set[str] = set()
        self._lock = asyncio.Lock()

    async def add(self, identifier: str) -> bool:
        async with self._lock:
            if identifier in self._items:
                return False
            self._items.add(identifier)
            return True

    async def add_many(self, identifiers: Iterable[str]) -> int:
        batch = list(identifiers)
        if not batch:
            return 0
        async with self._lock:
            before = len(self._items)
            self._items.update(batch)
            return len(self._items) - before

    def snapshot(self) -> list[str]:
        return sorted(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._items
