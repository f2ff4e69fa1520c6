import re
from collections.abc import Iterable, Iterator
from typing import Any


def canonicalize_locator(locator: str) -> str:
    """Drop the query string, then any trailing path separators."""
    return locator.split("?", 1)[0].rstrip("/")


class PatternPredicate:
    def __init__(self, pattern: str | re.Pattern[str]) -> None:
        if isinstance(pattern, re.Pattern):
            self.pattern = re.compile(pattern.pattern, pattern.flags | re.IGNORECASE)
        else:
            self.pattern = re.compile(pattern, re.IGNORECASE)

    def matches(self, value: Any) -> bool:
        return isinstance(value, str) and self.pattern.search(value) is not None


class LeafFilter(PatternPredicate):
    def accept(self, locator: Any) -> str | None:
        if not self.matches(locator):
            return None
        canonical = canonicalize_locator(locator)
        if not canonical:
            return None
        return canonical

    def accept_many(self, locators: Iterable[Any]) -> Iterator[str]:
        for locator in locators:
            canonical = self.accept(locator)
            if canonical is not None:
                yield canonical


class IndexFilter(PatternPredicate):
    """Selects child sitemaps whose own locator marks them as holding leaves."""
