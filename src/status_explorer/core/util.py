"""Small helpers shared by the parsers."""

from collections import Counter
from typing import Callable, Hashable, Iterable, TypeVar

T = TypeVar("T")


def is_empty(value: str | list) -> bool:
    """True for an empty list or a whitespace-only string."""
    if isinstance(value, str):
        return len(value.strip()) == 0
    return len(value) == 0


def trim(value: str) -> str:
    return value.strip()


def uniq_by(get_key: Callable[[T], Hashable], items: Iterable[T]) -> list[T]:
    """
    Deduplicate items by key, keeping the last occurrence.

    Keys keep the position of their first appearance.
    """
    by_key: dict = {}
    for item in items:
        by_key[get_key(item)] = item
    return list(by_key.values())


def find_duplicates(get_key: Callable[[T], str], items: Iterable[T]) -> list[str]:
    """Return every key that occurs more than once, in first-seen order."""
    counts = Counter(get_key(item) for item in items)
    return [key for key, count in counts.items() if count > 1]
