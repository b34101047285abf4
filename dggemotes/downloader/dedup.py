"""
Case-insensitive name deduplication.

Implements "first wins" deduplication over emote names:
- The lowercased name is the dedup key
- The first occurrence of a key is kept
- Later occurrences that differ only by case are dropped and counted

dedupe_names() produces the manifest list (always lowercase). NameIndex is
used while building download jobs, where the original spelling of the first
occurrence is kept for the URL and the filename.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable


def dedupe_names(names: Iterable[str]) -> list[str]:
    """
    Lowercase and deduplicate names, keeping first-seen order.

    The original-case variant is always discarded, so the output only ever
    contains lowercase names. Idempotent.

    Args:
        names: Names in aggregation order.

    Returns:
        Lowercase names, each appearing once.
    """
    seen: set[str] = set()
    result: list[str] = []
    for name in names:
        key = name.lower()
        if key in seen:
            continue
        seen.add(key)
        result.append(key)
    return result


@dataclass
class NameIndex:
    """
    In-memory index of names seen during the current run.

    Usage:
        index = NameIndex()
        for name in names:
            if not index.check_and_register(name):
                continue  # case-insensitive duplicate
            build_job(name)
    """

    # Lowercased name -> first spelling seen
    _key_to_name: dict[str, str] = field(default_factory=dict)

    # Statistics
    _total_checked: int = 0
    _duplicates_found: int = 0

    @property
    def total_checked(self) -> int:
        return self._total_checked

    @property
    def duplicates_found(self) -> int:
        return self._duplicates_found

    def check_and_register(self, name: str) -> bool:
        """
        Register a name if it is new.

        Returns:
            True if the name was new, False if it is a duplicate.
        """
        self._total_checked += 1
        key = name.lower()
        if key in self._key_to_name:
            self._duplicates_found += 1
            return False
        self._key_to_name[key] = name
        return True

    def stats(self) -> dict:
        return {
            "total_checked": self._total_checked,
            "duplicates_found": self._duplicates_found,
            "unique_names": len(self._key_to_name),
        }
