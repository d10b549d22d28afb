"""Fuzzy matching over flat, multi-field records.

This module provides approximate substring distance and a weighted
multi-key searcher that ranks records against a query string.

Scoring (ascending, 0 is best):
- Per value: edit distance of the query to the closest substring of the
  value, divided by the query length, capped at 1.0
- Per key: the best score over the key's values
- Per record: product of ``score ** weight`` over keys within the threshold
- Records with no key within the threshold are dropped
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
import sys
from typing import Any


# Exact matches still have to discriminate by weight in the product.
EXACT_SCORE_FLOOR = sys.float_info.epsilon

DEFAULT_THRESHOLD = 0.6


def substring_distance(pattern: str, text: str, max_distance: int | None = None) -> int:
    """Calculate the edit distance from *pattern* to its closest substring of *text*.

    Same dynamic program as Levenshtein distance, except that skipping
    characters at either end of *text* is free.

    Args:
        pattern: The string being looked for.
        text: The string being searched.
        max_distance: If provided, return max_distance+1 early when
            distance is guaranteed to exceed this threshold.

    Returns:
        The minimum number of insertions, deletions and substitutions that
        turn *pattern* into some substring of *text*.

    Examples:
        >>> substring_distance("test", "a test case")
        0
        >>> substring_distance("test", "text")
        1
        >>> substring_distance("abc", "")
        3
    """
    if not pattern:
        return 0
    if not text:
        return len(pattern)

    m, n = len(pattern), len(text)

    # Rows follow the pattern, columns follow the text; row 0 is all zeros
    # because a match may start anywhere in the text.
    prev_row = [0] * (n + 1)
    curr_row = [0] * (n + 1)

    for i in range(1, m + 1):
        curr_row[0] = i
        row_min = curr_row[0]
        for j in range(1, n + 1):
            cost = 0 if pattern[i - 1] == text[j - 1] else 1
            curr_row[j] = min(
                prev_row[j] + 1,  # deletion
                curr_row[j - 1] + 1,  # insertion
                prev_row[j - 1] + cost,  # substitution
            )
            row_min = min(row_min, curr_row[j])

        if max_distance is not None and row_min > max_distance:
            return max_distance + 1

        prev_row, curr_row = curr_row, prev_row

    return min(prev_row)


def value_score(query: str, value: str) -> float:
    """Return the normalized score of *value* for an already case-folded *query*."""
    if not query:
        return 0.0
    return min(substring_distance(query, value) / len(query), 1.0)


@dataclass(frozen=True)
class WeightedKey:
    """A record key to search and its (normalized) weight."""

    name: str
    weight: float = 1.0


@dataclass(frozen=True)
class FuzzyMatch:
    """A ranked hit: the record id and its score."""

    item_id: str
    score: float


class FuzzySearcher:
    """Weighted approximate matcher over a fixed set of records.

    The record collection is captured at construction; later changes to the
    source collection are not seen. Build a new searcher to pick them up.
    """

    def __init__(
        self,
        records: Iterable[Mapping[str, Any]],
        *,
        id_field: str = "id",
        keys: Sequence[WeightedKey] = (),
        threshold: float = DEFAULT_THRESHOLD,
        case_sensitive: bool = False,
    ) -> None:
        self.id_field = id_field
        self.keys = tuple(keys)
        self.threshold = threshold
        self.case_sensitive = case_sensitive
        self._records = [self._prepare(record) for record in records]

    def __len__(self) -> int:
        return len(self._records)

    def _fold(self, text: str) -> str:
        return text if self.case_sensitive else text.lower()

    def _prepare(self, record: Mapping[str, Any]) -> tuple[str, dict[str, list[str]]]:
        values = {
            key.name: [self._fold(str(value)) for value in record.get(key.name, ())] for key in self.keys
        }
        return str(record[self.id_field]), values

    def search(self, query: str) -> list[FuzzyMatch]:
        """Return matching records, best (lowest score) first.

        An empty query matches every record with score 0.0.
        """
        if not query:
            return [FuzzyMatch(item_id=item_id, score=0.0) for item_id, _ in self._records]

        folded = self._fold(query)
        matches: list[FuzzyMatch] = []

        for item_id, values in self._records:
            total = 1.0
            matched = False
            for key in self.keys:
                key_values = values[key.name]
                if not key_values:
                    continue
                best = min(value_score(folded, value) for value in key_values)
                if best > self.threshold:
                    continue
                matched = True
                total *= max(best, EXACT_SCORE_FLOOR) ** key.weight
            if matched:
                matches.append(FuzzyMatch(item_id=item_id, score=total))

        # Stable sort keeps insertion order among equal scores
        matches.sort(key=lambda match: match.score)
        return matches
