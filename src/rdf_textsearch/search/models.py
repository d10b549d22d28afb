"""Search data models."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any


class SearchResults(list):
    """Subject terms ranked best-first, with a parallel ``scores`` list.

    ``results[i]`` scored ``results.scores[i]``; lower scores are better and
    an exact hit scores machine epsilon raised to its field weight, not 0.0.
    """

    def __init__(self, subjects: Iterable[Any] = (), scores: Iterable[float] = ()) -> None:
        super().__init__(subjects)
        self.scores: list[float] = list(scores)
        if len(self.scores) != len(self):
            msg = f"Got {len(self)} subjects but {len(self.scores)} scores"
            raise ValueError(msg)

    def with_scores(self) -> list[tuple[Any, float]]:
        """Return ``(subject, score)`` pairs."""
        return list(zip(self, self.scores))

    def __repr__(self) -> str:
        return f"SearchResults({list(self)!r}, scores={self.scores!r})"
