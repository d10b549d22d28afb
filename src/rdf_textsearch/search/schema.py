"""
Field declarations for text indexes.

An index is configured with an ordered list of predicates whose object values
become searchable. Each declaration carries:
- term: the predicate (rdflib term or IRI string), looked up by IRI string
- weight: relative importance in ranking (default: 1.0)

Registration assigns each field a sequential id ("1", "2", ...) used as the
key path in the flat records handed to the fuzzy matcher.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from rdf_textsearch.terms import term_key


DEFAULT_WEIGHT = 1.0


@dataclass(frozen=True)
class FieldSpec:
    """
    Declaration of one indexed predicate.

    Args:
        term: Predicate whose values are indexed
        weight: Field weight in ranking; ``None`` means the default of 1.0
    """

    term: Any
    weight: float | None = None

    @property
    def key(self) -> str:
        return term_key(self.term)

    @property
    def effective_weight(self) -> float:
        return DEFAULT_WEIGHT if self.weight is None else float(self.weight)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the declaration to a dict."""
        return {"term": self.key, "weight": self.effective_weight}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FieldSpec:
        """Deserialize a declaration from a dict with ``term`` and optional ``weight``."""
        return cls(term=data["term"], weight=data.get("weight"))

    @classmethod
    def coerce(cls, value: Any) -> FieldSpec:
        """Accept a FieldSpec, a mapping, a ``(term, weight)`` pair or a bare term."""
        if isinstance(value, FieldSpec):
            return value
        if isinstance(value, Mapping):
            return cls.from_dict(value)
        if isinstance(value, tuple) and len(value) == 2:
            return cls(term=value[0], weight=value[1])
        return cls(term=value)


@dataclass(frozen=True)
class IndexedField:
    """A registered field: its record key path and raw weight."""

    field_id: str
    weight: float = DEFAULT_WEIGHT


def register_fields(fields: Iterable[Any]) -> dict[str, IndexedField]:
    """Assign sequential field ids to *fields* in order.

    Returns a dict keyed by predicate IRI string. A predicate declared twice
    keeps its first id and takes the weight of the later declaration.

    Raises:
        TypeError: If *fields* is not iterable.
    """
    registered: dict[str, IndexedField] = {}
    for value in fields:
        spec = FieldSpec.coerce(value)
        existing = registered.get(spec.key)
        field_id = existing.field_id if existing else str(len(registered) + 1)
        registered[spec.key] = IndexedField(field_id=field_id, weight=spec.effective_weight)
    return registered


def normalize_weights(fields: Iterable[IndexedField]) -> dict[str, float]:
    """Return ``{field_id: weight / total}`` for *fields*.

    Raises:
        ZeroDivisionError: If the weights sum to zero.
    """
    fields = list(fields)
    total = sum(field.weight for field in fields)
    return {field.field_id: field.weight / total for field in fields}
