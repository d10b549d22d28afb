"""Quad coercion and canonical term serialization.

rdflib hands quads around as plain ``(s, p, o, g)`` tuples and triples as
``(s, p, o)``. The indexes address parts by name, so everything entering them
goes through :func:`as_quad` first.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, NamedTuple

from rdflib.term import Node


class Quad(NamedTuple):
    """A statement with named positions; ``graph`` is ``None`` for the default graph."""

    subject: Node
    predicate: Node
    object: Node
    graph: Node | None = None


def as_quad(statement: Quad | Sequence[Any]) -> Quad:
    """Return *statement* as a :class:`Quad`.

    Accepts quads, rdflib ``(s, p, o, g)`` tuples and ``(s, p, o)`` triples.

    Raises:
        ValueError: If the statement does not have three or four parts.
    """
    if isinstance(statement, Quad):
        return statement
    parts = tuple(statement)
    if len(parts) in (3, 4):
        return Quad(*parts)
    msg = f"Expected a triple or quad, got {len(parts)} parts"
    raise ValueError(msg)


def term_to_ntriples(term: Node) -> str:
    """Serialize *term* in N-Triples form (``<iri>``, ``_:b0``, ``"lit"@en``).

    The result is stable and collision-free across term types, which makes it
    usable as a document id.
    """
    return term.n3()


def term_key(term: Node | str) -> str:
    """Return the lookup key for a predicate: its IRI string."""
    return str(term)
