"""Field-weighted document index over RDF quads.

Each subject with at least one value for an indexed predicate becomes one
flat document ``{"id": <n-triples subject>, <field id>: [values...]}``.
Quads are applied one at a time; the fuzzy searcher is a derived view that is
rebuilt from scratch on the first search after any change.
"""

from __future__ import annotations

from collections.abc import Iterable
import logging
from typing import Any

from rdflib.term import Node

from rdf_textsearch.config import get_settings
from rdf_textsearch.observability.context import index_context
from rdf_textsearch.observability.metrics import INDEX_DOC_COUNT, INDEX_REBUILDS, SEARCH_LATENCY, track_latency
from rdf_textsearch.observability.tracing import create_span
from rdf_textsearch.search.fuzzy import FuzzySearcher, WeightedKey
from rdf_textsearch.search.models import SearchResults
from rdf_textsearch.search.schema import IndexedField, normalize_weights, register_fields
from rdf_textsearch.terms import Quad, as_quad, term_key, term_to_ntriples


logger = logging.getLogger(__name__)

ID_FIELD = "id"


class TextIndex:
    """Weighted multi-field fuzzy index of subjects.

    Args:
        fields: Ordered field declarations (see ``FieldSpec.coerce``)
        name: Label used in logs and metrics
        threshold: Matcher acceptance bound; defaults to settings
        case_sensitive: Case-sensitive matching; defaults to settings
    """

    def __init__(
        self,
        fields: Iterable[Any],
        *,
        name: str = "",
        threshold: float | None = None,
        case_sensitive: bool | None = None,
    ) -> None:
        settings = get_settings()
        self.name = name
        self.threshold = settings.fuzzy_threshold if threshold is None else threshold
        self.case_sensitive = settings.case_sensitive if case_sensitive is None else case_sensitive

        self._fields: dict[str, IndexedField] = register_fields(fields)
        self.docs: dict[str, dict[str, Any]] = {}
        self.subjects: dict[str, Node] = {}
        self.dirty = True
        self._searcher: FuzzySearcher | None = None

    @property
    def fields(self) -> dict[str, IndexedField]:
        """Registered fields keyed by predicate IRI."""
        return self._fields

    def __len__(self) -> int:
        return len(self.docs)

    def __repr__(self) -> str:
        return f"TextIndex(name={self.name!r}, fields={len(self._fields)}, docs={len(self.docs)})"

    def normalized_weights(self) -> dict[str, float]:
        """Return ``{field_id: weight / total weight}``."""
        return normalize_weights(self._fields.values())

    def add(self, quad: Quad | tuple) -> None:
        """Index the object value of *quad* if its predicate is a registered field."""
        quad = as_quad(quad)
        field = self._fields.get(term_key(quad.predicate))
        if field is None:
            return

        doc_id = term_to_ntriples(quad.subject)
        doc = self.docs.get(doc_id)
        if doc is None:
            doc = {ID_FIELD: doc_id}
            self.docs[doc_id] = doc
            self.subjects[doc_id] = quad.subject

        doc.setdefault(field.field_id, []).append(str(quad.object))
        self.dirty = True

    def delete(self, quad: Quad | tuple) -> None:
        """Remove one occurrence of the object value of *quad* from its subject's document.

        Values are matched by string equality, so two quads whose objects share
        a lexical form (e.g. ``"a"`` and ``"a"@en``) are interchangeable here.
        """
        quad = as_quad(quad)
        field = self._fields.get(term_key(quad.predicate))
        if field is None:
            return

        doc_id = term_to_ntriples(quad.subject)
        doc = self.docs.get(doc_id)
        if doc is None:
            return

        values = doc.get(field.field_id)
        if not values:
            return

        try:
            values.remove(str(quad.object))
        except ValueError:
            return

        if not values:
            del doc[field.field_id]

        # Only the id left
        if len(doc) == 1:
            del self.docs[doc_id]
            del self.subjects[doc_id]

        self.dirty = True

    def ensure_built(self) -> None:
        """Rebuild the fuzzy searcher from the current documents if anything changed."""
        if not self.dirty:
            return

        with create_span("textsearch.index.rebuild", attributes={"textsearch.index": self.name}) as span:
            weights = self.normalized_weights()
            keys = [WeightedKey(name=field_id, weight=weight) for field_id, weight in weights.items()]
            self._searcher = FuzzySearcher(
                self.docs.values(),
                id_field=ID_FIELD,
                keys=keys,
                threshold=self.threshold,
                case_sensitive=self.case_sensitive,
            )
            span.set_attribute("textsearch.documents", len(self._searcher))

        INDEX_REBUILDS.labels(index=self.name).inc()
        INDEX_DOC_COUNT.labels(index=self.name).set(len(self.docs))
        logger.debug("Rebuilt text index %r with %d documents", self.name, len(self.docs))
        self.dirty = False

    def search(self, query: str) -> SearchResults:
        """Return subjects matching *query*, best first, with ``.scores`` attached."""
        with index_context(self.name), track_latency(SEARCH_LATENCY, index=self.name):
            self.ensure_built()
            with create_span("textsearch.index.search", attributes={"textsearch.index": self.name}) as span:
                matches = self._searcher.search(query)
                span.set_attribute("textsearch.results", len(matches))

        return SearchResults(
            (self.subjects[match.item_id] for match in matches),
            (match.score for match in matches),
        )
