"""RDF dataset wrapper that keeps one or more text indexes in sync.

Mutations go to every index and then to the wrapped ``rdflib.Dataset``.
Reads (containment, pattern matching, size, iteration) go straight to the
wrapped dataset; only ``search`` touches the indexes.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
import logging
from types import MappingProxyType
from typing import Any

from rdflib import Dataset
from rdflib.graph import DATASET_DEFAULT_GRAPH_ID
from rdflib.term import Node

from rdf_textsearch.errors import ConfigurationError, UnknownIndexError
from rdf_textsearch.search.models import SearchResults
from rdf_textsearch.search.text_index import TextIndex
from rdf_textsearch.terms import Quad, as_quad


logger = logging.getLogger(__name__)

DEFAULT_INDEX = ""


def _as_statement(quad: Quad) -> tuple:
    # A bare triple means "any graph" to rdflib on remove and containment
    if quad.graph is None:
        return (quad.subject, quad.predicate, quad.object, DATASET_DEFAULT_GRAPH_ID)
    return tuple(quad)


class TextSearchDataset:
    """An ``rdflib.Dataset`` facade with fuzzy full-text search.

    Args:
        dataset: Dataset to wrap; quads already in it are indexed on construction
        factory: Callable returning a new dataset when ``dataset`` is omitted
        fields: Field declarations for the default index (named ``""``)
        indexes: Mapping of index name to field declarations
        **index_options: Passed to every ``TextIndex`` (``threshold``, ``case_sensitive``)

    Raises:
        ConfigurationError: If neither ``fields`` nor ``indexes`` is given.
    """

    def __init__(
        self,
        *,
        dataset: Dataset | None = None,
        factory: Callable[[], Dataset] | None = None,
        fields: Iterable[Any] | None = None,
        indexes: Mapping[str, Iterable[Any]] | None = None,
        **index_options: Any,
    ) -> None:
        if fields is None and indexes is None:
            raise ConfigurationError("fields or indexes argument is required")

        self._indexes: dict[str, TextIndex] = {}

        if fields is not None:
            self._indexes[DEFAULT_INDEX] = TextIndex(fields, name=DEFAULT_INDEX, **index_options)

        for index_name, index_fields in (indexes or {}).items():
            self._indexes[index_name] = TextIndex(index_fields, name=index_name, **index_options)

        if dataset is None:
            self.dataset = (factory or Dataset)()
        else:
            self.dataset = dataset
            self._seed(dataset)

    def _seed(self, dataset: Iterable[Any]) -> None:
        count = 0
        for statement in dataset:
            quad = as_quad(statement)
            for index in self._indexes.values():
                index.add(quad)
            count += 1
        logger.debug("Seeded %d text indexes from %d existing quads", len(self._indexes), count)

    @property
    def indexes(self) -> Mapping[str, TextIndex]:
        """Read-only view of the indexes by name."""
        return MappingProxyType(self._indexes)

    def get_index(self, index_name: str = DEFAULT_INDEX) -> TextIndex:
        """Return the index registered as *index_name*.

        Raises:
            UnknownIndexError: If no index has that name.
        """
        try:
            return self._indexes[index_name]
        except KeyError:
            raise UnknownIndexError(index_name, list(self._indexes)) from None

    def search(self, query: str, index_name: str = DEFAULT_INDEX) -> SearchResults:
        """Search one index; see ``TextIndex.search``."""
        return self.get_index(index_name).search(query)

    @property
    def size(self) -> int:
        """Number of quads, counting a triple once per graph that holds it."""
        return sum(1 for _ in self.dataset.quads((None, None, None, None)))

    def __len__(self) -> int:
        return self.size

    def add(self, quad: Quad | tuple) -> TextSearchDataset:
        quad = as_quad(quad)
        for index in self._indexes.values():
            index.add(quad)
        self.dataset.add(_as_statement(quad))
        return self

    def delete(self, quad: Quad | tuple) -> TextSearchDataset:
        quad = as_quad(quad)
        for index in self._indexes.values():
            index.delete(quad)
        self.dataset.remove(_as_statement(quad))
        return self

    def has(self, quad: Quad | tuple) -> bool:
        return _as_statement(as_quad(quad)) in self.dataset

    def __contains__(self, quad: object) -> bool:
        return self.has(quad)  # type: ignore[arg-type]

    def match(
        self,
        subject: Node | None = None,
        predicate: Node | None = None,
        object: Node | None = None,  # noqa: A002
        graph: Node | None = None,
    ) -> Iterator[tuple]:
        """Yield ``(s, p, o, g)`` quads of the wrapped dataset matching the pattern."""
        return self.dataset.quads((subject, predicate, object, graph))

    def __iter__(self) -> Iterator[tuple]:
        return iter(self.dataset)


def text_search_dataset(**kwargs: Any) -> TextSearchDataset:
    """Build a :class:`TextSearchDataset`; accepts the same keyword arguments."""
    return TextSearchDataset(**kwargs)
