"""Fuzzy full-text search over RDF datasets.

Wrap an ``rdflib.Dataset`` in a :class:`TextSearchDataset`, declare which
predicates are searchable, and query subjects by approximate match on those
predicates' values.
"""

from rdf_textsearch.dataset import DEFAULT_INDEX, TextSearchDataset, text_search_dataset
from rdf_textsearch.errors import ConfigurationError, TextSearchError, UnknownIndexError
from rdf_textsearch.search.models import SearchResults
from rdf_textsearch.search.schema import FieldSpec
from rdf_textsearch.search.text_index import TextIndex
from rdf_textsearch.terms import Quad


__all__ = [
    "DEFAULT_INDEX",
    "ConfigurationError",
    "FieldSpec",
    "Quad",
    "SearchResults",
    "TextIndex",
    "TextSearchDataset",
    "TextSearchError",
    "UnknownIndexError",
    "text_search_dataset",
]
