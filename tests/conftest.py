"""Shared test fixtures and configuration."""

import os

import pytest
from rdflib import Dataset, Literal, Namespace

from rdf_textsearch.config import reset_settings
from rdf_textsearch.terms import Quad


EX = Namespace("http://example.org/")


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate every test from RDF_TEXTSEARCH_* variables in the outer environment."""
    for key in list(os.environ):
        if key.startswith("RDF_TEXTSEARCH_"):
            monkeypatch.delenv(key)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def label_quads():
    """Two subjects whose labels differ by one character."""
    return [
        Quad(EX.subject0, EX.label, Literal("test")),
        Quad(EX.subject1, EX.label, Literal("text")),
    ]


@pytest.fixture
def crossed_quads():
    """subject0 says "test" in its label, subject1 says it in its description."""
    return [
        Quad(EX.subject0, EX.label, Literal("test")),
        Quad(EX.subject0, EX.description, Literal("text")),
        Quad(EX.subject1, EX.label, Literal("text")),
        Quad(EX.subject1, EX.description, Literal("test")),
    ]


@pytest.fixture
def rdf_dataset(label_quads):
    dataset = Dataset()
    for quad in label_quads:
        dataset.add((quad.subject, quad.predicate, quad.object))
    return dataset
