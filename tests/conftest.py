"""
Test Configuration
==================

Pytest fixtures for Devgraph tests.
"""

import logging
import os
from collections.abc import Generator
from typing import Any

import pytest
import structlog

# Set test environment
os.environ["ENVIRONMENT"] = "testing"

from services.defect_graph.ingestion import GraphIngester, sample_graph
from services.defect_graph.queries import DefectGraphQueryEngine
from services.defect_graph.store import GraphStore
from shared.logging.logger import _configure_library_defaults


@pytest.fixture
def store() -> Generator[GraphStore, None, None]:
    """An empty graph store, cleared after the test."""
    graph = GraphStore()
    yield graph
    graph.clear()


@pytest.fixture
def sample_document() -> dict[str, Any]:
    """A fresh copy of the sample graph document."""
    return sample_graph()


@pytest.fixture
def sample_store(store: GraphStore, sample_document: dict[str, Any]) -> GraphStore:
    """A store seeded with the sample graph."""
    GraphIngester(store).ingest(sample_document)
    return store


@pytest.fixture
def engine(sample_store: GraphStore) -> DefectGraphQueryEngine:
    """Query engine over the sample graph."""
    return DefectGraphQueryEngine(sample_store)


@pytest.fixture
def empty_engine(store: GraphStore) -> DefectGraphQueryEngine:
    """Query engine over an empty store."""
    return DefectGraphQueryEngine(store)


@pytest.fixture
def isolated_logging() -> Generator[None, None, None]:
    """Restore root logger handlers/level and structlog defaults after setup_logging."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    _configure_library_defaults()
