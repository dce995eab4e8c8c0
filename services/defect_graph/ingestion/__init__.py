"""
Graph Ingestion Module
======================

Loads graph documents into a GraphStore.

Version: 0.1.0
"""

from services.defect_graph.ingestion.fixtures import SAMPLE_GRAPH, sample_graph
from services.defect_graph.ingestion.ingester import (
    GraphIngester,
    IngestionOptions,
    IngestionResult,
    load_document,
)


__all__ = [
    "GraphIngester",
    "IngestionOptions",
    "IngestionResult",
    "load_document",
    "SAMPLE_GRAPH",
    "sample_graph",
]
