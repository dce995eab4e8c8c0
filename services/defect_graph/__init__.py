"""
Defect Graph Service
====================

In-memory property graph of developers, defects, skills and teams, with
the traversal, ranking and recommendation queries built on it.

Version: 0.1.0
"""

from services.defect_graph.errors import (
    DanglingReferenceError,
    DefectGraphError,
    DuplicateIdError,
    InvalidArgumentError,
    NotFoundError,
)
from services.defect_graph.queries import DefectGraphQueryEngine
from services.defect_graph.store import GraphStore, graph_session

__version__ = "0.1.0"

__all__ = [
    "DefectGraphQueryEngine",
    "GraphStore",
    "graph_session",
    # Errors
    "DefectGraphError",
    "DuplicateIdError",
    "DanglingReferenceError",
    "NotFoundError",
    "InvalidArgumentError",
]
