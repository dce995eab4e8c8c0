"""
DEVGRAPH Services
=================

Services:
- defect_graph: In-memory graph of developers, defects, skills and teams
"""

__all__ = [
    "defect_graph",
]
