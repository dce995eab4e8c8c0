"""
Defect Graph Queries
====================

Pattern matching, aggregation and recommendation over the Defect Graph.

Modules:
- matcher: Anchored multi-hop traversal
- aggregation: Grouping, counting and multi-key ranking
- recommendations: Skill-based developer recommendations
- engine: The named query surface

Version: 0.1.0
"""

from services.defect_graph.queries.aggregation import (
    SortDirection,
    SortKey,
    count_group_by,
    distinct_ordered,
    distinct_sorted,
    sort_by,
)
from services.defect_graph.queries.engine import (
    DefectGraphQueryEngine,
    DeveloperDefectCount,
)
from services.defect_graph.queries.matcher import (
    Binding,
    Hop,
    Pattern,
    PatternMatcher,
    PropertyFilter,
)
from services.defect_graph.queries.recommendations import (
    DeveloperRecommendation,
    RecommendationEngine,
)


__all__ = [
    # Aggregation
    "SortDirection",
    "SortKey",
    "count_group_by",
    "distinct_ordered",
    "distinct_sorted",
    "sort_by",
    # Matching
    "Binding",
    "Hop",
    "Pattern",
    "PatternMatcher",
    "PropertyFilter",
    # Recommendations
    "DeveloperRecommendation",
    "RecommendationEngine",
    # Engine
    "DefectGraphQueryEngine",
    "DeveloperDefectCount",
]
