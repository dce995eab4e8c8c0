"""
Skill-Based Recommendations
===========================

Finds developers who could help with a defect.

Pipeline:
1. Resolve the anchor defect
2. Match developers holding any of the required skills
3. Drop developers already assigned to the anchor defect
4. Count distinct matching skills per developer
5. Count each developer's current workload (0 when unassigned)
6. Rank by matching skills (desc), then workload (asc), then name and id

Version: 0.1.0
"""

from collections.abc import Iterable
from dataclasses import asdict, dataclass
from typing import Any

from services.defect_graph.errors import InvalidArgumentError, NotFoundError
from services.defect_graph.queries.aggregation import (
    SortKey,
    count_group_by,
    distinct_ordered,
    sort_by,
)
from services.defect_graph.queries.matcher import (
    Hop,
    Pattern,
    PatternMatcher,
    PropertyFilter,
)
from services.defect_graph.schema import NodeKind, RelationshipType
from services.defect_graph.store import GraphStore
from shared.logging import get_logger


logger = get_logger(__name__)


# Name and id make the order total
RANKING: tuple[SortKey, ...] = (
    SortKey.desc("matching_skills"),
    SortKey.asc("current_workload"),
    SortKey.asc("name"),
    SortKey.asc("developer_id"),
)


@dataclass(frozen=True)
class DeveloperRecommendation:
    """A ranked candidate for helping with a defect."""

    name: str
    matching_skills: int
    current_workload: int
    developer_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class RecommendationEngine:
    """
    Ranks developers for a defect by skill match and workload.

    Example:
        >>> engine = RecommendationEngine(store)
        >>> engine.recommend("defect1", ["Java", "Python"])
        [DeveloperRecommendation(name='Dave', matching_skills=1, current_workload=0, ...),
         DeveloperRecommendation(name='Bob', matching_skills=1, current_workload=1, ...)]
    """

    def __init__(self, store: GraphStore, matcher: PatternMatcher | None = None) -> None:
        self.store = store
        self.matcher = matcher or PatternMatcher(store)

    def recommend(
        self,
        defect_id: str,
        required_skills: Iterable[str] | None,
    ) -> list[DeveloperRecommendation]:
        """
        Rank developers who hold any of `required_skills` and are not yet
        assigned to the defect.

        Args:
            defect_id: Anchor defect
            required_skills: Skill names; empty or None yields no candidates

        Returns:
            Recommendations ordered by (matching_skills desc, current_workload asc),
            ties broken by name, then developer id

        Raises:
            InvalidArgumentError: `required_skills` is a single string
            NotFoundError: The defect does not exist (only checked when
                there are required skills)
        """
        if isinstance(required_skills, str):
            raise InvalidArgumentError(
                f"required_skills must be a collection of skill names, got the string {required_skills!r}"
            )

        skills = distinct_ordered(required_skills or ())
        if not skills:
            logger.debug("recommendation_skipped_no_skills", defect_id=defect_id)
            return []

        if not self.store.has_node(NodeKind.DEFECT, defect_id):
            logger.warning("recommendation_anchor_missing", defect_id=defect_id)
            raise NotFoundError(NodeKind.DEFECT.value, "id", defect_id)

        pattern = Pattern(
            anchor_kind=NodeKind.DEVELOPER,
            hops=(
                Hop(
                    RelationshipType.HAS_SKILL,
                    where=PropertyFilter.one_of("name", skills),
                ),
            ),
        )

        # Negative pattern: NOT (developer)-[:ASSIGNED_TO]->(anchor)
        # Applied per binding, before aggregation.
        candidate_bindings = (
            binding
            for binding in self.matcher.match(pattern)
            if not self.matcher.has_edge(RelationshipType.ASSIGNED_TO, binding[0], defect_id)
        )

        # count(DISTINCT skill) per developer; parallel HAS_SKILL edges count once
        matching = count_group_by(distinct_ordered(candidate_bindings), 0)

        recommendations = []
        for developer_id, matching_skills in matching.items():
            developer = self.store.get_node(NodeKind.DEVELOPER, developer_id)
            recommendations.append(
                DeveloperRecommendation(
                    name=developer.name,  # type: ignore[union-attr]
                    matching_skills=matching_skills,
                    current_workload=self._workload(developer_id),
                    developer_id=developer_id,
                )
            )

        ranked = sort_by(recommendations, RANKING)
        logger.info(
            "recommendations_ranked",
            defect_id=defect_id,
            required_skills=skills,
            candidates=len(ranked),
        )
        return ranked

    def recommend_scores(
        self,
        defect_id: str,
        required_skills: Iterable[str] | None,
    ) -> dict[str, int]:
        """
        Name -> matching skill count.

        Iteration order follows the ranking, but a name shared by several
        developers keeps only the lowest-ranked entry.
        """
        return {
            rec.name: rec.matching_skills
            for rec in self.recommend(defect_id, required_skills)
        }

    def _workload(self, developer_id: str) -> int:
        """All ASSIGNED_TO relationships of the developer, to any defect."""
        return sum(1 for _ in self.store.out_edges(developer_id, RelationshipType.ASSIGNED_TO))
