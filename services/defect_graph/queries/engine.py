"""
Defect Graph Query Engine
=========================

The operation surface of the Defect Graph: mutations plus the fixed set of
named queries.

Name-keyed queries (team name, developer name) do not require names to be
unique. Several nodes sharing a name are matched together and their
results merged; callers needing strict identity should work with ids.

Version: 0.1.0
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from services.defect_graph.queries.aggregation import (
    SortKey,
    count_group_by,
    distinct_sorted,
    sort_by,
)
from services.defect_graph.queries.matcher import PatternMatcher
from services.defect_graph.queries.recommendations import (
    DeveloperRecommendation,
    RecommendationEngine,
)
from services.defect_graph.schema import (
    BaseNode,
    DefectNode,
    DeveloperNode,
    Edge,
    NodeKind,
    RelationshipType,
    SkillNode,
    TeamNode,
)
from services.defect_graph.store import GraphStore
from shared.config import settings
from shared.logging import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class DeveloperDefectCount:
    """A developer's position in the defect ranking."""

    name: str
    defect_count: int


class DefectGraphQueryEngine:
    """
    Query engine over a single graph store.

    Features:
    - Node and relationship creation
    - Team, assignment and skill traversals
    - Defect-count ranking
    - Skill-based recommendations
    """

    def __init__(self, store: GraphStore, log_queries: bool | None = None) -> None:
        self.store = store
        self.matcher = PatternMatcher(store)
        self.recommender = RecommendationEngine(store, self.matcher)
        if log_queries is None:
            log_queries = settings.graph.log_queries
        self._log_query = logger.info if log_queries else logger.debug

    # =========================================================================
    # Mutations
    # =========================================================================

    def create_node(self, kind: NodeKind | str, properties: BaseNode | Mapping[str, Any]) -> BaseNode:
        return self.store.create_node(kind, properties)

    def create_edge(self, edge_type: RelationshipType | str, from_id: str, to_id: str) -> Edge:
        return self.store.create_edge(edge_type, from_id, to_id)

    def clear(self) -> None:
        self.store.clear()

    def create_developer(self, developer: DeveloperNode) -> DeveloperNode:
        return self.store.create_node(NodeKind.DEVELOPER, developer)  # type: ignore[return-value]

    def create_defect(self, defect: DefectNode) -> DefectNode:
        return self.store.create_node(NodeKind.DEFECT, defect)  # type: ignore[return-value]

    def create_skill(self, skill: SkillNode) -> SkillNode:
        return self.store.create_node(NodeKind.SKILL, skill)  # type: ignore[return-value]

    def create_team(self, team: TeamNode) -> TeamNode:
        return self.store.create_node(NodeKind.TEAM, team)  # type: ignore[return-value]

    def assign_skill_to_developer(self, developer_id: str, skill_id: str) -> Edge:
        return self.store.create_edge(RelationshipType.HAS_SKILL, developer_id, skill_id)

    def assign_defect_to_developer(self, defect_id: str, developer_id: str) -> Edge:
        return self.store.create_edge(RelationshipType.ASSIGNED_TO, developer_id, defect_id)

    def assign_developer_to_team(self, developer_id: str, team_id: str) -> Edge:
        return self.store.create_edge(RelationshipType.MEMBER_OF, developer_id, team_id)

    # =========================================================================
    # Traversals
    # =========================================================================

    def developers_in_team(self, team_name: str) -> list[DeveloperNode]:
        """Find all developers in a team. Unknown teams yield an empty list."""
        developers = self.matcher.developers_in_team(team_name)
        self._log_query("developers_found_in_team", team_name=team_name, count=len(developers))
        return developers

    def defects_for_developer(self, developer_name: str) -> list[DefectNode]:
        """Find all defects assigned to a developer, in assignment order."""
        defects = self.matcher.defects_for_developer(developer_name)
        self._log_query(
            "defects_found_for_developer",
            developer_name=developer_name,
            count=len(defects),
        )
        return defects

    def skills_for_defect(self, defect_id: str) -> list[str]:
        """Distinct skill names of developers working on a defect, ascending."""
        skills = distinct_sorted(self.matcher.skill_names_for_defect(defect_id))
        self._log_query("skills_found_for_defect", defect_id=defect_id, count=len(skills))
        return skills

    def skills_for_team(self, team_name: str) -> list[str]:
        """Distinct skill names held by a team's members, ascending."""
        skills = distinct_sorted(self.matcher.skill_names_for_team(team_name))
        self._log_query("skills_found_in_team", team_name=team_name, count=len(skills))
        return skills

    # =========================================================================
    # Ranking
    # =========================================================================

    def rank_developers_by_defects(self) -> list[DeveloperDefectCount]:
        """
        Developers ranked by number of assigned defects, descending.

        Developers without assignments are absent. Assignments are grouped
        by developer name; ties are ordered by name.
        """
        rows = (
            {"developer_name": self._developer_name(developer_id), "defect_id": defect_id}
            for developer_id, defect_id in self.matcher.assignments()
        )
        counts = count_group_by(rows, "developer_name")
        ranking = sort_by(
            (DeveloperDefectCount(name, count) for name, count in counts.items()),
            [SortKey.desc("defect_count"), SortKey.asc("name")],
        )
        self._log_query("developers_ranked_by_defects", count=len(ranking))
        return ranking

    def defect_counts_by_developer(self) -> dict[str, int]:
        """Developer name -> defect count, iterating in ranking order."""
        return {entry.name: entry.defect_count for entry in self.rank_developers_by_defects()}

    # =========================================================================
    # Recommendations
    # =========================================================================

    def recommend_for_defect(
        self,
        defect_id: str,
        required_skills: Iterable[str] | None,
    ) -> dict[str, int]:
        """Developer name -> number of matching skills."""
        return self.recommender.recommend_scores(defect_id, required_skills)

    def recommend_for_defect_detailed(
        self,
        defect_id: str,
        required_skills: Iterable[str] | None,
    ) -> list[DeveloperRecommendation]:
        """Ranked recommendations with matching skills and current workload."""
        return self.recommender.recommend(defect_id, required_skills)

    def _developer_name(self, developer_id: str) -> str:
        developer = self.store.get_node(NodeKind.DEVELOPER, developer_id)
        return developer.name  # type: ignore[union-attr]
