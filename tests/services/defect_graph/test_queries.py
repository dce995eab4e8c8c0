"""
Tests for the Defect Graph Query Engine
=======================================

End-to-end tests of the named queries over the sample graph.

Version: 0.1.0
"""

import random
from typing import Any

import pytest

from services.defect_graph.errors import DanglingReferenceError, NotFoundError
from services.defect_graph.ingestion import GraphIngester
from services.defect_graph.queries import DefectGraphQueryEngine, DeveloperDefectCount
from services.defect_graph.schema import (
    DefectNode,
    DeveloperNode,
    NodeKind,
    RelationshipType,
    Severity,
    SkillLevel,
    SkillNode,
    TeamNode,
)
from services.defect_graph.store import GraphStore


# =============================================================================
# Team and Assignment Traversals
# =============================================================================


class TestDevelopersInTeam:
    """Graph traversal: (Developer)-[:MEMBER_OF]->(Team)"""

    def test_backend_team(self, engine: DefectGraphQueryEngine) -> None:
        developers = engine.developers_in_team("Backend Team")

        assert {dev.name for dev in developers} == {"Alice", "Bob"}
        assert len(developers) == 2

    def test_frontend_team(self, engine: DefectGraphQueryEngine) -> None:
        developers = engine.developers_in_team("Frontend Team")

        assert {dev.name for dev in developers} == {"Carol", "Dave"}
        assert len(developers) == 2

    def test_unknown_team_is_empty(self, engine: DefectGraphQueryEngine) -> None:
        assert engine.developers_in_team("Platform Team") == []


class TestDefectsForDeveloper:
    """Graph traversal: (Developer)-[:ASSIGNED_TO]->(Defect)"""

    def test_alice(self, engine: DefectGraphQueryEngine) -> None:
        defects = engine.defects_for_developer("Alice")

        assert len(defects) == 3
        assert {d.title for d in defects} == {
            "Login API fails",
            "Database connection timeout",
            "Performance issue in query",
        }

    def test_bob(self, engine: DefectGraphQueryEngine) -> None:
        defects = engine.defects_for_developer("Bob")

        assert len(defects) == 1
        assert defects[0].title == "Memory leak in service"

    def test_unassigned_developer(self, engine: DefectGraphQueryEngine) -> None:
        assert engine.defects_for_developer("Dave") == []

    def test_unknown_developer(self, engine: DefectGraphQueryEngine) -> None:
        assert engine.defects_for_developer("Mallory") == []

    def test_duplicate_names_are_merged(self, engine: DefectGraphQueryEngine) -> None:
        """Two developers named alike are matched together."""
        engine.create_node(NodeKind.DEVELOPER, {"id": "dev5", "name": "Bob"})
        engine.assign_defect_to_developer("defect3", "dev5")

        assert {d.id for d in engine.defects_for_developer("Bob")} == {"defect5", "defect3"}


# =============================================================================
# Ranking
# =============================================================================


class TestDefectRanking:
    """Aggregation over (Developer)-[:ASSIGNED_TO]->(Defect)"""

    def test_counts(self, engine: DefectGraphQueryEngine) -> None:
        counts = engine.defect_counts_by_developer()

        assert counts == {"Alice": 3, "Bob": 1, "Carol": 1}
        assert "Dave" not in counts

    def test_ranking_order(self, engine: DefectGraphQueryEngine) -> None:
        ranking = engine.rank_developers_by_defects()

        assert ranking[0] == DeveloperDefectCount(name="Alice", defect_count=3)
        assert [entry.defect_count for entry in ranking] == [3, 1, 1]

    def test_ties_ordered_by_name(self, empty_engine: DefectGraphQueryEngine) -> None:
        """Bob and Carol tie on one defect each; Carol was assigned first."""
        for dev_id, name in (("dev3", "Carol"), ("dev2", "Bob")):
            empty_engine.create_developer(DeveloperNode(id=dev_id, name=name))
        for defect_id in ("defect1", "defect2"):
            empty_engine.create_defect(DefectNode(id=defect_id, title=defect_id))
        empty_engine.assign_defect_to_developer("defect1", "dev3")
        empty_engine.assign_defect_to_developer("defect2", "dev2")

        assert empty_engine.rank_developers_by_defects() == [
            DeveloperDefectCount(name="Bob", defect_count=1),
            DeveloperDefectCount(name="Carol", defect_count=1),
        ]

    def test_counts_iterate_in_ranking_order(self, engine: DefectGraphQueryEngine) -> None:
        assert next(iter(engine.defect_counts_by_developer())) == "Alice"

    def test_empty_graph(self, empty_engine: DefectGraphQueryEngine) -> None:
        assert empty_engine.defect_counts_by_developer() == {}


# =============================================================================
# Multi-Hop Skill Queries
# =============================================================================


class TestSkillsForDefect:
    """Graph traversal: (Skill)<-[:HAS_SKILL]-(Developer)-[:ASSIGNED_TO]->(Defect)"""

    def test_defect1(self, engine: DefectGraphQueryEngine) -> None:
        assert engine.skills_for_defect("defect1") == ["Java", "Python"]

    def test_defect5(self, engine: DefectGraphQueryEngine) -> None:
        assert engine.skills_for_defect("defect5") == ["Java", "Neo4j"]

    def test_unknown_defect(self, engine: DefectGraphQueryEngine) -> None:
        assert engine.skills_for_defect("defect404") == []

    def test_deduplicated_across_developers(self, engine: DefectGraphQueryEngine) -> None:
        """Bob joins Alice on defect1; Java is listed once."""
        engine.assign_defect_to_developer("defect1", "dev2")

        assert engine.skills_for_defect("defect1") == ["Java", "Neo4j", "Python"]


class TestSkillsForTeam:
    """Graph traversal: (Skill)<-[:HAS_SKILL]-(Developer)-[:MEMBER_OF]->(Team)"""

    def test_backend_team(self, engine: DefectGraphQueryEngine) -> None:
        assert engine.skills_for_team("Backend Team") == ["Java", "Neo4j", "Python"]

    def test_frontend_team(self, engine: DefectGraphQueryEngine) -> None:
        assert engine.skills_for_team("Frontend Team") == ["Python", "React"]

    def test_unknown_team(self, engine: DefectGraphQueryEngine) -> None:
        assert engine.skills_for_team("Platform Team") == []


# =============================================================================
# Recommendations
# =============================================================================


class TestRecommendForDefect:
    """Skill-based recommendation through the query surface."""

    def test_basic_mapping(self, engine: DefectGraphQueryEngine) -> None:
        assert engine.recommend_for_defect("defect1", ["Java", "Python"]) == {"Bob": 1, "Dave": 1}

    def test_detailed_ranking(self, engine: DefectGraphQueryEngine) -> None:
        ranked = engine.recommend_for_defect_detailed("defect1", ["Java", "Python"])

        assert [(r.name, r.matching_skills, r.current_workload) for r in ranked] == [
            ("Dave", 1, 0),
            ("Bob", 1, 1),
        ]

    def test_empty_required_skills(self, engine: DefectGraphQueryEngine, empty_engine: DefectGraphQueryEngine) -> None:
        assert engine.recommend_for_defect("defect1", []) == {}
        assert engine.recommend_for_defect_detailed("anything", []) == []
        assert empty_engine.recommend_for_defect("defect1", []) == {}

    def test_unknown_defect(self, engine: DefectGraphQueryEngine) -> None:
        with pytest.raises(NotFoundError):
            engine.recommend_for_defect("defect404", ["Java"])


# =============================================================================
# Mutations
# =============================================================================


class TestTypedCreators:
    """The typed creators mirror create_node / create_edge."""

    def test_build_graph_with_creators(self, empty_engine: DefectGraphQueryEngine) -> None:
        empty_engine.create_team(TeamNode(id="team1", name="Backend Team", location="San Francisco"))
        empty_engine.create_developer(DeveloperNode(id="dev1", name="Alice", team_id="team1"))
        empty_engine.create_skill(SkillNode(id="skill1", name="Java", level=SkillLevel.EXPERT))
        empty_engine.create_defect(DefectNode(id="defect1", title="Login API fails", severity=Severity.HIGH))

        empty_engine.assign_developer_to_team("dev1", "team1")
        empty_engine.assign_skill_to_developer("dev1", "skill1")
        empty_engine.assign_defect_to_developer("defect1", "dev1")

        assert [d.name for d in empty_engine.developers_in_team("Backend Team")] == ["Alice"]
        assert empty_engine.skills_for_defect("defect1") == ["Java"]
        assert empty_engine.defect_counts_by_developer() == {"Alice": 1}

    def test_assign_to_missing_defect(self, engine: DefectGraphQueryEngine) -> None:
        with pytest.raises(DanglingReferenceError):
            engine.assign_defect_to_developer("defect404", "dev1")

    def test_clear(self, engine: DefectGraphQueryEngine) -> None:
        engine.clear()

        assert engine.developers_in_team("Backend Team") == []
        assert engine.store.node_count() == 0


# =============================================================================
# Order Independence
# =============================================================================


def _all_answers(engine: DefectGraphQueryEngine) -> dict[str, Any]:
    return {
        "backend": sorted(d.id for d in engine.developers_in_team("Backend Team")),
        "frontend": sorted(d.id for d in engine.developers_in_team("Frontend Team")),
        "alice": sorted(d.id for d in engine.defects_for_developer("Alice")),
        "counts": list(engine.defect_counts_by_developer().items()),
        "ranking": engine.rank_developers_by_defects(),
        "defect_skills": [engine.skills_for_defect(f"defect{i}") for i in range(1, 6)],
        "team_skills": [engine.skills_for_team(t) for t in ("Backend Team", "Frontend Team")],
        "recommend": list(engine.recommend_for_defect("defect1", ["Java", "Python"]).items()),
        "recommend_detailed": engine.recommend_for_defect_detailed("defect3", ["Java", "Python", "React"]),
        "recommend_ties": engine.recommend_for_defect_detailed("defect2", ["Java", "React"]),
    }


class TestOrderIndependence:
    """Creating the same graph in another valid order answers queries identically."""

    @pytest.mark.parametrize("seed", range(20))
    def test_shuffled_creation(self, engine: DefectGraphQueryEngine, sample_document: dict[str, Any], seed: int) -> None:
        rng = random.Random(seed)
        shuffled = {key: list(items) for key, items in sample_document.items()}
        for items in shuffled.values():
            rng.shuffle(items)

        other = DefectGraphQueryEngine(GraphStore())
        GraphIngester(other.store).ingest(shuffled)

        assert _all_answers(other) == _all_answers(engine)
