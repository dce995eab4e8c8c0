"""
Tests for Defect Graph Schema
=============================

Tests for node models and relationship types.

Version: 0.1.0
"""

import pytest
from pydantic import ValidationError

from services.defect_graph.schema import (
    NODE_MODELS,
    DefectNode,
    DefectStatus,
    DeveloperNode,
    Direction,
    Edge,
    NodeKind,
    RelationshipType,
    Severity,
    SkillLevel,
    SkillNode,
    TeamNode,
)


# =============================================================================
# Node Tests
# =============================================================================


class TestNodeModels:
    """Tests for node models."""

    def test_create_developer(self) -> None:
        """Test creating a developer node."""
        dev = DeveloperNode(id="dev1", name="Alice", team_id="team1")

        assert dev.kind == NodeKind.DEVELOPER
        assert dev.name == "Alice"
        assert dev.team_id == "team1"

    def test_defect_enums_parsed_from_strings(self) -> None:
        """Severity and status accept their string values."""
        defect = DefectNode(id="defect1", title="Login API fails", severity="HIGH", status="IN_PROGRESS")

        assert defect.severity == Severity.HIGH
        assert defect.status == DefectStatus.IN_PROGRESS

    def test_invalid_severity_rejected(self) -> None:
        """Unknown severities fail validation."""
        with pytest.raises(ValidationError):
            DefectNode(id="defect1", title="Broken", severity="URGENT")

    def test_empty_id_rejected(self) -> None:
        """Ids must be non-empty."""
        with pytest.raises(ValidationError):
            TeamNode(id="", name="Backend Team")

    def test_nodes_are_frozen(self) -> None:
        """Nodes cannot be modified after creation."""
        skill = SkillNode(id="skill1", name="Java", level=SkillLevel.EXPERT)

        with pytest.raises(ValidationError):
            skill.name = "Kotlin"  # type: ignore[misc]

    def test_to_properties(self) -> None:
        """Properties are flat with enum values as strings."""
        defect = DefectNode(id="defect2", title="Timeout", severity=Severity.CRITICAL)

        assert defect.to_properties() == {
            "id": "defect2",
            "title": "Timeout",
            "severity": "CRITICAL",
            "status": None,
        }

    def test_optional_attributes_stay_unset(self) -> None:
        """Severity, status and level are stored as given, with no invented defaults."""
        defect = DefectNode(id="defect1", title="Login API fails")
        skill = SkillNode(id="skill1", name="Java", level=None)

        assert defect.severity is None
        assert defect.status is None
        assert skill.level is None

    def test_every_kind_has_a_model(self) -> None:
        """Each node kind maps to a model declaring that kind."""
        for kind in NodeKind:
            assert NODE_MODELS[kind].kind == kind


# =============================================================================
# Relationship Tests
# =============================================================================


class TestRelationshipTypes:
    """Tests for relationship endpoint kinds."""

    @pytest.mark.parametrize(
        ("edge_type", "source", "target"),
        [
            (RelationshipType.HAS_SKILL, NodeKind.DEVELOPER, NodeKind.SKILL),
            (RelationshipType.ASSIGNED_TO, NodeKind.DEVELOPER, NodeKind.DEFECT),
            (RelationshipType.MEMBER_OF, NodeKind.DEVELOPER, NodeKind.TEAM),
        ],
    )
    def test_endpoint_kinds(
        self,
        edge_type: RelationshipType,
        source: NodeKind,
        target: NodeKind,
    ) -> None:
        assert edge_type.source_kind == source
        assert edge_type.target_kind == target

    def test_edge_str(self) -> None:
        edge = Edge(type=RelationshipType.MEMBER_OF, from_id="dev1", to_id="team1")

        assert str(edge) == "(dev1)-[:MEMBER_OF]->(team1)"

    def test_directions(self) -> None:
        assert {d.value for d in Direction} == {"outgoing", "incoming"}
