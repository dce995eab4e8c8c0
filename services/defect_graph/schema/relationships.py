"""
Graph Relationship Definitions
==============================

Relationship types for the Defect Graph.

Every relationship type fixes the node kinds at both of its ends, so an
endpoint id is always resolved in the kind-space of its relationship.

Version: 0.1.0
"""

from dataclasses import dataclass
from enum import Enum

from services.defect_graph.schema.nodes import NodeKind


class RelationshipType(str, Enum):
    """Directed relationship types."""

    HAS_SKILL = "HAS_SKILL"  # Developer -> Skill
    ASSIGNED_TO = "ASSIGNED_TO"  # Developer -> Defect
    MEMBER_OF = "MEMBER_OF"  # Developer -> Team

    @property
    def source_kind(self) -> NodeKind:
        """Kind of the node the relationship starts at."""
        return RELATIONSHIP_ENDPOINTS[self][0]

    @property
    def target_kind(self) -> NodeKind:
        """Kind of the node the relationship points to."""
        return RELATIONSHIP_ENDPOINTS[self][1]


RELATIONSHIP_ENDPOINTS: dict[RelationshipType, tuple[NodeKind, NodeKind]] = {
    RelationshipType.HAS_SKILL: (NodeKind.DEVELOPER, NodeKind.SKILL),
    RelationshipType.ASSIGNED_TO: (NodeKind.DEVELOPER, NodeKind.DEFECT),
    RelationshipType.MEMBER_OF: (NodeKind.DEVELOPER, NodeKind.TEAM),
}


class Direction(str, Enum):
    """Direction a hop follows a relationship in."""

    OUTGOING = "outgoing"  # (source)-[r]->(target)
    INCOMING = "incoming"  # (target)<-[r]-(source)


# =============================================================================
# Relationship Model
# =============================================================================


@dataclass(frozen=True)
class Edge:
    """A directed, typed relationship between two node ids. Carries no properties."""

    type: RelationshipType
    from_id: str
    to_id: str

    def __str__(self) -> str:
        return f"({self.from_id})-[:{self.type.value}]->({self.to_id})"
