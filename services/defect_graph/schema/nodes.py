"""
Graph Node Definitions
======================

Pydantic models for the node kinds of the Defect Graph.

Version: 0.1.0
"""

from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field


class NodeKind(str, Enum):
    """Node labels."""

    DEVELOPER = "Developer"
    DEFECT = "Defect"
    SKILL = "Skill"
    TEAM = "Team"


class Severity(str, Enum):
    """Defect severity."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class DefectStatus(str, Enum):
    """Defect workflow status."""

    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    CLOSED = "CLOSED"


class SkillLevel(str, Enum):
    """Proficiency level of a skill."""

    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    EXPERT = "EXPERT"


# =============================================================================
# Node Models
# =============================================================================


class BaseNode(BaseModel):
    """
    Base model for graph nodes.

    Nodes are frozen once created, so the store can hand them out
    without callers being able to alias its data.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    kind: ClassVar[NodeKind]

    id: str = Field(..., min_length=1, description="Identifier, unique within the node kind")

    def to_properties(self) -> dict[str, Any]:
        """Convert to a flat property mapping (enum values as strings)."""
        return self.model_dump(mode="json")


class DeveloperNode(BaseNode):
    """A developer who can own defects, hold skills and belong to a team."""

    kind: ClassVar[NodeKind] = NodeKind.DEVELOPER

    name: str
    team_id: str | None = None


class DefectNode(BaseNode):
    """A tracked defect."""

    kind: ClassVar[NodeKind] = NodeKind.DEFECT

    title: str
    severity: Severity | None = None
    status: DefectStatus | None = None


class SkillNode(BaseNode):
    """A named skill at a given level."""

    kind: ClassVar[NodeKind] = NodeKind.SKILL

    name: str
    level: SkillLevel | None = None


class TeamNode(BaseNode):
    """A team developers are members of."""

    kind: ClassVar[NodeKind] = NodeKind.TEAM

    name: str
    location: str | None = None


NODE_MODELS: dict[NodeKind, type[BaseNode]] = {
    NodeKind.DEVELOPER: DeveloperNode,
    NodeKind.DEFECT: DefectNode,
    NodeKind.SKILL: SkillNode,
    NodeKind.TEAM: TeamNode,
}
