"""
Defect Graph Schema
===================

Node and relationship definitions for the Defect Graph.

Node Types:
- Developer: People who hold skills and own defects
- Defect: Tracked defects with severity and status
- Skill: Named skills with a proficiency level
- Team: Teams developers belong to

Relationships:
- HAS_SKILL: Developer -> Skill
- ASSIGNED_TO: Developer -> Defect
- MEMBER_OF: Developer -> Team

Version: 0.1.0
"""

from services.defect_graph.schema.nodes import (
    NODE_MODELS,
    BaseNode,
    DefectNode,
    DefectStatus,
    DeveloperNode,
    NodeKind,
    Severity,
    SkillLevel,
    SkillNode,
    TeamNode,
)
from services.defect_graph.schema.relationships import (
    RELATIONSHIP_ENDPOINTS,
    Direction,
    Edge,
    RelationshipType,
)

__all__ = [
    # Nodes
    "BaseNode",
    "DeveloperNode",
    "DefectNode",
    "SkillNode",
    "TeamNode",
    "NODE_MODELS",
    # Enums
    "NodeKind",
    "Severity",
    "DefectStatus",
    "SkillLevel",
    # Relationships
    "RelationshipType",
    "RELATIONSHIP_ENDPOINTS",
    "Direction",
    "Edge",
]
