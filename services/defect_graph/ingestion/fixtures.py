"""
Sample Graph
============

Reference document with two teams, four developers, four skills and five
defects, used by the CLI and the test suite.

Version: 0.1.0
"""

from copy import deepcopy
from typing import Any


SAMPLE_GRAPH: dict[str, Any] = {
    "teams": [
        {"id": "team1", "name": "Backend Team", "location": "San Francisco"},
        {"id": "team2", "name": "Frontend Team", "location": "New York"},
    ],
    "developers": [
        {"id": "dev1", "name": "Alice", "team_id": "team1"},
        {"id": "dev2", "name": "Bob", "team_id": "team1"},
        {"id": "dev3", "name": "Carol", "team_id": "team2"},
        {"id": "dev4", "name": "Dave", "team_id": "team2"},
    ],
    "skills": [
        {"id": "skill1", "name": "Java", "level": "EXPERT"},
        {"id": "skill2", "name": "Python", "level": "INTERMEDIATE"},
        {"id": "skill3", "name": "React", "level": "EXPERT"},
        {"id": "skill4", "name": "Neo4j", "level": "BEGINNER"},
    ],
    "defects": [
        {"id": "defect1", "title": "Login API fails", "severity": "HIGH", "status": "OPEN"},
        {"id": "defect2", "title": "Database connection timeout", "severity": "CRITICAL", "status": "OPEN"},
        {"id": "defect3", "title": "UI button misaligned", "severity": "LOW", "status": "CLOSED"},
        {"id": "defect4", "title": "Performance issue in query", "severity": "MEDIUM", "status": "IN_PROGRESS"},
        {"id": "defect5", "title": "Memory leak in service", "severity": "HIGH", "status": "OPEN"},
    ],
    "relationships": [
        # Skills
        {"type": "HAS_SKILL", "from": "dev1", "to": "skill1"},  # Alice -> Java
        {"type": "HAS_SKILL", "from": "dev1", "to": "skill2"},  # Alice -> Python
        {"type": "HAS_SKILL", "from": "dev2", "to": "skill1"},  # Bob -> Java
        {"type": "HAS_SKILL", "from": "dev2", "to": "skill4"},  # Bob -> Neo4j
        {"type": "HAS_SKILL", "from": "dev3", "to": "skill3"},  # Carol -> React
        {"type": "HAS_SKILL", "from": "dev4", "to": "skill3"},  # Dave -> React
        {"type": "HAS_SKILL", "from": "dev4", "to": "skill2"},  # Dave -> Python
        # Assignments
        {"type": "ASSIGNED_TO", "from": "dev1", "to": "defect1"},
        {"type": "ASSIGNED_TO", "from": "dev1", "to": "defect2"},
        {"type": "ASSIGNED_TO", "from": "dev3", "to": "defect3"},
        {"type": "ASSIGNED_TO", "from": "dev1", "to": "defect4"},
        {"type": "ASSIGNED_TO", "from": "dev2", "to": "defect5"},
        # Membership
        {"type": "MEMBER_OF", "from": "dev1", "to": "team1"},
        {"type": "MEMBER_OF", "from": "dev2", "to": "team1"},
        {"type": "MEMBER_OF", "from": "dev3", "to": "team2"},
        {"type": "MEMBER_OF", "from": "dev4", "to": "team2"},
    ],
}


def sample_graph() -> dict[str, Any]:
    """A fresh copy of the sample document, safe to modify."""
    return deepcopy(SAMPLE_GRAPH)
