"""
Pattern Matcher
===============

Anchored multi-hop traversal over the Defect Graph.

A pattern is an anchor kind with an optional property filter, followed by
a chain of hops. Each hop follows one relationship type in one direction
and may filter the nodes it reaches. Matching yields bindings: tuples of
node ids, one per pattern position.

Ordering:
- Anchors in node insertion order
- Per source node, neighbors in relationship insertion order

A hop with no matches for a partial binding drops that binding; there are
no partial rows.

Version: 0.1.0
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from services.defect_graph.errors import InvalidArgumentError
from services.defect_graph.queries.aggregation import distinct_ordered
from services.defect_graph.schema import (
    BaseNode,
    DefectNode,
    DeveloperNode,
    Direction,
    NodeKind,
    RelationshipType,
)
from services.defect_graph.store import GraphStore
from shared.logging import get_logger


logger = get_logger(__name__)

Binding = tuple[str, ...]


# =============================================================================
# Pattern Definitions
# =============================================================================


@dataclass(frozen=True)
class PropertyFilter:
    """Equality (or membership) test on a node property, compared verbatim."""

    key: str
    values: frozenset[str]

    @classmethod
    def equals(cls, key: str, value: str) -> "PropertyFilter":
        return cls(key, frozenset([value]))

    @classmethod
    def one_of(cls, key: str, values: Iterable[str]) -> "PropertyFilter":
        return cls(key, frozenset(values))

    def matches(self, node: BaseNode) -> bool:
        value: Any = getattr(node, self.key, None)
        if isinstance(value, Enum):
            value = value.value
        return value in self.values


@dataclass(frozen=True)
class Hop:
    """One traversal step across relationships of a single type."""

    edge_type: RelationshipType
    direction: Direction = Direction.OUTGOING
    where: PropertyFilter | None = None

    @property
    def from_kind(self) -> NodeKind:
        if self.direction == Direction.OUTGOING:
            return self.edge_type.source_kind
        return self.edge_type.target_kind

    @property
    def to_kind(self) -> NodeKind:
        if self.direction == Direction.OUTGOING:
            return self.edge_type.target_kind
        return self.edge_type.source_kind


@dataclass(frozen=True)
class Pattern:
    """An anchored chain of hops."""

    anchor_kind: NodeKind
    anchor_filter: PropertyFilter | None = None
    hops: tuple[Hop, ...] = field(default_factory=tuple)

    @property
    def kinds(self) -> tuple[NodeKind, ...]:
        """Node kind at each binding position."""
        return (self.anchor_kind, *(hop.to_kind for hop in self.hops))

    def validate(self) -> None:
        """Check that consecutive hops connect compatible node kinds."""
        current = self.anchor_kind
        for position, hop in enumerate(self.hops, start=1):
            if hop.from_kind != current:
                raise InvalidArgumentError(
                    f"Hop {position} ({hop.edge_type.value}, {hop.direction.value}) "
                    f"starts at {hop.from_kind.value}, but the pattern is at {current.value}"
                )
            current = hop.to_kind


# =============================================================================
# Matcher
# =============================================================================


class PatternMatcher:
    """
    Executes patterns against a graph store.

    Supported query shapes:
    1. Team(name) <-MEMBER_OF- Developer
    2. Developer(name) -ASSIGNED_TO-> Defect
    3. Developer -ASSIGNED_TO-> Defect, unfiltered
    4. Defect(id) <-ASSIGNED_TO- Developer -HAS_SKILL-> Skill
    5. Team(name) <-MEMBER_OF- Developer -HAS_SKILL-> Skill
    """

    def __init__(self, store: GraphStore) -> None:
        self.store = store

    def anchors(self, kind: NodeKind, where: PropertyFilter | None = None) -> list[str]:
        """Ids of nodes of `kind` passing the filter, in insertion order."""
        if where is not None and where.key == "id":
            # Direct lookup; ids are unique within a kind
            return [node_id for node_id in sorted(where.values) if self.store.has_node(kind, node_id)]
        return [
            node.id
            for node in self.store.nodes(kind)
            if where is None or where.matches(node)
        ]

    def match(self, pattern: Pattern) -> Iterator[Binding]:
        """
        Lazily yield every binding of the pattern.

        Raises:
            InvalidArgumentError: Hops that do not chain
        """
        pattern.validate()
        for anchor_id in self.anchors(pattern.anchor_kind, pattern.anchor_filter):
            yield from self._extend((anchor_id,), pattern.hops)

    def _extend(self, binding: Binding, hops: tuple[Hop, ...]) -> Iterator[Binding]:
        if not hops:
            yield binding
            return

        hop, rest = hops[0], hops[1:]
        for neighbor_id in self.store.neighbors(binding[-1], hop.edge_type, hop.direction):
            if hop.where is not None:
                node = self.store.get_node(hop.to_kind, neighbor_id)
                if node is None or not hop.where.matches(node):
                    continue
            yield from self._extend((*binding, neighbor_id), rest)

    def has_edge(self, edge_type: RelationshipType, from_id: str, to_id: str) -> bool:
        """Check whether at least one `edge_type` relationship links the two ids."""
        return any(target == to_id for target in self.store.out_edges(from_id, edge_type))

    def nodes_at(self, bindings: Iterable[Binding], pattern: Pattern, position: int) -> list[BaseNode]:
        """Resolve the node at `position` of each binding (one entry per binding)."""
        kind = pattern.kinds[position]
        nodes = []
        for binding in bindings:
            node = self.store.get_node(kind, binding[position])
            if node is not None:
                nodes.append(node)
        return nodes

    # =========================================================================
    # Query Shapes
    # =========================================================================

    def developers_in_team(self, team_name: str) -> list[DeveloperNode]:
        """Shape 1: developers whose MEMBER_OF relationship targets a team with this name."""
        pattern = Pattern(
            anchor_kind=NodeKind.TEAM,
            anchor_filter=PropertyFilter.equals("name", team_name),
            hops=(Hop(RelationshipType.MEMBER_OF, Direction.INCOMING),),
        )
        return self.nodes_at(self.match(pattern), pattern, 1)  # type: ignore[return-value]

    def defects_for_developer(self, developer_name: str) -> list[DefectNode]:
        """Shape 2: defects assigned to developers with this name."""
        pattern = Pattern(
            anchor_kind=NodeKind.DEVELOPER,
            anchor_filter=PropertyFilter.equals("name", developer_name),
            hops=(Hop(RelationshipType.ASSIGNED_TO),),
        )
        return self.nodes_at(self.match(pattern), pattern, 1)  # type: ignore[return-value]

    def assignments(self) -> Iterator[Binding]:
        """Shape 3: every (developer id, defect id) assignment binding."""
        return self.match(
            Pattern(
                anchor_kind=NodeKind.DEVELOPER,
                hops=(Hop(RelationshipType.ASSIGNED_TO),),
            )
        )

    def skill_names_for_defect(self, defect_id: str) -> list[str]:
        """Shape 4: distinct skill names of developers assigned to the defect."""
        pattern = Pattern(
            anchor_kind=NodeKind.DEFECT,
            anchor_filter=PropertyFilter.equals("id", defect_id),
            hops=(
                Hop(RelationshipType.ASSIGNED_TO, Direction.INCOMING),
                Hop(RelationshipType.HAS_SKILL),
            ),
        )
        return self._distinct_names(self.match(pattern), pattern, 2)

    def skill_names_for_team(self, team_name: str) -> list[str]:
        """Shape 5: distinct skill names of the members of teams with this name."""
        pattern = Pattern(
            anchor_kind=NodeKind.TEAM,
            anchor_filter=PropertyFilter.equals("name", team_name),
            hops=(
                Hop(RelationshipType.MEMBER_OF, Direction.INCOMING),
                Hop(RelationshipType.HAS_SKILL),
            ),
        )
        return self._distinct_names(self.match(pattern), pattern, 2)

    def _distinct_names(self, bindings: Iterable[Binding], pattern: Pattern, position: int) -> list[str]:
        names = [node.name for node in self.nodes_at(bindings, pattern, position)]  # type: ignore[attr-defined]
        return distinct_ordered(names)
