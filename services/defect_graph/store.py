"""
Graph Store
===========

In-memory store for the nodes and directed, typed relationships of the
Defect Graph.

Features:
- Per-kind id spaces (the same id may exist once per node kind)
- Parallel relationships (no deduplication)
- Insertion-ordered adjacency in both directions

The store is not synchronized. One logical writer/reader per instance;
callers sharing an instance across threads must lock around it.

Version: 0.1.0
"""

from collections.abc import Generator, Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from pydantic import ValidationError

from services.defect_graph.errors import (
    DanglingReferenceError,
    DuplicateIdError,
    InvalidArgumentError,
)
from services.defect_graph.schema import (
    NODE_MODELS,
    BaseNode,
    Direction,
    Edge,
    NodeKind,
    RelationshipType,
)
from shared.logging import get_logger


logger = get_logger(__name__)


def coerce_kind(kind: NodeKind | str) -> NodeKind:
    """Resolve a node kind given as enum or label string."""
    if isinstance(kind, NodeKind):
        return kind
    try:
        return NodeKind(kind)
    except ValueError as e:
        raise InvalidArgumentError(f"Unknown node kind: {kind!r}") from e


def coerce_relationship(edge_type: RelationshipType | str) -> RelationshipType:
    """Resolve a relationship type given as enum or string."""
    if isinstance(edge_type, RelationshipType):
        return edge_type
    try:
        return RelationshipType(edge_type)
    except ValueError as e:
        raise InvalidArgumentError(f"Unknown relationship type: {edge_type!r}") from e


class GraphStore:
    """
    Owner of all node and relationship data.

    Nodes are frozen pydantic models, so everything the store returns is
    a read-only view; there is no update or per-entity delete.

    Example:
        >>> store = GraphStore()
        >>> store.create_node(NodeKind.TEAM, {"id": "team1", "name": "Backend Team"})
        >>> store.create_node(NodeKind.DEVELOPER, {"id": "dev1", "name": "Alice"})
        >>> store.create_edge(RelationshipType.MEMBER_OF, "dev1", "team1")
        >>> list(store.in_edges("team1", RelationshipType.MEMBER_OF))
        ['dev1']
    """

    def __init__(self) -> None:
        self._nodes: dict[NodeKind, dict[str, BaseNode]] = {kind: {} for kind in NodeKind}
        self._edges: list[Edge] = []
        # (type, node id) -> neighbor ids in edge insertion order
        self._outgoing: dict[tuple[RelationshipType, str], list[str]] = {}
        self._incoming: dict[tuple[RelationshipType, str], list[str]] = {}

    # =========================================================================
    # Mutation
    # =========================================================================

    def create_node(
        self,
        kind: NodeKind | str,
        properties: BaseNode | Mapping[str, Any],
    ) -> BaseNode:
        """
        Insert a node of the given kind.

        Args:
            kind: Node kind
            properties: The kind's node model, or a mapping validated into it

        Returns:
            The stored node

        Raises:
            DuplicateIdError: A node of this kind already has the id
            InvalidArgumentError: Unknown kind or properties not matching the kind
        """
        kind = coerce_kind(kind)
        node = self._build_node(kind, properties)

        nodes = self._nodes[kind]
        if node.id in nodes:
            logger.warning("duplicate_node_rejected", kind=kind, node_id=node.id)
            raise DuplicateIdError(kind.value, node.id)

        nodes[node.id] = node
        logger.debug("node_created", kind=kind, node_id=node.id)
        return node

    def create_edge(
        self,
        edge_type: RelationshipType | str,
        from_id: str,
        to_id: str,
    ) -> Edge:
        """
        Insert a directed relationship.

        Endpoints are resolved in the kind-spaces fixed by the relationship
        type. Inserting the same triple twice creates two parallel edges.

        Raises:
            DanglingReferenceError: Either endpoint does not exist
            InvalidArgumentError: Unknown relationship type or non-string endpoint ids
        """
        edge_type = coerce_relationship(edge_type)
        if not isinstance(from_id, str) or not isinstance(to_id, str):
            raise InvalidArgumentError(
                f"Relationship endpoints must be string ids, got {from_id!r} -> {to_id!r}"
            )

        missing = []
        if from_id not in self._nodes[edge_type.source_kind]:
            missing.append(f"{edge_type.source_kind.value} {from_id!r}")
        if to_id not in self._nodes[edge_type.target_kind]:
            missing.append(f"{edge_type.target_kind.value} {to_id!r}")
        if missing:
            logger.warning(
                "dangling_edge_rejected",
                edge_type=edge_type,
                from_id=from_id,
                to_id=to_id,
                missing=missing,
            )
            raise DanglingReferenceError(edge_type.value, from_id, to_id, missing)

        edge = Edge(type=edge_type, from_id=from_id, to_id=to_id)
        self._edges.append(edge)
        self._outgoing.setdefault((edge_type, from_id), []).append(to_id)
        self._incoming.setdefault((edge_type, to_id), []).append(from_id)

        logger.debug("edge_created", edge_type=edge_type, from_id=from_id, to_id=to_id)
        return edge

    def clear(self) -> None:
        """Remove all nodes and relationships. Safe to call repeatedly."""
        node_count = self.node_count()
        edge_count = self.edge_count()

        for nodes in self._nodes.values():
            nodes.clear()
        self._edges.clear()
        self._outgoing.clear()
        self._incoming.clear()

        logger.info("graph_cleared", nodes_deleted=node_count, relationships_deleted=edge_count)

    # =========================================================================
    # Adjacency
    # =========================================================================

    def out_edges(self, node_id: str, edge_type: RelationshipType | str) -> Iterator[str]:
        """Lazily yield ids reached by following `edge_type` forward from `node_id`."""
        edge_type = coerce_relationship(edge_type)
        return iter(self._outgoing.get((edge_type, node_id), ()))

    def in_edges(self, node_id: str, edge_type: RelationshipType | str) -> Iterator[str]:
        """Lazily yield ids of nodes whose `edge_type` relationship targets `node_id`."""
        edge_type = coerce_relationship(edge_type)
        return iter(self._incoming.get((edge_type, node_id), ()))

    def neighbors(
        self,
        node_id: str,
        edge_type: RelationshipType | str,
        direction: Direction,
    ) -> Iterator[str]:
        """Follow `edge_type` from `node_id` in the given direction."""
        if direction == Direction.OUTGOING:
            return self.out_edges(node_id, edge_type)
        return self.in_edges(node_id, edge_type)

    # =========================================================================
    # Reads
    # =========================================================================

    def get_node(self, kind: NodeKind | str, node_id: str) -> BaseNode | None:
        """Get a node by kind and id."""
        return self._nodes[coerce_kind(kind)].get(node_id)

    def has_node(self, kind: NodeKind | str, node_id: str) -> bool:
        """Check whether a node of the kind exists."""
        return node_id in self._nodes[coerce_kind(kind)]

    def nodes(self, kind: NodeKind | str) -> Iterator[BaseNode]:
        """Iterate nodes of one kind in insertion order."""
        return iter(self._nodes[coerce_kind(kind)].values())

    def edges(self, edge_type: RelationshipType | str | None = None) -> Iterator[Edge]:
        """Iterate relationships in insertion order, optionally of one type."""
        wanted = coerce_relationship(edge_type) if edge_type is not None else None
        for edge in self._edges:
            if wanted is None or edge.type == wanted:
                yield edge

    def node_count(self, kind: NodeKind | str | None = None) -> int:
        """Count nodes, optionally of one kind."""
        if kind is not None:
            return len(self._nodes[coerce_kind(kind)])
        return sum(len(nodes) for nodes in self._nodes.values())

    def edge_count(self, edge_type: RelationshipType | str | None = None) -> int:
        """Count relationships, optionally of one type."""
        if edge_type is None:
            return len(self._edges)
        return sum(1 for _ in self.edges(edge_type))

    def stats(self) -> dict[str, Any]:
        """Node and relationship counts per kind / type."""
        return {
            "nodes": {kind.value: len(nodes) for kind, nodes in self._nodes.items()},
            "relationships": {
                edge_type.value: self.edge_count(edge_type) for edge_type in RelationshipType
            },
        }

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _build_node(kind: NodeKind, properties: BaseNode | Mapping[str, Any]) -> BaseNode:
        """Validate properties into the node model for `kind`."""
        model = NODE_MODELS[kind]

        if isinstance(properties, BaseNode):
            if not isinstance(properties, model):
                raise InvalidArgumentError(
                    f"Expected {model.__name__} for kind {kind.value}, "
                    f"got {type(properties).__name__}"
                )
            return properties

        if not isinstance(properties, Mapping):
            raise InvalidArgumentError(
                f"Properties for {kind.value} must be a mapping or {model.__name__}"
            )

        try:
            return model.model_validate(dict(properties))
        except ValidationError as e:
            raise InvalidArgumentError(f"Invalid {kind.value} properties: {e}") from e


@contextmanager
def graph_session() -> Generator[GraphStore, None, None]:
    """
    Scoped acquisition of a graph store.

    Usage:
        with graph_session() as store:
            GraphIngester(store).ingest(SAMPLE_GRAPH)
            ...

    The store is cleared when the block exits.
    """
    store = GraphStore()
    logger.debug("graph_session_opened")
    try:
        yield store
    finally:
        store.clear()
        logger.debug("graph_session_closed")
