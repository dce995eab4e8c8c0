"""
Defect Graph Errors
===================

Exceptions raised by the graph store and the query engine.

All errors are raised at the point of detection and never retried here.
A failed mutation leaves the store unchanged.

Version: 0.1.0
"""


class DefectGraphError(Exception):
    """Base class for defect graph errors."""


class DuplicateIdError(DefectGraphError):
    """A node with the same id already exists for its kind."""

    def __init__(self, kind: str, node_id: str) -> None:
        self.kind = kind
        self.node_id = node_id
        super().__init__(f"{kind} with id {node_id!r} already exists")


class DanglingReferenceError(DefectGraphError):
    """A relationship endpoint does not exist in the store."""

    def __init__(
        self,
        edge_type: str,
        from_id: str,
        to_id: str,
        missing: list[str],
    ) -> None:
        self.edge_type = edge_type
        self.from_id = from_id
        self.to_id = to_id
        self.missing = missing
        super().__init__(
            f"Cannot create {edge_type} from {from_id!r} to {to_id!r}: "
            f"missing {', '.join(missing)}"
        )


class NotFoundError(DefectGraphError):
    """A lookup that must resolve to an entity matched nothing."""

    def __init__(self, kind: str, key: str, value: str) -> None:
        self.kind = kind
        self.key = key
        self.value = value
        super().__init__(f"No {kind} with {key}={value!r}")


class InvalidArgumentError(DefectGraphError):
    """Structurally malformed input (unknown kind, unknown edge type, bad properties)."""
