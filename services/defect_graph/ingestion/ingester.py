"""
Graph Document Ingester
=======================

Loads a graph document (teams, developers, skills, defects and
relationships) into a GraphStore.

Document layout:
    {
        "teams": [{"id": ..., "name": ..., "location": ...}],
        "developers": [{"id": ..., "name": ..., "team_id": ...}],
        "skills": [{"id": ..., "name": ..., "level": ...}],
        "defects": [{"id": ..., "title": ..., "severity": ..., "status": ...}],
        "relationships": [{"type": "HAS_SKILL", "from": ..., "to": ...}]
    }

Version: 0.1.0
"""

import json
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from services.defect_graph.errors import DefectGraphError, DuplicateIdError, InvalidArgumentError
from services.defect_graph.schema import NodeKind
from services.defect_graph.store import GraphStore
from shared.logging import get_logger


logger = get_logger(__name__)


# Document section -> node kind, in creation order
NODE_SECTIONS: tuple[tuple[str, NodeKind], ...] = (
    ("teams", NodeKind.TEAM),
    ("developers", NodeKind.DEVELOPER),
    ("skills", NodeKind.SKILL),
    ("defects", NodeKind.DEFECT),
)


@dataclass
class IngestionOptions:
    """Options for document ingestion."""

    # Raise the first error instead of collecting it
    stop_on_error: bool = True

    # Silently skip nodes whose id already exists for their kind
    skip_existing: bool = False


@dataclass
class IngestionResult:
    """Result of document ingestion."""

    # Counts
    nodes_created: dict[str, int] = field(default_factory=dict)
    nodes_skipped: int = 0
    relationships_created: int = 0

    # Errors
    errors: list[dict[str, Any]] = field(default_factory=list)

    # Timing
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    completed_at: datetime | None = None
    duration_seconds: float = 0.0

    @property
    def success(self) -> bool:
        """Whether ingestion completed without errors."""
        return len(self.errors) == 0

    @property
    def total_nodes_created(self) -> int:
        """Total nodes created."""
        return sum(self.nodes_created.values())


class GraphIngester:
    """
    Ingests graph documents into a store.

    Nodes are created before relationships so that documents may list
    relationships in any order.
    """

    def __init__(self, store: GraphStore, options: IngestionOptions | None = None) -> None:
        self.store = store
        self.options = options or IngestionOptions()

    def ingest(self, document: dict[str, Any]) -> IngestionResult:
        """
        Ingest a graph document.

        Args:
            document: Graph document as dictionary

        Returns:
            IngestionResult with counts and any collected errors

        Raises:
            DefectGraphError: First failure, when `stop_on_error` is set
        """
        if not isinstance(document, dict):
            raise InvalidArgumentError("Graph document must be a JSON object")

        result = IngestionResult()

        for section, kind in NODE_SECTIONS:
            for item in self._section(document, section, result):
                try:
                    self.store.create_node(kind, item)
                    result.nodes_created[kind.value] = result.nodes_created.get(kind.value, 0) + 1
                except DuplicateIdError as e:
                    if self.options.skip_existing:
                        result.nodes_skipped += 1
                    else:
                        self._record(result, kind.value, item, e)
                except DefectGraphError as e:
                    self._record(result, kind.value, item, e)

        for rel in self._section(document, "relationships", result):
            try:
                if not isinstance(rel, dict):
                    raise InvalidArgumentError(f"Relationship entry must be an object, got {rel!r}")
                self.store.create_edge(rel.get("type", ""), rel.get("from", ""), rel.get("to", ""))
                result.relationships_created += 1
            except DefectGraphError as e:
                self._record(result, "relationship", rel, e)

        result.completed_at = datetime.now(UTC)
        result.duration_seconds = (result.completed_at - result.started_at).total_seconds()

        logger.info(
            "graph_document_ingested",
            nodes_created=result.total_nodes_created,
            relationships_created=result.relationships_created,
            errors=len(result.errors),
            duration_seconds=round(result.duration_seconds, 4),
        )
        return result

    def _section(self, document: dict[str, Any], section: str, result: IngestionResult) -> list[Any]:
        """Entries of one document section; a missing section is empty."""
        items = document.get(section, [])
        if not isinstance(items, list):
            error = InvalidArgumentError(f"Section {section!r} must be a list, got {type(items).__name__}")
            self._record(result, section, None, error, item_id=section)
            return []
        return items

    def _record(
        self,
        result: IngestionResult,
        item_type: str,
        item: Any,
        error: DefectGraphError,
        item_id: str = "unknown",
    ) -> None:
        if self.options.stop_on_error:
            raise error
        if isinstance(item, dict):
            item_id = item.get("id") or f"{item.get('from')}->{item.get('to')}"
        logger.warning("ingestion_item_failed", item_type=item_type, item_id=item_id, error=str(error))
        result.errors.append({"type": item_type, "id": item_id, "error": str(error)})


def load_document(path: Path | str) -> dict[str, Any]:
    """
    Read a graph document from a JSON file.

    Raises:
        InvalidArgumentError: The file is not valid JSON
    """
    path = Path(path)
    logger.debug("graph_document_loading", path=str(path))
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise InvalidArgumentError(f"Invalid graph document {path}: {e}") from e
