#!/usr/bin/env python3
"""
Defect Graph Query Script
=========================

Load a graph document and run one named query against it.

Usage:
    python scripts/query_graph.py team "Backend Team"
    python scripts/query_graph.py defects Alice
    python scripts/query_graph.py ranking
    python scripts/query_graph.py defect-skills defect1
    python scripts/query_graph.py team-skills "Backend Team"
    python scripts/query_graph.py recommend defect1 Java Python --detailed
    python scripts/query_graph.py --fixture graph.json stats

Without --fixture, GRAPH_SEED_FILE is used, then the built-in sample graph.

Version: 0.1.0
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from services.defect_graph import DefectGraphError, DefectGraphQueryEngine, graph_session
from services.defect_graph.ingestion import SAMPLE_GRAPH, GraphIngester, load_document
from shared.config import settings
from shared.logging import get_logger, setup_logging


logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Query the defect graph.")
    parser.add_argument("--fixture", type=Path, help="Graph document (JSON) to load")
    parser.add_argument("--log-level", default=settings.log_level.value, help="Logging level")

    commands = parser.add_subparsers(dest="command", required=True)

    team = commands.add_parser("team", help="Developers in a team")
    team.add_argument("team_name")

    defects = commands.add_parser("defects", help="Defects assigned to a developer")
    defects.add_argument("developer_name")

    commands.add_parser("ranking", help="Developers ranked by assigned defects")

    defect_skills = commands.add_parser("defect-skills", help="Skills of developers on a defect")
    defect_skills.add_argument("defect_id")

    team_skills = commands.add_parser("team-skills", help="Skills held within a team")
    team_skills.add_argument("team_name")

    recommend = commands.add_parser("recommend", help="Recommend developers for a defect")
    recommend.add_argument("defect_id")
    recommend.add_argument("skills", nargs="*", help="Required skill names")
    recommend.add_argument("--detailed", action="store_true", help="Include workload, keep ranking")

    commands.add_parser("stats", help="Node and relationship counts")

    return parser


def run_query(engine: DefectGraphQueryEngine, args: argparse.Namespace) -> Any:
    """Dispatch one named query and return a JSON-serializable result."""
    if args.command == "team":
        return [dev.to_properties() for dev in engine.developers_in_team(args.team_name)]
    if args.command == "defects":
        return [defect.to_properties() for defect in engine.defects_for_developer(args.developer_name)]
    if args.command == "ranking":
        return [
            {"name": entry.name, "defect_count": entry.defect_count}
            for entry in engine.rank_developers_by_defects()
        ]
    if args.command == "defect-skills":
        return engine.skills_for_defect(args.defect_id)
    if args.command == "team-skills":
        return engine.skills_for_team(args.team_name)
    if args.command == "recommend":
        if args.detailed:
            return [
                rec.to_dict()
                for rec in engine.recommend_for_defect_detailed(args.defect_id, args.skills)
            ]
        return engine.recommend_for_defect(args.defect_id, args.skills)
    if args.command == "stats":
        return engine.store.stats()
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(
        log_level=args.log_level,
        json_logs=settings.is_production,
        service_name=settings.service_name,
    )

    fixture = args.fixture or settings.graph.seed_file

    try:
        document = load_document(fixture) if fixture else SAMPLE_GRAPH
        with graph_session() as store:
            GraphIngester(store).ingest(document)
            result = run_query(DefectGraphQueryEngine(store), args)
    except (DefectGraphError, OSError) as e:
        logger.error("query_failed", command=args.command, error=str(e))
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
