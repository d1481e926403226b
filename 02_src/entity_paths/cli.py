"""CLI entrypoint for the shortest path run."""

import argparse
import logging
from typing import Any, Dict, List

from .config import PathConfig, get_settings, load_config
from .errors import ConfigError, PreconditionError
from .logging_config import configure_logging
from .phases import (
    BipartiteCollapsePhase,
    EntityDocumentIngestionPhase,
    PathSearchPhase,
    ResultExportPhase,
    RunReportPhase,
)
from .pipeline import PipelinePhase, PipelineRunner

logger = logging.getLogger(__name__)


def build_default_phases(progress_every: int = 10000) -> List[PipelinePhase]:
    return [
        EntityDocumentIngestionPhase(),
        BipartiteCollapsePhase(),
        PathSearchPhase(progress_every=progress_every),
        ResultExportPhase(),
        RunReportPhase(),
    ]


def run_pipeline(config: PathConfig, progress_every: int = 10000) -> Dict[str, Any]:
    for line in config.display_lines():
        logger.info(line)
    runner = PipelineRunner(phases=build_default_phases(progress_every))
    final_context = runner.run({"config": config})
    report = dict(final_context["run_report"])
    report["phase_timings"] = final_context.get("phase_timings", {})
    return report


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Find shortest paths between entities linked through shared documents."
    )
    parser.add_argument("--config", default=settings.config_path, help="Location of the JSON config file.")
    parser.add_argument("--max-depth", type=int, default=None, help="Override output.max_depth.")
    parser.add_argument(
        "--all-paths",
        action="store_true",
        help="Find every shortest-length path instead of the first one.",
    )
    parser.add_argument("--output-file", default=None, help="Override output.output_file.")
    parser.add_argument("--log-level", default=settings.log_level)
    parser.add_argument("--log-format", choices=["text", "json"], default=settings.log_format)
    return parser.parse_args(argv)


def apply_overrides(config: PathConfig, args: argparse.Namespace) -> PathConfig:
    updates: Dict[str, Any] = {}
    if args.max_depth is not None:
        if args.max_depth < 0:
            raise ConfigError(f"--max-depth must be non-negative, got {args.max_depth}")
        updates["max_depth"] = args.max_depth
    if args.all_paths:
        updates["find_all_paths"] = True
    if args.output_file:
        updates["output_file"] = args.output_file
    if not updates:
        return config
    return config.model_copy(update={"output": config.output.model_copy(update=updates)})


def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    configure_logging(args.log_level, args.log_format, settings.log_module_levels)

    try:
        config = apply_overrides(load_config(args.config), args)
        report = run_pipeline(config, progress_every=settings.progress_every)
    except (ConfigError, PreconditionError) as error:
        logger.error("Run aborted: %s", error)
        return 1

    search = report["search"]
    print(f"Results saved to: {report['written_files'].get('results', '-')}")
    print(
        "Counts:",
        f"vertices={report['vertex_count']}",
        f"edges={report['edge_count']}",
        f"pairs={search.get('total_pairs', 0)}",
        f"pairs_with_paths={search.get('pairs_with_paths', 0)}",
        f"paths={search.get('paths_found', 0)}",
    )
    return 0
