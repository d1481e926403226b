"""Result and unipartite graph export phase."""

import csv
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Sequence, Tuple

from ..config import PathConfig
from ..errors import InvalidDelimiter, MalformedRow, OutputError
from ..graph_model import Graph, PathResult, header_fields
from ..pipeline import PipelinePhase

logger = logging.getLogger(__name__)


def _check_delimiter(delimiter: str) -> None:
    if len(delimiter) != 1:
        raise InvalidDelimiter(f"Delimiter must be a single character, got {delimiter!r}")


def write_results(
    output_path: Path,
    results: Sequence[PathResult],
    delimiter: str,
    path_delimiter: str,
    with_groups: bool,
) -> None:
    _check_delimiter(delimiter)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with output_path.open("w", newline="", encoding="utf-8") as handle:
            writer = csv.writer(handle, delimiter=delimiter, lineterminator="\n")
            writer.writerow(header_fields(with_groups))
            writer.writerows(result.to_row(path_delimiter, with_groups) for result in results)
    except OSError as error:
        raise OutputError(f"Unable to write results to {output_path}: {error}") from error


def write_edge_list(output_path: Path, edges: Iterable[Tuple[str, str]], delimiter: str) -> int:
    _check_delimiter(delimiter)
    count = 0
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with output_path.open("w", newline="", encoding="utf-8") as handle:
            writer = csv.writer(handle, delimiter=delimiter, lineterminator="\n")
            for edge in edges:
                writer.writerow(edge)
                count += 1
    except OSError as error:
        raise OutputError(f"Unable to write edge list to {output_path}: {error}") from error
    return count


def read_edge_list(input_path: Path, delimiter: str) -> Graph:
    """Rebuild an undirected graph from a file written by ``write_edge_list``."""
    _check_delimiter(delimiter)
    edges = []
    with input_path.open(newline="", encoding="utf-8") as handle:
        reader = csv.reader(handle, delimiter=delimiter)
        for row in reader:
            if not row:
                continue
            if len(row) != 2:
                raise MalformedRow(f"Invalid edge on line {reader.line_num} of {input_path}: {row}")
            edges.append((row[0], row[1]))
    return Graph.from_edge_list(edges, undirected=True)


class ResultExportPhase(PipelinePhase):
    phase_name = "export"

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        config: PathConfig = context["config"]
        output = config.output
        graph: Graph = context["graph"]
        written: Dict[str, str] = {}

        if output.unipartite:
            unipartite_path = Path(output.unipartite)
            edges = graph.edge_list() if output.unipartite_directed else graph.undirected_edge_list()
            count = write_edge_list(unipartite_path, edges, output.path_delimiter)
            logger.info("Wrote %d edges of the unipartite graph to: %s", count, unipartite_path)
            written["unipartite"] = str(unipartite_path)

        if config.entities.has_queries():
            results = context.get("results", [])
            output_path = Path(output.output_file)
            write_results(
                output_path,
                results,
                delimiter=output.delimiter,
                path_delimiter=output.path_delimiter,
                with_groups=len(config.entities.data_sources) >= 2,
            )
            logger.info("Results located at: %s", output_path)
            written["results"] = str(output_path)

        return {"written_files": written}
