"""Batch path search over many queries against one graph."""

from dataclasses import dataclass, field
from typing import AbstractSet, Callable, Dict, Iterable, List, Optional

from .graph_model import Graph, PathResult
from .queries import PathQuery
from .traversal import ReachableResult, all_paths, bfs, reachable_vertices

ProgressCallback = Callable[[int, int], None]
AnomalyCallback = Callable[[PathQuery], None]


@dataclass
class SearchStats:
    total_pairs: int = 0
    pairs_processed: int = 0
    pairs_skipped: int = 0
    pairs_with_paths: int = 0
    paths_found: int = 0
    missing_sources: int = 0
    pathless_anomalies: int = 0
    reachable_computations: int = 0

    @property
    def percentage_with_paths(self) -> float:
        if not self.total_pairs:
            return 0.0
        return 100.0 * self.pairs_with_paths / self.total_pairs

    def as_dict(self) -> Dict[str, float]:
        return {
            "total_pairs": self.total_pairs,
            "pairs_processed": self.pairs_processed,
            "pairs_skipped": self.pairs_skipped,
            "pairs_with_paths": self.pairs_with_paths,
            "paths_found": self.paths_found,
            "missing_sources": self.missing_sources,
            "pathless_anomalies": self.pathless_anomalies,
            "reachable_computations": self.reachable_computations,
            "percentage_with_paths": round(self.percentage_with_paths, 2),
        }


@dataclass
class SearchOutcome:
    results: List[PathResult] = field(default_factory=list)
    stats: SearchStats = field(default_factory=SearchStats)


def find_paths(
    graph: Graph,
    query: PathQuery,
    max_depth: int,
    find_all_paths: bool,
    link_template: str,
) -> List[PathResult]:
    if find_all_paths:
        vertex_paths = all_paths(graph, query.source, query.destination, max_depth).paths
    else:
        found = bfs(graph, query.source, query.destination, max_depth)
        vertex_paths = [found.path] if found.found else []

    return [
        PathResult.build(
            query.source,
            query.destination,
            vertices,
            link_template,
            source_group=query.source_group,
            destination_group=query.destination_group,
        )
        for vertices in vertex_paths
    ]


class PathSearch:
    """Answers queries, reusing one reachable set per consecutive source."""

    def __init__(
        self,
        graph: Graph,
        max_depth: int,
        find_all_paths: bool = False,
        link_template: str = "",
        skip_entities: AbstractSet[str] = frozenset(),
        progress_every: int = 10000,
        on_progress: Optional[ProgressCallback] = None,
        on_anomaly: Optional[AnomalyCallback] = None,
    ) -> None:
        self.graph = graph
        self.max_depth = max_depth
        self.find_all_paths = find_all_paths
        self.link_template = link_template
        self.skip_entities = frozenset(skip_entities)
        self.progress_every = progress_every
        self._on_progress = on_progress
        self._on_anomaly = on_anomaly
        self._source: Optional[str] = None
        self._reachable: Optional[ReachableResult] = None

    def run(self, queries: Iterable[PathQuery]) -> SearchOutcome:
        self._source = None
        self._reachable = None
        planned = list(queries)
        outcome = SearchOutcome(stats=SearchStats(total_pairs=len(planned)))
        for query in planned:
            outcome.results.extend(self._answer(query, outcome.stats))
            outcome.stats.pairs_processed += 1
            if self._on_progress and self.progress_every and outcome.stats.pairs_processed % self.progress_every == 0:
                self._on_progress(outcome.stats.pairs_processed, outcome.stats.total_pairs)
        return outcome

    def _reachable_from(self, source: str, stats: SearchStats) -> ReachableResult:
        if source != self._source or self._reachable is None:
            self._source = source
            self._reachable = reachable_vertices(self.graph, source, self.max_depth)
            stats.reachable_computations += 1
            if not self._reachable.found:
                stats.missing_sources += 1
        return self._reachable

    def _answer(self, query: PathQuery, stats: SearchStats) -> List[PathResult]:
        if (
            query.source == query.destination
            or query.source in self.skip_entities
            or query.destination in self.skip_entities
        ):
            stats.pairs_skipped += 1
            return []

        reachable = self._reachable_from(query.source, stats)
        if not reachable.found or query.destination not in reachable:
            return []

        results = find_paths(self.graph, query, self.max_depth, self.find_all_paths, self.link_template)
        if not results:
            stats.pathless_anomalies += 1
            if self._on_anomaly:
                self._on_anomaly(query)
            return []

        stats.pairs_with_paths += 1
        stats.paths_found += len(results)
        return results
