"""Path search phase driven by a LangGraph workflow."""

import logging
from typing import Any, Dict, List

from langgraph.graph import END, START, StateGraph
from typing_extensions import TypedDict

from ..config import PathConfig
from ..graph_model import Graph, PathResult
from ..pipeline import PipelinePhase
from ..queries import PathQuery, plan_queries
from ..search import PathSearch, SearchStats

logger = logging.getLogger(__name__)


class SearchState(TypedDict):
    config: PathConfig
    graph: Graph
    skip_entities: frozenset
    queries: List[PathQuery]
    results: List[PathResult]
    stats: SearchStats
    summary: Dict[str, Any]


class PathSearchPhase(PipelinePhase):
    phase_name = "search"

    def __init__(self, progress_every: int = 10000) -> None:
        self._progress_every = progress_every

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        config: PathConfig = context["config"]
        if not config.entities.has_queries():
            logger.warning("At least two data sources, explicit pairs or from/to lists must be configured")
            return {"results": [], "search_summary": SearchStats().as_dict()}

        workflow = self._build_workflow()
        result_state = workflow.invoke(
            {
                "config": config,
                "graph": context["graph"],
                "skip_entities": frozenset(config.entities.skip),
                "queries": [],
                "results": [],
                "stats": SearchStats(),
                "summary": {},
            }
        )
        return {"results": result_state["results"], "search_summary": result_state["summary"]}

    def _build_workflow(self):
        graph = StateGraph(SearchState)
        graph.add_node("plan_queries", self._plan_queries)
        graph.add_node("search_paths", self._search_paths)
        graph.add_node("summarize", self._summarize)
        graph.add_edge(START, "plan_queries")
        graph.add_edge("plan_queries", "search_paths")
        graph.add_edge("search_paths", "summarize")
        graph.add_edge("summarize", END)
        return graph.compile()

    def _plan_queries(self, state: SearchState) -> Dict[str, Any]:
        entities = state["config"].entities
        queries = plan_queries(
            groups=[source.to_entities() for source in entities.data_sources],
            pairs=entities.pairs,
            pair_delimiter=entities.pair_delimiter,
            from_entities=entities.from_entities,
            to_entities=entities.to_entities,
        )
        logger.info("Performing shortest path analysis on %d vertex pairs", len(queries))
        return {"queries": queries}

    def _search_paths(self, state: SearchState) -> Dict[str, Any]:
        output = state["config"].output
        search = PathSearch(
            state["graph"],
            max_depth=output.max_depth,
            find_all_paths=output.find_all_paths,
            link_template=output.webapp_link,
            skip_entities=state["skip_entities"],
            progress_every=self._progress_every,
            on_progress=self._log_progress,
            on_anomaly=self._log_anomaly,
        )
        outcome = search.run(state["queries"])
        for result in outcome.results:
            logger.debug(result.display())
        return {"results": outcome.results, "stats": outcome.stats}

    def _summarize(self, state: SearchState) -> Dict[str, Any]:
        stats = state["stats"]
        logger.info("Summary - Total number of entity pairs:   %d", stats.total_pairs)
        logger.info("Summary - Number of pairs with paths:     %d", stats.pairs_with_paths)
        logger.info("Summary - Percentage of pairs with paths: %.2f %%", stats.percentage_with_paths)
        logger.info("Summary - Total number of paths found:    %d", stats.paths_found)
        return {"summary": stats.as_dict()}

    @staticmethod
    def _log_progress(processed: int, total: int) -> None:
        logger.info("Processed %d pairs of %d", processed, total)

    @staticmethod
    def _log_anomaly(query: PathQuery) -> None:
        logger.warning("Vertex %s was deemed reachable from %s, but no path!", query.destination, query.source)
