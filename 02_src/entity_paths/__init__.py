"""Shortest paths between entities that co-occur in documents."""

from .bipartite import CollapseResult, EntityDocument, FanOutStats, collapse
from .graph_model import Graph, PathResult, Vertex, VertexArena
from .lineage import LineageNode, LineageTree
from .pipeline import PipelinePhase, PipelineRunner
from .queries import PathQuery
from .search import PathSearch, SearchStats
from .traversal import all_paths, bfs, reachable_vertices

__all__ = [
    "Graph",
    "Vertex",
    "VertexArena",
    "PathResult",
    "LineageNode",
    "LineageTree",
    "EntityDocument",
    "FanOutStats",
    "CollapseResult",
    "collapse",
    "bfs",
    "reachable_vertices",
    "all_paths",
    "PathQuery",
    "PathSearch",
    "SearchStats",
    "PipelinePhase",
    "PipelineRunner",
]
