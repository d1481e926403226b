"""Bounded-depth traversals over a read-only unipartite graph.

All three searches keep their state local to the call: a discovered set (or,
for the all-paths search, the lineage of each partial path) and a FIFO
frontier. Malformed arguments raise; a missing root or an unreachable goal is
reported through ``found=False``.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, FrozenSet, List, Optional, Set

from .errors import InvalidDepth, InvalidVertex
from .graph_model import NO_PARENT, Graph, VertexArena
from .lineage import ROOT, LineageTree


@dataclass
class TraversalStats:
    vertices_expanded: int = 0
    max_frontier: int = 0


@dataclass
class BfsResult:
    found: bool
    arena: VertexArena = field(default_factory=VertexArena)
    index: int = NO_PARENT
    stats: TraversalStats = field(default_factory=TraversalStats)

    @property
    def path(self) -> List[str]:
        if not self.found:
            return []
        return self.arena.flatten(self.index)

    @property
    def hops(self) -> Optional[int]:
        if not self.found:
            return None
        return self.arena[self.index].depth


@dataclass
class ReachableResult:
    found: bool
    vertices: FrozenSet[str] = frozenset()
    stats: TraversalStats = field(default_factory=TraversalStats)

    def __contains__(self, vertex: object) -> bool:
        return vertex in self.vertices


@dataclass
class AllPathsResult:
    tree: Optional[LineageTree]
    goals: List[int] = field(default_factory=list)
    stats: TraversalStats = field(default_factory=TraversalStats)

    @property
    def found(self) -> bool:
        return bool(self.goals)

    @property
    def paths(self) -> List[List[str]]:
        if self.tree is None:
            return []
        return [self.tree.flatten(index) for index in self.goals]


def _check_vertex(name: str, identifier: str) -> None:
    if not isinstance(identifier, str) or not identifier:
        raise InvalidVertex(f"{name} vertex identifier is empty")


def _check_depth(max_depth: int) -> None:
    if not isinstance(max_depth, int) or max_depth < 0:
        raise InvalidDepth(f"Maximum depth must be a non-negative integer, got {max_depth!r}")


def _walk(graph: Graph, root: str, goal: Optional[str], max_depth: int) -> BfsResult:
    arena = VertexArena()
    stats = TraversalStats()
    discovered: Set[str] = {root}
    queue: Deque[int] = deque([arena.add(root, 0)])

    while queue:
        index = queue.popleft()
        vertex = arena[index]

        if goal is not None and vertex.identifier == goal:
            return BfsResult(found=True, arena=arena, index=index, stats=stats)

        next_depth = vertex.depth + 1
        if next_depth > max_depth:
            continue

        stats.vertices_expanded += 1
        for adjacent in graph.adjacent_to(vertex.identifier):
            if adjacent in discovered:
                continue
            discovered.add(adjacent)
            queue.append(arena.add(adjacent, next_depth, index))
        stats.max_frontier = max(stats.max_frontier, len(queue))

    return BfsResult(found=goal is None, arena=arena, stats=stats)


def bfs(graph: Graph, root: str, goal: str, max_depth: int) -> BfsResult:
    """Shortest path from root to goal using at most ``max_depth`` hops.

    Neighbours are visited in sorted order, so ties between equally short
    paths always resolve to the same one.
    """
    _check_vertex("Root", root)
    _check_vertex("Goal", goal)
    _check_depth(max_depth)

    if root not in graph:
        return BfsResult(found=False)
    return _walk(graph, root, goal, max_depth)


def reachable_vertices(graph: Graph, root: str, max_depth: int) -> ReachableResult:
    """Every vertex within ``max_depth`` hops of root, root included."""
    _check_vertex("Root", root)
    _check_depth(max_depth)

    if root not in graph:
        return ReachableResult(found=False)

    walk = _walk(graph, root, None, max_depth)
    vertices = frozenset(vertex.identifier for vertex in walk.arena.vertices)
    return ReachableResult(found=True, vertices=vertices, stats=walk.stats)


def all_paths(graph: Graph, root: str, goal: str, max_depth: int) -> AllPathsResult:
    """All simple paths from root to goal of the shortest length within ``max_depth``.

    Unlike ``bfs`` a vertex may appear on several branches; a branch is only
    barred from revisiting its own ancestors. Expansion stops after the first
    level at which the goal is reached.
    """
    _check_vertex("Root", root)
    _check_vertex("Goal", goal)
    _check_depth(max_depth)

    if root == goal:
        tree = LineageTree.make_root(root, marked=True)
        return AllPathsResult(tree=tree, goals=[ROOT])

    tree = LineageTree.make_root(root)
    stats = TraversalStats()
    goals: List[int] = []
    frontier: List[int] = [ROOT]

    for _ in range(max_depth):
        next_frontier: List[int] = []
        for index in frontier:
            stats.vertices_expanded += 1
            for adjacent in graph.adjacent_to(tree.node(index).name):
                if tree.contains_ancestor(index, adjacent):
                    continue
                if adjacent == goal:
                    goals.append(tree.make_child(index, adjacent, marked=True))
                else:
                    next_frontier.append(tree.make_child(index, adjacent))
        stats.max_frontier = max(stats.max_frontier, len(next_frontier))

        if goals or not next_frontier:
            break
        frontier = next_frontier

    return AllPathsResult(tree=tree, goals=goals, stats=stats)
