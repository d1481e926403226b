"""Unipartite graph primitives and path result records."""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from .errors import InvalidDelimiter, InvalidPath, InvalidVertex

NO_PARENT = -1
LINK_PLACEHOLDER = "<ENTITY_IDS>"


@dataclass
class Graph:
    """Adjacency sets keyed by vertex identifier."""

    nodes: Dict[str, Set[str]] = field(default_factory=dict)

    def add_directed(self, source: str, destination: str) -> None:
        if not source or not destination:
            raise InvalidVertex(f"Empty vertex identifier in edge ({source!r}, {destination!r})")
        if source == destination:
            raise InvalidVertex(f"Self-loop rejected for vertex: {source}")
        self.nodes.setdefault(source, set()).add(destination)
        self.nodes.setdefault(destination, set())

    def add_undirected(self, a: str, b: str) -> None:
        self.add_directed(a, b)
        self.add_directed(b, a)

    def adjacent_to(self, vertex: str) -> List[str]:
        if not vertex:
            raise InvalidVertex("Empty vertex identifier")
        return sorted(self.nodes.get(vertex, ()))

    def equal(self, other: "Graph") -> bool:
        if self.nodes.keys() != other.nodes.keys():
            return False
        return all(self.nodes[vertex] == other.nodes[vertex] for vertex in self.nodes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Graph):
            return NotImplemented
        return self.equal(other)

    def __contains__(self, vertex: object) -> bool:
        return vertex in self.nodes

    def vertex_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return sum(len(adjacent) for adjacent in self.nodes.values())

    def simplify_for_undirected(self) -> "Graph":
        """Keep a single direction per edge: destination must sort after source."""
        simplified = Graph()
        for source, destination in self.edge_list():
            if destination > source:
                simplified.add_directed(source, destination)
        return simplified

    def edge_list(self) -> Iterator[Tuple[str, str]]:
        for source in sorted(self.nodes):
            for destination in sorted(self.nodes[source]):
                yield source, destination

    def undirected_edge_list(self) -> Iterator[Tuple[str, str]]:
        return self.simplify_for_undirected().edge_list()

    @classmethod
    def from_edge_list(cls, edges: Iterable[Tuple[str, str]], undirected: bool = True) -> "Graph":
        graph = cls()
        for source, destination in edges:
            if undirected:
                graph.add_undirected(source, destination)
            else:
                graph.add_directed(source, destination)
        return graph


@dataclass(frozen=True)
class Vertex:
    identifier: str
    depth: int
    parent: int = NO_PARENT


class VertexArena:
    """Vertices discovered by one traversal, linked to parents by index."""

    def __init__(self) -> None:
        self.vertices: List[Vertex] = []

    def add(self, identifier: str, depth: int, parent: int = NO_PARENT) -> int:
        self.vertices.append(Vertex(identifier=identifier, depth=depth, parent=parent))
        return len(self.vertices) - 1

    def __getitem__(self, index: int) -> Vertex:
        return self.vertices[index]

    def __len__(self) -> int:
        return len(self.vertices)

    def flatten(self, index: int) -> List[str]:
        lineage: List[str] = []
        while index != NO_PARENT:
            vertex = self.vertices[index]
            lineage.append(vertex.identifier)
            index = vertex.parent
        lineage.reverse()
        return lineage


def build_link(template: str, path: Sequence[str]) -> str:
    if not path:
        raise InvalidPath("Path is empty")
    return template.replace(LINK_PLACEHOLDER, ",".join(path))


def header_fields(with_groups: bool) -> List[str]:
    if with_groups:
        return [
            "Source entity ID",
            "Source entity data source",
            "Destination entity ID",
            "Destination entity data source",
            "Number of hops",
            "Path",
            "Link",
        ]
    return ["Source entity ID", "Destination entity ID", "Number of hops", "Path", "Link"]


def path_result_header(delimiter: str, with_groups: bool = False) -> str:
    if not delimiter:
        raise InvalidDelimiter("Cannot use a blank delimiter")
    return delimiter.join(header_fields(with_groups))


@dataclass(frozen=True)
class PathResult:
    source: str
    destination: str
    hops: int
    path: Tuple[str, ...]
    link: str
    source_group: Optional[str] = None
    destination_group: Optional[str] = None

    @classmethod
    def build(
        cls,
        source: str,
        destination: str,
        vertices: Sequence[str],
        link_template: str,
        source_group: Optional[str] = None,
        destination_group: Optional[str] = None,
    ) -> "PathResult":
        if not source:
            raise InvalidVertex("Source entity ID is blank")
        if not destination:
            raise InvalidVertex("Destination entity ID is blank")
        if (source_group is None) != (destination_group is None):
            raise InvalidVertex("Both data sources or neither must be given")
        if source_group is not None and not (source_group and destination_group):
            raise InvalidVertex("Data source name is blank")
        if len(vertices) < 2:
            raise InvalidPath(f"List of vertices on path is too small ({len(vertices)})")
        if vertices[0] != source or vertices[-1] != destination:
            raise InvalidPath(f"Path {list(vertices)} does not run from {source} to {destination}")

        return cls(
            source=source,
            destination=destination,
            hops=len(vertices) - 1,
            path=tuple(vertices),
            link=build_link(link_template, vertices),
            source_group=source_group,
            destination_group=destination_group,
        )

    @property
    def has_groups(self) -> bool:
        return self.source_group is not None

    def display(self) -> str:
        if self.has_groups:
            ends = f"{self.source}:{self.source_group} -> {self.destination}:{self.destination_group}"
        else:
            ends = f"{self.source} -> {self.destination}"
        return f"{ends} ({self.hops} hops): [{' '.join(self.path)}]"

    def to_row(self, path_delimiter: str, with_groups: Optional[bool] = None) -> List[str]:
        """Record fields; group columns are blank for an ungrouped result in a grouped file."""
        if not path_delimiter:
            raise InvalidDelimiter("Cannot use a blank delimiter for the path")
        if with_groups is None:
            with_groups = self.has_groups
        row = [self.source]
        if with_groups:
            row.append(self.source_group or "")
        row.append(self.destination)
        if with_groups:
            row.append(self.destination_group or "")
        row.extend([str(self.hops), path_delimiter.join(self.path), self.link])
        return row

    def to_record(self, delimiter: str, path_delimiter: str, with_groups: Optional[bool] = None) -> str:
        if not delimiter:
            raise InvalidDelimiter("Cannot use a blank delimiter")
        return delimiter.join(self.to_row(path_delimiter, with_groups))
