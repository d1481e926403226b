"""Collapse entity-document pairs into an entity-only graph."""

from dataclasses import dataclass, field
from itertools import combinations
from types import MappingProxyType
from typing import AbstractSet, Dict, FrozenSet, Iterable, Mapping, Set

from .errors import FanOutError
from .graph_model import Graph

MAX_LINKED_ENTITIES = 3


@dataclass(frozen=True)
class EntityDocument:
    entity_id: str
    document_id: str


@dataclass
class FanOutStats:
    """Documents counted by the number of distinct entities they link."""

    at_most_one: int = 0
    two: int = 0
    three: int = 0
    four_or_more: int = 0

    @property
    def total(self) -> int:
        return self.at_most_one + self.two + self.three + self.four_or_more

    def as_dict(self) -> Dict[str, int]:
        return {
            "0-1": self.at_most_one,
            "2": self.two,
            "3": self.three,
            "4+": self.four_or_more,
        }


@dataclass
class CollapseResult:
    graph: Graph
    stats: FanOutStats = field(default_factory=FanOutStats)


def group_by_document(
    connections: Iterable[EntityDocument],
    skip_entities: AbstractSet[str] = frozenset(),
) -> Mapping[str, FrozenSet[str]]:
    grouped: Dict[str, Set[str]] = {}
    for connection in connections:
        entities = grouped.setdefault(connection.document_id, set())
        if connection.entity_id not in skip_entities:
            entities.add(connection.entity_id)
    return MappingProxyType({document: frozenset(entities) for document, entities in grouped.items()})


def collapse(
    connections: Iterable[EntityDocument],
    skip_entities: AbstractSet[str] = frozenset(),
    strict: bool = False,
) -> CollapseResult:
    """Connect every two (or three) entities that share a document.

    Documents linking four or more entities add no edges; they are counted,
    or rejected with ``FanOutError`` when ``strict`` is set.
    """
    graph = Graph()
    stats = FanOutStats()

    for document_id, entities in sorted(group_by_document(connections, skip_entities).items()):
        size = len(entities)
        if size <= 1:
            stats.at_most_one += 1
            continue
        if size > MAX_LINKED_ENTITIES:
            if strict:
                raise FanOutError(
                    f"Expected at most {MAX_LINKED_ENTITIES} entities for document {document_id}, found {size}"
                )
            stats.four_or_more += 1
            continue

        if size == 2:
            stats.two += 1
        else:
            stats.three += 1
        for a, b in combinations(sorted(entities), 2):
            graph.add_undirected(a, b)

    return CollapseResult(graph=graph, stats=stats)
