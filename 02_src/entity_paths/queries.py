"""Expand the configured entity lists into ordered (source, destination) queries."""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from .errors import InvalidDelimiter, MalformedPair


@dataclass(frozen=True)
class DataSourceEntities:
    name: str
    entity_ids: Tuple[str, ...]


@dataclass(frozen=True)
class PathQuery:
    source: str
    destination: str
    source_group: Optional[str] = None
    destination_group: Optional[str] = None


def extract_entity_pair(pair: str, delimiter: str) -> Tuple[str, str]:
    """Split e.g. ``"e-1|e-2"`` into its two entity IDs."""
    if not delimiter:
        raise InvalidDelimiter("Cannot split an entity pair on a blank delimiter")
    parts = pair.split(delimiter)
    if len(parts) != 2:
        raise MalformedPair(f"Expected 2 entity IDs, got {len(parts)} in {pair!r}")
    source, destination = (part.strip() for part in parts)
    if not source or not destination:
        raise MalformedPair(f"Blank entity ID in {pair!r}")
    return source, destination


def queries_from_groups(groups: Sequence[DataSourceEntities]) -> Iterator[PathQuery]:
    # every group i is paired with each later group j, source-major
    for i, left in enumerate(groups):
        for right in groups[i + 1 :]:
            for source in left.entity_ids:
                for destination in right.entity_ids:
                    yield PathQuery(source, destination, left.name, right.name)


def queries_from_pairs(pairs: Sequence[str], delimiter: str) -> Iterator[PathQuery]:
    for pair in pairs:
        source, destination = extract_entity_pair(pair, delimiter)
        yield PathQuery(source, destination)


def queries_from_lists(sources: Sequence[str], destinations: Sequence[str]) -> Iterator[PathQuery]:
    for source in sources:
        for destination in destinations:
            yield PathQuery(source, destination)


def total_number_of_pairs(groups: Sequence[DataSourceEntities]) -> int:
    total = 0
    for i, left in enumerate(groups):
        for right in groups[i + 1 :]:
            total += len(left.entity_ids) * len(right.entity_ids)
    return total


def plan_queries(
    groups: Sequence[DataSourceEntities] = (),
    pairs: Sequence[str] = (),
    pair_delimiter: str = "|",
    from_entities: Sequence[str] = (),
    to_entities: Sequence[str] = (),
) -> List[PathQuery]:
    """All configured queries: grouped pairs, then explicit pairs, then from x to."""
    queries: List[PathQuery] = []
    if len(groups) >= 2:
        queries.extend(queries_from_groups(groups))
    queries.extend(queries_from_pairs(pairs, pair_delimiter))
    queries.extend(queries_from_lists(from_entities, to_entities))
    return queries
