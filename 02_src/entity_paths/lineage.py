"""Lineage tree used by the all-paths search.

Each node records one vertex of a partial path explored from a fixed root.
Nodes live in a flat list owned by the tree and point at their parent by
index, so a path is recovered by walking indices back to the root.
"""

from dataclasses import dataclass, field
from typing import List

from .errors import CycleDetected, InvalidName
from .graph_model import NO_PARENT

ROOT = 0


@dataclass
class LineageNode:
    name: str
    parent: int = NO_PARENT
    children: List[int] = field(default_factory=list)
    marked: bool = False


class LineageTree:
    def __init__(self) -> None:
        self.nodes: List[LineageNode] = []

    @classmethod
    def make_root(cls, name: str, marked: bool = False) -> "LineageTree":
        if not name:
            raise InvalidName("Root name is empty")
        tree = cls()
        tree.nodes.append(LineageNode(name=name, marked=marked))
        return tree

    def make_child(self, parent: int, name: str, marked: bool = False) -> int:
        if not name:
            raise InvalidName("Child name is empty")
        if self.contains_ancestor(parent, name):
            raise CycleDetected(f"Lineage already contains {name}")

        self.nodes.append(LineageNode(name=name, parent=parent, marked=marked))
        index = len(self.nodes) - 1
        self.nodes[parent].children.append(index)
        return index

    def contains_ancestor(self, index: int, name: str) -> bool:
        while index != NO_PARENT:
            node = self.nodes[index]
            if node.name == name:
                return True
            index = node.parent
        return False

    def flatten(self, index: int) -> List[str]:
        lineage: List[str] = []
        while index != NO_PARENT:
            node = self.nodes[index]
            lineage.append(node.name)
            index = node.parent
        lineage.reverse()
        return lineage

    def node(self, index: int) -> LineageNode:
        return self.nodes[index]

    def children(self, index: int) -> List[str]:
        return [self.nodes[child].name for child in self.nodes[index].children]

    def __len__(self) -> int:
        return len(self.nodes)
