"""
Document tree model.

Nodes live in an arena (Document.nodes) and refer to each other by integer
id, so parent links never form reference cycles. Slots hold a value (the
root, an array element or an object property); blocks hold the slots of an
object or array body; markers and scalars are the leaves.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from .constants import MARKER_TEXT


class SlotRole(Enum):
    ROOT = "root"
    ELEMENT = "element"
    PROPERTY = "property"


class ContainerType(Enum):
    OBJECT = "object"
    ARRAY = "array"


class MarkerType(Enum):
    EXPANDER = "expander"
    OPEN_BRACE = "open-brace"
    CLOSE_BRACE = "close-brace"
    OPEN_BRACKET = "open-bracket"
    CLOSE_BRACKET = "close-bracket"
    ELLIPSIS = "ellipsis"
    COMMA = "comma"
    COLON = "colon"

    @property
    def text(self) -> str:
        return MARKER_TEXT[self.value]


class ScalarType(Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    SYMBOL = "symbol"


@dataclass
class Slot:
    """Holder for one value; numbered once it survives construction."""

    node_id: int
    role: SlotRole
    parent: Optional[int] = None
    children: list[int] = field(default_factory=list)
    key: Optional[str] = None
    line_number: Optional[int] = None


@dataclass
class Block:
    """Body of an object or array; its children are slots."""

    node_id: int
    container: ContainerType
    parent: Optional[int] = None
    children: list[int] = field(default_factory=list)


@dataclass
class Marker:
    node_id: int
    marker: MarkerType
    parent: Optional[int] = None
    line_number: Optional[int] = None


@dataclass
class Scalar:
    node_id: int
    scalar: ScalarType
    text: str
    parent: Optional[int] = None
    link: bool = False


Node = Union[Slot, Block, Marker, Scalar]


class Document:
    """A built document: the node arena plus the numbering it produced."""

    def __init__(self, wrapper_name: Optional[str] = None) -> None:
        self.nodes: list[Node] = []
        self.wrapper_name = wrapper_name
        self.root = self.add(Slot(0, SlotRole.ROOT)).node_id
        # Value of the line counter once building finished
        self.final_line = 0

    def __getitem__(self, node_id: int) -> Node:
        return self.nodes[node_id]

    def new_id(self) -> int:
        return len(self.nodes)

    def add(self, node: Node) -> Node:
        self.nodes.append(node)
        return node

    def append_child(self, parent_id: int, node: Node) -> Node:
        """Attach node as the last child of parent_id."""
        parent = self.nodes[parent_id]
        if not isinstance(parent, (Slot, Block)):
            raise TypeError(f"{type(parent).__name__} cannot hold children")
        node.parent = parent_id
        parent.children.append(node.node_id)
        return node

    def detach(self, node_id: int) -> None:
        """Unlink a node from its parent. The node stays in the arena, unreachable."""
        node = self.nodes[node_id]
        if node.parent is not None:
            parent = self.nodes[node.parent]
            assert isinstance(parent, (Slot, Block))
            parent.children.remove(node_id)
            node.parent = None

    def children(self, node_id: int) -> list[Node]:
        node = self.nodes[node_id]
        if isinstance(node, (Slot, Block)):
            return [self.nodes[child] for child in node.children]
        return []

    def walk(self, node_id: Optional[int] = None) -> Iterator[Node]:
        """Yield attached nodes in document order, starting at the root."""
        stack = [self.root if node_id is None else node_id]
        while stack:
            node = self.nodes[stack.pop()]
            yield node
            if isinstance(node, (Slot, Block)):
                stack.extend(reversed(node.children))

    def line_numbers(self) -> list[int]:
        """All assigned line numbers in document order, JSONP lines included."""
        numbers = [
            node.line_number
            for node in self.walk()
            if isinstance(node, (Slot, Marker)) and node.line_number is not None
        ]
        if self.wrapper_name is not None:
            numbers = [1] + numbers + [self.final_line]
        return numbers

    @property
    def root_container(self) -> Optional[ContainerType]:
        """Container type of the top-level value, if it still has a body."""
        for child in self.children(self.root):
            if isinstance(child, Block):
                return child.container
        return None

    @property
    def gutter_width(self) -> float:
        """Width in rem of the line-number gutter."""
        return 1 + len(str(self.final_line)) * 0.5
