# src/blockscope/dom/tree.py
import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from bs4 import BeautifulSoup, Tag

from .core import BoundingBox, ElementRecord
from ..exceptions import SelectorNotFound

logger = logging.getLogger(__name__)


class Node:
    """
    Opaque, read-only handle to one element of a DOMTree.

    Two handles are equal when they point at the same slot of the same tree.
    """
    __slots__ = ("_tree", "index")

    def __init__(self, tree: "DOMTree", index: int):
        self._tree = tree
        self.index = index

    @property
    def tree(self) -> "DOMTree":
        return self._tree

    @property
    def _record(self) -> ElementRecord:
        return self._tree.records[self.index]

    @property
    def tag(self) -> str:
        return self._record.tag

    @property
    def id(self) -> str:
        return self._record.element_id

    @property
    def class_list(self) -> Tuple[str, ...]:
        return self._record.classes

    @property
    def class_name(self) -> str:
        """The raw class attribute, like `Element.className`."""
        return self._record.attrs.get("class", "")

    @property
    def attrs(self) -> Mapping[str, str]:
        return MappingProxyType(self._record.attrs)

    @property
    def bounding_box(self) -> Optional[BoundingBox]:
        return self._record.bbox

    @property
    def children(self) -> List["Node"]:
        return [Node(self._tree, i) for i in self._record.children]

    @property
    def parent(self) -> Optional["Node"]:
        parent = self._record.parent
        return Node(self._tree, parent) if parent is not None else None

    @property
    def first_child(self) -> Optional["Node"]:
        children = self._record.children
        return Node(self._tree, children[0]) if children else None

    @property
    def text_content(self) -> str:
        """All descendant text, concatenated without separators."""
        return self._tree.text_of(self.index)

    def select(self, selector: str) -> List["Node"]:
        """Descendants of this node matching a CSS selector, in document order."""
        return self._tree.select(selector, scope=self)

    def has(self, selector: str) -> bool:
        return self._tree.select_first(selector, scope=self) is not None

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and other._tree is self._tree and other.index == self.index

    def __hash__(self) -> int:
        return hash((id(self._tree), self.index))

    def __repr__(self) -> str:
        ident = f"#{self.id}" if self.id else ""
        classes = "".join(f".{c}" for c in self.class_list)
        return f"<Node {self.index} {self.tag}{ident}{classes}>"


class DOMTree:
    """
    Immutable snapshot of a parsed document.

    Element data lives in an arena of ElementRecords addressed by index.
    The parsed soup is kept only to answer CSS queries; nothing in
    blockscope modifies it after the build.
    """

    def __init__(
            self,
            soup: BeautifulSoup,
            tags: Sequence[Tag],
            records: Sequence[ElementRecord],
            page_height: float = 0.0,
    ):
        self._soup = soup
        self._tags: Tuple[Tag, ...] = tuple(tags)
        self.records: Tuple[ElementRecord, ...] = tuple(records)
        self.page_height = page_height
        self._index_of: Dict[int, int] = {id(tag): i for i, tag in enumerate(self._tags)}

    def __len__(self) -> int:
        return len(self.records)

    def node(self, index: int) -> Node:
        if not 0 <= index < len(self.records):
            raise IndexError(f"No element at index {index}")
        return Node(self, index)

    @property
    def root(self) -> Optional[Node]:
        """The outermost element (usually <html>)."""
        return Node(self, 0) if self.records else None

    @property
    def body(self) -> Optional[Node]:
        return self.select_first("body")

    def nodes(self) -> List[Node]:
        return [Node(self, i) for i in range(len(self.records))]

    def text_of(self, index: int) -> str:
        return self._tags[index].get_text()

    def outer_html(self, node: Node) -> str:
        return str(self._tags[node.index])

    def inner_html(self, node: Node) -> str:
        return self._tags[node.index].decode_contents()

    def _wrap(self, tags) -> List[Node]:
        # Tags outside the arena (none in practice) are dropped.
        result = []
        for tag in tags:
            index = self._index_of.get(id(tag))
            if index is not None:
                result.append(Node(self, index))
        return result

    def select(self, selector: str, scope: Optional[Node] = None) -> List[Node]:
        """
        Evaluates a CSS selector against the whole document, or against the
        descendants of `scope`. Raises soupsieve.SelectorSyntaxError for
        invalid expressions.
        """
        context = self._tags[scope.index] if scope is not None else self._soup
        return self._wrap(context.select(selector))

    def select_first(self, selector: str, scope: Optional[Node] = None) -> Optional[Node]:
        context = self._tags[scope.index] if scope is not None else self._soup
        tag = context.select_one(selector)
        if tag is None:
            return None
        found = self._wrap([tag])
        return found[0] if found else None

    def get_element(self, selector: str) -> Node:
        """Returns the first node matching `selector` or raises SelectorNotFound."""
        node = self.select_first(selector)
        if node is None:
            raise SelectorNotFound(selector)
        return node
