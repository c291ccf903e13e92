# src/blockscope/dom/builder.py
import logging
import re
from typing import Dict, List, Optional

from bs4 import BeautifulSoup, Tag

from .core import BoundingBox, ElementRecord
from .tree import DOMTree
from ..exceptions import ParseError
from ..model import ExtractedContent
from ..utils.config_manager import config_manager

logger = logging.getLogger(__name__)

_BBOX_SPLIT = re.compile(r'[\s,]+')


class DOMBuilder:
    """
    Builder responsible for parsing a rendered HTML snapshot into a DOMTree.

    Geometry is read from an attribute (default `data-bbox="x,y,width,height"`)
    that the render collaborator writes onto each element it measured. The
    scrollable page height is read from `data-scroll-height` on <html> or
    <body> unless given explicitly.
    """

    def __init__(self, bbox_attribute: Optional[str] = None, page_height_attribute: Optional[str] = None):
        self.bbox_attribute = bbox_attribute or config_manager.get_nested("dom.bbox_attribute", "data-bbox")
        self.page_height_attribute = page_height_attribute or config_manager.get_nested(
            "dom.page_height_attribute", "data-scroll-height"
        )

    def build(self, html: str, page_height: Optional[float] = None) -> DOMTree:
        """
        Parses raw HTML into an immutable DOMTree.

        Args:
            html (str): The rendered markup.
            page_height (Optional[float]): Total scrollable height of the page. Overrides
                                           the attribute-based lookup.

        Returns:
            DOMTree: The arena-backed snapshot.

        Raises:
            ParseError: For empty input, markup without elements or malformed geometry.
        """
        if not html or not html.strip():
            raise ParseError("Failed to parse HTML: document is empty")

        # Basic cleanup of potentially dirty HTML (e.g., BOM)
        clean_html = html.replace('\ufeff', '').strip()
        try:
            soup = BeautifulSoup(clean_html, 'html.parser')
        except Exception as e:
            raise ParseError(f"Failed to parse HTML: {e}") from e

        tags: List[Tag] = soup.find_all(True)
        if not tags:
            raise ParseError("Failed to parse HTML: no elements found")

        index_of: Dict[int, int] = {id(tag): i for i, tag in enumerate(tags)}
        records = [self._build_record(i, tag, index_of) for i, tag in enumerate(tags)]

        if page_height is None:
            page_height = self._detect_page_height(records)

        logger.debug("Built tree with %d elements (page height %.0f).", len(records), page_height)
        return DOMTree(soup, tags, records, page_height=page_height)

    def _build_record(self, index: int, tag: Tag, index_of: Dict[int, int]) -> ElementRecord:
        attrs = {}
        for name, value in tag.attrs.items():
            # bs4 returns multi-valued attributes (class, rel, ...) as lists
            attrs[name] = " ".join(value) if isinstance(value, list) else str(value)

        classes = tuple(dict.fromkeys(tag.get("class") or []))
        children = tuple(index_of[id(child)] for child in tag.children if isinstance(child, Tag))
        parent = index_of.get(id(tag.parent)) if tag.parent is not None else None

        raw_bbox = attrs.get(self.bbox_attribute)
        bbox = self._parse_bbox(raw_bbox, tag.name) if raw_bbox else None

        return ElementRecord(
            index=index,
            tag=tag.name.lower(),
            attrs=attrs,
            classes=classes,
            parent=parent,
            children=children,
            bbox=bbox,
        )

    @staticmethod
    def _parse_bbox(raw: str, tag_name: str) -> BoundingBox:
        parts = [p for p in _BBOX_SPLIT.split(raw.strip()) if p]
        if len(parts) != 4:
            raise ParseError(f"Malformed bounding box on <{tag_name}>: '{raw}'")
        try:
            x, y, width, height = (float(p) for p in parts)
        except ValueError as e:
            raise ParseError(f"Malformed bounding box on <{tag_name}>: '{raw}'") from e
        return BoundingBox(x=x, y=y, width=width, height=height)

    def _detect_page_height(self, records: List[ElementRecord]) -> float:
        for record in records:
            if record.tag in ('html', 'body') and self.page_height_attribute in record.attrs:
                raw = record.attrs[self.page_height_attribute]
                try:
                    return float(raw)
                except ValueError as e:
                    raise ParseError(f"Malformed page height: '{raw}'") from e

        # Fallback: the lowest rendered edge
        bottoms = [r.bbox.bottom for r in records if r.bbox is not None]
        return max(bottoms) if bottoms else 0.0


def extract_content(tree: DOMTree, selector: str) -> ExtractedContent:
    """
    Resolves `selector` against the tree and returns the first match's markup.

    Raises:
        SelectorNotFound: If nothing matches.
    """
    node = tree.get_element(selector)
    return ExtractedContent(
        outer_html=tree.outer_html(node),
        inner_html=tree.inner_html(node),
        tag_name=node.tag,
        class_name=node.class_name,
        child_count=len(node.children),
    )
