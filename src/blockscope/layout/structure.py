# src/blockscope/layout/structure.py
import logging
from typing import Dict, Sequence, Tuple

from ..dom.tree import Node
from ..model import ChildSignature, LayoutStructure

logger = logging.getLogger(__name__)

IMAGE_SELECTOR = 'img, picture, svg'
HEADING_SELECTOR = 'h1, h2, h3, h4, h5, h6'
TEXT_SELECTOR = 'p'
LINK_SELECTOR = 'a, button'
LIST_SELECTOR = 'ul, ol'
# Inline background images count as imagery for the whole region
BACKGROUND_IMAGE_SELECTOR = '[style*="background-image"]'

TAG_SIGNATURE_MAP: Dict[str, ChildSignature] = {
    'img': ChildSignature.IMAGE,
    'picture': ChildSignature.IMAGE,
    'svg': ChildSignature.IMAGE,
    'h1': ChildSignature.HEADING,
    'h2': ChildSignature.HEADING,
    'h3': ChildSignature.HEADING,
    'h4': ChildSignature.HEADING,
    'h5': ChildSignature.HEADING,
    'h6': ChildSignature.HEADING,
    'p': ChildSignature.TEXT,
    'span': ChildSignature.TEXT,
    'blockquote': ChildSignature.TEXT,
    'a': ChildSignature.LINK,
    'button': ChildSignature.LINK,
    'ul': ChildSignature.LIST,
    'ol': ChildSignature.LIST,
    'dl': ChildSignature.LIST,
    'video': ChildSignature.MEDIA,
    'iframe': ChildSignature.MEDIA,
    'audio': ChildSignature.MEDIA,
}

CONTAINER_TAGS = frozenset({'div', 'section', 'article', 'figure', 'aside', 'main', 'header', 'footer'})

# Independent descendant-presence probes used to classify generic containers.
CONTENT_PROBES: Tuple[Tuple[ChildSignature, str], ...] = (
    (ChildSignature.IMAGE, IMAGE_SELECTOR),
    (ChildSignature.HEADING, HEADING_SELECTOR),
    (ChildSignature.TEXT, TEXT_SELECTOR),
    (ChildSignature.LINK, LINK_SELECTOR),
    (ChildSignature.LIST, LIST_SELECTOR),
)


def classify_child(node: Node) -> ChildSignature:
    """Classifies a child element by its primary content type."""
    signature = TAG_SIGNATURE_MAP.get(node.tag)
    if signature is not None:
        return signature

    if node.tag in CONTAINER_TAGS:
        return analyze_container_content(node)

    return ChildSignature.MIXED


def analyze_container_content(node: Node) -> ChildSignature:
    """
    Determines the primary type of a generic container from what it holds
    anywhere below it: nothing -> container, one kind -> that kind, more -> mixed.
    """
    present = [signature for signature, selector in CONTENT_PROBES if node.has(selector)]

    if not present:
        return ChildSignature.CONTAINER
    if len(present) == 1:
        return present[0]
    return ChildSignature.MIXED


def detect_repeating_pattern(signatures: Sequence[ChildSignature]) -> bool:
    """
    True when all signatures are equal, or when an even sequence of at least
    four repeats its first pair (image, text, image, text).
    """
    if len(signatures) < 2:
        return False

    if len(set(signatures)) == 1:
        return True

    if len(signatures) >= 4 and len(signatures) % 2 == 0:
        first_pair = tuple(signatures[:2])
        return all(tuple(signatures[i:i + 2]) == first_pair for i in range(2, len(signatures), 2))

    return False


def detect_column_count(node: Node) -> int:
    """Detects the number of columns from the direct children."""
    children = node.children
    if not children:
        return 0

    # Up to four similar children are read as side-by-side columns
    if len(children) <= 4:
        signatures = [classify_child(child) for child in children]
        if len(set(signatures)) <= 2 or len(children) == 1:
            return len(children)

    # Grid-like structures: the first row tells the column count
    first_row = children[0].children
    if first_row:
        return len(first_row)

    return 1


def has_images(node: Node) -> bool:
    return node.has(IMAGE_SELECTOR) or node.has(BACKGROUND_IMAGE_SELECTOR)


def analyze_structure(node: Node) -> LayoutStructure:
    """Builds the structure summary of a node's direct children."""
    children = node.children
    signatures = tuple(classify_child(child) for child in children)

    return LayoutStructure(
        row_count=len(children),
        column_count=detect_column_count(node),
        has_images=has_images(node),
        has_headings=node.has(HEADING_SELECTOR),
        has_links=node.has(LINK_SELECTOR),
        has_list=node.has(LIST_SELECTOR),
        child_signatures=signatures,
        is_repeating=detect_repeating_pattern(signatures),
    )
