# src/blockscope/matching/siblings.py
import logging
from typing import List

from .scoring import is_card_sized
from .synthesizer import SelectorSynthesizer, meaningful_classes
from ..dom.tree import Node

logger = logging.getLogger(__name__)

CARD_ITEM_SELECTOR = (
    '[class*="card"], [class*="tile"], [class*="item"], '
    '[class*="category"], [class*="division"]'
)


def count_card_items(node: Node) -> int:
    """Card-like descendants or card-sized direct children, whichever is larger."""
    card_items = len(node.select(CARD_ITEM_SELECTOR))
    sized_children = sum(1 for child in node.children if is_card_sized(child))
    return max(card_items, sized_children)


def find_similar_siblings(node: Node) -> List[Node]:
    """Same-tag siblings sharing at least one meaningful class with `node`."""
    parent = node.parent
    if parent is None:
        return []
    own_classes = set(meaningful_classes(node))
    if not own_classes:
        return []
    return [
        sibling for sibling in parent.children
        if sibling != node and sibling.tag == node.tag and own_classes.intersection(sibling.class_list)
    ]


def find_sibling_selectors(node: Node, card_count: int, synthesizer: SelectorSynthesizer) -> List[str]:
    """
    Selectors of siblings continuing a card group split across containers.

    Only looks when the matched node holds some, but fewer than `card_count`, items.
    """
    items = count_card_items(node)
    if not 0 < items < card_count:
        return []

    selectors = []
    for sibling in find_similar_siblings(node):
        selector = synthesizer.synthesize(sibling)
        if selector:
            selectors.append(selector)

    if selectors:
        logger.info(
            "Found %d similar sibling(s), total items: ~%d",
            len(selectors), items * (1 + len(selectors)),
        )
    return selectors
