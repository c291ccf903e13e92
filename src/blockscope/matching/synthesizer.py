# src/blockscope/matching/synthesizer.py
"""
Selector synthesis as an ordered chain of strategies.

Each strategy proposes selector expressions for a target node. Every
proposal is re-queried against the tree and only accepted when it resolves
to exactly the target. If no strategy yields such a selector, synthesis
fails with None rather than returning a best-effort guess.
"""
import logging
import re
from enum import Enum
from typing import Callable, Iterator, List, Optional, Tuple

import soupsieve

from ..dom.tree import DOMTree, Node
from ..utils.config_manager import config_manager

logger = logging.getLogger(__name__)

# Utility-style class prefixes (spacing, layout, colour, AEM grid) that say
# nothing about what a block is
UTILITY_CLASS_PATTERN = re.compile(
    r'^(mt-|mb-|px-|py-|mx-|my-|flex|grid|col-|row-|w-|h-|text-|bg-|p-|m-|d-|aem-)'
)


class SelectorOutcome(str, Enum):
    UNIQUE = "unique"        # resolves to exactly the target
    AMBIGUOUS = "ambiguous"  # matches the target and other nodes
    INVALID = "invalid"      # unparsable, or does not match the target


def meaningful_classes(node: Node) -> List[str]:
    """Classes longer than two characters that are not utility classes."""
    return [c for c in node.class_list if len(c) > 2 and not UTILITY_CLASS_PATTERN.match(c)]


def class_selector(classes) -> str:
    return "".join(f".{soupsieve.escape(c)}" for c in classes)


def same_tag_position(node: Node) -> Tuple[int, int]:
    """1-based position among same-tag siblings, and the number of such siblings."""
    parent = node.parent
    if parent is None:
        return 1, 1
    siblings = [child for child in parent.children if child.tag == node.tag]
    return siblings.index(node) + 1, len(siblings)


class SelectorSynthesizer:
    """
    Converts a node into the first selector, in strategy order, that is
    verified unique against the tree.

    Example:
        >>> synthesizer = SelectorSynthesizer(tree)
        >>> synthesizer.synthesize(node)
        '.product-cards'
    """

    def __init__(self, tree: DOMTree):
        self.tree = tree
        self.max_class_matches = config_manager.get_nested("selectors.max_class_matches", 10)
        self.max_positional_matches = config_manager.get_nested("selectors.max_positional_matches", 5)
        self._strategies: Tuple[Callable[[Node], Iterator[str]], ...] = (
            self._by_id,
            self._by_meaningful_classes,
            self._by_tag_and_classes,
            self._by_class_position,
            self._by_parent_scope,
            self._by_tag_position,
        )

    def verify(self, selector: str, target: Node) -> SelectorOutcome:
        try:
            matches = self.tree.select(selector)
        except soupsieve.SelectorSyntaxError:
            logger.debug("Rejected unparsable selector %r", selector)
            return SelectorOutcome.INVALID

        if target not in matches:
            return SelectorOutcome.INVALID
        return SelectorOutcome.UNIQUE if len(matches) == 1 else SelectorOutcome.AMBIGUOUS

    def synthesize(self, node: Node) -> Optional[str]:
        """Returns a selector resolving to exactly `node`, or None."""
        for strategy in self._strategies:
            for selector in strategy(node):
                if self.verify(selector, node) == SelectorOutcome.UNIQUE:
                    logger.debug("Selector for %r via %s: %s", node, strategy.__name__, selector)
                    return selector
        logger.debug("No unique selector for %r", node)
        return None

    # --- Strategies, in priority order ---

    def _by_id(self, node: Node) -> Iterator[str]:
        if node.id and not node.id[0].isdigit():
            yield f"#{soupsieve.escape(node.id)}"

    def _by_meaningful_classes(self, node: Node) -> Iterator[str]:
        meaningful = meaningful_classes(node)
        if meaningful:
            yield class_selector(meaningful)

    def _by_tag_and_classes(self, node: Node) -> Iterator[str]:
        if node.class_list:
            yield node.tag + class_selector(node.class_list)

    def _by_class_position(self, node: Node) -> Iterator[str]:
        meaningful = meaningful_classes(node)
        if not meaningful:
            return
        base = class_selector(meaningful)
        matches = self.tree.select(base)
        if not 1 < len(matches) <= self.max_class_matches or node not in matches:
            return
        position = matches.index(node) + 1
        yield f"{base}:nth-of-type({position})"
        yield f"{base}:nth-child({position})"

    def _by_parent_scope(self, node: Node) -> Iterator[str]:
        parent = node.parent
        if parent is None:
            return

        if parent.id:
            parent_selector = f"#{soupsieve.escape(parent.id)}"
        elif parent.tag in ('main', 'body'):
            parent_selector = parent.tag
        else:
            parent_selector = class_selector(meaningful_classes(parent))

        if parent_selector:
            position, _ = same_tag_position(node)
            yield f"{parent_selector} > {node.tag}:nth-of-type({position})"

    def _by_tag_position(self, node: Node) -> Iterator[str]:
        position, sibling_count = same_tag_position(node)
        if node.parent is None or sibling_count < 2:
            return
        selector = f"{node.tag}:nth-of-type({position})"
        if len(self.tree.select(selector)) < self.max_positional_matches:
            yield selector
