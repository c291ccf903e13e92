# src/blockscope/matching/matcher.py
import logging
from typing import List, NamedTuple, Optional, Union

import soupsieve

from .core import MatchSettings
from .registry import BlockTypeRegistry
from .scoring import score_element
from ..dom.tree import DOMTree, Node
from ..model import BlockType, ContentHints

logger = logging.getLogger(__name__)

# Scanned after the type-specific expressions for every block type
FALLBACK_SELECTOR = 'section, article, main > div, [role="main"] > div'


class ScoredCandidate(NamedTuple):
    node: Node
    score: float
    order: int  # discovery order, the tie-breaker


class ElementMatcher:
    """
    Enumerates, scores and ranks the nodes that could be the described block.

    Candidates come from the block type's search expressions followed by a
    generic scan of sections, articles and top-level divs. Each node is
    scored once, at its first discovery.

    `root` is either a whole DOMTree or a node whose descendants are searched.
    """

    def __init__(self, root: Union[Node, DOMTree], settings: Optional[MatchSettings] = None):
        self.root = root
        self.settings = settings or MatchSettings.from_config()

    def find_candidates(self, hints: ContentHints, block_type: BlockType) -> List[ScoredCandidate]:
        """All unique candidates in discovery order, with their scores."""
        definition = BlockTypeRegistry.get(block_type)
        candidates: List[ScoredCandidate] = []
        seen = set()

        for expression in definition.search_selectors + (FALLBACK_SELECTOR,):
            try:
                nodes = self.root.select(expression)
            except soupsieve.SelectorSyntaxError as e:
                logger.debug("Skipping invalid search expression %r: %s", expression, e)
                continue

            for node in nodes:
                if node in seen:
                    continue
                seen.add(node)
                score = score_element(node, hints, block_type, self.settings)
                candidates.append(ScoredCandidate(node, score, len(candidates)))

        logger.debug("Scored %d candidate(s) for block type '%s'.", len(candidates), block_type.value)
        return candidates

    def rank(self, candidates: List[ScoredCandidate]) -> List[ScoredCandidate]:
        """Candidates above the acceptance threshold, best first; ties keep discovery order."""
        accepted = [c for c in candidates if c.score > self.settings.min_score]
        return sorted(accepted, key=lambda c: (-c.score, c.order))

    def match(self, hints: ContentHints, block_type: BlockType) -> List[ScoredCandidate]:
        return self.rank(self.find_candidates(hints, block_type))
