# src/blockscope/matching/smart.py
"""
Smart matching: find the tree node behind each block a vision model described.
"""
import json
import logging
import re
from typing import List, Optional, Sequence, Union

from pydantic import ValidationError
from tqdm import tqdm

from .core import MatchSettings
from .matcher import ElementMatcher
from .siblings import find_sibling_selectors
from .synthesizer import SelectorSynthesizer
from ..dom.tree import DOMTree, Node
from ..model import BlockType, ContentHints, DescribedBlock, HintPosition, MatchResult, NamedBlock
from ..utils.config_manager import config_manager

logger = logging.getLogger(__name__)

_JSON_ARRAY = re.compile(r'\[[\s\S]*\]')


def match_element(
        root: Union[Node, DOMTree],
        hints: ContentHints,
        block_type: BlockType,
        settings: Optional[MatchSettings] = None,
) -> MatchResult:
    """
    Finds the node that best matches a described block and returns its selector.

    The best-ranked candidate that can be given a verified unique selector
    wins. For card groups whose match holds fewer cards than described,
    similar siblings are returned as `sibling_selectors`.

    Args:
        root: The tree, or the node whose descendants are searched.
        hints: Content hints of the described block.
        block_type: The declared block type.

    Returns:
        MatchResult: `selector` is None when no candidate cleared the threshold.
    """
    tree = root if isinstance(root, DOMTree) else root.tree
    synthesizer = SelectorSynthesizer(tree)
    ranked = ElementMatcher(root, settings).match(hints, block_type)

    for candidate in ranked:
        selector = synthesizer.synthesize(candidate.node)
        if selector is None:
            continue

        sibling_selectors: List[str] = []
        if block_type == BlockType.CARDS and hints.card_count:
            sibling_selectors = find_sibling_selectors(candidate.node, hints.card_count, synthesizer)

        logger.debug("Best match %s scored %g.", selector, candidate.score)
        return MatchResult(
            selector=selector,
            sibling_selectors=tuple(sibling_selectors) if sibling_selectors else None,
        )

    return MatchResult()


def detect_blocks(tree: DOMTree, blocks: Sequence[DescribedBlock]) -> List[NamedBlock]:
    """
    Matches every described block against one tree.
    Blocks without a confident match are left out.
    """
    show_progress = config_manager.get_nested("matching.show_progress", False)
    settings = MatchSettings.from_config()
    matched: List[NamedBlock] = []

    for block in tqdm(blocks, desc="Matching blocks", unit="block", disable=not show_progress):
        logger.info("Finding DOM element for: %s", block.name)
        result = match_element(tree, block.content_hints, block.type, settings)

        if not result.found:
            logger.info("  Could not find matching element")
            continue

        logger.info("  Found: %s", result.selector)
        if result.sibling_selectors:
            logger.info(
                "  + %d sibling(s) to merge: %s",
                len(result.sibling_selectors), ", ".join(result.sibling_selectors),
            )

        matched.append(NamedBlock(
            selector=result.selector,
            name=block.name,
            description=block.description,
            type=block.type,
            priority="high" if block.content_hints.position == HintPosition.TOP else "medium",
            sibling_selectors=result.sibling_selectors,
        ))

    return matched


def parse_block_descriptions(text: str) -> List[DescribedBlock]:
    """
    Extracts the JSON array of block descriptions from a model's text reply.

    Returns an empty list when no array can be parsed; entries that do not
    validate are skipped.
    """
    match = _JSON_ARRAY.search(text or "")
    if not match:
        logger.error("No JSON array found in block descriptions: %s", (text or "")[:200])
        return []

    try:
        raw_blocks = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        logger.error("Failed to parse block descriptions: %s", e)
        return []

    blocks = []
    for raw in raw_blocks:
        try:
            blocks.append(DescribedBlock.model_validate(raw))
        except ValidationError as e:
            logger.warning("Skipping invalid block description %r: %s", raw, e)
    return blocks
