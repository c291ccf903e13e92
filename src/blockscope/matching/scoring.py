# src/blockscope/matching/scoring.py
"""
Additive scoring of candidate nodes against content hints.

A candidate is first checked for plausible block geometry; anything too
small, unmeasured, or (nearly) as tall as the page scores 0. Otherwise
the score is the sum of all rule adjustments: the common rules below plus
the rules of the block type's definition and its class-name keyword bonus.
"""
import logging
from typing import Optional

from .core import BlockTypeDefinition, MatchSettings, ScoringContext, scoring_rule
from .registry import BlockTypeRegistry
from ..dom.tree import Node
from ..model import BlockType, ContentHints, HintPosition

logger = logging.getLogger(__name__)

WRAPPER_CLASS_FRAGMENTS = ('responsivegrid', 'container', 'wrapper')
SECTION_LIKE_SELECTOR = '[class*="hero"], [class*="card"], [class*="grid"], section, article'
MEDIA_SELECTOR = 'img, picture, video'
CARD_ITEM_SELECTOR = '[class*="card"], [class*="item"], [class*="tile"]'
HEADING_PREFIX_LENGTH = 20


def is_disqualified(ctx: ScoringContext) -> bool:
    box = ctx.node.bounding_box
    if box is None:
        return True
    if box.width < ctx.settings.min_width or box.height < ctx.settings.min_height:
        return True
    # Taller than most of the page: the whole page, not a block
    return ctx.page_height > 0 and box.height > ctx.page_height * ctx.settings.max_page_fraction


@scoring_rule("generic-wrapper")
def penalize_generic_wrapper(ctx: ScoringContext) -> float:
    class_str = ctx.node.class_name.lower()
    if not any(fragment in class_str for fragment in WRAPPER_CLASS_FRAGMENTS):
        return 0
    # Holding several distinct sections marks a parent container
    return -50 if len(ctx.node.select(SECTION_LIKE_SELECTOR)) > 1 else 0


@scoring_rule("position")
def score_position(ctx: ScoringContext) -> float:
    if ctx.page_height <= 0:
        return 0
    relative_y = ctx.node.bounding_box.y / ctx.page_height
    position = ctx.hints.position

    if position == HintPosition.TOP and relative_y < 0.3:
        return 30
    if position == HintPosition.MIDDLE and 0.2 <= relative_y <= 0.7:
        return 20
    if position == HintPosition.BOTTOM and relative_y > 0.6:
        return 20
    return 0


@scoring_rule("heading-text")
def score_heading_text(ctx: ScoringContext) -> float:
    if not ctx.hints.headings:
        return 0
    text = ctx.node.text_content.lower()
    for heading in ctx.hints.headings:
        prefix = heading.lower()[:HEADING_PREFIX_LENGTH]
        if prefix.strip() and prefix in text:
            return 25
    return 0


@scoring_rule("images")
def score_images(ctx: ScoringContext) -> float:
    hints = ctx.hints
    if not hints.has_images:
        return 0
    image_count = len(ctx.node.select(MEDIA_SELECTOR))
    if image_count == 0:
        return 0

    score = 15
    if hints.image_count:
        if abs(image_count - hints.image_count) <= 2:
            score += 10
        # Far more images than described: an over-inclusive container
        if image_count > hints.image_count * 2:
            score -= 20
    return score


@scoring_rule("card-structure")
def score_card_structure(ctx: ScoringContext) -> float:
    hints = ctx.hints
    if not (hints.has_cards and hints.card_count):
        return 0

    score = 0
    half = hints.card_count * 0.5
    sized_children = [child for child in ctx.node.children if is_card_sized(child)]
    if len(sized_children) >= half:
        score += 20
    if len(ctx.node.select(CARD_ITEM_SELECTOR)) >= half:
        score += 15
    return score


def is_card_sized(node: Node) -> bool:
    box = node.bounding_box
    return box is not None and box.width > 100 and box.height > 100


COMMON_RULES = (
    penalize_generic_wrapper,
    score_position,
    score_heading_text,
    score_images,
    score_card_structure,
)


def score_keywords(ctx: ScoringContext, definition: BlockTypeDefinition) -> float:
    class_str = ctx.node.class_name.lower()
    if definition.keywords and any(keyword in class_str for keyword in definition.keywords):
        return 20
    return 0


def score_element(
        node: Node,
        hints: ContentHints,
        block_type: BlockType,
        settings: Optional[MatchSettings] = None,
) -> float:
    """
    Scores how well `node` matches a described block.

    Returns 0 for disqualified nodes; otherwise the (possibly negative) sum
    of every rule adjustment.
    """
    settings = settings or MatchSettings.from_config()
    definition = BlockTypeRegistry.get(block_type)
    ctx = ScoringContext(
        node=node,
        hints=hints,
        block_type=block_type,
        page_height=node.tree.page_height,
        settings=settings,
    )

    if is_disqualified(ctx):
        return 0

    score = 0.0
    for rule in COMMON_RULES + definition.scoring_rules:
        adjustment = rule(ctx)
        if adjustment:
            logger.debug("%r %s: %+g", node, getattr(rule, "rule_label", rule.__name__), adjustment)
        score += adjustment

    score += score_keywords(ctx, definition)
    return score
