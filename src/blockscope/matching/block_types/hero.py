from ..core import BlockTypeDefinition, ScoringContext, scoring_rule
from ...model import BlockType

CARD_LIKE_SELECTOR = '[class*="card"], [class*="grid"], [class*="tile"]'


@scoring_rule("hero-contains-cards")
def penalize_card_groups(ctx: ScoringContext) -> float:
    """A hero candidate holding more than three card/grid/tile elements is a page section, not the hero."""
    if len(ctx.node.select(CARD_LIKE_SELECTOR)) > 3:
        return -40
    return 0


DEFINITION = BlockTypeDefinition(
    block_type=BlockType.HERO,
    search_selectors=[
        '[class*="hero"]', '[class*="banner"]', '[class*="jumbotron"]',
        'main > section:first-of-type', 'main > div:first-of-type',
        '[class*="intro"]', '[class*="splash"]',
    ],
    keywords=['hero', 'banner', 'jumbotron'],
    scoring_rules=[penalize_card_groups],
)
