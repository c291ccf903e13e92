from ..core import BlockTypeDefinition, ScoringContext, scoring_rule
from ...model import BlockType

HERO_LIKE_SELECTOR = '[class*="hero"], [class*="banner"], [class*="jumbotron"]'


@scoring_rule("cards-contain-hero")
def penalize_hero_content(ctx: ScoringContext) -> float:
    """Card groups do not contain heroes; a node that does is their parent."""
    return -40 if ctx.node.has(HERO_LIKE_SELECTOR) else 0


@scoring_rule("cards-lead-with-hero")
def penalize_large_first_child(ctx: ScoringContext) -> float:
    """A tall, full-width first child is a hero mis-scoped into the card group."""
    first = ctx.node.first_child
    box = ctx.node.bounding_box
    if first is None or first.bounding_box is None or box is None:
        return 0
    first_box = first.bounding_box
    if first_box.height > 300 and first_box.width > box.width * 0.8:
        return -30
    return 0


DEFINITION = BlockTypeDefinition(
    block_type=BlockType.CARDS,
    search_selectors=[
        # Card containers first
        'section[class*="column-control"]', 'div[class*="column-control"]',
        'section[class*="columns"]', 'div[class*="columns"]',
        '[class*="card-container"]', '[class*="cards"]',
        '[class*="grid"]', '[class*="tiles"]',
        '[class*="products"]', '[class*="features"]', '[class*="services"]',
        '[class*="categories"]', '[class*="divisions"]', '[class*="items"]',
        # Broader scan
        'main section', 'main > div',
    ],
    keywords=['card', 'grid', 'list', 'column-control', 'columns'],
    scoring_rules=[penalize_hero_content, penalize_large_first_child],
)
