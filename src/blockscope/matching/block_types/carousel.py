from ..core import BlockTypeDefinition
from ...model import BlockType

DEFINITION = BlockTypeDefinition(
    block_type=BlockType.CAROUSEL,
    search_selectors=[
        '[class*="carousel"]', '[class*="slider"]', '[class*="swiper"]',
        '[class*="slideshow"]', '[class*="gallery"]',
    ],
    keywords=['carousel', 'slider', 'swiper'],
)
