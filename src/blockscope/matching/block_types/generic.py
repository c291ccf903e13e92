# Fallback for every block type without a dedicated definition.
from ..core import BlockTypeDefinition
from ...model import BlockType

DEFINITION = BlockTypeDefinition(
    block_type=BlockType.OTHER,
    search_selectors=['section', 'article', 'main > div', '[class*="content"]', '[class*="block"]'],
)
