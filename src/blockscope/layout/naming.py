# src/blockscope/layout/naming.py
import re
from typing import Dict

from ..model import ChildSignature, LayoutPattern, LayoutStructure

PATTERN_PREFIXES: Dict[LayoutPattern, str] = {
    LayoutPattern.GRID: 'card-grid',
    LayoutPattern.COLUMNS: 'columns',
    LayoutPattern.HERO: 'hero-banner',
    LayoutPattern.MEDIA_TEXT: 'media-text',
    LayoutPattern.LIST: 'content-list',
    LayoutPattern.ACCORDION: 'accordion',
    LayoutPattern.TABS: 'tabs',
    LayoutPattern.CARDS: 'cards',
    LayoutPattern.CAROUSEL: 'carousel',
    LayoutPattern.TEXT: 'text-block',
    LayoutPattern.TEXT_ONLY: 'text-block',
    LayoutPattern.SINGLE_IMAGE: 'featured-image',
    LayoutPattern.UNKNOWN: 'custom-block',
}


def to_kebab_case(value: str) -> str:
    """'mediaText  block_name' -> 'media-text-block-name'"""
    value = re.sub(r'([a-z])([A-Z])', r'\1-\2', value)
    value = re.sub(r'[\s_]+', '-', value)
    value = re.sub(r'-{2,}', '-', value)
    return value.lower()


def _suffix_for(pattern: LayoutPattern, structure: LayoutStructure) -> str:
    if pattern == LayoutPattern.GRID:
        suffix = f'-{structure.row_count}'
        if structure.has_images:
            suffix += '-media'
        return suffix

    if pattern == LayoutPattern.COLUMNS:
        return f'-{structure.column_count}'

    if pattern == LayoutPattern.MEDIA_TEXT:
        signatures = structure.child_signatures
        first_is_image = bool(signatures) and signatures[0] == ChildSignature.IMAGE
        return '-left' if first_is_image else '-right'

    if pattern == LayoutPattern.HERO:
        return '-cta' if structure.has_links else ''

    if pattern == LayoutPattern.LIST:
        return '-illustrated' if structure.has_images else ''

    if pattern == LayoutPattern.ACCORDION:
        return f'-{structure.row_count // 2}-items'

    return ''


def generate_block_name(pattern: LayoutPattern, structure: LayoutStructure) -> str:
    """Derives a stable kebab-case block name from the pattern and structure."""
    return to_kebab_case(PATTERN_PREFIXES[pattern] + _suffix_for(pattern, structure))
