# src/blockscope/layout/patterns.py
"""
Pattern detection as an ordered decision table.

Rules are evaluated top to bottom and the first matching rule wins.
Several conditions overlap (both grid rules, grid vs. columns), so the
order of PATTERN_RULES is part of the behaviour.
"""
import logging
from typing import Callable, NamedTuple, Tuple

from ..dom.tree import Node
from ..model import ChildSignature, LayoutPattern, LayoutStructure

logger = logging.getLogger(__name__)

# An <img> with an explicit width or a <picture> marks a prominent visual
LARGE_IMAGE_SELECTOR = 'img[width], picture'


class PatternRule(NamedTuple):
    name: str
    predicate: Callable[[LayoutStructure, Node], bool]
    pattern: LayoutPattern


def _first_signature_is(structure: LayoutStructure, signature: ChildSignature) -> bool:
    return bool(structure.child_signatures) and structure.child_signatures[0] == signature


def _is_single_image(s: LayoutStructure, node: Node) -> bool:
    return s.row_count == 1 and _first_signature_is(s, ChildSignature.IMAGE)


def _is_list(s: LayoutStructure, node: Node) -> bool:
    return s.has_list and s.row_count == 1


def _is_hero(s: LayoutStructure, node: Node) -> bool:
    if not (s.row_count <= 3 and s.has_images and s.has_headings):
        return False
    return node.has(LARGE_IMAGE_SELECTOR) or _first_signature_is(s, ChildSignature.IMAGE)


def _is_repeating_grid(s: LayoutStructure, node: Node) -> bool:
    return s.is_repeating and s.row_count >= 3


def _is_media_text(s: LayoutStructure, node: Node) -> bool:
    return s.row_count == 1 and s.column_count == 2 and s.has_images


def _is_columns(s: LayoutStructure, node: Node) -> bool:
    return 2 <= s.column_count <= 4 and not s.is_repeating


def _is_image_grid(s: LayoutStructure, node: Node) -> bool:
    return s.row_count >= 2 and s.has_images and s.is_repeating


def _is_accordion(s: LayoutStructure, node: Node) -> bool:
    if not (s.is_repeating and ChildSignature.HEADING in s.child_signatures):
        return False
    heading_count = s.child_signatures.count(ChildSignature.HEADING)
    return heading_count >= 2 and heading_count * 2 == s.row_count


def _is_text_only(s: LayoutStructure, node: Node) -> bool:
    if s.has_images:
        return False
    return s.has_headings or all(
        sig in (ChildSignature.TEXT, ChildSignature.HEADING) for sig in s.child_signatures
    )


PATTERN_RULES: Tuple[PatternRule, ...] = (
    PatternRule("single-image", _is_single_image, LayoutPattern.SINGLE_IMAGE),
    PatternRule("list", _is_list, LayoutPattern.LIST),
    PatternRule("hero", _is_hero, LayoutPattern.HERO),
    PatternRule("repeating-grid", _is_repeating_grid, LayoutPattern.GRID),
    PatternRule("media-text", _is_media_text, LayoutPattern.MEDIA_TEXT),
    PatternRule("columns", _is_columns, LayoutPattern.COLUMNS),
    PatternRule("image-grid", _is_image_grid, LayoutPattern.GRID),
    PatternRule("accordion", _is_accordion, LayoutPattern.ACCORDION),
    PatternRule("text-only", _is_text_only, LayoutPattern.TEXT_ONLY),
)


def detect_pattern(structure: LayoutStructure, node: Node) -> LayoutPattern:
    """Returns the pattern of the first rule whose condition holds, else UNKNOWN."""
    for rule in PATTERN_RULES:
        if rule.predicate(structure, node):
            logger.debug("Pattern rule '%s' matched.", rule.name)
            return rule.pattern
    return LayoutPattern.UNKNOWN
