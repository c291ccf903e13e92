# tests/layout/test_patterns.py
import pytest

from blockscope.layout.analyzer import analyze_layout
from blockscope.layout.patterns import PATTERN_RULES, detect_pattern
from blockscope.model import ChildSignature as S, LayoutPattern, LayoutStructure


def make_structure(**overrides):
    values = dict(
        row_count=1,
        column_count=1,
        has_images=False,
        has_headings=False,
        has_links=False,
        has_list=False,
        child_signatures=(S.MIXED,),
        is_repeating=False,
    )
    values.update(overrides)
    return LayoutStructure(**values)


def test_rule_order_is_fixed():
    assert [rule.name for rule in PATTERN_RULES] == [
        "single-image", "list", "hero", "repeating-grid", "media-text",
        "columns", "image-grid", "accordion", "text-only",
    ]


@pytest.mark.parametrize("markup", ['<img src="a.jpg">', '<picture></picture>', '<svg></svg>'])
def test_only_child_image_is_single_image(region, markup):
    analysis = analyze_layout(region(markup))
    assert analysis.pattern == LayoutPattern.SINGLE_IMAGE
    assert analysis.block_name == 'featured-image'


def test_four_images_are_a_media_grid(region):
    analysis = analyze_layout(region('<img src="1"><img src="2"><img src="3"><img src="4">'))
    s = analysis.structure
    assert (s.row_count, s.column_count, s.has_images, s.is_repeating) == (4, 4, True, True)
    assert analysis.pattern == LayoutPattern.GRID
    assert analysis.block_name == 'card-grid-4-media'


def test_single_paragraph_is_text_only(region):
    # Every signature is text, so the text-only rule applies before the default
    analysis = analyze_layout(region('<p>Just a paragraph</p>'))
    s = analysis.structure
    assert (s.row_count, s.column_count) == (1, 1)
    assert not (s.has_images or s.has_headings or s.has_list)
    assert analysis.pattern == LayoutPattern.TEXT_ONLY
    assert analysis.block_name == 'text-block'


def test_alternating_heading_content_pairs_resolve_to_grid(region):
    # heading/text pairs repeat, and the repeating-grid rule precedes accordion
    analysis = analyze_layout(region(
        '<h2>Question one</h2><div><p>Answer one</p></div>'
        '<h2>Question two</h2><div><p>Answer two</p></div>'
    ))
    s = analysis.structure
    assert s.child_signatures == (S.HEADING, S.TEXT, S.HEADING, S.TEXT)
    assert s.is_repeating and s.row_count == 4
    assert analysis.pattern == LayoutPattern.GRID
    assert analysis.block_name == 'card-grid-4'


def test_accordion_condition_is_shadowed_by_repeating_grid(region):
    node = region('<p>x</p>')
    # Any heading/content pairing has row_count >= 4, which the repeating-grid rule claims first
    structure = make_structure(
        row_count=4,
        column_count=5,
        child_signatures=(S.HEADING, S.TEXT, S.HEADING, S.TEXT),
        is_repeating=True,
    )
    assert detect_pattern(structure, node) == LayoutPattern.GRID


def test_list_pattern(region):
    analysis = analyze_layout(region('<ul><li>One</li><li>Two</li></ul>'))
    assert analysis.pattern == LayoutPattern.LIST
    assert analysis.block_name == 'content-list'


def test_illustrated_list(region):
    analysis = analyze_layout(region('<ol><li><img src="a"> One</li></ol>'))
    assert analysis.pattern == LayoutPattern.LIST
    assert analysis.block_name == 'content-list-illustrated'


def test_hero_with_leading_image_and_cta(region):
    analysis = analyze_layout(region('<img src="bg.jpg"><h1>Welcome</h1><a href="/go">Start</a>'))
    assert analysis.pattern == LayoutPattern.HERO
    assert analysis.block_name == 'hero-banner-cta'


def test_hero_with_explicit_width_image(region):
    analysis = analyze_layout(region('<h1>Welcome</h1><div><img src="bg.jpg" width="1400"></div>'))
    assert analysis.pattern == LayoutPattern.HERO
    assert analysis.block_name == 'hero-banner'


def test_heading_and_plain_image_are_columns(region):
    analysis = analyze_layout(region('<h1>Welcome</h1><img src="bg.jpg">'))
    assert analysis.structure.column_count == 2
    assert analysis.pattern == LayoutPattern.COLUMNS
    assert analysis.block_name == 'columns-2'


def test_repeating_grid_takes_priority_over_columns(region):
    # Three identical text columns would otherwise be "columns-3"
    analysis = analyze_layout(region('<div><p>a</p></div>' * 3))
    assert analysis.structure.column_count == 3
    assert analysis.pattern == LayoutPattern.GRID
    assert analysis.block_name == 'card-grid-3'


def test_six_image_cards_are_a_media_grid(region):
    analysis = analyze_layout(region('<div><img src="a"></div><div><img src="b"></div>' * 3))
    assert analysis.pattern == LayoutPattern.GRID
    assert analysis.block_name == 'card-grid-6-media'


def test_two_identical_image_children_are_image_grid(region):
    # Too few rows for the first grid rule and repeating, so not columns either
    analysis = analyze_layout(region('<figure><img src="a"></figure><figure><img src="b"></figure>'))
    assert analysis.structure.row_count == 2
    assert analysis.pattern == LayoutPattern.GRID
    assert analysis.block_name == 'card-grid-2-media'


def test_long_text_section_is_text_only(region):
    analysis = analyze_layout(region('<h2>Title</h2>' + '<p>para</p>' * 4))
    assert analysis.structure.column_count == 1
    assert analysis.pattern == LayoutPattern.TEXT_ONLY


def test_unrecognized_content_is_unknown(region):
    analysis = analyze_layout(region('<table><tr><td>1</td></tr></table>'))
    assert analysis.pattern == LayoutPattern.UNKNOWN
    assert analysis.block_name == 'custom-block'


def test_single_child_never_reaches_media_text(region):
    # A single child forces column_count to 1, so the media-text rule
    # (row_count 1 and column_count 2) cannot fire on a real tree.
    analysis = analyze_layout(region('<div><img src="a.jpg"><p>Side text</p></div>'))
    assert analysis.structure.row_count == 1
    assert analysis.structure.column_count == 1
    assert analysis.pattern == LayoutPattern.UNKNOWN
    assert analysis.block_name == 'custom-block'


def test_media_text_rule_itself(region):
    structure = make_structure(row_count=1, column_count=2, has_images=True)
    assert detect_pattern(structure, region('<p>x</p>')) == LayoutPattern.MEDIA_TEXT


def test_detect_pattern_defaults_to_unknown(region):
    structure = make_structure(row_count=0, column_count=0, child_signatures=(), has_images=True)
    assert detect_pattern(structure, region('')) == LayoutPattern.UNKNOWN
