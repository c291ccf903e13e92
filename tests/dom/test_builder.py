# tests/dom/test_builder.py
import pytest

from blockscope.dom.builder import DOMBuilder, extract_content
from blockscope.exceptions import ErrorCode, ParseError, SelectorNotFound


def test_build_reads_bounding_boxes(build_tree):
    tree = build_tree('<section id="s" data-bbox="10, 200, 1200, 400"><p>Hi</p></section>')
    box = tree.get_element('#s').bounding_box
    assert (box.x, box.y, box.width, box.height) == (10.0, 200.0, 1200.0, 400.0)
    assert box.bottom == 600.0
    assert tree.get_element('p').bounding_box is None


def test_bbox_accepts_whitespace_separators(build_tree):
    tree = build_tree('<div id="d" data-bbox="0 0 300 90"></div>')
    assert tree.get_element('#d').bounding_box.height == 90.0


def test_page_height_from_html_attribute(page):
    tree = page('<section data-bbox="0,0,1200,400"></section>', height=3200)
    assert tree.page_height == 3200.0


def test_page_height_falls_back_to_lowest_edge(build_tree):
    tree = build_tree(
        '<div data-bbox="0,0,100,100"></div><div data-bbox="0,500,100,250"></div>'
    )
    assert tree.page_height == 750.0


def test_explicit_page_height_wins(builder):
    tree = builder.build('<html data-scroll-height="3200"><body><div></div></body></html>', page_height=999)
    assert tree.page_height == 999


def test_page_height_zero_without_geometry(build_tree):
    assert build_tree('<p>plain</p>').page_height == 0.0


@pytest.mark.parametrize("html", ["", "   \n  ", "just some text"])
def test_empty_or_elementless_markup_raises_parse_error(builder, html):
    with pytest.raises(ParseError) as exc_info:
        builder.build(html)
    assert exc_info.value.code == ErrorCode.PARSE_ERROR


@pytest.mark.parametrize("bbox", ["1,2,3", "a,b,c,d", "1,2,3,4,5"])
def test_malformed_bbox_raises_parse_error(builder, bbox):
    with pytest.raises(ParseError, match="Malformed bounding box"):
        builder.build(f'<div data-bbox="{bbox}"></div>')


def test_malformed_page_height_raises_parse_error(builder):
    with pytest.raises(ParseError, match="page height"):
        builder.build('<html data-scroll-height="tall"><body></body></html>')


def test_custom_geometry_attribute():
    tree = DOMBuilder(bbox_attribute="data-rect").build('<div id="d" data-rect="0,0,400,100"></div>')
    assert tree.get_element('#d').bounding_box.width == 400.0


def test_bom_is_stripped(builder):
    tree = builder.build('\ufeff<div id="x"></div>')
    assert tree.root.id == "x"


def test_extract_content(build_tree):
    tree = build_tree('<div class="cards grid"><div class="card">A</div><div class="card">B</div></div>')
    content = extract_content(tree, '.cards')
    assert content.tag_name == 'div'
    assert content.class_name == 'cards grid'
    assert content.child_count == 2
    assert content.inner_html == '<div class="card">A</div><div class="card">B</div>'
    assert content.outer_html.startswith('<div class="cards grid">')


def test_extract_content_missing_selector(build_tree):
    tree = build_tree('<div></div>')
    with pytest.raises(SelectorNotFound) as exc_info:
        extract_content(tree, '.missing')
    assert exc_info.value.code == ErrorCode.SELECTOR_NOT_FOUND
    assert '.missing' in str(exc_info.value)
