# tests/conftest.py
import pytest

from blockscope.dom.builder import DOMBuilder


@pytest.fixture
def builder():
    return DOMBuilder()


@pytest.fixture
def build_tree(builder):
    """Builds a DOMTree from inline markup."""
    def _build(html, page_height=None):
        return builder.build(html, page_height=page_height)
    return _build


@pytest.fixture
def region(build_tree):
    """Wraps markup in <div id="region"> and returns that node."""
    def _region(inner_html):
        tree = build_tree(f'<div id="region">{inner_html}</div>')
        return tree.get_element('#region')
    return _region


@pytest.fixture
def page(build_tree):
    """Builds a full document with a known scrollable height."""
    def _page(body_html, height=2000):
        return build_tree(
            f'<!DOCTYPE html><html data-scroll-height="{height}"><body>{body_html}</body></html>'
        )
    return _page
