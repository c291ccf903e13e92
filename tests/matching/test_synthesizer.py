# tests/matching/test_synthesizer.py
import pytest

from blockscope.matching.synthesizer import SelectorOutcome, SelectorSynthesizer, meaningful_classes


@pytest.fixture
def synthesize(page):
    """Builds a page and returns (selector, target) for the element marked data-target."""
    def _synthesize(body_html):
        tree = page(body_html)
        target = tree.get_element('[data-target]')
        return SelectorSynthesizer(tree).synthesize(target), target
    return _synthesize


def resolves_to(selector, target):
    return target.tree.select(selector) == [target]


def test_id_selector(synthesize):
    selector, target = synthesize('<div id="hero" class="banner" data-target>x</div>')
    assert selector == '#hero'


def test_id_starting_with_digit_is_skipped(synthesize):
    selector, target = synthesize('<div id="1abc" class="promo-box" data-target>x</div>')
    assert selector == '.promo-box'


def test_meaningful_classes_skip_utilities(synthesize):
    selector, target = synthesize('<div class="mt-4 product-list flex aem-Grid ab" data-target>x</div>')
    assert selector == '.product-list'


def test_tag_and_all_classes(synthesize):
    selector, target = synthesize(
        '<div class="teaser">a</div><section class="teaser" data-target>b</section>'
    )
    assert selector == 'section.teaser'


def test_utility_only_classes_use_tag_and_classes(synthesize):
    selector, target = synthesize('<div class="flex">a</div><section class="flex" data-target>b</section>')
    assert selector == 'section.flex'


def test_class_position_nth_of_type(synthesize):
    selector, target = synthesize(
        '<div class="wrap"><div class="tile">A</div><div class="tile" data-target>B</div></div>'
    )
    assert selector == '.tile:nth-of-type(2)'
    assert resolves_to(selector, target)


def test_class_position_falls_back_to_nth_child(synthesize):
    selector, target = synthesize(
        '<div><div class="tile">A</div></div>'
        '<div><span>x</span><div class="tile" data-target>B</div></div>'
    )
    assert selector == '.tile:nth-child(2)'
    assert resolves_to(selector, target)


def test_parent_scope_main(synthesize):
    selector, target = synthesize('<main><section>A</section><section data-target>B</section></main>')
    assert selector == 'main > section:nth-of-type(2)'


def test_parent_scope_body(synthesize):
    selector, target = synthesize('<div>A</div><div data-target>B</div>')
    assert selector == 'body > div:nth-of-type(2)'


def test_parent_scope_id(synthesize):
    selector, target = synthesize(
        '<div id="list"><p>a</p><p data-target>b</p></div><div><p>c</p><p>d</p></div>'
    )
    assert selector == '#list > p:nth-of-type(2)'


def test_parent_scope_meaningful_classes(synthesize):
    selector, target = synthesize(
        '<div class="faq"><p>a</p><p data-target>b</p></div><div><p>c</p><p>d</p></div>'
    )
    assert selector == '.faq > p:nth-of-type(2)'


def test_bare_tag_position_last_resort(synthesize):
    selector, target = synthesize('<div><article>a</article><article data-target>b</article></div>')
    assert selector == 'article:nth-of-type(2)'


def test_bare_tag_position_must_be_unique(synthesize):
    # Both sibling groups share positions, so article:nth-of-type(2) matches twice
    selector, target = synthesize(
        '<div><article>a</article><article data-target>b</article></div>'
        '<div><article>c</article><article>d</article></div>'
    )
    assert selector is None


def test_no_unique_selector_returns_none(synthesize):
    selector, target = synthesize('<div><span data-target>a</span></div><div><span>b</span></div>')
    assert selector is None


def test_special_characters_are_escaped(synthesize):
    selector, target = synthesize('<div class="md:wide" data-target>a</div>')
    assert selector == '.md\\:wide'
    assert resolves_to(selector, target)


def test_every_synthesized_selector_is_unique(page):
    tree = page(
        '<main id="content">'
        '<section class="hero banner"><h1>Hi</h1><p>Intro</p></section>'
        '<section class="cards"><div class="card">1</div><div class="card">2</div><div class="card">3</div></section>'
        '<section class="cards"><div class="card">4</div></section>'
        '<div class="mt-2"><span>a</span><span>b</span></div>'
        '</main>'
        '<footer><p>one</p><p>two</p></footer>'
    )
    synthesizer = SelectorSynthesizer(tree)
    for node in tree.nodes():
        selector = synthesizer.synthesize(node)
        if selector is not None:
            assert tree.select(selector) == [node], selector


def test_verify_outcomes(page):
    tree = page('<div class="a">1</div><div class="a">2</div><p class="b">3</p>')
    synthesizer = SelectorSynthesizer(tree)
    first = tree.get_element('.a')
    assert synthesizer.verify('.b', tree.get_element('.b')) == SelectorOutcome.UNIQUE
    assert synthesizer.verify('.a', first) == SelectorOutcome.AMBIGUOUS
    assert synthesizer.verify('.b', first) == SelectorOutcome.INVALID
    assert synthesizer.verify('div[', first) == SelectorOutcome.INVALID


def test_meaningful_classes(region):
    node = region('<div class="px-2 cards ab grid-3 col-6 text-center hero-wrap d-flex aem-GridColumn"></div>').first_child
    assert meaningful_classes(node) == ['cards', 'hero-wrap']
