# topmark:header:start
#
#   project      : PagePress
#   file         : test_whitespace_step.py
#   file_relpath : tests/pipeline/steps/test_whitespace_step.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for whitespace compression."""

from __future__ import annotations

from pagepress.pipeline.steps.synonyms import SynonymStep, shorten_tags
from pagepress.pipeline.steps.whitespace import (
    WhitespaceStep,
    compress_css,
    compress_whitespace,
    mask_preformatted,
)
from pagepress.text.masking import MaskingCodec, TokenFamily
from tests.conftest import make_config, mark_pipeline
from tests.pipeline.conftest import make_doc

LIST = "<ul>\n  <li>one</li>\n  <li>two</li>\n</ul>\n"


def test_markup_whitespace_and_optional_closers() -> None:
    assert compress_whitespace(LIST, is_css=False, drop_optional_closers=True) == (
        "<ul><li>one<li>two</ul>"
    )
    assert compress_whitespace(LIST, is_css=False, drop_optional_closers=False) == (
        "<ul><li>one</li><li>two</li></ul>"
    )


def test_inline_whitespace_is_collapsed_not_removed() -> None:
    text = "<p>a   <b>bold</b>\n\n  text  </p>"

    assert compress_whitespace(text, is_css=False, drop_optional_closers=False) == (
        "<p>a <b>bold</b> text</p>"
    )


def test_block_tags_with_attributes() -> None:
    text = '<div class="x">\n <p>a</p> </div>'

    assert compress_whitespace(text, is_css=False, drop_optional_closers=False) == (
        '<div class="x"><p>a</p></div>'
    )


def test_compress_css() -> None:
    assert compress_css("a { color : red ; }") == "a{color:red}"
    text = "a {\n  color : red ;\n}\n\nb , i { margin: 0 }\n"
    assert compress_whitespace(text, is_css=True, drop_optional_closers=True) == (
        "a{color:red}b,i{margin:0}"
    )


def test_no_break_spaces_are_content() -> None:
    text = "<p>a\u00a0\u00a0b</p>\u00a0<b>x</b>\u00a0<i>y</i>\u00a0"

    assert compress_whitespace(text, is_css=False, drop_optional_closers=False) == text
    assert compress_css("a\u00a0{ color : red }") == "a\u00a0{color:red}"


def test_mask_preformatted() -> None:
    masks = MaskingCodec()
    text = "<pre class=code>a  b\n c</pre> <PRE>x y</PRE>"

    masked, blocks = mask_preformatted(text, masks)

    assert blocks == 2
    assert "  " not in masked
    assert masks.count(TokenFamily.PRE) == 3
    assert masks.unmask(masked, TokenFamily.PRE) == text


def test_shorten_tags() -> None:
    text = '<strong class="x">a</strong><EM>b</EM><embed src="e"><emphasis>'

    assert shorten_tags(text) == '<b class="x">a</b><i>b</i><embed src="e"><emphasis>'


@mark_pipeline
def test_synonyms_only_for_aggressive_compression() -> None:
    html = make_doc("<em>x</em>")
    css = make_doc("<em>x</em>", type_id="css")

    SynonymStep()(html)
    SynonymStep()(css)

    assert html.text == "<i>x</i>"
    assert css.text == "<em>x</em>"


@mark_pipeline
def test_strict_doctype_keeps_optional_closers() -> None:
    doc = make_doc(LIST)
    doc.doctype_mode = "strict"

    WhitespaceStep()(doc)

    assert doc.text == "<ul><li>one</li><li>two</li></ul>"


@mark_pipeline
def test_xml_keeps_optional_closers() -> None:
    doc = make_doc(LIST, type_id="xml")

    WhitespaceStep()(doc)

    assert "</li>" in doc.text


@mark_pipeline
def test_pre_block_disables_wrapping_and_stays_masked() -> None:
    doc = make_doc("<p>a</p>\n<pre>  x</pre>")

    WhitespaceStep()(doc)

    assert not doc.wrap_enabled
    assert "  x" not in doc.text
    assert doc.masks.unmask(doc.text, TokenFamily.PRE) == "<p>a<pre>  x</pre>"


@mark_pipeline
def test_compress_zero_leaves_text_alone() -> None:
    doc = make_doc("a   b\n\n", config=make_config(types={"html": {"compress": 0}}))

    WhitespaceStep()(doc)

    assert doc.text == "a   b\n\n"
