# topmark:header:start
#
#   project      : PagePress
#   file         : test_macro_syntax.py
#   file_relpath : tests/text/test_macro_syntax.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for macro token delimiters."""

from __future__ import annotations

from pagepress.text.macros import MacroSyntax


def test_substitute_matches_both_styles_case_insensitively() -> None:
    syntax = MacroSyntax()

    text, count = syntax.substitute("<<DATE>> and <:date:>", "date", "today")

    assert text == "today and today"
    assert count == 2


def test_substitute_with_callback() -> None:
    syntax = MacroSyntax()

    text, count = syntax.substitute("<<file>>", "file", lambda m: m.group(0).upper())

    assert text == "<<FILE>>"
    assert count == 1


def test_keywords_are_literal() -> None:
    syntax = MacroSyntax()

    text, count = syntax.substitute("<<aXb>>", "a.b", "!")

    assert count == 0
    assert text == "<<aXb>>"


def test_find_unresolved_in_document_order() -> None:
    syntax = MacroSyntax()
    text = "<p><:author:></p>\n<p><<title>></p>\n<<<not a token\nx << y >> z"

    assert syntax.find_unresolved(text) == ["<:author:>", "<<title>>"]


def test_custom_delimiters() -> None:
    syntax = MacroSyntax(delimiters=(("{{", "}}"),))

    text, count = syntax.substitute("{{ date }} {{date}} <<date>>", "date", "D")

    assert count == 1
    assert text == "{{ date }} D <<date>>"
    assert syntax.find_unresolved(text) == []
