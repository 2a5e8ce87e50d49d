"""Tests for the token scanner."""

import pytest
from p69.lib.engine.scanner import tokens_scan, number_parse
from p69.models.dataModel import Token


def test_no_tokens():
    assert tokens_scan(".a { color: blue; }") == []
    assert tokens_scan("") == []


def test_simple_token():
    text = ".a{color:$color}"
    tokens = tokens_scan(text)
    assert len(tokens) == 1
    tk = tokens[0]
    assert tk.path == ("color",)
    assert tk.args is None
    assert tk.suffix == ""
    assert text[tk.start : tk.end] == "$color"


def test_dotted_path():
    tokens = tokens_scan("color: $theme.color.base;")
    assert tokens[0].path == ("theme", "color", "base")
    assert tokens[0].dotted == "theme.color.base"


def test_trailing_dot_ends_path():
    text = "$a.b. next"
    tk = tokens_scan(text)[0]
    assert tk.path == ("a", "b")
    assert text[tk.end] == "."


def test_multiple_tokens_ascending():
    text = "$a $b.c $d"
    tokens = tokens_scan(text)
    assert [t.dotted for t in tokens] == ["a", "b.c", "d"]
    starts = [t.start for t in tokens]
    assert starts == sorted(starts)
    for before, after in zip(tokens, tokens[1:]):
        assert before.span_end <= after.start


@pytest.mark.parametrize(
    "text,expected",
    [
        ("$fn()", ()),
        ("$fn(1, 2)", (1, 2)),
        ("$fn( -1.5 , .5, 2e3 )", (-1.5, 0.5, 2000.0)),
        ("$fn('a', \"b\")", ("a", "b")),
        ("$fn(true, false)", (True, False)),
        (r"$fn('it\'s', 'a\\b')", ("it's", "a\\b")),
    ],
)
def test_args(text, expected):
    tokens = tokens_scan(text)
    assert len(tokens) == 1
    assert tokens[0].args == expected
    assert tokens[0].end == len(text)


@pytest.mark.parametrize(
    "text",
    [
        "$fn(1, 2",
        "$fn('open)",
        "$fn(abc)",
        "$fn(1,)",
        "$fn(1 2)",
        "$fn(truely)",
    ],
)
def test_malformed_args_not_tokens(text):
    assert tokens_scan(text) == []


def test_malformed_args_do_not_stop_scanning():
    tokens = tokens_scan("$bad(1, $good")
    assert [t.dotted for t in tokens] == ["good"]


def test_suffix_after_args():
    text = "padding: $space(2)px;"
    tk = tokens_scan(text)[0]
    assert tk.suffix == "px"
    assert text[tk.start : tk.end] == "$space(2)"
    assert text[tk.end : tk.span_end] == "px"


def test_percent_suffix_after_path():
    tk = tokens_scan("width: $size.half%;")[0]
    assert tk.path == ("size", "half")
    assert tk.suffix == "%"


def test_punctuation_is_not_suffix():
    tokens = tokens_scan("color:$color;}")
    assert tokens[0].suffix == ""


def test_sigil_without_path():
    assert tokens_scan("costs $ 5 or $-1") == []


def test_no_rescan_inside_string_args():
    tokens = tokens_scan("$fn('$inner') $after")
    assert [t.dotted for t in tokens] == ["fn", "after"]
    assert tokens[0].args == ("$inner",)


def test_scan_is_repeatable():
    text = "$a(1)px and $b"
    assert tokens_scan(text) == tokens_scan(text)


def test_number_parse():
    assert number_parse("12") == 12
    assert isinstance(number_parse("12"), int)
    assert number_parse("1.") == 1.0
    assert isinstance(number_parse("1e2"), float)


def test_token_span_validation():
    with pytest.raises(ValueError):
        Token(path=("a",), start=5, end=2)
    with pytest.raises(ValueError):
        Token(path=(), start=0, end=1)


def test_unicode_path_segments():
    text = "content: $café.naïve;"
    tk = tokens_scan(text)[0]
    assert tk.path == ("café", "naïve")
    assert text[tk.start : tk.end] == "$café.naïve"
