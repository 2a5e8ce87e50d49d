"""Tests for the token rewrite engine."""

import unicodedata
from collections.abc import Mapping
import pytest
from unittest.mock import Mock, patch
from p69.lib.engine import replace_all, MissingTokenError, ResolutionError
from p69.lib.engine.base import options_get, error_report
from p69.models.dataModel import Options, Token


@pytest.fixture
def sink() -> Mock:
    return Mock()


@pytest.fixture
def options(sink: Mock) -> Options:
    return Options(reference="test.p69", on_error=sink)


def test_concrete_scenario():
    with patch("p69.lib.engine.base.error_report") as mock_report:
        result = replace_all({"color": "blue"}, ".a{color:$color}")
    assert result == ".a{color:blue}"
    mock_report.assert_not_called()


def test_layered_maps(options, sink):
    assert replace_all([{}, {"x": "fallback"}], "$x", options) == "fallback"
    sink.assert_not_called()


def test_map_precedence(options):
    maps = [{"a": {"b": "x"}}, {"a": {"b": "y"}}]
    assert replace_all(maps, "$a.b", options) == "x"


def test_no_tokens_returns_normalized_input(options, sink):
    text = "café { margin: 0; }"
    assert replace_all({}, text, options) == unicodedata.normalize("NFC", text)
    sink.assert_not_called()


def test_offset_safety(options, sink):
    maps = {"long": "a-much-longer-value", "s": "", "mid": "xyz"}
    text = "[$long] [$s] [$mid] [$long]"
    expected = "[a-much-longer-value] [] [xyz] [a-much-longer-value]"
    assert replace_all(maps, text, options) == expected
    sink.assert_not_called()


def test_shorten_and_lengthen(options):
    maps = {"very_long_token_name": "1", "x": "expanded value"}
    assert replace_all(maps, "$very_long_token_name|$x", options) == "1|expanded value"


def test_missing_token_reported_once(options, sink):
    result = replace_all({"a": "1"}, "$a $nope.here $a", options)
    assert result == "1 $nope.here 1"
    sink.assert_called_once()
    error, token, passed = sink.call_args.args
    assert isinstance(error, MissingTokenError)
    assert str(error) == "Missing token: nope.here"
    assert token.path == ("nope", "here")
    assert passed.reference == "test.p69"


def test_missing_token_silent(sink):
    options = Options(error_if_missing=False, on_error=sink)
    assert replace_all({}, "color: $nope;", options) == "color: $nope;"
    sink.assert_not_called()


def test_suffix_append(options):
    assert replace_all({"grid": lambda n: n * 4}, "$grid(2)px", options) == "8px"
    assert replace_all({"pct": 50}, "$pct%", options) == "50%"


def test_none_value_drops_suffix(options, sink):
    maps = {"gap": lambda n: None}
    assert replace_all(maps, "gap: $gap(1)px;", options) == "gap: ;"
    sink.assert_not_called()


def test_callable_resolution(options):
    add = Mock(side_effect=lambda a, b: a + b)
    assert replace_all({"add": add}, "$add(1, 2)", options) == "3"
    add.assert_called_once_with(1, 2)


def test_args_on_literal_reported(options, sink):
    result = replace_all({"color": "blue"}, "$color(1) $color", options)
    assert result == "$color(1) blue"
    sink.assert_called_once()
    assert isinstance(sink.call_args.args[0], ResolutionError)


def test_callable_failure_does_not_abort(options, sink):
    def broken():
        raise RuntimeError("broken")

    maps = {"broken": broken, "ok": "fine"}
    result = replace_all(maps, "$ok $broken() $ok", options)
    assert result == "fine $broken() fine"
    sink.assert_called_once()
    assert isinstance(sink.call_args.args[0], ResolutionError)


def test_errors_reported_back_to_front(options, sink):
    replace_all({}, "$first $second", options)
    reported = [c.args[1].dotted for c in sink.call_args_list]
    assert reported == ["second", "first"]


def test_raising_sink_stops_rewrite():
    def fatal(error, token, options):
        raise error

    with pytest.raises(MissingTokenError):
        replace_all({}, "$nope", Options(on_error=fatal))


def test_determinism():
    def run():
        sink = Mock()
        out = replace_all(
            [{"a": "1"}, {"b": lambda: "2"}], "$a $b() $c $b", Options(on_error=sink)
        )
        return out, [(str(c.args[0]), c.args[1]) for c in sink.call_args_list]

    assert run() == run()


def test_options_get_defaults():
    options = options_get(None)
    assert options.on_error is error_report
    assert options.error_if_missing is True
    assert options.reference


def test_error_report_does_not_raise():
    token = Token(path=("a", "b"), args=(1, "x"), start=0, end=4)
    error_report(MissingTokenError("a.b"), token, Options(reference="file.p69"))


class UnreachableMap(Mapping):
    """A lazy token map that fails on every read."""

    def __getitem__(self, key):
        raise RuntimeError("backend down")

    def __contains__(self, key):
        return True

    def __iter__(self):
        return iter(())

    def __len__(self):
        return 0


def test_failing_lookup_reported_and_continues(options, sink):
    result = replace_all([UnreachableMap()], "$a and $b", options)
    assert result == "$a and $b"
    assert sink.call_count == 2
    for call in sink.call_args_list:
        assert isinstance(call.args[0], ResolutionError)
        assert isinstance(call.args[0].__cause__, RuntimeError)
