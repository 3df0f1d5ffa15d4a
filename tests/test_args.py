from __future__ import annotations

import pytest

from slackcommander.args import parse_args, strip_formatting
from slackcommander.errors import InputError, UnterminatedQuote


def test_splits_on_whitespace():
    assert parse_args("a b c") == ["a", "b", "c"]


def test_collapses_whitespace_runs_and_trims():
    assert parse_args("  a   b\t c  ") == ["a", "b", "c"]


def test_double_quotes_group_words():
    assert parse_args('"hello world" foo') == ["hello world", "foo"]


def test_single_quotes_group_words():
    assert parse_args("a 'b c' d") == ["a", "b c", "d"]


def test_smart_quotes_are_normalized():
    assert parse_args("“quoted phrase”") == ["quoted phrase"]
    assert parse_args("say ‘hi there’ now") == ["say", "hi there", "now"]


def test_other_quote_kind_is_literal_inside_quotes():
    assert parse_args("say \"it's fine\"") == ["say", "it's fine"]


def test_quote_glued_to_word_joins_token():
    assert parse_args('foo"bar baz" qux') == ["foobar baz", "qux"]


def test_empty_quotes_yield_empty_token():
    assert parse_args('"" x') == ["", "x"]


def test_empty_input_yields_no_tokens():
    assert parse_args("") == []
    assert parse_args("   ") == []


def test_unterminated_quote_raises():
    with pytest.raises(UnterminatedQuote) as exc:
        parse_args('"abc')
    assert isinstance(exc.value, InputError)
    assert exc.value.message == "quotes did not terminate"


def test_rejoined_tokens_parse_to_same_sequence():
    tokens = parse_args("deploy api --env prod")
    assert parse_args(" ".join(tokens)) == tokens


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("*bold*", "bold"),
        ("_*both*_", "both"),
        ("~strike~", "strike"),
        ("*", "*"),
        ("*mixed_", "*mixed_"),
        ("plain", "plain"),
    ],
)
def test_strip_formatting(raw: str, expected: str):
    assert strip_formatting(raw) == expected
