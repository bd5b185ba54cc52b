import pytest

from cmdkit.quoting import ensure_quoted, quote_if_needed, should_quote


def test_ensure_quoted_wraps_plain_value() -> None:
    assert ensure_quoted("a b") == '"a b"'


def test_ensure_quoted_escapes_inner_quotes() -> None:
    assert ensure_quoted('say "hi"') == '"say \\"hi\\""'
    assert ensure_quoted("it's", "'") == "'it\\'s'"


def test_ensure_quoted_leaves_wrapped_value() -> None:
    assert ensure_quoted('"already"') == '"already"'
    assert ensure_quoted("'single'", "'") == "'single'"


def test_ensure_quoted_doubles_backslashes_before_closing_quote() -> None:
    assert ensure_quoted("a b\\") == '"a b\\\\"'
    assert ensure_quoted('a\\"b c') == '"a\\\\\\"b c"'
    assert ensure_quoted("C:\\dir x\\file") == '"C:\\dir x\\file"'


def test_ensure_quoted_lone_quote_is_not_wrapped() -> None:
    assert ensure_quoted('"') == '"\\""'


def test_ensure_quoted_empty_quote_char_is_identity() -> None:
    assert ensure_quoted("a b", "") == "a b"


def test_ensure_quoted_empty_value() -> None:
    assert ensure_quoted("") == '""'


@pytest.mark.parametrize("quote_char", ['"', "'", "", "`"])
@pytest.mark.parametrize("value", ["", "a", "a b", '"x"', "'y'", 'mid"dle', "\"", "''"])
def test_ensure_quoted_is_idempotent(value: str, quote_char: str) -> None:
    once = ensure_quoted(value, quote_char)
    assert ensure_quoted(once, quote_char) == once


def test_should_quote_only_for_whitespace() -> None:
    assert should_quote("a b")
    assert should_quote("a\tb")
    assert not should_quote("")
    assert not should_quote("plain")


def test_quote_if_needed() -> None:
    assert quote_if_needed("plain") == "plain"
    assert quote_if_needed("two words") == '"two words"'
    assert quote_if_needed("two words", "'") == "'two words'"
