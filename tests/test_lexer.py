"""Tests for the lexer and the Dispenser token source."""

from cfgdecode.dispenser import Dispenser
from cfgdecode.lexer import tokenize


# ---------------------------------------------------------------------------
# tokenize
# ---------------------------------------------------------------------------

def test_words_and_braces():
    tokens = tokenize('root {\n  a "text lol"\n}')
    assert [t.value for t in tokens] == ["root", "{", "a", "text lol", "}"]
    assert [t.line for t in tokens] == [1, 1, 2, 2, 3]


def test_columns():
    tokens = tokenize('root {\n  a "text lol"\n}')
    assert [t.column for t in tokens] == [1, 6, 3, 5, 1]


def test_default_filename():
    assert tokenize("root")[0].file == "Testfile"


def test_custom_filename():
    assert tokenize("root", "Caddyfile")[0].file == "Caddyfile"


def test_comment_skipped():
    tokens = tokenize("root a # trailing words\nb")
    assert [t.value for t in tokens] == ["root", "a", "b"]
    assert tokens[2].line == 2


def test_hash_inside_word_is_kept():
    assert tokenize("match a#b")[1].value == "a#b"


def test_escaped_quote():
    assert tokenize(r'a "say \"hi\""')[1].value == 'say "hi"'


def test_multiline_quoted_word():
    tokens = tokenize('a "x\ny" b')
    assert tokens[1].value == "x\ny"
    assert tokens[1].line == 1
    assert tokens[2].line == 2


def test_empty_quoted_word():
    assert tokenize('a ""')[1].value == ""


def test_token_str_is_value():
    assert str(tokenize("root")[0]) == "root"


# ---------------------------------------------------------------------------
# Dispenser
# ---------------------------------------------------------------------------

def test_dispenser_next_arg_stays_on_line():
    d = Dispenser.from_text("root a\nb")
    assert d.next_arg()
    assert d.token().value == "root"
    assert d.next_arg()
    assert d.token().value == "a"
    assert not d.next_arg()
    assert d.next()
    assert d.token().value == "b"
    assert not d.next()


def test_dispenser_next_arg_after_multiline_token():
    d = Dispenser.from_text('a "x\ny" b')
    d.next()
    d.next()
    assert d.next_arg()
    assert d.token().value == "b"


def test_dispenser_empty():
    d = Dispenser([])
    assert not d.next_arg()
    assert not d.next()
    assert d.token().value == ""
