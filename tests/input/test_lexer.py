"""Tests for the command line lexer."""

import pytest

from pms.errors import ParseError
from pms.input.lexer import Token, TokenClass, split_statements, tokenize


def texts(line: str):
    return [(t.cls, t.text) for t in tokenize(line)]


class TestTokenize:
    """Tests for tokenize."""

    def test_words_then_end(self):
        assert texts("play cursor") == [
            (TokenClass.IDENTIFIER, "play"),
            (TokenClass.IDENTIFIER, "cursor"),
            (TokenClass.END, ""),
        ]

    def test_empty_input_is_just_end(self):
        assert list(tokenize("")) == [Token(TokenClass.END, "")]

    def test_quotes_are_removed(self):
        assert texts("sort \"album artist\" 'x y'")[1:3] == [
            (TokenClass.IDENTIFIER, "album artist"),
            (TokenClass.IDENTIFIER, "x y"),
        ]

    def test_semicolon_is_stop(self):
        assert [t.cls for t in tokenize("cursor home;play")] == [
            TokenClass.IDENTIFIER,
            TokenClass.IDENTIFIER,
            TokenClass.STOP,
            TokenClass.IDENTIFIER,
            TokenClass.END,
        ]

    def test_comments_are_dropped(self):
        assert texts("play # cursor") == [
            (TokenClass.IDENTIFIER, "play"),
            (TokenClass.END, ""),
        ]

    def test_paths_stay_whole(self):
        assert texts("add music/a-b_c.mp3")[1] == (TokenClass.IDENTIFIER, "music/a-b_c.mp3")

    def test_unterminated_quote(self):
        with pytest.raises(ParseError):
            list(tokenize('sort "album'))


class TestSplitStatements:
    """Tests for split_statements."""

    def test_each_statement_ends_with_end(self):
        statements = split_statements("cursor home; play cursor")
        assert [[t.text for t in s] for s in statements] == [
            ["cursor", "home", ""],
            ["play", "cursor", ""],
        ]
        assert all(s[-1].cls is TokenClass.END for s in statements)

    def test_empty_statements_dropped(self):
        assert split_statements(" ;; ") == []
        assert len(split_statements("play;;")) == 1
