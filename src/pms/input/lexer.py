"""Quote-aware lexer for command lines.

Splits on whitespace, respects single and double quotes, treats ``;`` as a
statement separator and drops ``#`` comments. Every token stream ends with
exactly one END token.

    >>> [t.text for t in tokenize('play cursor; sort "album artist"')]
    ['play', 'cursor', ';', 'sort', 'album artist', '']
"""

from __future__ import annotations

import shlex
from enum import Enum
from typing import Iterator, List, NamedTuple

from pms.errors import ParseError

QUOTES = "\"'"


class TokenClass(Enum):
    IDENTIFIER = "identifier"
    STOP = "stop"
    END = "end"


class Token(NamedTuple):
    cls: TokenClass
    text: str


def _unquote(word: str) -> str:
    if len(word) >= 2 and word[0] in QUOTES and word[-1] == word[0]:
        return word[1:-1]
    return word


def tokenize(text: str) -> Iterator[Token]:
    """Yield classified tokens for *text*, finishing with END.

    Raises:
        ParseError: On an unterminated quote
    """
    lexer = shlex.shlex(text, posix=False, punctuation_chars=";")
    lexer.whitespace_split = True
    try:
        words = list(lexer)
    except ValueError as e:
        raise ParseError(f"Cannot parse input: {e}") from e

    for word in words:
        if set(word) == {";"}:
            # Runs such as ";;" come back as one punctuation word
            for char in word:
                yield Token(TokenClass.STOP, char)
        else:
            yield Token(TokenClass.IDENTIFIER, _unquote(word))
    yield Token(TokenClass.END, "")


def split_statements(text: str) -> List[List[Token]]:
    """Lex *text* into statements, each ending in its own END token.

    Empty statements (``;;`` or a blank line) are dropped.
    """
    statements: List[List[Token]] = []
    current: List[Token] = []
    for token in tokenize(text):
        if token.cls is TokenClass.IDENTIFIER:
            current.append(token)
            continue
        if current:
            current.append(Token(TokenClass.END, ""))
            statements.append(current)
        current = []
    return statements
