"""
Generic command protocol.

A command is created per invocation and fed the tokens that follow its
verb, one at a time. Identifier tokens advance its state through
``transition``; the END token commits the effect through ``finish``.
Anything else is a parse error.
"""

from typing import Generic, TypeVar

from pms.context import AppContext
from pms.errors import ParseError
from pms.input.lexer import Token, TokenClass

S = TypeVar("S")


class Command(Generic[S]):
    """Base class for token-driven commands.

    Subclasses implement:
        initial_state(): the state before any token
        transition(state, token): next state for an identifier token
        finish(state): perform the effect, return the final state
    """

    name = ""

    def __init__(self, ctx: AppContext) -> None:
        self.ctx = ctx
        self.state: S = self.initial_state()
        self.done = False

    def initial_state(self) -> S:
        raise NotImplementedError

    def transition(self, state: S, token: Token) -> S:
        raise NotImplementedError

    def finish(self, state: S) -> S:
        raise NotImplementedError

    def execute(self, cls: TokenClass, text: str) -> None:
        """Feed one token.

        Raises:
            ParseError: On a token class the grammar does not accept, or on
                any token after END
            PmsError: Whatever transition() or finish() raise
        """
        if self.done:
            raise ParseError(f"{self.name}: unexpected input '{text}' after end of command")

        if cls is TokenClass.END:
            self.done = True
            self.state = self.finish(self.state)
            return

        if cls is not TokenClass.IDENTIFIER:
            raise ParseError(f"{self.name}: unexpected {cls.value} '{text}', expected END")

        self.state = self.transition(self.state, Token(cls, text))
