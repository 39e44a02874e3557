"""
Input handling for pms.

Contains:
- lexer: turns a command line into classified tokens
"""

from .lexer import Token, TokenClass, split_statements, tokenize

__all__ = [
    "Token",
    "TokenClass",
    "split_statements",
    "tokenize",
]
