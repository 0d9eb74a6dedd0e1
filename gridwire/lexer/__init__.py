"""Location-tracking lexical scanner for gridwire source text."""

from .lib import Token, TokenType, tokenize

__all__ = ["Token", "TokenType", "tokenize"]
