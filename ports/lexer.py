"""
Port: Lexer
Odpowiedzialność: zamiana surowego tekstu na sekwencję tokenów.
"""
from typing import Protocol, runtime_checkable

from contracts import Token


@runtime_checkable
class Lexer(Protocol):
    def tokenize(self, text: str) -> list[Token]:
        """
        Converts raw expression text into tokens, left to right.
        Whitespace is insignificant and never produces a token.
        Returns an empty list for empty or whitespace-only input.
        Raises LexError on the first character that cannot start a token.
        """
        ...
