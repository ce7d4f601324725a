"""
Port: SyntaxValidator
Odpowiedzialność: strukturalna kontrola wyrażenia bez liczenia wartości.
"""
from typing import Protocol, runtime_checkable

from contracts import Token, ValidationIssue


@runtime_checkable
class SyntaxValidator(Protocol):
    def find_issue(self, tokens: list[Token]) -> ValidationIssue | None:
        """
        Runs the structural checks in a fixed order and returns the first
        violation found, or None if the token sequence is well formed.
        Never evaluates anything, so it cannot fail on overflow or domain issues.
        """
        ...

    def is_valid(self, text: str) -> bool:
        """
        Tokenizes and checks raw text. Never raises for str input;
        a lexing failure counts as invalid.
        """
        ...
