"""
Adapter: RegexLexer
Implementuje port Lexer.

Tokeny (od lewej, jeden regex dopasowywany od bieżącej pozycji):
  NUMBER      — [0-9]+(.[0-9]+)?([eE][-+]?[0-9]+)?   (bez znaku; znak to osobny operator)
  IDENTIFIER  — [A-Za-z]+   (stałe, nazwy funkcji, zmienne)
  OPERATOR    — + - * / ^
  LPAREN / RPAREN / COMMA

Białe znaki są usuwane przed tokenizacją, więc nie rozdzielają tokenów:
"1 2" to liczba 12, a "s qrt(4)" to wywołanie sqrt(4). Pozycje tokenów
i błędów odnoszą się do oryginalnego tekstu. Pierwszy znak, od którego
nie zaczyna się żaden token (np. '@', '#', '.5', cudzysłów), kończy
tokenizację błędem LexError.
"""
from __future__ import annotations

import re

from contracts import LexError, Token, TokenKind

_TOKEN_RE = re.compile(
    r'(?P<number>[0-9]+(?:\.[0-9]+)?(?:[eE][-+]?[0-9]+)?)'
    r'|(?P<identifier>[A-Za-z]+)'
    r'|(?P<operator>[-+*/^])'
    r'|(?P<lparen>\()'
    r'|(?P<rparen>\))'
    r'|(?P<comma>,)'
)

_GROUP_KIND = {
    "number": TokenKind.NUMBER,
    "identifier": TokenKind.IDENTIFIER,
    "operator": TokenKind.OPERATOR,
    "lparen": TokenKind.LPAREN,
    "rparen": TokenKind.RPAREN,
    "comma": TokenKind.COMMA,
}


class RegexLexer:
    """Czysty, bezstanowy lekser; instancję można współdzielić między wątkami."""

    # -- Lexer protocol ----------------------------------------------------

    def tokenize(self, text: str) -> list[Token]:
        stripped, offsets = _strip_whitespace(text)
        tokens: list[Token] = []
        pos = 0
        while pos < len(stripped):
            m = _TOKEN_RE.match(stripped, pos)
            if m is None:
                where = offsets[pos]
                raise LexError(
                    f"Nieoczekiwany znak {stripped[pos]!r} na pozycji {where}",
                    position=where,
                    code="BAD_CHAR",
                )
            tokens.append(_make_token(m.lastgroup, m.group(), offsets[pos]))
            pos = m.end()
        return tokens


def _strip_whitespace(text: str) -> tuple[str, list[int]]:
    """Tekst bez białych znaków + pozycja każdego znaku w oryginale."""
    offsets = [i for i, ch in enumerate(text) if not ch.isspace()]
    return "".join(text[i] for i in offsets), offsets


def _make_token(group: str, lexeme: str, pos: int) -> Token:
    kind = _GROUP_KIND[group]
    if kind is TokenKind.NUMBER:
        return Token(kind=kind, text=lexeme, position=pos, value=float(lexeme))
    return Token(kind=kind, text=lexeme, position=pos)
