"""
Adapter: TokenSyntaxValidator
Implementuje port SyntaxValidator — strukturalna kontrola ciągu tokenów
(do walidacji "w locie", np. kolorowanie pola podczas pisania).

Kolejność sprawdzeń (pierwszy błąd kończy walidację):
  1. EMPTY                  — brak tokenów
  2. UNBALANCED_PARENS      — licznik nawiasów nigdy < 0, na końcu 0
  3. BAD_START              — pierwszy token nie jest jednym z * / ^ ) ,
  4. BAD_END                — ostatni token nie jest jednym z + - * / ^ ( ,
  5. OPERATOR_ADJACENCY     — dwa operatory obok siebie tylko gdy drugi to
                              unarny minus; podwójny unarny znak zabroniony
  6. FUNCTION_WITHOUT_PAREN — po nazwie funkcji zawsze '('
  7. BAD_COMMA              — przecinek między dwoma pełnymi podwyrażeniami
  8. OPERAND_ADJACENCY, UNKNOWN_FUNCTION, EMPTY_PARENS, MISSING_OPERAND
  9. BAD_COMMA / ARITY_MISMATCH — przecinki tylko w wywołaniu, arność z tabeli
 10. TOO_DEEP               — zagnieżdżenie nawiasów > max_depth

Nic nie jest liczone, więc walidator działa liniowo i nigdy nie zgłasza
błędów dziedziny ani przepełnienia.
"""
from __future__ import annotations

from dataclasses import dataclass

from adapters.functions import FUNCTIONS, is_function
from adapters.lexer.regex_lexer import RegexLexer
from contracts import LexError, Token, TokenKind, ValidationIssue
from ports.lexer import Lexer

_BAD_FIRST = {"*", "/", "^", ")", ","}
_BAD_LAST = {"+", "-", "*", "/", "^", "(", ","}

# Tokeny, po których może zacząć się nowe podwyrażenie (pozycja unarna)
_OPENING_KINDS = {TokenKind.OPERATOR, TokenKind.LPAREN, TokenKind.COMMA}


def _ends_operand(tok: Token) -> bool:
    if tok.kind in (TokenKind.NUMBER, TokenKind.RPAREN):
        return True
    return tok.kind is TokenKind.IDENTIFIER and not is_function(tok.text)


def _starts_operand(tok: Token) -> bool:
    return tok.kind in (TokenKind.NUMBER, TokenKind.IDENTIFIER, TokenKind.LPAREN)


def _issue(code: str, message: str, tok: Token | None = None) -> ValidationIssue:
    return ValidationIssue(
        code=code,
        message=message,
        position=tok.position if tok is not None else None,
    )


@dataclass
class _Frame:
    function: str | None  # None = zwykłe nawiasy grupujące
    args: int
    opener: Token


class TokenSyntaxValidator:
    """Liniowa walidacja strukturalna wyrażenia."""

    def __init__(self, lexer: Lexer | None = None, max_depth: int = 64) -> None:
        self._lexer = lexer or RegexLexer()
        self._max_depth = max_depth

    # -- SyntaxValidator protocol -----------------------------------------

    def is_valid(self, text: str) -> bool:
        try:
            tokens = self._lexer.tokenize(text)
        except LexError:
            return False
        return self.find_issue(tokens) is None

    def find_issue(self, tokens: list[Token]) -> ValidationIssue | None:
        for check in (
            self._check_empty,
            self._check_balance,
            self._check_edges,
            self._check_operators,
            self._check_function_parens,
            self._check_commas,
            self._check_adjacency,
            self._check_calls,
            self._check_depth,
        ):
            issue = check(tokens)
            if issue is not None:
                return issue
        return None

    # -- Prywatne ----------------------------------------------------------

    def _check_empty(self, tokens: list[Token]) -> ValidationIssue | None:
        if not tokens:
            return _issue("EMPTY", "Puste wyrażenie.")
        return None

    def _check_balance(self, tokens: list[Token]) -> ValidationIssue | None:
        open_stack: list[Token] = []
        for tok in tokens:
            if tok.kind is TokenKind.LPAREN:
                open_stack.append(tok)
            elif tok.kind is TokenKind.RPAREN:
                if not open_stack:
                    return _issue("UNBALANCED_PARENS", "Nadmiarowy nawias ')'.", tok)
                open_stack.pop()
        if open_stack:
            return _issue("UNBALANCED_PARENS", "Niezamknięty nawias '('.", open_stack[-1])
        return None

    def _check_edges(self, tokens: list[Token]) -> ValidationIssue | None:
        first, last = tokens[0], tokens[-1]
        if first.text in _BAD_FIRST:
            return _issue("BAD_START", f"Wyrażenie nie może zaczynać się od {first.text!r}.", first)
        if last.text in _BAD_LAST:
            return _issue("BAD_END", f"Wyrażenie nie może kończyć się na {last.text!r}.", last)
        return None

    def _check_operators(self, tokens: list[Token]) -> ValidationIssue | None:
        prev: Token | None = None
        prev_unary = False
        for tok in tokens:
            if tok.kind is not TokenKind.OPERATOR:
                prev, prev_unary = tok, False
                continue

            unary_position = prev is None or prev.kind in _OPENING_KINDS
            if not unary_position:
                prev, prev_unary = tok, False
                continue

            # Pozycja unarna: dozwolony '-' (także po operatorze binarnym)
            # i '+' tylko na początku, po '(' lub ','
            after_operator = prev is not None and prev.kind is TokenKind.OPERATOR
            if tok.text == "-" and not prev_unary:
                ok = True
            elif tok.text == "+":
                ok = not after_operator
            else:
                ok = False
            if not ok:
                shown = prev.text if prev is not None else "początku"
                return _issue(
                    "OPERATOR_ADJACENCY",
                    f"Operator {tok.text!r} nie może wystąpić po {shown!r}.",
                    tok,
                )
            prev, prev_unary = tok, True
        return None

    def _check_function_parens(self, tokens: list[Token]) -> ValidationIssue | None:
        for i, tok in enumerate(tokens):
            if tok.kind is TokenKind.IDENTIFIER and is_function(tok.text):
                nxt = tokens[i + 1] if i + 1 < len(tokens) else None
                if nxt is None or nxt.kind is not TokenKind.LPAREN:
                    return _issue(
                        "FUNCTION_WITHOUT_PAREN",
                        f"Po nazwie funkcji {tok.text!r} musi wystąpić '('.",
                        tok,
                    )
        return None

    def _check_commas(self, tokens: list[Token]) -> ValidationIssue | None:
        for i, tok in enumerate(tokens):
            if tok.kind is not TokenKind.COMMA:
                continue
            # BAD_START / BAD_END gwarantują, że sąsiedzi istnieją
            prev, nxt = tokens[i - 1], tokens[i + 1]
            next_ok = _starts_operand(nxt) or nxt.text in ("-", "+")
            if not _ends_operand(prev) or not next_ok:
                return _issue(
                    "BAD_COMMA",
                    "Przecinek musi rozdzielać dwa pełne podwyrażenia.",
                    tok,
                )
        return None

    def _check_adjacency(self, tokens: list[Token]) -> ValidationIssue | None:
        for prev, tok in zip(tokens, tokens[1:]):
            if tok.kind is TokenKind.LPAREN and prev.kind is TokenKind.IDENTIFIER \
                    and not is_function(prev.text):
                return _issue(
                    "UNKNOWN_FUNCTION",
                    f"{prev.text!r} nie jest znaną funkcją.",
                    prev,
                )
            if _starts_operand(tok) and _ends_operand(prev):
                return _issue(
                    "OPERAND_ADJACENCY",
                    f"Brak operatora między {prev.text!r} a {tok.text!r}.",
                    tok,
                )
            if tok.kind is TokenKind.RPAREN:
                if prev.kind is TokenKind.LPAREN:
                    return _issue("EMPTY_PARENS", "Puste nawiasy '()'.", prev)
                if prev.kind is TokenKind.OPERATOR:
                    return _issue(
                        "MISSING_OPERAND",
                        f"Brak argumentu po operatorze {prev.text!r}.",
                        prev,
                    )
        return None

    def _check_calls(self, tokens: list[Token]) -> ValidationIssue | None:
        frames: list[_Frame] = []
        prev: Token | None = None
        for tok in tokens:
            if tok.kind is TokenKind.LPAREN:
                name = None
                if prev is not None and prev.kind is TokenKind.IDENTIFIER and is_function(prev.text):
                    name = prev.text
                frames.append(_Frame(function=name, args=1, opener=tok))
            elif tok.kind is TokenKind.COMMA:
                if not frames or frames[-1].function is None:
                    return _issue(
                        "BAD_COMMA",
                        "Przecinek poza listą argumentów funkcji.",
                        tok,
                    )
                frames[-1].args += 1
            elif tok.kind is TokenKind.RPAREN:
                frame = frames.pop()
                if frame.function is not None:
                    arity = FUNCTIONS[frame.function].arity
                    if frame.args != arity:
                        return _issue(
                            "ARITY_MISMATCH",
                            f"{frame.function}() oczekuje {arity} arg(ów), podano {frame.args}.",
                            frame.opener,
                        )
            prev = tok
        return None

    def _check_depth(self, tokens: list[Token]) -> ValidationIssue | None:
        depth = 0
        for tok in tokens:
            if tok.kind is TokenKind.LPAREN:
                depth += 1
                if depth > self._max_depth:
                    return _issue(
                        "TOO_DEEP",
                        f"Zagnieżdżenie nawiasów przekracza {self._max_depth}.",
                        tok,
                    )
            elif tok.kind is TokenKind.RPAREN:
                depth -= 1
        return None
