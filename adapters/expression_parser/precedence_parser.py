"""
Adapter: PrecedenceParser
Implementuje port ExpressionParser — precedence climbing po jawnym kursorze.

Gramatyka (od najsłabiej wiążącego):
  sum     = term (('+'|'-') term)*          lewostronnie łączne
  term    = power (('*'|'/') power)*        lewostronnie łączne
  power   = unary ('^' unary)*              prawostronnie łączne: 2^3^2 = 2^(3^2)
  unary   = ('-'|'+')* primary              '+' to tożsamość
  primary = NUMBER | IDENT | FUNC '(' sum (',' sum)* ')' | '(' sum ')'

Rekurencja zachodzi wyłącznie przy wejściu w nawias (grupa lub wywołanie
funkcji) i jest ograniczona licznikiem głębokości. Łańcuchy operatorów,
potęg i znaków unarnych są parsowane iteracyjnie, więc długość wejścia
nie przekłada się na głębokość stosu.
"""
from __future__ import annotations

from adapters.functions import FUNCTIONS, is_function, lookup_constant
from contracts import (
    BinOpNode,
    ConstantNode,
    ExprAST,
    ExpressionSyntaxError,
    FunctionCallNode,
    NumberNode,
    Token,
    TokenKind,
    UnaryOpNode,
    VariableNode,
)

# Lewy binding power operatorów binarnych ('^' obsługiwany osobno w _power)
_LEFT_BP: dict[str, int] = {"+": 10, "-": 10, "*": 20, "/": 20}


class _Parser:
    def __init__(self, tokens: list[Token], max_depth: int) -> None:
        self._tokens = tokens
        self._pos = 0
        self._depth = 0
        self._max_depth = max_depth

    def _peek(self) -> Token | None:
        return self._tokens[self._pos] if self._pos < len(self._tokens) else None

    def _peek_kind(self) -> TokenKind | None:
        tok = self._peek()
        return tok.kind if tok is not None else None

    def _peek_op(self) -> str | None:
        tok = self._peek()
        if tok is not None and tok.kind is TokenKind.OPERATOR:
            return tok.text
        return None

    def _consume(self) -> Token:
        tok = self._peek()
        if tok is None:
            raise ExpressionSyntaxError(
                "Nieoczekiwany koniec wyrażenia",
                position=self._end_position(),
                code="UNEXPECTED_END",
            )
        self._pos += 1
        return tok

    def _expect(self, kind: TokenKind, text: str) -> Token:
        tok = self._consume()
        if tok.kind is not kind:
            raise ExpressionSyntaxError(
                f"Oczekiwano {text!r}, otrzymano {tok.text!r}",
                position=tok.position,
                code="UNEXPECTED_TOKEN",
            )
        return tok

    def _end_position(self) -> int:
        if not self._tokens:
            return 0
        last = self._tokens[-1]
        return last.position + len(last.text)

    def parse(self) -> ExprAST:
        if not self._tokens:
            raise ExpressionSyntaxError("Puste wyrażenie", position=0, code="EMPTY")
        node = self._expr(0)
        tok = self._peek()
        if tok is not None:
            raise ExpressionSyntaxError(
                f"Nieoczekiwany token: {tok.text!r}",
                position=tok.position,
                code="UNEXPECTED_TOKEN",
            )
        return node

    def _expr(self, min_bp: int) -> ExprAST:
        left = self._power()
        while True:
            op = self._peek_op()
            if op is None or op not in _LEFT_BP:
                break
            bp = _LEFT_BP[op]
            if bp <= min_bp:
                break
            self._consume()
            # Lewostronne wiązanie: right_bp = bp (nie bp-1)
            right = self._expr(bp)
            left = BinOpNode(op=op, left=left, right=right)  # type: ignore[arg-type]
        return left

    def _power(self) -> ExprAST:
        operands = [self._unary()]
        while self._peek_op() == "^":
            self._consume()
            operands.append(self._unary())
        # Składanie od prawej
        node = operands.pop()
        while operands:
            node = BinOpNode(op="^", left=operands.pop(), right=node)
        return node

    def _unary(self) -> ExprAST:
        negate = False
        while self._peek_op() in ("-", "+"):
            if self._consume().text == "-":
                negate = not negate
        node = self._primary()
        if negate:
            node = UnaryOpNode(op="-", operand=node)
        return node

    def _primary(self) -> ExprAST:
        tok = self._consume()

        if tok.kind is TokenKind.NUMBER:
            return NumberNode(value=tok.value)  # type: ignore[arg-type]

        if tok.kind is TokenKind.LPAREN:
            self._enter(tok)
            node = self._expr(0)
            self._expect(TokenKind.RPAREN, ")")
            self._depth -= 1
            return node

        if tok.kind is TokenKind.IDENTIFIER:
            nxt = self._peek()
            if is_function(tok.text):
                return self._call(tok)
            if nxt is not None and nxt.kind is TokenKind.LPAREN:
                raise ExpressionSyntaxError(
                    f"{tok.text!r} nie jest znaną funkcją",
                    position=tok.position,
                    code="UNKNOWN_FUNCTION",
                )
            constant = lookup_constant(tok.text)
            if constant is not None:
                return ConstantNode(name=constant)
            return VariableNode(name=tok.text)

        raise ExpressionSyntaxError(
            f"Nieoczekiwany token: {tok.text!r}",
            position=tok.position,
            code="UNEXPECTED_TOKEN",
        )

    def _call(self, name_tok: Token) -> FunctionCallNode:
        fn = FUNCTIONS[name_tok.text]
        opener = self._expect(TokenKind.LPAREN, "(")
        self._enter(opener)

        args: list[ExprAST] = []
        tok = self._peek()
        if tok is None or tok.kind is not TokenKind.RPAREN:
            args.append(self._expr(0))
            while self._peek_kind() is TokenKind.COMMA:
                self._consume()
                args.append(self._expr(0))
        self._expect(TokenKind.RPAREN, ")")
        self._depth -= 1

        if len(args) != fn.arity:
            raise ExpressionSyntaxError(
                f"{fn.name}() oczekuje {fn.arity} arg(ów), podano {len(args)}",
                position=name_tok.position,
                code="ARITY_MISMATCH",
            )
        return FunctionCallNode(name=fn.name, args=args)

    def _enter(self, opener: Token) -> None:
        self._depth += 1
        if self._depth > self._max_depth:
            raise ExpressionSyntaxError(
                f"Zagnieżdżenie nawiasów przekracza {self._max_depth}",
                position=opener.position,
                code="TOO_DEEP",
            )


class PrecedenceParser:
    """Bezstanowy parser; każde wywołanie parse() tworzy własny kursor."""

    def __init__(self, max_depth: int = 64) -> None:
        self._max_depth = max_depth

    # -- ExpressionParser protocol ------------------------------------------

    def parse(self, tokens: list[Token]) -> ExprAST:
        return _Parser(tokens, self._max_depth).parse()
