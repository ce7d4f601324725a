"""
Port: ExpressionParser
Odpowiedzialność: budowa ExprAST ze strumienia tokenów.
"""
from typing import Protocol, runtime_checkable

from contracts import ExprAST, Token


@runtime_checkable
class ExpressionParser(Protocol):
    def parse(self, tokens: list[Token]) -> ExprAST:
        """
        Parses tokens according to the fixed precedence grammar
        (sum < term < power < unary < primary) and returns the AST.

        Constants are resolved to ConstantNode, every other bare identifier
        becomes a VariableNode. Function calls are checked against the
        function table, so every FunctionCallNode has a known name and
        the exact arity.

        Raises ExpressionSyntaxError on malformed input, on a call to a name
        that is not in the function table, or when the parenthesis nesting
        exceeds the configured maximum depth.
        """
        ...
