#!/usr/bin/env python3
"""
exprcalc.py — CLI narzędzie ExprCalc.

Działa całkowicie lokalnie, nie wymaga uruchomionego serwera API.

Konfiguracja: zmienne środowiskowe z prefiksem EXPRCALC_
lub plik .env (np. EXPRCALC_MAX_DEPTH=32).

Podkomendy:
    eval       — oblicz wartość wyrażenia
    validate   — sprawdź poprawność składniową (bez liczenia)
    tokens     — pokaż tokeny z pozycjami
    ast        — pokaż drzewo wyrażenia jako JSON
    functions  — listuj funkcje i stałe

Użycie:
    python exprcalc.py eval --text "2 + 3 * 4"
    python exprcalc.py eval --text "x^2 + y" --var x=3 --var y=1 --steps
    python exprcalc.py validate --text "sin(PI/2"
    python exprcalc.py tokens --text "pow(2, 1.5e-2)"
    python exprcalc.py ast --text "-sqrt(4) ^ 2"
    echo "log(E)" | python exprcalc.py eval
"""
from __future__ import annotations

import argparse
import sys
from typing import Any, NoReturn

from rich import box
from rich.console import Console
from rich.table import Table

from contracts import EvalError


# -- helpers ---------------------------------------------------------------

_CONSOLE: Console | None = None


def _console() -> Console:
    global _CONSOLE
    if _CONSOLE is None:
        _CONSOLE = Console(highlight=False)
    return _CONSOLE


def _safe_terminal_text(value: Any) -> str:
    s = str(value)
    s = s.replace("→", "->").replace("—", "-").replace("π", "pi")
    encoding = sys.stdout.encoding or "utf-8"
    try:
        s.encode(encoding)
        return s
    except UnicodeEncodeError:
        return s.encode(encoding, errors="replace").decode(encoding, errors="replace")


def _print_kv_table(title: str, rows: list[tuple[str, Any]]) -> None:
    table = Table(title=title, box=box.ASCII, show_header=False, pad_edge=False)
    table.add_column("Key", no_wrap=True, style="bold cyan")
    table.add_column("Value")
    for key, value in rows:
        table.add_row(_safe_terminal_text(key), _safe_terminal_text(value))
    _console().print(table)


def _calculator():
    from calculator import Calculator
    from config import Settings
    return Calculator(max_depth=Settings().max_depth)


def _read_text(args: argparse.Namespace) -> str:
    text = getattr(args, "text", None) or sys.stdin.read().strip()
    if not text:
        print("Błąd: podaj wyrażenie przez --text lub stdin", file=sys.stderr)
        sys.exit(1)
    return text


def _parse_vars(pairs: list[str]) -> dict[str, float]:
    variables: dict[str, float] = {}
    for pair in pairs:
        name, sep, raw = pair.partition("=")
        name = name.strip()
        if not sep or not name:
            print(f"Błąd: zmienna w formacie nazwa=wartość, otrzymano {pair!r}", file=sys.stderr)
            sys.exit(1)
        try:
            variables[name] = float(raw)
        except ValueError:
            print(f"Błąd: {raw!r} nie jest liczbą (zmienna {name!r})", file=sys.stderr)
            sys.exit(1)
    return variables


def _fail(exc: EvalError) -> NoReturn:
    where = f" (pozycja {exc.position})" if exc.position is not None else ""
    print(f"{exc.kind.value}: {exc.message}{where}", file=sys.stderr)
    sys.exit(1)


# -- podkomendy ------------------------------------------------------------

def _eval(args: argparse.Namespace) -> None:
    text = _read_text(args)
    variables = _parse_vars(args.var)
    try:
        result = _calculator().evaluate(text, variables, with_steps=args.steps)
    except EvalError as exc:
        _fail(exc)

    if args.steps:
        for i, step in enumerate(result.steps, 1):
            print(f"  {i:>3}. {step}")
    print(repr(result.value) if not result.value.is_integer() else int(result.value))


def _validate(args: argparse.Namespace) -> None:
    text = _read_text(args)
    try:
        issue = _calculator().check(text)
    except EvalError as exc:
        _fail(exc)

    if issue is None:
        print("valid")
        return
    _print_kv_table("Invalid expression", [
        ("code", issue.code),
        ("message", issue.message),
        ("position", "-" if issue.position is None else issue.position),
    ])
    sys.exit(1)


def _tokens(args: argparse.Namespace) -> None:
    text = _read_text(args)
    try:
        tokens = _calculator().tokenize(text)
    except EvalError as exc:
        _fail(exc)

    table = Table(title=f"Tokens [{len(tokens)}]", box=box.ASCII)
    table.add_column("#", justify="right", no_wrap=True)
    table.add_column("Kind", no_wrap=True, style="cyan")
    table.add_column("Text")
    table.add_column("Pos", justify="right", no_wrap=True)
    table.add_column("Value", justify="right")
    for i, tok in enumerate(tokens):
        table.add_row(
            str(i),
            tok.kind.value,
            _safe_terminal_text(tok.text),
            str(tok.position),
            "" if tok.value is None else repr(tok.value),
        )
    _console().print(table)


def _ast(args: argparse.Namespace) -> None:
    text = _read_text(args)
    try:
        ast = _calculator().parse(text)
    except EvalError as exc:
        _fail(exc)
    # pydantic ma własny limit głębokości serializacji;
    # PydanticSerializationError dziedziczy po ValueError
    try:
        dumped = ast.model_dump_json(indent=2)
    except (ValueError, RecursionError) as exc:
        print(f"ast_too_deep: drzewo zbyt głębokie do zapisu jako JSON ({exc})", file=sys.stderr)
        sys.exit(1)
    print(dumped)


def _functions(args: argparse.Namespace) -> None:
    from adapters.functions import CONSTANTS, FUNCTIONS

    table = Table(title=f"Functions [{len(FUNCTIONS)}]", box=box.ASCII)
    table.add_column("Name", no_wrap=True, style="cyan")
    table.add_column("Arity", justify="right", no_wrap=True)
    table.add_column("Domain")
    for fn in FUNCTIONS.values():
        table.add_row(fn.name, str(fn.arity), fn.domain_hint or "all finite")
    _console().print(table)

    _print_kv_table(
        "Constants (case-insensitive)",
        [(name, repr(value)) for name, value in CONSTANTS.items()],
    )


# -- main ------------------------------------------------------------------

def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="exprcalc",
        description="ExprCalc — bezpieczny kalkulator wyrażeń (CLI)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # eval
    p = sub.add_parser("eval", help="Oblicz wartość wyrażenia")
    p.add_argument("--text", "-t", help="Wyrażenie (lub stdin)")
    p.add_argument("--var", "-V", action="append", default=[], metavar="NAME=VALUE",
                   help="Wartość zmiennej jednoliterowej (można powtarzać)")
    p.add_argument("--steps", "-s", action="store_true",
                   help="Wyświetl kroki obliczeń")

    # validate
    p = sub.add_parser("validate", help="Sprawdź składnię bez liczenia")
    p.add_argument("--text", "-t", help="Wyrażenie (lub stdin)")

    # tokens
    p = sub.add_parser("tokens", help="Pokaż tokeny")
    p.add_argument("--text", "-t", help="Wyrażenie (lub stdin)")

    # ast
    p = sub.add_parser("ast", help="Pokaż AST jako JSON")
    p.add_argument("--text", "-t", help="Wyrażenie (lub stdin)")

    # functions
    sub.add_parser("functions", help="Listuj funkcje i stałe")

    args = parser.parse_args(argv)

    commands = {
        "eval":      _eval,
        "validate":  _validate,
        "tokens":    _tokens,
        "ast":       _ast,
        "functions": _functions,
    }
    commands[args.command](args)


if __name__ == "__main__":
    main()
