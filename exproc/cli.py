"""Command line interface for exproc."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .calculus import derivative, simplify, substitute, taylor
from .core.config import settings
from .core.errors import ExprocError
from .core.logging import get_context_logger, get_logger, setup_logging
from .parser import ASTNode, Context, evaluate, free_variables, parse, print_infix, print_tex

logger = get_logger(__name__)


def _binding(text: str) -> tuple[str, float]:
    name, sep, value = text.partition("=")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got '{text}'")
    try:
        return name.strip(), float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not a number") from None


def _substitution(text: str) -> tuple[str, str]:
    name, sep, expression = text.partition("=")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"expected NAME=EXPRESSION, got '{text}'")
    return name.strip(), expression


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="exproc",
        description="Parse, evaluate, differentiate and expand arithmetic expressions.",
    )
    parser.add_argument(
        "--tex",
        action="store_true",
        help="Print resulting expressions as LaTeX instead of infix text.",
    )
    parser.add_argument(
        "--context",
        type=Path,
        default=settings.CONTEXT_FILE,
        help="YAML file extending the default parsing context.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr.",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    show = commands.add_parser("print", help="Parse an expression and print it back.")
    show.add_argument("expression")

    evaluate_cmd = commands.add_parser("eval", help="Evaluate an expression numerically.")
    evaluate_cmd.add_argument("expression")
    evaluate_cmd.add_argument(
        "-b",
        "--bind",
        type=_binding,
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Variable binding (repeatable; the first binding of a name wins).",
    )

    diff = commands.add_parser("diff", help="Differentiate an expression.")
    diff.add_argument("expression")
    diff.add_argument("--var", default="x", help="Variable to differentiate by (default: x).")
    diff.add_argument(
        "--raw",
        action="store_true",
        help="Print the derivative without simplifying it.",
    )

    simplify_cmd = commands.add_parser("simplify", help="Simplify an expression.")
    simplify_cmd.add_argument("expression")

    subst = commands.add_parser("subst", help="Substitute expressions for variables.")
    subst.add_argument("expression")
    subst.add_argument(
        "-s",
        "--sub",
        type=_substitution,
        action="append",
        default=[],
        metavar="NAME=EXPRESSION",
        help="Substitution (repeatable; the first entry for a name wins).",
    )

    expand = commands.add_parser("taylor", help="Taylor-expand an expression.")
    expand.add_argument("expression")
    expand.add_argument("--var", default="x", help="Expansion variable (default: x).")
    expand.add_argument("--point", default="0", help="Expansion point expression (default: 0).")
    expand.add_argument("--order", type=int, default=3, help="Highest power kept (default: 3).")
    expand.add_argument(
        "--no-simplify-steps",
        dest="simplify_steps",
        action="store_false",
        help="Do not simplify derivatives between differentiation steps.",
    )

    variables = commands.add_parser("vars", help="List the variables of an expression.")
    variables.add_argument("expression")

    return parser


def _run(args: argparse.Namespace, context: Context) -> str:
    node = parse(args.expression, context)

    if args.command == "eval":
        return repr(evaluate(node, args.bind).unwrap())

    if args.command == "vars":
        return " ".join(free_variables(node))

    result: ASTNode
    if args.command == "print":
        result = node
    elif args.command == "diff":
        result = derivative(node, args.var)
        if not args.raw:
            result = simplify(result)
    elif args.command == "simplify":
        result = simplify(node)
    elif args.command == "subst":
        subs = [(name, parse(text, context)) for name, text in args.sub]
        result = simplify(substitute(node, subs))
    elif args.command == "taylor":
        point = parse(args.point, context)
        result = taylor(node, args.var, point, args.order, simplify_steps=args.simplify_steps)
    else:  # pragma: no cover - argparse rejects unknown commands
        raise ValueError(f"Unknown command: {args.command}")

    return print_tex(result, context) if args.tex else print_infix(result, context)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    setup_logging(level="DEBUG" if args.verbose else None)
    logger.debug("Running command %s", args.command)

    try:
        context = Context.from_yaml(args.context) if args.context else Context.default()
        output = _run(args, context)
    except (ExprocError, ValueError, OSError) as exc:
        get_context_logger(__name__, command=args.command).debug(
            "Command failed: %s", exc, exc_info=True
        )
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
