"""
Variable substitution.

A substitution pass walks the tree once and replaces every variable that
has an entry with a deep copy of that entry's tree. Replacements are not
walked again, so ``x -> x + 1`` applied once yields ``x + 1`` and stops.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Union

from ..parser.ast import ASTNode, BinaryOp, Constant, UnaryOp, Variable


@dataclass(frozen=True)
class Substitution:
    """
    A variable name and the tree that replaces it.

    The tree is borrowed; each substitution site receives its own copy.
    """

    name: str
    node: ASTNode


Substitutions = Union[
    Mapping[str, ASTNode],
    Iterable[Union[Substitution, tuple[str, ASTNode]]],
]


def _normalize(subs: Substitutions) -> list[Substitution]:
    if isinstance(subs, Mapping):
        return [Substitution(name, node) for name, node in subs.items()]
    return [s if isinstance(s, Substitution) else Substitution(*s) for s in subs]


class SubstitutionVisitor:
    """
    Copy a tree, replacing variables by their substitution entries.

    Args:
        subs: Substitution entries; the first entry with a matching name wins
    """

    def __init__(self, subs: Substitutions):
        self.subs = _normalize(subs)

    def visit_constant(self, node: Constant) -> ASTNode:
        return Constant(node.value)

    def visit_variable(self, node: Variable) -> ASTNode:
        for sub in self.subs:
            if sub.name == node.name:
                return sub.node.copy()
        return Variable(node.name)

    def visit_binary_op(self, node: BinaryOp) -> ASTNode:
        return BinaryOp(node.op, node.lhs.accept(self), node.rhs.accept(self))

    def visit_unary_op(self, node: UnaryOp) -> ASTNode:
        return UnaryOp(node.op, node.operand.accept(self))


def substitute(node: ASTNode, subs: Substitutions) -> ASTNode:
    """
    Replace free variables in a single pass.

    Args:
        node: Tree to substitute into (not modified)
        subs: Mapping, Substitution objects or (name, tree) pairs

    Returns:
        Fresh tree; a plain deep copy when nothing matches
    """
    return node.accept(SubstitutionVisitor(subs))
