"""
Combinator functions for building logic trees programmatically.

Operands may be bare constraint codes, existing logic nodes, or constraint
objects carrying a ``code`` attribute. Operands are never modified.
"""

from functools import reduce
from typing import Any

from imlogic.errors import InvalidCodeError

from .codes import validate_code
from .nodes import And, Leaf, LogicNode, LogicNodeBase, Or


def as_node(operand: Any) -> LogicNode:
    """Coerce a code, node or constraint to a logic node."""
    if isinstance(operand, LogicNodeBase):
        return operand
    if isinstance(operand, str):
        return Leaf(validate_code(operand))
    code = getattr(operand, "code", None)
    if isinstance(code, str):
        return Leaf(validate_code(code))
    raise InvalidCodeError(f"Cannot use {operand!r} as a logic operand")


def _fold(node_type, operands) -> LogicNode:
    if len(operands) < 2:
        raise TypeError(f"{node_type.__name__.lower()}_() takes at least two operands")
    nodes = [as_node(operand) for operand in operands]
    return reduce(lambda left, right: node_type(left, right), nodes)


def and_(*operands: Any) -> LogicNode:
    """
    Combine operands with AND.

    More than two operands fold left: ``and_(a, b, c)`` is
    ``And(And(a, b), c)``.
    """
    return _fold(And, operands)


def or_(*operands: Any) -> LogicNode:
    """Combine operands with OR, folding left like ``and_``."""
    return _fold(Or, operands)
