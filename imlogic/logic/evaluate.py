"""
Evaluation and pruning of logic trees.

Both walk the tree with an explicit stack, so depth is bounded only by memory.
"""

from typing import List, Mapping, Optional, Tuple

from imlogic.errors import UnknownConstraintCodeError

from .nodes import And, Leaf, LogicNode, Or


def _lookup(node: LogicNode, results: Mapping[str, bool]) -> bool:
    if not isinstance(node, Leaf):
        raise TypeError(f"Not a logic node: {node!r}")
    try:
        return bool(results[node.code])
    except KeyError:
        raise UnknownConstraintCodeError([node.code]) from None


def evaluate(node: LogicNode, results: Mapping[str, bool]) -> bool:
    """
    Evaluate ``node`` against per-code constraint results.

    Operands are evaluated left to right with short-circuiting, so codes that
    are never consulted need not appear in ``results``.

    Raises:
        UnknownConstraintCodeError: If a consulted code is missing
    """
    # (binary node, True once its right operand is being evaluated)
    pending: List[Tuple[LogicNode, bool]] = []
    current = node
    while True:
        while isinstance(current, (And, Or)):
            pending.append((current, False))
            current = current.left
        value = _lookup(current, results)

        while pending:
            parent, on_right = pending.pop()
            if on_right:
                continue
            if isinstance(parent, And) and not value:
                continue
            if isinstance(parent, Or) and value:
                continue
            pending.append((parent, True))
            current = parent.right
            break
        else:
            return value


def remove_code(node: LogicNode, code: str) -> Optional[LogicNode]:
    """
    Return ``node`` without any leaf for ``code``.

    A binary node that loses one side collapses to the other; ``None`` means
    nothing is left.
    """
    pruned: List[Optional[LogicNode]] = []
    stack: List[Tuple[LogicNode, bool]] = [(node, False)]
    while stack:
        current, children_done = stack.pop()
        if isinstance(current, Leaf):
            pruned.append(None if current.code == code else current)
        elif not children_done:
            stack.append((current, True))
            stack.append((current.right, False))
            stack.append((current.left, False))
        else:
            right = pruned.pop()
            left = pruned.pop()
            if left is None:
                pruned.append(right)
            elif right is None:
                pruned.append(left)
            elif left is current.left and right is current.right:
                pruned.append(current)
            else:
                pruned.append(type(current)(left, right))
    return pruned[0]
