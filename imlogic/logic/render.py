"""
Rendering of logic trees back to text.

Output uses the fewest parentheses that preserve meaning under AND-over-OR
precedence: only an OR nested directly beneath an AND is wrapped.
"""

from typing import Callable, List, Mapping, Tuple, Union

from imlogic.errors import UnknownConstraintCodeError

from .nodes import And, Leaf, LogicNode, Or

Describer = Union[Mapping[str, str], Callable[[str], str]]


def _and_operand(node: LogicNode, text: str) -> str:
    return f"({text})" if isinstance(node, Or) else text


def _render(node: LogicNode, leaf_text: Callable[[str], str]) -> str:
    # Post-order walk over an explicit stack; trees can be thousands deep.
    rendered: List[str] = []
    stack: List[Tuple[LogicNode, bool]] = [(node, False)]
    while stack:
        current, children_done = stack.pop()
        if isinstance(current, Leaf):
            rendered.append(leaf_text(current.code))
        elif not isinstance(current, (And, Or)):
            raise TypeError(f"Not a logic node: {current!r}")
        elif not children_done:
            stack.append((current, True))
            stack.append((current.right, False))
            stack.append((current.left, False))
        else:
            right = rendered.pop()
            left = rendered.pop()
            if isinstance(current, And):
                left = _and_operand(current.left, left)
                right = _and_operand(current.right, right)
                rendered.append(f"{left} and {right}")
            else:
                rendered.append(f"{left} or {right}")
    return rendered[0]


def render(node: LogicNode) -> str:
    """Render ``node`` in canonical code form, e.g. ``"(A or B) and C"``."""
    return _render(node, lambda code: code)


def render_verbose(node: LogicNode, describe: Describer) -> str:
    """
    Render ``node`` with each code replaced by its constraint description.

    Args:
        node: Logic tree to render
        describe: Mapping or callable from code to description

    Raises:
        UnknownConstraintCodeError: If a code has no description
    """
    if callable(describe):

        def lookup(code: str) -> str:
            try:
                return describe(code)
            except KeyError:
                raise UnknownConstraintCodeError([code]) from None

    else:
        missing = [code for code in node.codes() if code not in describe]
        if missing:
            raise UnknownConstraintCodeError(missing)
        lookup = describe.__getitem__
    return _render(node, lookup)
