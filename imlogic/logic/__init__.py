"""
Boolean constraint logic over constraint codes.

Trees can be built with combinators (``and_``, ``or_`` or the ``&``/``|``
operators) or parsed from text, then rendered and evaluated.
"""

from imlogic.logic.nodes import Leaf, And, Or, LogicNode
from imlogic.logic.combinators import and_, or_, as_node
from imlogic.logic.parser import parse_logic, tokenize
from imlogic.logic.render import render, render_verbose
from imlogic.logic.evaluate import evaluate, remove_code
from imlogic.logic.codes import CodeAllocator, code_sequence, next_code, is_valid_code

__all__ = [
    "Leaf",
    "And",
    "Or",
    "LogicNode",
    "and_",
    "or_",
    "as_node",
    "parse_logic",
    "tokenize",
    "render",
    "render_verbose",
    "evaluate",
    "remove_code",
    "CodeAllocator",
    "code_sequence",
    "next_code",
    "is_valid_code",
]
