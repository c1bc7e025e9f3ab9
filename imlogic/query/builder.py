"""
Query-side owner of constraint codes and their logic.

``ConstraintQuery`` keeps the ordered constraints of one query, hands out
codes, and holds the active logic tree. Without explicit logic the tree is
the AND of every code in insertion order.
"""

from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from imlogic.errors import UnknownConstraintCodeError
from imlogic.logging_config import get_logger
from imlogic.logic.codes import CodeAllocator, is_valid_code
from imlogic.logic.combinators import as_node
from imlogic.logic.evaluate import evaluate, remove_code
from imlogic.logic.nodes import And, Leaf, LogicNode
from imlogic.logic.parser import parse_logic
from imlogic.logic.render import render, render_verbose

logger = get_logger(__name__)


class Constraint(BaseModel):
    """A query constraint as seen by the logic engine: a code and a description."""

    model_config = ConfigDict(frozen=True)

    code: str
    description: str

    @field_validator("code")
    @classmethod
    def _check_code(cls, value: str) -> str:
        if not is_valid_code(value):
            raise ValueError(f"invalid constraint code {value!r}")
        return value

    def __and__(self, other: Any) -> LogicNode:
        return as_node(self).and_(other)

    def __rand__(self, other: Any) -> LogicNode:
        return as_node(other).and_(self)

    def __or__(self, other: Any) -> LogicNode:
        return as_node(self).or_(other)

    def __ror__(self, other: Any) -> LogicNode:
        return as_node(other).or_(self)

    def __str__(self):
        return f"{self.code}: {self.description}"


class ConstraintQuery:
    """
    Constraints of a single query together with their logic.

    Building (adding constraints, setting logic) is single-writer. The logic
    tree itself is immutable, so ``evaluator()`` results can be shared across
    threads once building is finished.
    """

    def __init__(self, name: Optional[str] = None):
        self.name = name
        self._constraints: Dict[str, Constraint] = {}
        self._codes = CodeAllocator()
        self._logic: Optional[LogicNode] = None
        self._explicit_logic = False
        self._logger = (
            get_logger(f"{__name__}.{name}", context={"query": name}) if name else logger
        )

    def __len__(self) -> int:
        return len(self._constraints)

    def __contains__(self, code: str) -> bool:
        return code in self._constraints

    def __repr__(self):
        return f"ConstraintQuery(name={self.name!r}, logic={self.render_logic()!r})"

    @property
    def constraints(self) -> List[Constraint]:
        """Constraints in insertion order."""
        return list(self._constraints.values())

    @property
    def codes(self) -> List[str]:
        return list(self._constraints)

    @property
    def logic(self) -> Optional[LogicNode]:
        """The active logic tree, or None when the query has no constraints."""
        return self._logic

    @property
    def has_explicit_logic(self) -> bool:
        return self._explicit_logic

    def get_constraint(self, code: str) -> Constraint:
        try:
            return self._constraints[code]
        except KeyError:
            raise UnknownConstraintCodeError([code]) from None

    def add_constraint(self, description: str, code: Optional[str] = None) -> Constraint:
        """
        Add a constraint, assigning it the next free code unless one is given.

        A new constraint is ANDed onto the current logic, whether that is the
        implicit default or logic set by the caller.

        Args:
            description: Human-readable form of the constraint, e.g. ``"x = 1"``
            code: Optional explicit code

        Returns:
            The added constraint

        Raises:
            DuplicateCodeError: If ``code`` is already used in this query
            InvalidCodeError: If ``code`` is not a valid constraint code
        """
        code = self._codes.allocate() if code is None else self._codes.claim(code)
        constraint = Constraint(code=code, description=description)
        self._constraints[code] = constraint

        leaf = Leaf(code)
        self._logic = leaf if self._logic is None else And(self._logic, leaf)
        self._logger.debug("%s: added constraint %s, logic is now %s", self, constraint, self._logic)
        return constraint

    def remove_constraint(self, code: str) -> Constraint:
        """
        Remove a constraint and prune its code from the logic.

        If explicit logic ends up referencing nothing, the implicit default
        over the remaining constraints takes over.
        """
        constraint = self.get_constraint(code)
        del self._constraints[code]
        self._codes.release(code)

        if self._explicit_logic:
            self._logic = remove_code(self._logic, code)
            if self._logic is None:
                self._explicit_logic = False
                self._logic = self._default_logic()
        else:
            self._logic = self._default_logic()
        self._logger.debug("%s: removed constraint %s, logic is now %s", self, constraint, self._logic)
        return constraint

    def set_logic(self, logic: Union[str, LogicNode, Constraint]) -> LogicNode:
        """
        Replace the active logic.

        Args:
            logic: Expression text (e.g. ``"A and (B or C)"``), a logic tree
                built with combinators, or a single constraint

        Returns:
            The installed logic tree

        Raises:
            LogicSyntaxError: If the expression text is malformed
            UnknownConstraintCodeError: If the logic references codes that are
                not constraints of this query
        """
        if isinstance(logic, str):
            node = parse_logic(logic, self._constraints)
        else:
            node = as_node(logic)
            unknown = [code for code in node.codes() if code not in self._constraints]
            if unknown:
                raise UnknownConstraintCodeError(unknown, render(node))

        self._logic = node
        self._explicit_logic = True
        self._logger.debug("%s: logic set to %s", self, node)
        return node

    def clear_logic(self) -> None:
        """Drop explicit logic and return to the AND of all constraints."""
        self._explicit_logic = False
        self._logic = self._default_logic()

    def _default_logic(self) -> Optional[LogicNode]:
        logic = None
        for code in self._constraints:
            logic = Leaf(code) if logic is None else And(logic, Leaf(code))
        return logic

    def unconstrained_codes(self) -> List[str]:
        """Codes of constraints the active logic never references."""
        referenced = set(self._logic.codes()) if self._logic is not None else set()
        return [code for code in self._constraints if code not in referenced]

    def render_logic(self) -> str:
        """Canonical code form of the logic, or ``""`` with no constraints."""
        return render(self._logic) if self._logic is not None else ""

    def describe_logic(self) -> str:
        """Logic with each code replaced by its constraint description."""
        if self._logic is None:
            return ""
        return render_verbose(
            self._logic, {code: c.description for code, c in self._constraints.items()}
        )

    def evaluate(self, results: Mapping[str, bool]) -> bool:
        """
        Evaluate the active logic against per-code constraint results.

        A query without constraints accepts everything.
        """
        if self._logic is None:
            return True
        return evaluate(self._logic, results)

    def evaluator(self) -> Callable[[Mapping[str, bool]], bool]:
        """Return a function evaluating a snapshot of the current logic."""
        node = self._logic

        def _evaluate(results: Mapping[str, bool]) -> bool:
            return True if node is None else evaluate(node, results)

        return _evaluate
