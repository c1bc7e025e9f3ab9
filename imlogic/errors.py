"""
Error types raised by the constraint logic engine.

All errors are input or programming errors reported straight to the caller.
"""

from typing import Iterable, Optional, Tuple


class LogicError(Exception):
    """Base class for constraint logic errors."""


class LogicSyntaxError(LogicError, ValueError):
    """A textual logic expression (or a constraint code) is malformed."""

    def __init__(
        self,
        message: str,
        expression: Optional[str] = None,
        position: Optional[int] = None,
    ):
        self.message = message
        self.expression = expression
        self.position = position
        super().__init__(self._format())

    def _format(self) -> str:
        if self.expression is None:
            return self.message
        if self.position is None:
            return f"{self.message} in {self.expression!r}"
        return f"{self.message} at position {self.position} in {self.expression!r}"


class InvalidCodeError(LogicSyntaxError):
    """A constraint code does not belong to the code alphabet."""


class UnknownConstraintCodeError(LogicError, KeyError):
    """Logic references codes that are not among the known constraints."""

    def __init__(self, codes: Iterable[str], expression: Optional[str] = None):
        self.codes: Tuple[str, ...] = tuple(sorted(set(codes)))
        self.expression = expression
        super().__init__(*self.codes)

    def __str__(self) -> str:
        listed = ", ".join(self.codes)
        if self.expression is None:
            return f"Unknown constraint code(s): {listed}"
        return f"Unknown constraint code(s) {listed} in {self.expression!r}"


class DuplicateCodeError(LogicError, ValueError):
    """An explicit code is already in use within the same query."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Constraint code {code!r} is already in use")
