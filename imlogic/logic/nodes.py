"""
Logic tree node types.

A logic tree is built from three immutable variants: ``Leaf`` (a single
constraint code), ``And`` and ``Or``. Nodes are pydantic models tagged by a
``type`` field, so trees serialize to and validate from JSON.
"""

from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .codes import is_valid_code


class LogicNodeBase(BaseModel):
    """Behaviour shared by all logic tree nodes."""

    model_config = ConfigDict(frozen=True)

    def codes(self) -> List[str]:
        """Codes referenced by this tree, left to right, without repeats."""
        seen: List[str] = []
        stack = [self]
        while stack:
            node = stack.pop()
            if isinstance(node, Leaf):
                if node.code not in seen:
                    seen.append(node.code)
            else:
                stack.append(node.right)
                stack.append(node.left)
        return seen

    def and_(self, other: Any) -> "LogicNode":
        """Combine with another operand using AND."""
        from .combinators import and_

        return and_(self, other)

    def or_(self, other: Any) -> "LogicNode":
        """Combine with another operand using OR."""
        from .combinators import or_

        return or_(self, other)

    def __and__(self, other: Any) -> "LogicNode":
        return self.and_(other)

    def __rand__(self, other: Any) -> "LogicNode":
        from .combinators import and_

        return and_(other, self)

    def __or__(self, other: Any) -> "LogicNode":
        return self.or_(other)

    def __ror__(self, other: Any) -> "LogicNode":
        from .combinators import or_

        return or_(other, self)

    def __str__(self) -> str:
        from .render import render

        return render(self)


class Leaf(LogicNodeBase):
    """Reference to a single constraint by its code."""

    type: Literal["leaf"] = "leaf"
    code: str

    def __init__(self, code: Optional[str] = None, **data: Any):
        if code is not None:
            data["code"] = code
        super().__init__(**data)

    @field_validator("code")
    @classmethod
    def _check_code(cls, value: str) -> str:
        if not is_valid_code(value):
            raise ValueError(f"invalid constraint code {value!r}")
        return value

    def __repr__(self):
        return f"Leaf({self.code!r})"


class And(LogicNodeBase):
    """Both operands must hold."""

    type: Literal["and"] = "and"
    left: "LogicNode"
    right: "LogicNode"

    def __init__(self, left: Any = None, right: Any = None, **data: Any):
        if left is not None:
            data["left"] = left
        if right is not None:
            data["right"] = right
        super().__init__(**data)

    def __repr__(self):
        return f"And({self.left!r}, {self.right!r})"


class Or(LogicNodeBase):
    """At least one operand must hold."""

    type: Literal["or"] = "or"
    left: "LogicNode"
    right: "LogicNode"

    def __init__(self, left: Any = None, right: Any = None, **data: Any):
        if left is not None:
            data["left"] = left
        if right is not None:
            data["right"] = right
        super().__init__(**data)

    def __repr__(self):
        return f"Or({self.left!r}, {self.right!r})"


LogicNode = Annotated[Union[Leaf, And, Or], Field(discriminator="type")]

And.model_rebuild()
Or.model_rebuild()
