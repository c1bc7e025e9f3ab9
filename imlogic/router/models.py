"""
Request and response models for the constraint logic endpoints.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

from imlogic.logic.nodes import LogicNode


class LogicSource(BaseModel):
    """Logic given either as expression text or as a JSON logic tree."""

    expression: Optional[str] = Field(
        None, description="Logic expression such as 'A and (B or C)'", examples=["A and (B or C)"]
    )
    logic: Optional[LogicNode] = Field(None, description="Logic tree in JSON form")

    @model_validator(mode="after")
    def _exactly_one_source(self):
        if (self.expression is None) == (self.logic is None):
            raise ValueError("Provide exactly one of 'expression' or 'logic'")
        return self


class ParseRequest(BaseModel):
    """Parse a logic expression, optionally checking codes."""
    expression: str = Field(..., description="Logic expression to parse")
    codes: Optional[List[str]] = Field(
        None, description="Known constraint codes; unknown codes are rejected when given"
    )


class ParseResponse(BaseModel):
    logic: LogicNode = Field(..., description="Parsed logic tree")
    rendered: str = Field(..., description="Canonical form of the expression")
    codes: List[str] = Field(..., description="Codes referenced, left to right")


class EvaluateRequest(LogicSource):
    """Evaluate logic against per-constraint results."""
    results: Dict[str, bool] = Field(
        ..., description="Whether each constraint holds, keyed by code"
    )


class EvaluateResponse(BaseModel):
    result: bool = Field(..., description="Value of the logic for the given results")
    rendered: str = Field(..., description="Canonical form of the evaluated logic")


class RenderRequest(LogicSource):
    """Render logic in canonical form, and verbosely when descriptions are given."""
    descriptions: Optional[Dict[str, str]] = Field(
        None, description="Human-readable constraint descriptions keyed by code"
    )


class RenderResponse(BaseModel):
    rendered: str = Field(..., description="Canonical form")
    verbose: Optional[str] = Field(None, description="Form using constraint descriptions")


class ErrorDetail(BaseModel):
    """Error payload for rejected logic."""
    error: str = Field(..., description="Error kind")
    message: str = Field(..., description="Human-readable explanation")
    position: Optional[int] = Field(None, description="Character offset of a syntax error")
    codes: List[str] = Field(default_factory=list, description="Unknown constraint codes")
