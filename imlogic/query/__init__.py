"""
Constraint-owning query object with code assignment and logic management.
"""

from imlogic.query.builder import Constraint, ConstraintQuery

__all__ = [
    "Constraint",
    "ConstraintQuery",
]
