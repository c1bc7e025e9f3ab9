"""
Test configuration and fixtures for the imlogic test suite.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from imlogic.query.builder import ConstraintQuery
from imlogic.router.logic_router import LogicRouter


@pytest.fixture
def query() -> ConstraintQuery:
    """A query with three constraints coded A, B and C."""
    q = ConstraintQuery(name="genes")
    q.add_constraint("x = 1")
    q.add_constraint("y = 2")
    q.add_constraint("z = 3")
    return q


@pytest.fixture
def all_results():
    """Every combination of truth values for codes A, B and C."""
    combos = []
    for mask in range(8):
        combos.append({
            "A": bool(mask & 1),
            "B": bool(mask & 2),
            "C": bool(mask & 4),
        })
    return combos


@pytest.fixture
def logic_app() -> FastAPI:
    app = FastAPI()
    app.include_router(LogicRouter())
    return app


@pytest.fixture
def client(logic_app):
    with TestClient(logic_app) as client:
        yield client
