"""
Tests for the constraint logic HTTP endpoints.
"""

from imlogic.logic import Leaf, and_, or_


class TestParseEndpoint:
    """Test POST /logic/parse."""

    def test_parse(self, client):
        """Test parsing an expression into its tree and codes."""
        response = client.post("/logic/parse", json={"expression": "A or B AND C"})
        assert response.status_code == 200
        body = response.json()
        assert body["rendered"] == "A or B and C"
        assert body["codes"] == ["A", "B", "C"]
        assert body["logic"]["type"] == "or"
        assert body["logic"]["right"]["type"] == "and"

    def test_parse_syntax_error(self, client):
        """Test that malformed text returns 400 with its position."""
        response = client.post("/logic/parse", json={"expression": "(A and B"})
        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["error"] == "syntax"
        assert detail["position"] == 0

    def test_parse_unknown_code(self, client):
        """Test that unknown codes return 422."""
        response = client.post(
            "/logic/parse", json={"expression": "A and Z", "codes": ["A", "B"]}
        )
        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["error"] == "unknown_code"
        assert detail["codes"] == ["Z"]


class TestEvaluateEndpoint:
    """Test POST /logic/evaluate."""

    def test_evaluate_expression(self, client):
        """Test evaluating textual logic."""
        response = client.post(
            "/logic/evaluate",
            json={"expression": "A and (B or C)", "results": {"A": True, "B": False, "C": True}},
        )
        assert response.status_code == 200
        assert response.json() == {"result": True, "rendered": "A and (B or C)"}

    def test_evaluate_tree(self, client):
        """Test evaluating a JSON logic tree."""
        tree = and_(Leaf("A"), or_("B", "C")).model_dump()
        response = client.post(
            "/logic/evaluate",
            json={"logic": tree, "results": {"A": False, "B": True, "C": True}},
        )
        assert response.status_code == 200
        assert response.json()["result"] is False

    def test_evaluate_short_circuits(self, client):
        """Test that unconsulted codes may be omitted."""
        response = client.post(
            "/logic/evaluate", json={"expression": "A or B", "results": {"A": True}}
        )
        assert response.status_code == 200
        assert response.json()["result"] is True

    def test_evaluate_missing_result(self, client):
        """Test that a consulted but missing code returns 422."""
        response = client.post(
            "/logic/evaluate", json={"expression": "A and B", "results": {"A": True}}
        )
        assert response.status_code == 422
        assert response.json()["detail"]["codes"] == ["B"]

    def test_evaluate_needs_exactly_one_source(self, client):
        """Test that exactly one of expression and logic is required."""
        response = client.post(
            "/logic/evaluate",
            json={"expression": "A", "logic": {"type": "leaf", "code": "A"}, "results": {"A": True}},
        )
        assert response.status_code == 422

        response = client.post("/logic/evaluate", json={"results": {"A": True}})
        assert response.status_code == 422

    def test_evaluate_rejects_bad_tree_code(self, client):
        """Test that trees with invalid codes fail validation."""
        response = client.post(
            "/logic/evaluate",
            json={"logic": {"type": "leaf", "code": "a"}, "results": {"a": True}},
        )
        assert response.status_code == 422


class TestRenderEndpoint:
    """Test POST /logic/render."""

    def test_render_canonical(self, client):
        """Test canonical rendering without descriptions."""
        response = client.post("/logic/render", json={"expression": "((A or B)) and (C)"})
        assert response.status_code == 200
        assert response.json() == {"rendered": "(A or B) and C", "verbose": None}

    def test_render_verbose(self, client):
        """Test rendering with descriptions."""
        response = client.post(
            "/logic/render",
            json={
                "expression": "A and (B or C)",
                "descriptions": {"A": "Gene.length > 100", "B": "Gene.symbol = zen", "C": "Gene.symbol = eve"},
            },
        )
        assert response.status_code == 200
        assert response.json()["verbose"] == (
            "Gene.length > 100 and (Gene.symbol = zen or Gene.symbol = eve)"
        )

    def test_render_missing_description(self, client):
        """Test that a missing description returns 422."""
        response = client.post(
            "/logic/render", json={"expression": "A or B", "descriptions": {"A": "x = 1"}}
        )
        assert response.status_code == 422
        assert response.json()["detail"]["codes"] == ["B"]
