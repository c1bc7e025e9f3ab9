"""
Tests for logic tree nodes and the combinator functions.
"""

import pytest
from pydantic import TypeAdapter, ValidationError

from imlogic.errors import InvalidCodeError
from imlogic.logic import And, Leaf, LogicNode, Or, and_, as_node, or_, render


class TestNodes:
    """Test node construction and immutability."""

    def test_leaf(self):
        """Test positional and keyword construction of a leaf."""
        leaf = Leaf("A")
        assert leaf.code == "A"
        assert leaf.type == "leaf"
        assert leaf == Leaf(code="A")

    def test_leaf_rejects_bad_code(self):
        """Test that leaves validate their code."""
        with pytest.raises(ValueError):
            Leaf("a")

    def test_nodes_are_frozen(self):
        """Test that nodes cannot be modified."""
        leaf = Leaf("A")
        with pytest.raises(ValidationError):
            leaf.code = "B"

    def test_nodes_are_hashable(self):
        """Test that equal nodes hash together."""
        assert len({Leaf("A"), Leaf("A"), And(Leaf("A"), Leaf("B"))}) == 2

    def test_codes_in_order_without_repeats(self):
        """Test listing referenced codes left to right."""
        node = Or(And(Leaf("B"), Leaf("A")), Leaf("B"))
        assert node.codes() == ["B", "A"]

    def test_str_is_canonical_rendering(self):
        """Test that str() renders the canonical form."""
        node = And(Or(Leaf("A"), Leaf("B")), Leaf("C"))
        assert str(node) == render(node) == "(A or B) and C"

    def test_repr(self):
        """Test the constructor-style repr."""
        assert repr(And(Leaf("A"), Leaf("B"))) == "And(Leaf('A'), Leaf('B'))"

    def test_json_round_trip(self):
        """Test dumping a tree and validating it back."""
        node = And(Or(Leaf("A"), Leaf("B")), Leaf("C"))
        data = node.model_dump()
        assert data["type"] == "and"
        assert data["left"]["type"] == "or"
        assert TypeAdapter(LogicNode).validate_python(data) == node

    def test_validate_from_json(self):
        """Test validating a tree from JSON text."""
        adapter = TypeAdapter(LogicNode)
        node = adapter.validate_json(
            '{"type": "or", "left": {"type": "leaf", "code": "A"},'
            ' "right": {"type": "leaf", "code": "B"}}'
        )
        assert node == Or(Leaf("A"), Leaf("B"))


class TestCombinators:
    """Test building logic programmatically."""

    def test_and_of_codes(self):
        """Test and_ over two codes."""
        assert and_("A", "B") == And(Leaf("A"), Leaf("B"))

    def test_or_of_codes(self):
        """Test or_ over two codes."""
        assert or_("A", "B") == Or(Leaf("A"), Leaf("B"))

    def test_many_operands_fold_left(self):
        """Test that extra operands fold to the left."""
        assert and_("A", "B", "C") == And(And(Leaf("A"), Leaf("B")), Leaf("C"))

    def test_mixed_operands(self):
        """Test combining a node with a bare code."""
        node = and_(or_("A", "B"), "C")
        assert node == And(Or(Leaf("A"), Leaf("B")), Leaf("C"))

    def test_operands_are_not_mutated(self):
        """Test that combining leaves the operands unchanged."""
        inner = or_("A", "B")
        before = inner.model_dump()
        and_(inner, "C")
        or_(inner, "D")
        assert inner.model_dump() == before

    def test_methods_and_operators(self):
        """Test node methods and the & and | operators."""
        a, b, c = Leaf("A"), Leaf("B"), Leaf("C")
        assert a.and_(b) == And(a, b)
        assert a.or_(b) == Or(a, b)
        assert (a & b | c) == Or(And(a, b), c)
        assert (a & (b | c)) == And(a, Or(b, c))

    def test_reflected_operators_accept_codes(self):
        """Test a bare code on the left of & and |."""
        assert ("A" & Leaf("B")) == And(Leaf("A"), Leaf("B"))
        assert ("A" | Leaf("B")) == Or(Leaf("A"), Leaf("B"))

    def test_objects_with_codes(self):
        """Test that any object with a code attribute is accepted."""
        class Stub:
            code = "D"

        assert as_node(Stub()) == Leaf("D")

    def test_needs_two_operands(self):
        """Test that a single operand is rejected."""
        with pytest.raises(TypeError):
            and_("A")

    def test_bad_operands(self):
        """Test that invalid codes and non-operands are rejected."""
        with pytest.raises(InvalidCodeError):
            and_("A", "b")
        with pytest.raises(InvalidCodeError):
            as_node(42)
