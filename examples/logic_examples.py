"""
Examples demonstrating constraint logic usage.

Shows the two ways of building logic for a query: combining constraints
while they are added, and setting logic from an expression string.
"""

from imlogic.errors import LogicSyntaxError, UnknownConstraintCodeError
from imlogic.logic import and_, or_, parse_logic, render
from imlogic.query import ConstraintQuery


def default_logic_examples():
    """Constraints added without logic are ANDed together."""
    print("=== Default Logic ===\n")

    query = ConstraintQuery(name="genes")
    query.add_constraint("Gene.length > 1000")
    query.add_constraint("Gene.organism.name = Drosophila melanogaster")
    query.add_constraint("Gene.symbol = zen")
    print(f"Codes: {query.codes}")
    print(f"Logic: {query.render_logic()}")
    print(f"Described: {query.describe_logic()}\n")


def combinator_examples():
    """Build logic fluently from the constraints returned by add_constraint."""
    print("=== Combinators ===\n")

    query = ConstraintQuery()
    length = query.add_constraint("Gene.length > 1000")
    zen = query.add_constraint("Gene.symbol = zen")
    eve = query.add_constraint("Gene.symbol = eve")

    query.set_logic(length & (zen | eve))
    print(f"Operators: {query.render_logic()}")

    query.set_logic(or_(and_("A", "B"), "C"))
    print(f"Functions: {query.render_logic()}\n")


def string_logic_examples():
    """Set logic from text and evaluate it."""
    print("=== String Logic ===\n")

    query = ConstraintQuery()
    for description in ("x = 1", "y = 2", "z = 3"):
        query.add_constraint(description)

    query.set_logic("A and (B or C)")
    for results in (
        {"A": True, "B": False, "C": True},
        {"A": False, "B": True, "C": True},
    ):
        print(f"{results} -> {query.evaluate(results)}")

    print(f"Normalized: {render(parse_logic('((A)) OR (B AND C)'))}\n")


def error_examples():
    """Malformed logic and unknown codes are reported, never repaired."""
    print("=== Errors ===\n")

    query = ConstraintQuery()
    query.add_constraint("x = 1")
    query.add_constraint("y = 2")

    for expression in ("(A and B", "A and Z"):
        try:
            query.set_logic(expression)
        except (LogicSyntaxError, UnknownConstraintCodeError) as e:
            print(f"{expression!r}: {type(e).__name__}: {e}")
    print()


def main():
    """Run all examples."""
    print("Constraint Logic Examples")
    print("=" * 50)
    print()

    default_logic_examples()
    combinator_examples()
    string_logic_examples()
    error_examples()

    print("=" * 50)
    print("All examples completed!")


if __name__ == "__main__":
    main()
