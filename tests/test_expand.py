"""Tests for the distributive expansion pass."""

from algebra.expressions import Rational, Symbol, Power, Product, Sum
from algebra.expand import Expand, expand, distribute
from algebra.simplify import simplify

a = Symbol("a")
b = Symbol("b")
c = Symbol("c")
d = Symbol("d")
x = Symbol("x")


class TestProduct:
    def test_two_sums(self):
        result = expand(Product([Sum([a, b]), Sum([c, d])]))
        assert isinstance(result, Sum)
        assert set(result.terms) == {
            Product([a, c]), Product([a, d]), Product([b, c]), Product([b, d])}
        assert len(result.terms) == 4

    def test_one_sum(self):
        assert expand(Product([a, Sum([b, c])])) == Sum([Product([a, b]), Product([a, c])])

    def test_no_sums(self):
        assert expand(Product([a, b])) == Product([a, b])
        assert expand(Product([a, b, c])) == Product([a, b, c])

    def test_fold_over_three_factors(self):
        result = expand(Product([a, Sum([b, c]), d]))
        assert simplify(result) == Sum([Product([a, b, d]), Product([a, c, d])])

    def test_distribute_appends_to_running_product(self):
        assert distribute(Product([a, b]), c, False) == Product([a, b, c])
        assert distribute(Product([a, b]), c, True) == Product([Product([a, b]), c])

    def test_leaves_unchanged(self):
        assert expand(x) is x
        assert expand(Rational(3)) == Rational(3)
        assert Expand()(Sum([a, b])) == Sum([a, b])


class TestSum:
    def test_children_expanded(self):
        result = expand(Sum([Product([a, Sum([b, c])]), d]))
        assert result == Sum([Sum([Product([a, b]), Product([a, c])]), d])
        assert simplify(result) == Sum([Product([a, b]), Product([a, c]), d])


class TestPower:
    def test_exponent_one_and_zero(self):
        assert expand(Power(Sum([a, b]), 1)) == Sum([a, b])
        assert expand(Power(Sum([a, b]), 0)) == Rational(1)

    def test_square(self):
        result = expand(Power(Sum([a, b]), 2))
        assert isinstance(result, Sum)
        assert len(result.terms) == 4
        assert simplify(result) == Sum([Power(a, 2), Product([2, a, b]), Power(b, 2)])

    def test_negative_integer_exponent(self):
        result = expand(Power(Sum([a, b]), -2))
        assert isinstance(result, Power)
        assert result.exponent == Rational(-1)
        assert len(result.base.terms) == 4

    def test_fractional_exponent(self):
        assert expand(Power(x, Rational(3, 2))) == Power(Product([x, x, x]), Rational(1, 2))
        assert expand(Power(Sum([a, b]), Rational(1, 2))) == Power(Sum([a, b]), Rational(1, 2))

    def test_base_expanded(self):
        base = Product([a, Sum([b, c])])
        assert expand(Power(base, Rational(1, 3))) == Power(
            Sum([Product([a, b]), Product([a, c])]), Rational(1, 3))

    def test_binomial_square(self):
        result = simplify(expand(Power(Sum([x, 1]), 2)))
        assert result == Sum([Power(x, 2), Product([2, x]), 1])

    def test_binomial_cube(self):
        result = simplify(expand(Power(Sum([x, 1]), 3)))
        assert result == Sum([
            Power(x, 3), Product([3, Power(x, 2)]), Product([3, x]), 1])

    def test_binomial_fourth(self):
        result = simplify(expand(Power(Sum([x, 1]), 4)))
        assert isinstance(result, Sum)
        assert len(result.terms) == 5
        assert Product([6, Power(x, 2)]) in result.terms
