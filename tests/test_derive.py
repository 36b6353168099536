"""Tests for symbolic differentiation."""

import pytest

from algebra.common import InvalidArgument
from algebra.derive import Derive, derive
from algebra.expressions import Rational, Symbol, Power, Product, Sum
from algebra.simplify import simplify

x = Symbol("x")
y = Symbol("y")


class TestRules:
    def test_constant(self):
        assert derive(Rational(3, 4), "x") == Rational(0)

    def test_symbol(self):
        assert derive(x, "x") == Rational(1)
        assert derive(y, "x") == Rational(0)

    def test_sum(self):
        assert derive(Sum([x, y]), "x") == Sum([1, 0])

    def test_product_rule(self):
        assert derive(Product([x, y]), "x") == Sum([Product([1, y]), Product([x, 0])])

    def test_power_rule(self):
        assert derive(Power(x, 3), "x") == Product([3, Power(x, 2), 1])

    def test_result_not_simplified(self):
        result = derive(Power(x, 2), "x")
        assert result == Product([2, Power(x, 1), 1])
        assert simplify(result) == Product([2, x])


class TestSimplified:
    def test_square(self):
        assert simplify(derive(Power(x, 2), "x")) == Product([2, x])

    def test_product_of_three(self):
        assert simplify(derive(Product([x, x, y]), "x")) == Product([2, x, y])

    def test_other_variable(self):
        assert simplify(derive(Product([x, y]), "y")) == x

    def test_square_root(self):
        result = simplify(derive(Power(x, Rational(1, 2)), "x"))
        assert result == Product([Rational(1, 2), Power(x, Rational(-1, 2))])

    def test_chain(self):
        result = simplify(derive(Power(Sum([x, 1]), 2), "x"))
        assert result == Product([2, Sum([x, 1])])

    def test_polynomial(self):
        poly = Sum([Product([3, Power(x, 2)]), Product([-2, x]), 5])
        assert simplify(derive(poly, "x")) == Sum([Product([6, x]), -2])


class TestVariable:
    @pytest.mark.parametrize("var", ["X", "xy", "", "1", None])
    def test_invalid_variable(self, var):
        with pytest.raises(InvalidArgument):
            Derive(var)

    def test_symbol_as_variable(self):
        assert Derive(x)(Power(x, 2)) == derive(Power(x, 2), "x")
