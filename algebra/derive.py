from .common import require
from .expressions import NodeVisitor, Symbol, Power, Product, Sum, zero, one, minus_one

class Derive(NodeVisitor):
    """Partial derivative with respect to one symbol. The result is not simplified."""

    def __init__(self, var):
        if isinstance(var, Symbol):
            var = var.ch
        require(isinstance(var, str) and len(var) == 1 and "a" <= var <= "z",
                f"variable to derive on must be a letter between 'a' and 'z', got {var!r}")
        self.var = var

    def visit_rational(self, expr):
        return zero

    def visit_symbol(self, expr):
        if expr.ch == self.var:
            return one
        return zero

    def visit_sum(self, expr):
        return expr.apply(self)

    def visit_product(self, expr):
        factors = expr.factors
        terms = []
        for i, factor in enumerate(factors):
            terms.append(Product(factors[:i] + (self(factor),) + factors[i+1:]))
        return Sum(terms)

    def visit_power(self, expr):
        e = expr.exponent
        return Product([e, Power(expr.base, e.add(minus_one)), self(expr.base)])

def derive(expr, var):
    return Derive(var)(expr)
