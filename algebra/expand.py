from .expressions import NodeVisitor, Rational, Power, Product, Sum, one

class Expand(NodeVisitor):
    """Applies the distributive law so no Sum remains below a Product or Power."""

    def visit_sum(self, expr):
        return expr.apply(self)

    def visit_product(self, expr):
        factors = [self(x) for x in expr.factors]
        result = distribute(factors[0], factors[1], True)
        for factor in factors[2:]:
            result = distribute(result, factor, False)
        return result

    def visit_power(self, expr):
        b = self(expr.base)
        e = expr.exponent
        if e.is_one():
            return b
        elif e.is_zero():
            return one
        elif abs(e.num) > 1:
            repeated = self(Product([b] * abs(e.num)))
            residual = Rational(1 if e.num > 0 else -1, e.den)
            if residual.is_one():
                return repeated
            return Power(repeated, residual)
        else:
            return Power(b, e)

def distribute(u1, u2, first):
    if isinstance(u1, Sum) and isinstance(u2, Sum):
        return Sum([Product([a, b]) for a in u1.terms for b in u2.terms])
    elif isinstance(u1, Sum):
        return Sum([Product([a, u2]) for a in u1.terms])
    elif isinstance(u2, Sum):
        return Sum([Product([b, u1]) for b in u2.terms])
    elif isinstance(u1, Product) and not first:
        return Product(list(u1.factors) + [u2])
    else:
        return Product([u1, u2])

def expand(expr):
    return Expand()(expr)
