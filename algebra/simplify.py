"""Reduction of expressions to canonical normal form.

Children are simplified first, then a reduction specific to the node kind
is applied: sums collect like terms, products collect like factors and
powers fold rational bases whose exact roots exist.
"""
import logging

from .common import UndefinedArithmetic
from .expressions import NodeVisitor, Rational, Power, Product, Sum, zero, one

logger = logging.getLogger(__name__)

def base(u):
    if isinstance(u, Power):
        return u.base
    else:
        return u

def exponent(u):
    if isinstance(u, Power):
        return u.exponent
    else:
        return one

def term(u):
    if isinstance(u, Product) and isinstance(u.factors[0], Rational):
        if len(u.factors) == 2:
            return u.factors[1]
        else:
            return Product(u.factors[1:])
    else:
        return u

def const(u):
    if isinstance(u, Product) and isinstance(u.factors[0], Rational):
        return u.factors[0]
    else:
        return one

def factors_of(u):
    if isinstance(u, Product):
        return list(u.factors)
    else:
        return [u]

class Simplify(NodeVisitor):
    def visit_sum(self, expr):
        constant = zero
        groups = {}
        for u in self.flatten(expr):
            if isinstance(u, Rational):
                constant = constant.add(u)
            else:
                key = term(u)
                groups[key] = groups.get(key, zero).add(const(u))
        terms = []
        regroup = False
        for key, coeff in groups.items():
            if coeff.is_zero():
                continue
            elif coeff.is_one() and isinstance(key, Sum):
                # c*(a + b) with c == 1 unwraps into the outer sum.
                terms.extend(key.terms)
                regroup = True
            elif coeff.is_one():
                terms.append(key)
            else:
                terms.append(Product([coeff] + factors_of(key)))
        if not constant.is_zero():
            terms.append(constant)
        if regroup:
            logger.debug("regrouping sum terms %s", [str(t) for t in terms])
            return self(Sum(terms))
        return summation(terms)

    def visit_product(self, expr):
        constant = one
        groups = {}
        for u in self.flatten(expr):
            if isinstance(u, Rational):
                constant = constant.multiply(u)
            else:
                groups[base(u)] = groups.get(base(u), zero).add(exponent(u))
        factors = []
        regroup = False
        for b, e in groups.items():
            # b**0 leaves nothing behind but the constant.
            if e.is_zero():
                continue
            p = self(Power(b, e))
            if isinstance(p, Rational):
                constant = constant.multiply(p)
            elif isinstance(p, Product):
                factors.extend(p.factors)
                regroup = True
            else:
                factors.append(p)
        if constant.is_zero():
            return zero
        # Folded groups may land on a base that another group already produced.
        if regroup or len({base(f) for f in factors}) < len(factors):
            logger.debug("regrouping product factors %s", [str(f) for f in factors])
            return self(Product(factors + [constant]))
        if not constant.is_one():
            factors.append(constant)
        return product(factors, constant)

    def visit_power(self, expr):
        b = self(expr.base)
        e = self(expr.exponent)
        if isinstance(b, Power):
            e = e.multiply(b.exponent)
            b = b.base
        if e.is_one():
            return b
        if isinstance(b, Rational):
            if b.is_zero():
                if e.is_zero():
                    raise UndefinedArithmetic("0^0 is indeterminate")
                return zero
            if e.is_zero():
                return one
            if e.num < 0:
                b = b.reciprocal()
                e = e.negate()
            if b.num > 0 or e.den % 2 != 0:
                root = b.integer_root(e.den)
                if root is not None:
                    return root.power(Rational(e.num))
        if e.is_zero():
            raise UndefinedArithmetic(f"exponent of {b} reduced to 0")
        return Power(b, e)

    def flatten(self, expr):
        out = []
        for u in expr.subexpressions():
            u = self(u)
            if type(u) is type(expr):
                out.extend(u.subexpressions())
            else:
                out.append(u)
        return out

def summation(terms):
    if len(terms) == 0:
        return zero
    elif len(terms) == 1:
        return terms[0]
    else:
        return Sum(terms)

def product(factors, constant=one):
    if len(factors) == 0:
        return constant
    elif len(factors) == 1:
        return factors[0]
    else:
        return Product(factors)

def simplify(expr):
    return Simplify()(expr)
