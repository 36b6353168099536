from dataclasses import dataclass
from fractions import Fraction
from math import gcd
from typing import Tuple
import operator
import numpy as np

from .common import InvalidArgument, UndefinedArithmetic, require

ROOT_TOLERANCE = 1e-9
FLOAT_BITS = 1000    # wider integers overflow a float

@dataclass(eq=False, frozen=True)
class Expr:
    priority = 1000
    tag = None

    def __str__(self):
        return self.accept(LinearForm())

    def __hash__(self):
        h = self.__dict__.get("_hash")
        if h is None:
            h = hash((type(self).__name__,) + self.key())
            object.__setattr__(self, "_hash", h)
        return h

    def __eq__(self, other):
        if self is other:
            return True
        if type(self) is not type(other):
            return False
        return hash(self) == hash(other) and self.key() == other.key()

    def __lt__(self, other):
        return compare(self, other) < 0

    def __le__(self, other):
        return compare(self, other) <= 0

    def __gt__(self, other):
        return compare(self, other) > 0

    def __ge__(self, other):
        return compare(self, other) >= 0

    def __add__(self, other):
        return Sum([self, other])

    def __radd__(self, other):
        return Sum([other, self])

    def __sub__(self, other):
        return Sum([self, -convert(other)])

    def __rsub__(self, other):
        return Sum([other, -self])

    def __mul__(self, other):
        return Product([self, other])

    def __rmul__(self, other):
        return Product([other, self])

    def __truediv__(self, other):
        return Product([self, Power(other, minus_one)])

    def __rtruediv__(self, other):
        return Product([other, Power(self, minus_one)])

    def __neg__(self):
        return Product([minus_one, self])

    def __pow__(self, other):
        return Power(self, other)

    def key(self):
        return tuple(self.subexpressions())

    def subexpressions(self):
        return iter(())

    def accept(self, visitor):
        raise NotImplementedError

@dataclass(eq=False, frozen=True)
class Rational(Expr):
    num : int
    den : int = 1
    priority = 0

    def __post_init__(self):
        try:
            num = operator.index(self.num)
            den = operator.index(self.den)
        except TypeError:
            raise InvalidArgument(f"Rational({self.num!r}, {self.den!r}) needs integers") from None
        if den == 0:
            raise InvalidArgument("denominator cannot be zero")
        g = gcd(num, den)
        if den < 0:
            g = -g
        object.__setattr__(self, "num", num // g)
        object.__setattr__(self, "den", den // g)

    def accept(self, visitor):
        return visitor.visit_rational(self)

    def key(self):
        return (self.num, self.den)

    def is_zero(self):
        return self.num == 0

    def is_one(self):
        return self.num == 1 and self.den == 1

    def as_fraction(self):
        return Fraction(self.num, self.den)

    def __int__(self):
        return self.num // self.den

    def negate(self):
        return Rational(-self.num, self.den)

    def reciprocal(self):
        return Rational(self.den, self.num)

    def add(self, other):
        if self.is_zero():
            return other
        if other.is_zero():
            return self
        return Rational(self.num * other.den + other.num * self.den, self.den * other.den)

    def multiply(self, other):
        if self.is_zero() or other.is_zero():
            return zero
        if self.is_one():
            return other
        if other.is_one():
            return self
        return Rational(self.num * other.num, self.den * other.den)

    def integer_root(self, r):
        """Exact r-th root of this number, or None when the root is irrational."""
        if self.num < 0 and r % 2 == 0:
            raise UndefinedArithmetic(f"no real root of index {r} for {self}")
        num = exact_root(abs(self.num), r)
        den = exact_root(self.den, r)
        if num is None or den is None:
            return None
        if self.num < 0:
            num = -num
        return Rational(num, den)

    def power(self, exponent):
        # Only the integer part of the exponent is used.
        num, den = self.num, self.den
        if exponent.num < 0:
            num, den = den, num
        n = abs(exponent.num) // exponent.den
        return Rational(num ** n, den ** n)

def exact_root(n, r):
    """r-th root of the non-negative integer n, or None when n is not a perfect r-th power."""
    if n < 2:
        return n
    # 2**r already exceeds n.
    if r >= n.bit_length():
        return None
    if n.bit_length() > FLOAT_BITS:
        root = floor_root(n, r)
        if root ** r == n:
            return root
        return None
    estimate = int(np.rint(np.power(float(n), 1.0 / r)))
    for candidate in (estimate, estimate - 1, estimate + 1):
        if candidate >= 0 and abs(candidate ** r - n) < ROOT_TOLERANCE:
            return candidate
    return None

def floor_root(n, r):
    # Newton iteration from above, in integers.
    x = 1 << -(-n.bit_length() // r)
    while True:
        y = ((r - 1) * x + n // x ** (r - 1)) // r
        if y >= x:
            return x
        x = y

@dataclass(eq=False, frozen=True)
class Symbol(Expr):
    ch : str
    priority = 6    # sorts after every composite kind

    def __post_init__(self):
        require(isinstance(self.ch, str) and len(self.ch) == 1 and "a" <= self.ch <= "z",
                f"symbol must be a letter between 'a' and 'z', got {self.ch!r}")

    def accept(self, visitor):
        return visitor.visit_symbol(self)

    def key(self):
        return (self.ch,)

@dataclass(eq=False, frozen=True)
class Power(Expr):
    base     : Expr
    exponent : Rational
    priority = 2
    tag = "^"

    def __post_init__(self):
        object.__setattr__(self, "base", convert(self.base))
        exponent = convert(self.exponent)
        require(isinstance(exponent, Rational), f"exponent must be rational, got {exponent}")
        object.__setattr__(self, "exponent", exponent)

    def accept(self, visitor):
        return visitor.visit_power(self)

    def subexpressions(self):
        yield self.base
        yield self.exponent

@dataclass(eq=False, frozen=True)
class Product(Expr):
    factors : Tuple[Expr, ...]
    priority = 3
    tag = "*"

    def __post_init__(self):
        object.__setattr__(self, "factors", arrange(self.factors, "Product"))

    def accept(self, visitor):
        return visitor.visit_product(self)

    def subexpressions(self):
        yield from self.factors

@dataclass(eq=False, frozen=True)
class Sum(Expr):
    terms : Tuple[Expr, ...]
    priority = 4
    tag = "+"

    def __post_init__(self):
        object.__setattr__(self, "terms", arrange(self.terms, "Sum"))

    def accept(self, visitor):
        return visitor.visit_sum(self)

    def apply(self, fn):
        return Sum([fn(x) for x in self.terms])

    def subexpressions(self):
        yield from self.terms

def arrange(children, name):
    require(children is not None, f"{name} needs a list of children")
    children = [convert(x) for x in children]
    require(len(children) >= 2, f"{name} needs at least 2 children, got {len(children)}")
    children.sort()
    return tuple(children)

def compare(a, b):
    """Canonical order: priority across kinds, then values, then children pairwise."""
    if a is None or b is None:
        raise InvalidArgument("cannot compare a missing expression")
    if type(a) is not type(b):
        return sign(a.priority - b.priority)
    if isinstance(a, Rational):
        return sign(a.num * b.den - b.num * a.den)
    if isinstance(a, Symbol):
        return sign(ord(a.ch) - ord(b.ch))
    xs = tuple(a.subexpressions())
    ys = tuple(b.subexpressions())
    for x, y in zip(xs, ys):
        c = compare(x, y)
        if c != 0:
            return c
    return sign(len(xs) - len(ys))

def sign(n):
    return (n > 0) - (n < 0)

def convert(obj):
    if isinstance(obj, Expr):
        return obj
    elif isinstance(obj, bool):
        raise InvalidArgument(f"cannot convert {obj!r} to an expression")
    elif isinstance(obj, int):
        return Rational(obj)
    elif isinstance(obj, Fraction):
        return Rational(obj.numerator, obj.denominator)
    elif obj is None:
        raise InvalidArgument("expression is missing")
    else:
        raise InvalidArgument(f"cannot convert {obj!r} : {type(obj).__name__} to an expression")

class Visitor:
    def __call__(self, expr):
        return convert(expr).accept(self)

    def visit_rational(self, expr):
        raise NotImplementedError(f"{type(self).__name__} does not handle Rational")

    def visit_symbol(self, expr):
        raise NotImplementedError(f"{type(self).__name__} does not handle Symbol")

    def visit_sum(self, expr):
        raise NotImplementedError(f"{type(self).__name__} does not handle Sum")

    def visit_product(self, expr):
        raise NotImplementedError(f"{type(self).__name__} does not handle Product")

    def visit_power(self, expr):
        raise NotImplementedError(f"{type(self).__name__} does not handle Power")

class TextVisitor(Visitor):
    def visit_rational(self, expr):
        if expr.den == 1:
            return str(expr.num)
        return f"{expr.num}/{expr.den}"

    def visit_symbol(self, expr):
        return expr.ch

class NodeVisitor(Visitor):
    def visit_rational(self, expr):
        return expr

    def visit_symbol(self, expr):
        return expr

class LinearForm(TextVisitor):
    def visit_sum(self, expr):
        return self.composite(expr)

    def visit_product(self, expr):
        return self.composite(expr)

    def visit_power(self, expr):
        return self.composite(expr)

    def composite(self, expr):
        return expr.tag + "(" + ", ".join(self(x) for x in expr.subexpressions()) + ")"

zero      = Rational(0)
one       = Rational(1)
minus_one = Rational(-1)
