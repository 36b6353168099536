"""Textual front ends: token-stream notations and indexed linear programs."""
import logging
import re

from .common import InvalidArgument, IllegalState, require
from .expressions import Rational, Symbol, Power, Product, Sum, minus_one
from .simplify import simplify

logger = logging.getLogger(__name__)

NUMBER = re.compile(r"[+-]?[0-9]+")
LETTER = re.compile(r"[a-z]")

def atom(token):
    if NUMBER.fullmatch(token):
        return Rational(int(token))
    elif LETTER.fullmatch(token):
        return Symbol(token)
    else:
        return None

def as_exponent(expr):
    if isinstance(expr, Rational):
        return expr
    e = simplify(expr)
    if not isinstance(e, Rational):
        raise InvalidArgument(f"exponent {expr} does not reduce to a rational number")
    return e

OPERATORS = {
    "+": lambda lhs, rhs: Sum([lhs, rhs]),
    "-": lambda lhs, rhs: Sum([lhs, Product([minus_one, rhs])]),
    "*": lambda lhs, rhs: Product([lhs, rhs]),
    "/": lambda lhs, rhs: Product([lhs, Power(rhs, minus_one)]),
    "^": lambda lhs, rhs: Power(lhs, as_exponent(rhs)),
}

def tokenize(line):
    require(isinstance(line, str), f"expected a line of text, got {line!r}")
    return line.split()

def from_polish(line):
    """Prefix notation, read right to left: "- x 1" is x - 1."""
    return run(reversed(tokenize(line)), prefix=True)

def from_rpn(line):
    """Postfix notation, read left to right: "x 1 -" is x - 1."""
    return run(tokenize(line), prefix=False)

NOTATIONS = {
    "polish": from_polish,
    "rpn": from_rpn,
}

def run(tokens, prefix):
    stack = []
    for token in tokens:
        if token in OPERATORS:
            if len(stack) < 2:
                raise IllegalState(f"not enough operands for {token!r}")
            if prefix:
                lhs = stack.pop()
                rhs = stack.pop()
            else:
                rhs = stack.pop()
                lhs = stack.pop()
            stack.append(OPERATORS[token](lhs, rhs))
        else:
            expr = atom(token)
            if expr is None:
                raise InvalidArgument(f"unrecognized token {token!r}")
            stack.append(expr)
    if len(stack) != 1:
        raise InvalidArgument(f"expression leaves {len(stack)} operands instead of one")
    return stack[0]

def subtract(operands):
    return Sum(operands[:1] + [Product([minus_one, x]) for x in operands[1:]])

def divide(operands):
    return Product(operands[:1] + [Power(x, minus_one) for x in operands[1:]])

def raise_to(operands):
    require(len(operands) >= 2, f"^ needs at least 2 operands, got {len(operands)}")
    c = Power(operands[-2], as_exponent(operands[-1]))
    for x in reversed(operands[:-2]):
        c = Power(x, as_exponent(c))
    return c

COMBINATORS = {
    "+": Sum,
    "-": subtract,
    "*": Product,
    "/": divide,
    "^": raise_to,
}

def lookup(expressions, index):
    try:
        i = int(index)
    except ValueError:
        raise InvalidArgument(f"invalid operand index: {index!r}") from None
    require(0 <= i < len(expressions), f"invalid operand index: {i}")
    return expressions[i]

def from_linear_program(instructions):
    """
    Each instruction either declares a leaf, ". x" or ". 3", or combines
    earlier results by position, "+ 0 1". The last result is returned.
    """
    require(instructions is not None, "instructions are missing")
    expressions = []
    for instruction in instructions:
        require(isinstance(instruction, str), f"invalid instruction: {instruction!r}")
        parts = instruction.split()
        if not parts:
            continue
        op, args = parts[0], parts[1:]
        if op == ".":
            require(len(args) == 1, f"declaration needs exactly one token: {instruction!r}")
            expr = atom(args[0])
            require(expr is not None, f"invalid symbol or number: {args[0]!r}")
        elif op in COMBINATORS:
            expr = COMBINATORS[op]([lookup(expressions, a) for a in args])
        else:
            raise InvalidArgument(f"invalid instruction: {instruction!r}")
        logger.debug("%d = %s", len(expressions), expr)
        expressions.append(expr)
    require(expressions, "no expressions generated from instructions")
    return expressions[-1]
