from .common import require
from .expressions import TextVisitor, LinearForm

class Tree(TextVisitor):
    def __init__(self, prefix=""):
        require(isinstance(prefix, str) and all(ch in " │" for ch in prefix),
                f"invalid tree prefix {prefix!r}")
        self.prefix = prefix

    def visit_rational(self, expr):
        return super().visit_rational(expr) + "\n"

    def visit_symbol(self, expr):
        return super().visit_symbol(expr) + "\n"

    def visit_sum(self, expr):
        return self.branch(expr)

    def visit_product(self, expr):
        return self.branch(expr)

    def visit_power(self, expr):
        return self.branch(expr)

    def branch(self, expr):
        out = [expr.tag + "\n"]
        children = list(expr.subexpressions())
        for i, child in enumerate(children):
            last = i == len(children) - 1
            out.append(self.prefix + ("╰── " if last else "├── "))
            out.append(child.accept(Tree(self.prefix + ("    " if last else "│   "))))
        return "".join(out)

def linear(expr):
    return LinearForm()(expr)

def tree(expr):
    return Tree()(expr)
