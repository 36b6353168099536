"""
Command line front end. Reads expressions from stdin, one per line, and
prints the result of a pass in linear or tree form.
"""
import argparse
import logging
import sys
from dataclasses import dataclass
from typing import Optional

from .common import AlgebraError
from .derive import derive
from .expand import expand
from .notation import NOTATIONS, from_linear_program
from .render import linear, tree
from .simplify import simplify

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class Options:
    command   : str
    notation  : str = "polish"
    var       : Optional[str] = None
    simplify  : bool = False
    log_level : str = "WARNING"

    @classmethod
    def from_args(cls, args):
        return cls(
            command=args.command,
            notation=args.notation,
            var=getattr(args, "var", None),
            simplify=getattr(args, "simplify", False),
            log_level=args.log_level)

def build_parser():
    parser = argparse.ArgumentParser(prog="minialgebra", description=__doc__)
    parser.add_argument("--notation", choices=sorted(NOTATIONS), default="polish",
                        help="token order of input lines (default: polish prefix)")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("parse", help="print each expression as parsed")
    sub.add_parser("simplify", help="print each expression in canonical form")
    p = sub.add_parser("expand", help="distribute products over sums")
    p.add_argument("--simplify", action="store_true", help="simplify after expanding")
    p = sub.add_parser("derive", help="differentiate and simplify")
    p.add_argument("var", help="variable to derive on, a single letter a-z")
    sub.add_parser("tree", help="print each expression as an indented tree")
    p = sub.add_parser("program", help="read stdin as one linear program")
    p.add_argument("--simplify", action="store_true", help="simplify the result")
    return parser

def transform(options, expr):
    if options.command == "simplify":
        return linear(simplify(expr))
    elif options.command == "expand":
        expr = expand(expr)
        return linear(simplify(expr) if options.simplify else expr)
    elif options.command == "derive":
        return linear(simplify(derive(expr, options.var)))
    elif options.command == "tree":
        return tree(expr).rstrip("\n")
    else:
        return linear(expr)

def run(options, lines, out):
    if options.command == "program":
        expr = from_linear_program(list(lines))
        if options.simplify:
            expr = simplify(expr)
        print(linear(expr), file=out)
        return
    parse = NOTATIONS[options.notation]
    for line in lines:
        if not line.strip():
            continue
        expr = parse(line)
        logger.debug("parsed %s", expr)
        print(transform(options, expr), file=out)

def main(argv=None):
    args = build_parser().parse_args(argv)
    options = Options.from_args(args)
    logging.basicConfig(level=options.log_level, format="%(levelname)s %(name)s: %(message)s")
    logger.info("running %s with %s notation", options.command, options.notation)
    try:
        run(options, sys.stdin.read().splitlines(), sys.stdout)
    except AlgebraError as e:
        logger.error("%s: %s", type(e).__name__, e)
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
