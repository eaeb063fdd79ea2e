#!/usr/bin/python3

import argparse
import logging
import random
import sys

from . import tree
from . import lex
from . import vm
from . import error

log = logging.getLogger(__name__)


def load(path):
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except OSError as err:
        error.error(f"Cannot read '{path}': {err.strerror}")


def compile(path):
    raw = load(path)
    log.debug("compiling %s", path)
    return raw, tree.build(raw)


def execute(raw, program, wait=True, seed=None):
    try:
        vm.run(program, rng=random.Random(seed), wait=wait)
    except error.RuntimeFault as err:
        error.runtime_error(raw.splitlines(), err)


def arguments(argv=None):
    parser = argparse.ArgumentParser(prog="rollscript", description="Run a rollscript file")
    parser.add_argument("path", help="script file to run")
    parser.add_argument("--no-wait", action="store_true", help="do not wait for a key after each print")
    parser.add_argument("--dump", action="store_true", help="print the compiled program and exit")
    parser.add_argument("--tokens", action="store_true", help="print the lexed tokens and exit")
    parser.add_argument("--seed", type=int, default=None, help="seed for dice rolls")
    parser.add_argument("-v", "--verbose", action="store_true", help="log progress to stderr")
    return parser.parse_args(argv)


def main(argv=None):
    args = arguments(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.tokens:
        raw = load(args.path)
        try:
            print(lex.lex(raw))
        except error.LexError as err:
            error.lang_error(raw.splitlines(), err)
        return

    raw, program = compile(args.path)
    if args.dump:
        print(program.render())
        return

    try:
        execute(raw, program, wait=not args.no_wait, seed=args.seed)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    main()
