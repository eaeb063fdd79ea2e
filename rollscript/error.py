
import sys
from typing import NoReturn


#an error that may point at a place in the source
class LangError(Exception):
    def __init__(self, msg, loc=None):
        super().__init__(msg)
        self.msg = msg
        self.loc = loc

    def __str__(self):
        if self.loc is None:
            return self.msg
        return f"{self.msg} ({self.loc})"


class LexError(LangError):
    pass


class ExprError(LangError):
    pass


class RuntimeFault(LangError):
    pass


def render_loc(line, loc):
    #caret block under the offending column
    return "\n".join([
        "     |",
        f"{loc.row:<4} | {line}",
        f"     | {'^':>{loc.col}}",
        "     |",
    ])


def describe(msg, lines=None, loc=None, kind="Error"):
    if loc is None:
        return f"{kind}: {msg}"

    text = f"{kind}: {msg} ({loc})"
    if lines is not None and 0 < loc.row <= len(lines):
        text += "\n" + render_loc(lines[loc.row - 1], loc)
    return text


def loc_error(lines, loc, msg) -> NoReturn:
    print(describe(msg, lines, loc), file=sys.stderr)
    sys.exit(1)


def lang_error(lines, err: LangError) -> NoReturn:
    loc_error(lines, err.loc, err.msg)


def runtime_error(lines, err: RuntimeFault) -> NoReturn:
    print(describe(err.msg, lines, err.loc, "Runtime error"), file=sys.stderr)
    sys.exit(1)


def error(msg) -> NoReturn:
    print(f"Error\n\t{msg}", file=sys.stderr)
    sys.exit(1)
