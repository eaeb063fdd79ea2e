
import logging
from dataclasses import dataclass
from dataclasses import field

from lark.exceptions import UnexpectedInput
from lark.exceptions import UnexpectedToken

from . import objs
from . import emission
from . import grammar
from . import error
from . import lex

log = logging.getLogger(__name__)


@dataclass
class node:
    subs : list[objs.instruction] = field(default_factory=lambda: [])

    def generate(self, output, ctx):
        for sub in self.subs:
            sub.generate(output, ctx)


def syntax_error(lines, err: UnexpectedInput):
    loc = None
    if isinstance(err.line, int) and err.line > 0:
        loc = lex.location(err.line, err.column)

    msg = "Syntax error"
    if isinstance(err, UnexpectedToken):
        tok = err.token
        found = grammar.spelling('$END') if tok.type == '$END' else \
                f'"{tok}"' if tok.type == 'STR' else f"'{tok}'"
        msg = f"Syntax error: unexpected {found}"

        expected = sorted(grammar.spelling(t) for t in err.expected)
        if 0 < len(expected) <= 5:
            msg += f", expected {' or '.join(expected)}"

    error.loc_error(lines, loc, msg)


def parse(parsed, ctx) -> node:
    return node([objs.parse(stmt, ctx) for stmt in parsed.children])


#lex, parse, build statements
def prepare(raw):
    try:
        lexed = lex.lex(raw)
    except error.LexError as err:
        error.lang_error(raw.splitlines(), err)
    log.debug("lexed %d lines into %d tokens", len(lexed.lines), len(lexed.tokens))

    try:
        parsed = grammar.parse(raw)
    except UnexpectedInput as err:
        syntax_error(lexed.lines, err)

    ctx = objs.context(lexed)
    return parse(parsed, ctx), ctx


def build(raw) -> emission.program:
    root, ctx = prepare(raw)

    output = emission.program()
    #index 0 is never a block opener
    output(objs._ill())

    root.generate(output, ctx)
    ctx.finish(output)

    log.debug("compiled %d instructions, %d subroutines", len(output), len(output.subs))
    return output
