
from dataclasses import dataclass
from dataclasses import field
from dataclasses import fields

from lark import Tree

from . import expr
from . import sym
from . import lex
from . import error


class instruction:
    def __str__(self):
        parts = [type(self).__name__.lstrip('_')]
        for f in fields(self):
            if f.name == 'loc':
                continue
            value = getattr(self, f.name)
            match value:
                case list():
                    parts.append(", ".join(
                        f'"{v}"' if type(v) is str else f"[{v}]"
                        for v in value
                    ))
                case expr.expression():
                    parts.append(f"[{value}]")
                case None:
                    pass
                case bool():
                    if value: parts.append(f.name)
                case int():
                    parts.append(f"{f.name}={value}")
                case _:
                    parts.append(str(value))
        return " ".join(parts)

    #plain instructions append themselves
    def generate(self, output, ctx):
        output(self)

    @classmethod
    def parse(cls, stmt, ctx):
        return cls(loc=ctx.loc_of(stmt))


#block opener waiting for its closer
@dataclass
class waiting:
    inst   : instruction
    index  : int
    breaks : list[int] = field(default_factory=lambda: [])


#compile context shared by all statements of one program
@dataclass
class context:
    lexed   : lex.lexed
    at      : dict[lex.location, lex.token] = field(default_factory=lambda: {})
    pending : list[waiting] = field(default_factory=lambda: [])
    calls   : list['_call'] = field(default_factory=lambda: [])

    def __post_init__(self):
        self.at = self.lexed.at()

    def fail(self, loc, msg):
        error.loc_error(self.lexed.lines, loc, msg)

    def loc_of(self, stmt) -> lex.location:
        head = stmt.children[0]
        return lex.location(head.line, head.column)

    def tokens_of(self, tree) -> list[lex.token]:
        return [self.at[lex.location(t.line, t.column)] for t in tree.children]

    def expression(self, tree, loc) -> expr.expression:
        try:
            return expr.compile(self.tokens_of(tree))
        except error.ExprError as err:
            self.fail(err.loc or loc, err.msg)

    def nth_expression(self, stmt, n):
        trees = [c for c in stmt.children if isinstance(c, Tree)]
        return self.expression(trees[n], self.loc_of(stmt))

    def word(self, stmt, terminal):
        for c in stmt.children:
            if not isinstance(c, Tree) and c.type == terminal:
                return self.at[lex.location(c.line, c.column)]
        return None

    def check_name(self, name_tok, msg):
        if name_tok.content.startswith(sym.reserved_prefix):
            self.fail(name_tok.loc, msg)

    #every block closed, every call has a target
    def finish(self, output):
        if self.pending:
            open_block = self.pending[-1].inst
            self.fail(open_block.loc, f"'{type(open_block).__name__.lstrip('_')}' block is never closed with 'end'")

        for call in self.calls:
            if not output.check_routine_defined(call.name):
                self.fail(call.loc, f"Subroutine '{call.name}' is not defined")



@dataclass
class _ill(instruction):
    loc : lex.location | None = None


@dataclass
class _print(instruction):
    args : list[str | expr.expression] = field(default_factory=lambda: [])
    loc   : lex.location | None = None

    @classmethod
    def parse(cls, stmt, ctx):
        loc = ctx.loc_of(stmt)
        args = []
        for c in stmt.children:
            if isinstance(c, Tree):
                args.append(ctx.expression(c, loc))
            elif c.type == 'STR':
                args.append(ctx.at[lex.location(c.line, c.column)].content)
        return cls(args, loc)


@dataclass
class _sub(instruction):
    name          : str
    offset_to_end : int = 0
    loc           : lex.location | None = None

    @classmethod
    def parse(cls, stmt, ctx):
        return cls(ctx.word(stmt, 'IDENT').content, loc=ctx.loc_of(stmt))

    def generate(self, output, ctx):
        if any(type(w.inst) is _sub for w in ctx.pending):
            ctx.fail(self.loc, "You cannot nest Sub")

        if output.check_routine_defined(self.name):
            ctx.fail(self.loc, f"Subroutine name \"{self.name}\" is conflicting")

        output.define_routine(self.name)
        ctx.pending.append(waiting(self, output.address()))
        output(self)


@dataclass
class _subend(instruction):
    loc : lex.location | None = None


@dataclass
class _call(instruction):
    name : str
    loc  : lex.location | None = None

    @classmethod
    def parse(cls, stmt, ctx):
        return cls(ctx.word(stmt, 'IDENT').content, loc=ctx.loc_of(stmt))

    def generate(self, output, ctx):
        ctx.calls.append(self)
        output(self)


@dataclass
class _while(instruction):
    cond          : expr.expression
    offset_to_end : int = 0
    loc           : lex.location | None = None

    @classmethod
    def parse(cls, stmt, ctx):
        return cls(ctx.nth_expression(stmt, 0), loc=ctx.loc_of(stmt))

    def generate(self, output, ctx):
        ctx.pending.append(waiting(self, output.address()))
        output(self)


@dataclass
class _let(instruction):
    name   : str
    init   : expr.expression
    is_mut : bool = False
    loc    : lex.location | None = None

    @classmethod
    def parse(cls, stmt, ctx):
        name = ctx.word(stmt, 'IDENT')
        ctx.check_name(name, f"Identifier '{name}' starts with _ and is reserved")
        return cls(
            name = name.content,
            init = ctx.nth_expression(stmt, 0),
            is_mut = ctx.word(stmt, 'ASMUT') is not None,
            loc = ctx.loc_of(stmt),
        )


@dataclass
class _modify(instruction):
    name  : str
    value : expr.expression
    loc   : lex.location | None = None

    @classmethod
    def parse(cls, stmt, ctx):
        name = ctx.word(stmt, 'IDENT')
        ctx.check_name(name, f"Identifier '{name}' starts with _ and is reserved, it cannot be modified")
        return cls(name.content, ctx.nth_expression(stmt, 0), loc=ctx.loc_of(stmt))


@dataclass
class _if(instruction):
    cond           : expr.expression
    offset_to_next : int = 0
    loc            : lex.location | None = None

    @classmethod
    def parse(cls, stmt, ctx):
        return cls(ctx.nth_expression(stmt, 0), loc=ctx.loc_of(stmt))

    def generate(self, output, ctx):
        ctx.pending.append(waiting(self, output.address()))
        output(self)


#closes the previous branch of an if chain and opens the next one
def next_branch(inst, word, output, ctx):
    if not ctx.pending:
        ctx.fail(inst.loc, f"A stray {word} detected")

    prev = ctx.pending[-1]
    if type(prev.inst) not in (_if, _elif):
        ctx.fail(inst.loc, f"Cannot find corresponding If for {word}")

    ctx.pending.pop()
    prev.inst.offset_to_next = output.address() - prev.index
    ctx.pending.append(waiting(inst, output.address()))
    output(inst)


@dataclass
class _elif(instruction):
    cond           : expr.expression
    offset_to_next : int = 0
    loc            : lex.location | None = None

    @classmethod
    def parse(cls, stmt, ctx):
        return cls(ctx.nth_expression(stmt, 0), loc=ctx.loc_of(stmt))

    def generate(self, output, ctx):
        next_branch(self, "ElIf", output, ctx)


@dataclass
class _else(instruction):
    offset_to_end : int = 0
    loc           : lex.location | None = None

    def generate(self, output, ctx):
        next_branch(self, "Else", output, ctx)


@dataclass
class _end(instruction):
    offset_to_start : int = 0
    loop            : bool = False
    loc             : lex.location | None = None

    def generate(self, output, ctx):
        if not ctx.pending:
            ctx.fail(self.loc, "A stray End detected")

        start = ctx.pending.pop()
        offset = output.address() - start.index

        match start.inst:
            case _sub():
                start.inst.offset_to_end = offset
                output(_subend(loc=self.loc))
                return

            case _while():
                start.inst.offset_to_end = offset
                for index in start.breaks:
                    output.insts[index].offset_to_exit = output.address() - index
                self.loop = True

            case _if() | _elif():
                start.inst.offset_to_next = offset

            case _else():
                start.inst.offset_to_end = offset

        self.offset_to_start = offset
        output(self)


@dataclass
class _input(instruction):
    prompt : str | None = None
    loc    : lex.location | None = None

    @classmethod
    def parse(cls, stmt, ctx):
        prompt = ctx.word(stmt, 'STR')
        return cls(prompt.content if prompt else None, loc=ctx.loc_of(stmt))


@dataclass
class _roll(instruction):
    count : expr.expression
    face  : expr.expression
    loc   : lex.location | None = None

    @classmethod
    def parse(cls, stmt, ctx):
        return cls(
            ctx.nth_expression(stmt, 0),
            ctx.nth_expression(stmt, 1),
            loc = ctx.loc_of(stmt),
        )


@dataclass
class _halt(instruction):
    loc : lex.location | None = None


@dataclass
class _break(instruction):
    offset_to_exit : int = 0
    loc            : lex.location | None = None

    def generate(self, output, ctx):
        #innermost while, a sub boundary ends the search
        for w in reversed(ctx.pending):
            if type(w.inst) is _sub:
                break
            if type(w.inst) is _while:
                w.breaks.append(output.address())
                output(self)
                return

        ctx.fail(self.loc, "A stray Break detected, it must be inside a While")


@dataclass
class _enablewait(instruction):
    loc : lex.location | None = None


@dataclass
class _disablewait(instruction):
    loc : lex.location | None = None



def parse(stmt, ctx):
    name = f"_{stmt.data}"

    namespace = globals()
    if name not in namespace:
        error.error(f"Invalid statement name: {stmt.data}")

    return namespace[name].parse(stmt, ctx)
