
import logging
import random

from . import objs
from . import expr
from . import env
from . import sym
from . import error
from . import console

log = logging.getLogger(__name__)


def render(arg, variables):
    if type(arg) is str:
        return arg
    value = expr.evaluate(arg, variables)
    if type(value) is bool:
        return sym.key_true if value else sym.key_false
    return str(value)


def read_integer(term, prompt):
    while True:
        line = term.read_line(prompt)
        if line is None:
            raise error.RuntimeFault("Input stream closed while waiting for a number")

        text = line.strip()
        digits = text[1:] if text[:1] in ('+', '-') else text
        if digits.isdecimal() and sym.int_min <= int(text) <= sym.int_max:
            return int(text)

        term.write(f"'{text}' is not a whole number, try again")


def roll(count, face, rng):
    if count < 1 or count > sym.max_dice:
        raise error.RuntimeFault(f"Cannot roll {count} dice, the limit is {sym.max_dice}")
    if face < 1:
        raise error.RuntimeFault(f"A die cannot have {face} faces")
    return expr.checked(sum(rng.randint(1, face) for _ in range(count)))


def run(program, term=None, rng=None, wait=True) -> env.environment:
    term = term or console.terminal()
    rng = rng or random.Random()

    insts = program.insts
    variables = env.environment()
    returns = []    #return addresses of active calls

    pc = 1          #index 0 is the sentinel
    running = True

    def located(inst, compute):
        try:
            return compute()
        except error.RuntimeFault as err:
            if err.loc is None:
                err.loc = inst.loc
            raise

    def test(inst):
        value = located(inst, lambda: expr.evaluate(inst.cond, variables))
        if type(value) is not bool:
            raise error.RuntimeFault(
                f"Type mismatch: condition '{inst.cond}' is an integer, expected a comparison",
                inst.loc
            )
        return value

    def integer(inst, what, e):
        value = expr.evaluate(e, variables)
        if type(value) is not int:
            raise error.RuntimeFault(f"Type mismatch: {what} must be an integer, got a boolean", inst.loc)
        return value

    #a branch test failed, find the branch that runs next
    def branch_miss(index):
        while True:
            index += insts[index].offset_to_next
            nxt = insts[index]
            if type(nxt) is not objs._elif or test(nxt):
                return index + 1

    #a branch ran to completion, leave the chain past its end
    def chain_exit(index):
        while True:
            match insts[index]:
                case objs._elif(offset_to_next=off): index += off
                case objs._else(offset_to_end=off):  index += off
                case _:                              return index + 1

    log.debug("running %d instructions", len(insts))

    while pc < len(insts) and running:
        inst = insts[pc]

        try:
            match inst:
                case objs._print(args=args):
                    term.write("".join(render(arg, variables) for arg in args))
                    if wait:
                        term.wait_key()
                    pc += 1

                #bodies only run through call
                case objs._sub(offset_to_end=off):
                    pc += off + 1

                case objs._call(name=name):
                    if len(returns) >= sym.max_call_depth:
                        raise error.RuntimeFault(f"Call stack overflow calling '{name}'")
                    returns.append(pc + 1)
                    pc = program.lookup_routine(name) + 1

                case objs._subend():
                    if not returns:
                        raise error.RuntimeFault("Internal error: end of subroutine reached without a call")
                    pc = returns.pop()

                case objs._while(offset_to_end=off):
                    pc += 1 if test(inst) else off + 1

                case objs._end(offset_to_start=off, loop=True):
                    pc -= off

                case objs._end():
                    pc += 1

                case objs._if():
                    pc = pc + 1 if test(inst) else branch_miss(pc)

                case objs._elif() | objs._else():
                    pc = chain_exit(pc)

                case objs._let(name=name, init=init, is_mut=is_mut):
                    variables.bind(name, integer(inst, f"value of '{name}'", init), is_mut)
                    pc += 1

                case objs._modify(name=name, value=value):
                    variables.assign(name, integer(inst, f"value of '{name}'", value))
                    pc += 1

                case objs._input(prompt=prompt):
                    variables.bind(sym.input_result, read_integer(term, prompt))
                    pc += 1

                case objs._roll(count=count, face=face):
                    total = roll(
                        integer(inst, "dice count", count),
                        integer(inst, "face count", face),
                        rng
                    )
                    log.debug("rolled %s", total)
                    variables.bind(sym.roll_result, total)
                    pc += 1

                case objs._break(offset_to_exit=off):
                    pc += off + 1

                case objs._enablewait():
                    wait = True
                    pc += 1

                case objs._disablewait():
                    wait = False
                    pc += 1

                case objs._halt():
                    running = False

                case x:
                    raise error.RuntimeFault(f"Internal error: cannot execute {x}")

        except error.RuntimeFault as err:
            if err.loc is None:
                err.loc = inst.loc
            raise

    log.debug("finished at instruction %d", pc)
    return variables
