
from dataclasses import dataclass
from dataclasses import field

from . import sym
from . import error


@dataclass(frozen=True)
class node:
    kind    : str   #bool, iden, num or op
    content : bool | str | int

    def __str__(self):
        match self.kind:
            case 'bool': return sym.key_true if self.content else sym.key_false
            case _:      return str(self.content)


@dataclass
class expression:
    #postfix order
    content : list[node] = field(default_factory=lambda: [])

    def __str__(self):
        return " ".join(map(str, self.content))


def typename(value):
    return 'boolean' if type(value) is bool else 'integer'


def operand(tok) -> node | None:
    match tok.kind:
        case 'num':  return node('num', tok.content)
        case 'iden': return node('iden', tok.content)
        case 'key' if tok.content == sym.key_true:  return node('bool', True)
        case 'key' if tok.content == sym.key_false: return node('bool', False)
    return None


#shunting-yard to postfix, operators of one tier are left associative
def compile(tokens) -> expression:
    if not tokens:
        raise error.ExprError("Empty expression")

    out = []
    stack = []
    want_operand = True

    for tok in tokens:
        match tok.kind:
            case 'num' | 'iden' | 'key' if operand(tok) is not None:
                if not want_operand:
                    raise error.ExprError(f"Missing operator before '{tok}'", tok.loc)
                out.append(operand(tok))
                want_operand = False

            case 'lparen':
                if not want_operand:
                    raise error.ExprError(f"Missing operator before '{tok}'", tok.loc)
                stack.append(tok)

            case 'ari' | 'rel':
                if want_operand:
                    raise error.ExprError(f"Missing operand before '{tok}'", tok.loc)
                #emit stacked operators that bind at least as tightly
                level = sym.prec_of(tok.content)
                while stack and stack[-1].kind != 'lparen' and \
                        sym.prec_of(stack[-1].content) >= level:
                    out.append(node('op', stack.pop().content))
                stack.append(tok)
                want_operand = True

            case 'rparen':
                if not any(t.kind == 'lparen' for t in stack):
                    raise error.ExprError("Unmatched parenthesis", tok.loc)
                if want_operand:
                    raise error.ExprError(f"Missing operand before '{tok}'", tok.loc)
                while stack[-1].kind != 'lparen':
                    out.append(node('op', stack.pop().content))
                stack.pop()

            case _:
                raise error.ExprError(f"Invalid token '{tok}' in expression", tok.loc)

    for tok in stack:
        if tok.kind == 'lparen':
            raise error.ExprError("Unmatched parenthesis", tok.loc)

    if want_operand:
        raise error.ExprError("Expression ends with an operator", tokens[-1].loc)

    while stack:
        out.append(node('op', stack.pop().content))

    return expression(out)


def checked(value):
    if value < sym.int_min or value > sym.int_max:
        raise error.RuntimeFault("Integer overflow")
    return value


#division truncates toward zero, the remainder follows the dividend
def divide(left, right):
    quot = abs(left) // abs(right)
    return quot if (left < 0) == (right < 0) else -quot

def remainder(left, right):
    return left - right * divide(left, right)


def apply(op, left, right):
    if type(left) is not int or type(right) is not int:
        raise error.RuntimeFault(
            f"Type mismatch: '{op}' expects integers, got {typename(left)} and {typename(right)}"
        )

    match op:
        case sym.op_add: return checked(left + right)
        case sym.op_sub: return checked(left - right)
        case sym.op_mul: return checked(left * right)

        case sym.op_div:
            if right == 0:
                raise error.RuntimeFault("Division by zero")
            return checked(divide(left, right))

        case sym.op_mod:
            if right == 0:
                raise error.RuntimeFault("Modulo by zero")
            return checked(remainder(left, right))

        case sym.op_eq:  return left == right
        case sym.op_neq: return left != right
        case sym.op_le:  return left <= right
        case sym.op_ge:  return left >= right
        case sym.op_lt:  return left < right
        case sym.op_gt:  return left > right

    raise error.RuntimeFault(f"Unknown operator '{op}'")


def evaluate(expr, env) -> int | bool:
    stack = []
    for n in expr.content:
        match n.kind:
            case 'num' | 'bool':
                stack.append(n.content)
            case 'iden':
                stack.append(env.value(n.content))
            case 'op':
                if len(stack) < 2:
                    raise error.RuntimeFault(f"Operator '{n}' is missing an operand")
                right = stack.pop()
                left = stack.pop()
                stack.append(apply(n.content, left, right))

    if len(stack) != 1:
        raise error.RuntimeFault(f"Malformed expression '{expr}'")
    return stack[0]
