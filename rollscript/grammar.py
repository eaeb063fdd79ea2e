
import logging

from lark import Lark
from lark import Token
from lark.lexer import Lexer

from . import lex

log = logging.getLogger(__name__)


#terminals are produced by lex.lex, the grammar only arranges them
grammar = r"""
    start: _stmt*

    _stmt: print
         | sub
         | call
         | while
         | let
         | modify
         | input
         | if
         | elif
         | else
         | end
         | roll
         | halt
         | break
         | enablewait
         | disablewait

    print: PRINT (_print_arg (COMMA _print_arg)*)? SEMI
    _print_arg: STR | expr

    sub: SUB IDENT SEMI
    call: CALL IDENT SEMI
    while: WHILE expr SEMI
    let: LET IDENT BE expr ASMUT? SEMI
    modify: MODIFY IDENT TO expr SEMI
    input: INPUT STR? SEMI
    if: IF expr SEMI
    elif: ELIF expr SEMI
    else: ELSE SEMI
    end: END SEMI
    roll: ROLL expr DICE WITH expr FACE SEMI
    halt: HALT SEMI
    break: BREAK SEMI
    enablewait: ENABLEWAIT SEMI
    disablewait: DISABLEWAIT SEMI

    expr: _expr_item+
    _expr_item: NUM | IDENT | TRUE | FALSE | ARI_OP | REL_OP | LPAREN | RPAREN

    %declare ASMUT BE TO DICE WITH FACE TRUE FALSE
    %declare PRINT SUB CALL WHILE LET MODIFY INPUT IF ELIF ELSE END ROLL HALT BREAK ENABLEWAIT DISABLEWAIT
    %declare ARI_OP REL_OP NUM IDENT STR SEMI COMMA LPAREN RPAREN
"""


#hands the tokens of lex.lex to lark
class token_feed(Lexer):
    def __init__(self, lexer_conf):
        pass

    def lex(self, data):
        #lark passes either the raw string or a slice wrapping it
        raw = data if isinstance(data, str) else data.text
        for tok in lex.lex(raw).tokens:
            yield Token(tok.terminal(), str(tok.content), line=tok.loc.row, column=tok.loc.col)


parser = Lark(grammar, parser='lalr', lexer=token_feed)


def parse(raw):
    log.debug("parsing statements")
    return parser.parse(raw)


#readable spelling of a terminal for diagnostics
def spelling(terminal):
    match terminal:
        case 'SEMI':   return "';'"
        case 'COMMA':  return "','"
        case 'LPAREN': return "'('"
        case 'RPAREN': return "')'"
        case 'ARI_OP': return 'an arithmetic operator'
        case 'REL_OP': return 'a comparison'
        case 'NUM':    return 'a number'
        case 'IDENT':  return 'an identifier'
        case 'STR':    return 'a string'
        case '$END':   return 'end of input'
        case x:        return f"'{x.lower()}'"
