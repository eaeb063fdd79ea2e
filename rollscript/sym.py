
#keywords
key_asmut = 'asmut'
key_be    = 'be'
key_to    = 'to'
key_dice  = 'dice'
key_with  = 'with'
key_face  = 'face'
key_true  = 'true'
key_false = 'false'

#instruction words
inst_print       = 'print'
inst_sub         = 'sub'
inst_call        = 'call'
inst_while       = 'while'
inst_let         = 'let'
inst_modify      = 'modify'
inst_input       = 'input'
inst_if          = 'if'
inst_elif        = 'elif'
inst_else        = 'else'
inst_end         = 'end'
inst_roll        = 'roll'
inst_halt        = 'halt'
inst_break       = 'break'
inst_enablewait  = 'enablewait'
inst_disablewait = 'disablewait'

#arithmetic
op_add = '+'
op_sub = '-'
op_mul = '*'
op_div = '/'
op_mod = '%'

#relational, two char spellings first so '<=' never lexes as '<'
op_eq  = '=='
op_neq = '!='
op_le  = '<='
op_ge  = '>='
op_lt  = '<'
op_gt  = '>'

eos     = ';'
delim   = ','
lparen  = '('
rparen  = ')'
quote   = '"'
comment = '#'

#irregular plurals, they lex as key_dice and key_face
plurals = {
    'dices': key_dice,
    'faces': key_face,
}


def _collect(prefix):
    return [
        value for name, value in
        list(globals().items()) #list() to make copy
        if name.startswith(prefix)
    ]

keywords = _collect('key_')
insts    = _collect('inst_')
ari_ops  = [op_add, op_sub, op_mul, op_div, op_mod]
rel_ops  = [op_eq, op_neq, op_le, op_ge, op_lt, op_gt]

#precedence, loosest first
prec = [
    (op_eq, op_neq, op_le, op_ge, op_lt, op_gt),
    (op_add, op_sub),
    (op_mul, op_div, op_mod),
]

def prec_of(op):
    for level, ops in enumerate(prec):
        if op in ops:
            return level
    raise KeyError(op)


#never part of an identifier
reserved_chars = '+-*/%"<>!=;,()#'

#identifiers starting with this are owned by the interpreter
reserved_prefix = '_'
roll_result  = '_roll'
input_result = '_input'

#64 bit signed
int_min = -(2 ** 63)
int_max = 2 ** 63 - 1

max_call_depth = 1000
max_dice = 1_000_000
