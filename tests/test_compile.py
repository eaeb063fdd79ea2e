import pytest

from rollscript import tree
from rollscript import objs
from rollscript import expr


def build(raw):
    return tree.build(raw)


def fails(raw, capsys):
    with pytest.raises(SystemExit) as info:
        tree.build(raw)
    assert info.value.code == 1
    return capsys.readouterr().err


def test_sentinel_at_zero():
    program = build("halt;")
    assert type(program[0]) is objs._ill
    assert type(program[1]) is objs._halt
    assert len(program) == 2


def test_if_chain_offsets():
    program = build(
        "if x == 1;\n"
        "print \"a\";\n"
        "elif x == 2;\n"
        "print \"b\";\n"
        "else;\n"
        "print \"c\";\n"
        "end;\n"
    )
    branch_if, branch_elif, branch_else, end = program[1], program[3], program[5], program[7]

    assert type(branch_if) is objs._if
    assert branch_if.offset_to_next == 2            #lands on the elif
    assert type(branch_elif) is objs._elif
    assert branch_elif.offset_to_next == 2          #lands on the else
    assert type(branch_else) is objs._else
    assert branch_else.offset_to_end == 2           #lands on the end
    assert type(end) is objs._end
    assert not end.loop


def test_if_without_else():
    program = build("if true; print \"x\"; print \"y\"; end;")
    assert program[1].offset_to_next == 3
    assert program[4].offset_to_start == 3


def test_while_offsets():
    program = build("while i < 3;\nmodify i to i + 1;\nend;")
    assert type(program[1]) is objs._while
    assert program[1].offset_to_end == 2
    assert program[3].loop
    assert program[3].offset_to_start == 2


def test_break_targets_enclosing_loop_end():
    program = build(
        "while true;\n"         #1
        "while false;\n"        #2
        "break;\n"              #3
        "end;\n"                #4
        "if true;\n"            #5
        "break;\n"              #6
        "end;\n"                #7
        "end;\n"                #8
    )
    assert program[3].offset_to_exit == 1
    assert program[6].offset_to_exit == 2


def test_sub_registration():
    program = build('sub A;\nprint "x";\nend;\ncall A;')
    assert program.subs == {"A": 1}
    assert program[1].offset_to_end == 2
    assert type(program[3]) is objs._subend
    assert type(program[4]) is objs._call


def test_call_before_definition():
    program = build("call later; halt; sub later; end;")
    assert program.subs == {"later": 3}


def test_let_and_modify():
    program = build("let x be 1 asmut;\nlet y be x * 2;\nmodify x to y;")
    assert program[1].is_mut
    assert not program[2].is_mut
    assert str(program[2].init) == "x 2 *"
    assert program[3].name == "x"
    assert str(program[3].value) == "y"


def test_print_arguments_in_order():
    program = build('print "hp: ", hp, "/", 10;')
    args = program[1].args
    assert args[0] == "hp: "
    assert isinstance(args[1], expr.expression)
    assert args[2] == "/"
    assert str(args[3]) == "10"


def test_empty_print():
    assert build("print;")[1].args == []


def test_roll_and_input():
    program = build('roll n + 1 dice with 6 faces;\ninput "Guess?";\ninput;')
    assert str(program[1].count) == "n 1 +"
    assert str(program[1].face) == "6"
    assert program[2].prompt == "Guess?"
    assert program[3].prompt is None


def test_statement_locations():
    program = build("\n  halt;")
    assert str(program[1].loc) == "2:3"


def test_render():
    listing = build("while i < 3; end;").render()
    assert "0000 : ill" in listing
    assert "0001 : while [i 3 <] offset_to_end=1" in listing
    assert "0002 : end offset_to_start=1 loop" in listing


@pytest.mark.parametrize("raw, msg", [
    ("sub A; sub B; end; end;", "You cannot nest Sub"),
    ("sub A; if true; sub B; end; end; end;", "You cannot nest Sub"),
    ("sub A; end; sub A; end;", 'Subroutine name "A" is conflicting'),
    ("elif true;", "A stray ElIf detected"),
    ("else;", "A stray Else detected"),
    ("end;", "A stray End detected"),
    ("while true; else; end;", "Cannot find corresponding If for Else"),
    ("if true; else; elif true; end;", "Cannot find corresponding If for ElIf"),
    ("let _x be 1;", "reserved"),
    ("modify _roll to 1;", "cannot be modified"),
    ("break;", "A stray Break detected"),
    ("while true; sub A; break; end; end;", "A stray Break detected"),
    ("call nowhere;", "Subroutine 'nowhere' is not defined"),
    ("while true;", "'while' block is never closed"),
])
def test_semantic_errors(raw, msg, capsys):
    assert msg in fails(raw, capsys)


def test_expression_error_points_at_token(capsys):
    err = fails("let x be (1 + 2;", capsys)
    assert "Error: Unmatched parenthesis (1:10)" in err
    assert "1    | let x be (1 + 2;" in err
    assert "     | " + " " * 9 + "^" in err


def test_syntax_error(capsys):
    err = fails("let x to 1;", capsys)
    assert "Syntax error: unexpected 'to', expected 'be' (1:7)" in err


def test_missing_semicolon(capsys):
    err = fails("halt", capsys)
    assert "Syntax error: unexpected end of input" in err


def test_lex_error_is_fatal(capsys):
    err = fails('print "abc;', capsys)
    assert "String is not terminated (1:7)" in err
