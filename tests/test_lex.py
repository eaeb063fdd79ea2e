import pytest

from rollscript import lex
from rollscript import sym
from rollscript import error


def kinds(raw):
    return [(t.kind, t.content) for t in lex.lex(raw).tokens]


def test_let_statement():
    assert kinds("let x be 1 + 2 asmut;") == [
        ('inst', 'let'),
        ('iden', 'x'),
        ('key', 'be'),
        ('num', 1),
        ('ari', '+'),
        ('num', 2),
        ('key', 'asmut'),
        ('semi', ';'),
    ]


def test_words_are_case_insensitive():
    assert kinds('PRINT "Hi";') == [('inst', 'print'), ('str', 'Hi'), ('semi', ';')]
    assert kinds("EnableWait;")[0] == ('inst', 'enablewait')


def test_word_must_end_at_separator():
    assert kinds("bed be") == [('iden', 'bed'), ('key', 'be')]
    assert kinds("endgame end;") == [('iden', 'endgame'), ('inst', 'end'), ('semi', ';')]
    assert kinds("dice1")[0] == ('iden', 'dice1')


def test_plural_keywords():
    assert kinds("roll 2 dices with 6 faces;") == [
        ('inst', 'roll'),
        ('num', 2),
        ('key', 'dice'),
        ('key', 'with'),
        ('num', 6),
        ('key', 'face'),
        ('semi', ';'),
    ]


def test_relational_longest_match():
    assert kinds("a <= b < c != d") == [
        ('iden', 'a'), ('rel', '<='), ('iden', 'b'),
        ('rel', '<'), ('iden', 'c'), ('rel', '!='), ('iden', 'd'),
    ]


def test_operators_and_parens_split_identifiers():
    assert kinds("(hp-1)*x") == [
        ('lparen', '('), ('iden', 'hp'), ('ari', '-'), ('num', 1),
        ('rparen', ')'), ('ari', '*'), ('iden', 'x'),
    ]


def test_comment_and_locations():
    lexed = lex.lex("# heading\n  print x; # trailing\n")
    assert [t.loc for t in lexed.tokens] == [
        lex.location(2, 3), lex.location(2, 9), lex.location(2, 10)
    ]
    assert lexed.lines == ["# heading", "  print x; # trailing"]


def test_hash_inside_string_is_text():
    assert kinds('print "#1";') == [('inst', 'print'), ('str', '#1'), ('semi', ';')]


def test_unterminated_string():
    with pytest.raises(error.LexError, match="String is not terminated") as info:
        lex.lex('let a be 1;\nprint "oops;')
    assert info.value.loc == lex.location(2, 7)


def test_unexpected_character():
    with pytest.raises(error.LexError, match="Unexpected character '='") as info:
        lex.lex("let a = 1;")
    assert info.value.loc == lex.location(1, 7)


def test_literal_out_of_range():
    assert kinds(str(sym.int_max)) == [('num', sym.int_max)]
    with pytest.raises(error.LexError, match="out of range"):
        lex.lex(str(sym.int_max + 1))


def test_terminal_names():
    tokens = lex.lex('let x be 1 < 2; print "a", (x);').tokens
    assert [t.terminal() for t in tokens] == [
        'LET', 'IDENT', 'BE', 'NUM', 'REL_OP', 'NUM', 'SEMI',
        'PRINT', 'STR', 'COMMA', 'LPAREN', 'IDENT', 'RPAREN', 'SEMI',
    ]


def test_listing():
    text = str(lex.lex("halt;"))
    assert "   1 |halt;" in text
    assert "inst(halt) semi(;)" in text
