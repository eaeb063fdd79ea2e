
from dataclasses import dataclass
from dataclasses import field

from . import sym
from . import error


@dataclass(frozen=True)
class location:
    row : int
    col : int

    def __str__(self):
        return f"{self.row}:{self.col}"


@dataclass(frozen=True)
class token:
    kind    : str
    content : str | int
    loc     : location

    def __str__(self):
        match self.kind:
            case 'str': return f'"{self.content}"'
            case _:     return str(self.content)

    #name of the grammar terminal this token feeds
    def terminal(self):
        match self.kind:
            case 'key' | 'inst': return self.content.upper()
            case 'ari':          return 'ARI_OP'
            case 'rel':          return 'REL_OP'
            case 'num':          return 'NUM'
            case 'iden':         return 'IDENT'
            case 'str':          return 'STR'
            case 'semi':         return 'SEMI'
            case 'comma':        return 'COMMA'
            case 'lparen':       return 'LPAREN'
            case 'rparen':       return 'RPAREN'


@dataclass
class lexed:
    lines  : list[str] = field(default_factory=lambda: [])
    tokens : list[token] = field(default_factory=lambda: [])

    def at(self):
        return {tok.loc: tok for tok in self.tokens}

    def __str__(self):
        out = []
        i = 0
        for row, line in enumerate(self.lines, 1):
            out.append(f"{row:>4} |{line}")
            items = []
            while i < len(self.tokens) and self.tokens[i].loc.row == row:
                tok = self.tokens[i]
                items.append(f"{tok.kind}({tok})")
                i += 1
            if items:
                out.append("     | " + " ".join(items))
        return "\n".join(out)


singles = {
    sym.eos:    'semi',
    sym.delim:  'comma',
    sym.lparen: 'lparen',
    sym.rparen: 'rparen',
}


def is_sep(char):
    return char.isspace() or char in sym.reserved_chars

def is_iden_char(char):
    return not char.isspace() and char not in sym.reserved_chars


#case insensitive, the word must not run on into an identifier ("bed" is not "be")
def match_word(spelling, rest):
    size = len(spelling)
    if rest[:size].lower() != spelling:
        return False
    return size == len(rest) or is_sep(rest[size])

def match_symbol(spelling, rest):
    return rest.startswith(spelling)


def longest(table, rest, matcher):
    found = [item for item in table if matcher(item, rest)]
    return max(found, key=len) if found else None


def scan(line, col, loc):
    rest = line[col:]
    char = rest[0]

    if char in singles:
        return singles[char], char, 1

    if char == sym.quote:
        end = rest.find(sym.quote, 1)
        if end < 0:
            raise error.LexError("String is not terminated", loc)
        return 'str', rest[1:end], end + 1

    for spelling, key in sym.plurals.items():
        if match_word(spelling, rest):
            return 'key', key, len(spelling)

    for kind, table, matcher in (
        ('key',  sym.keywords, match_word),
        ('inst', sym.insts,    match_word),
        ('ari',  sym.ari_ops,  match_symbol),
        ('rel',  sym.rel_ops,  match_symbol),
    ):
        item = longest(table, rest, matcher)
        if item is not None:
            return kind, item, len(item)

    if char.isdecimal():
        size = 1
        while size < len(rest) and rest[size].isdecimal():
            size += 1
        value = int(rest[:size])
        if value > sym.int_max:
            raise error.LexError(f"Integer literal {value} is out of range", loc)
        return 'num', value, size

    if is_iden_char(char):
        size = 1
        while size < len(rest) and is_iden_char(rest[size]):
            size += 1
        return 'iden', rest[:size], size

    raise error.LexError(f"Unexpected character '{char}'", loc)


def lex(raw) -> lexed:
    lines = raw.splitlines()
    tokens = []

    for row, line in enumerate(lines, 1):
        col = 0
        while col < len(line):
            if line[col].isspace():
                col += 1
                continue

            #rest of the line is a comment
            if line[col] == sym.comment:
                break

            loc = location(row, col + 1)
            kind, content, width = scan(line, col, loc)
            tokens.append(token(kind, content, loc))
            col += width

    return lexed(lines, tokens)
