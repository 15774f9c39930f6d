"""Pure lambda calculus tokenizer and parser.

Surface grammar of a single λ-term:

```
<expression>  ::= <abstraction> | <application> | <variable> | "(" <expression> ")"
<abstraction> ::= ("\" | "λ") <variable> "." <expression>
<application> ::= "(" <expression> <expression> ")"   ; always binary, always parenthesized
<variable>    ::= one or more alphanumeric characters
```

Whitespace (space, tab, newline) is insignificant between tokens. Because applications must be parenthesized, an
abstraction body never extends past a single expression: `λx.x y` is the abstraction `λx.x` followed by `y`, and the
application of x to y under the binder is written `λx.(x y)`.

The grammar for statements (assignments and programs) builds on this one and lives in lang/lexical.py.
"""

from dataclasses import dataclass

from lambdacalc.lang.error import GenericException
from lambdacalc.pure.term import Abstraction, Application, Variable


LAMBDA = "<lambda>"
PERIOD = "<period>"
OPEN_PAREN = "<open_paren>"
CLOSE_PAREN = "<close_paren>"
EQUALS = "<equals>"
SEMICOLON = "<semicolon>"
NAME = "<name>"
END = "<end>"

BUILTINS = {
    "λ": LAMBDA,
    "\\": LAMBDA,
    ".": PERIOD,
    "(": OPEN_PAREN,
    ")": CLOSE_PAREN,
    "=": EQUALS,
    ";": SEMICOLON,
}
WHITESPACE = " \t\r"


@dataclass(frozen=True)
class Token:
    """A single token. line_num is 1-based, col is 0-based within the line, offset is 0-based within the source."""
    kind: str
    text: str
    line_num: int
    col: int
    offset: int


def tokenize(source, first_line=1):
    """Splits source into tokens, ending with an END token. Raises GenericException on illegal characters. Line
    numbers count from first_line.
    """
    lines = source.split("\n")
    tokens = []

    line_num, col, idx = first_line, 0, 0
    while idx < len(source):
        char = source[idx]

        if char == "\n":
            line_num += 1
            col = 0
            idx += 1
            continue

        if char in WHITESPACE:
            length = 1
        elif char in BUILTINS:
            length = 1
            tokens.append(Token(BUILTINS[char], char, line_num, col, idx))
        elif char.isalnum():
            length = 1
            while idx + length < len(source) and source[idx + length].isalnum():
                length += 1
            tokens.append(Token(NAME, source[idx:idx + length], line_num, col, idx))
        else:
            line = lines[line_num - first_line]
            msg = "'{}' contains illegal character '{}'"
            raise GenericException(msg, (line, char), start=col, end=col + 1, line_num=line_num)

        col += length
        idx += length

    if tokens:  # END sits right after the last token
        last = tokens[-1]
        tokens.append(Token(END, "", last.line_num, last.col + len(last.text), last.offset + len(last.text)))
    else:
        tokens.append(Token(END, "", first_line, 0, 0))
    return tokens


class Parser:
    """Recursive-descent parser over the tokens of source. Shared by parse_term and the statement parser."""
    DESCRIPTIONS = {
        LAMBDA: "'λ'",
        PERIOD: "'.'",
        OPEN_PAREN: "'('",
        CLOSE_PAREN: "')'",
        EQUALS: "'='",
        SEMICOLON: "';'",
        NAME: "variable",
        END: "end of input",
    }

    def __init__(self, source, first_line=1):
        self.source = source
        self.lines = source.split("\n")
        self.first_line = first_line
        self.tokens = tokenize(source, first_line)
        self.pos = 0

    def line_of(self, token):
        """Returns the source line token is on."""
        return self.lines[token.line_num - self.first_line]

    def peek(self, ahead=0):
        """Returns the token ahead tokens after the current one (END if past the end)."""
        return self.tokens[min(self.pos + ahead, len(self.tokens) - 1)]

    def advance(self):
        token = self.peek()
        if token.kind != END:
            self.pos += 1
        return token

    def at_end(self):
        return self.peek().kind == END

    def expect(self, kind):
        """Consumes and returns the current token if it is of kind, otherwise raises a syntax error."""
        token = self.peek()
        if token.kind != kind:
            raise self.error("expected {1}, got {2}", token, Parser.DESCRIPTIONS[kind])
        return self.advance()

    def error(self, msg, token, *args):
        """Returns a GenericException pointing at token. In msg, {1}, {2}... are args followed by a description of the
        token; {0} is the offending line.
        """
        line = self.line_of(token)
        got = f"'{token.text}'" if token.kind != END else Parser.DESCRIPTIONS[END]
        end = token.col + max(len(token.text), 1)
        return GenericException(msg, (line, *args, got), start=token.col, end=end, line_num=token.line_num)

    def source_between(self, first, last):
        """Returns the source text spanned by tokens first through last."""
        return self.source[first.offset:last.offset + len(last.text)]

    def term(self):
        """Parses a single <expression>."""
        token = self.peek()

        if token.kind == LAMBDA:
            self.advance()
            bound = self.expect(NAME)
            self.expect(PERIOD)
            return Abstraction(bound.text, self.term())

        elif token.kind == NAME:
            self.advance()
            return Variable(token.text)

        elif token.kind == OPEN_PAREN:
            self.advance()
            first = self.term()
            if self.peek().kind == CLOSE_PAREN:
                self.advance()
                return first

            second = self.term()
            if self.peek().kind != CLOSE_PAREN:
                msg = "expected ')' closing the application opened at column {1}, got {2}"
                raise self.error(msg, self.peek(), token.col + 1)
            self.advance()
            return Application(first, second)

        raise self.error("expected λ-term, got {1}", token)


def parse_term(source):
    """Parses source, which must contain exactly one λ-term."""
    parser = Parser(source)
    if parser.at_end():
        raise GenericException("λ-term cannot be empty", diagnosis=False)

    term = parser.term()
    parser.expect(END)
    return term
