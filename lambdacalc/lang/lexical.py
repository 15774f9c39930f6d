"""Lexical analysis for lambdacalc programs, a shallow wrapper around pure lambda calculus.

All grammar can be loosely defined as follows:

```
<program>    ::= (<statement> ";"*)* <end of input>
<statement>  ::= <assign_stmt> | <exec_stmt>

<assign_stmt> ::= <variable> "=" <λ-term>   ; binds the unreduced λ-term to the name, prints nothing
<exec_stmt>   ::= <λ-term>                  ; will be reduced and outputted when the program is run
```

Statements need no separator: `I = λx.x (I y)` is an assignment followed by an executable statement. See
pure/lexical.py for <λ-term>.
"""

from dataclasses import dataclass, field

from lambdacalc.pure.lexical import EQUALS, NAME, SEMICOLON, Parser
from lambdacalc.pure.term import Abstraction, Application, Variable


@dataclass(frozen=True)
class AssignStmt:
    """name = term. source, line_num and line locate the statement in its program for error messages."""
    name: str
    term: "Abstraction | Application | Variable"
    source: str = field(default="", compare=False)
    line_num: int = field(default=None, compare=False)
    line: str = field(default="", compare=False)

    def __str__(self):
        return f"{self.name} = {self.term}"


@dataclass(frozen=True)
class ExecStmt:
    """A bare λ-term, reduced to normal form when run."""
    term: "Abstraction | Application | Variable"
    source: str = field(default="", compare=False)
    line_num: int = field(default=None, compare=False)
    line: str = field(default="", compare=False)

    def __str__(self):
        return str(self.term)


def parse_stmt(parser):
    """Parses the statement starting at parser's current token."""
    first = parser.peek()
    line = parser.line_of(first)

    if first.kind == NAME and parser.peek(1).kind == EQUALS:
        parser.advance()
        parser.advance()
        term = parser.term()
        source = parser.source_between(first, parser.tokens[parser.pos - 1])
        return AssignStmt(first.text, term, source, first.line_num, line)

    term = parser.term()
    if parser.peek().kind == EQUALS:
        raise parser.error("left-hand side of {1} must be a variable", parser.peek(), "'='")

    source = parser.source_between(first, parser.tokens[parser.pos - 1])
    return ExecStmt(term, source, first.line_num, line)


def parse_program(source, first_line=1):
    """Parses every statement in source, in order. Raises GenericException on the first syntax error."""
    parser = Parser(source, first_line)
    stmts = []

    while not parser.at_end():
        stmts.append(parse_stmt(parser))
        while parser.peek().kind == SEMICOLON:
            parser.advance()

    return stmts
