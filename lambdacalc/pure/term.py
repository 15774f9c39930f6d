"""Pure lambda calculus terms.

The `pure` directory contains the pure lambda calculus: terms, substitution, and reduction. Nothing in here knows about
assignments or sessions.

Formally, pure lambda calculus can be defined as

```
<λ-term> ::= <variable>                 ; "variable"
           | "λ" <variable> "." <λ-term> ; "abstraction"
           | "(" <λ-term> <λ-term> ")"  ; "application" (always binary, always parenthesized)
```

Terms are immutable: every transformation builds a new tree and reuses the subtrees it did not touch, so the same node
object may safely appear in several terms.

Sources: https://plato.stanford.edu/entries/lambda-calculus/#Com,
         http://pages.cs.wisc.edu/~horwitz/CS704-NOTES/1.LAMBDA-CALCULUS.html#NOR
"""

from dataclasses import dataclass

from termcolor import colored


SUBS = ["₀", "₁", "₂", "₃", "₄", "₅", "₆", "₇", "₈", "₉"]


@dataclass(frozen=True)
class Variable:
    """Variable in lambda calculus: an opaque name, compared by equality only."""
    name: str

    def __str__(self):
        return to_lc(self)


@dataclass(frozen=True)
class Abstraction:
    """Abstraction λbound.body: binds bound over body."""
    bound: str
    body: "Term"

    def __str__(self):
        return to_lc(self)


@dataclass(frozen=True)
class Application:
    """Application of function to argument."""
    function: "Term"
    argument: "Term"

    def __str__(self):
        return to_lc(self)


Term = (Variable, Abstraction, Application)


def free_vars(term):
    """Returns the set of names occurring free in term."""
    free = set()
    stack = [(term, frozenset())]
    while stack:
        node, bound = stack.pop()
        if isinstance(node, Variable):
            if node.name not in bound:
                free.add(node.name)
        elif isinstance(node, Abstraction):
            stack.append((node.body, bound | {node.bound}))
        elif isinstance(node, Application):
            stack.append((node.argument, bound))
            stack.append((node.function, bound))
        else:
            raise TypeError(f"not a λ-term: {node!r}")
    return free


def alpha_equals(term, other, mapping=None, other_mapping=None, depth=0):
    """Whether or not two terms are alpha-equivalent. mapping maps each name bound in term to the depth of its nearest
    binder, other_mapping does the same for other. Free variables must match by name.
    """
    stack = [(term, other, mapping or {}, other_mapping or {}, depth)]
    while stack:
        term, other, mapping, other_mapping, depth = stack.pop()

        if isinstance(term, Variable) and isinstance(other, Variable):
            if term.name in mapping or other.name in other_mapping:
                if mapping.get(term.name) != other_mapping.get(other.name):
                    return False
            elif term.name != other.name:
                return False

        elif isinstance(term, Abstraction) and isinstance(other, Abstraction):
            mapping = {**mapping, term.bound: depth}
            other_mapping = {**other_mapping, other.bound: depth}
            stack.append((term.body, other.body, mapping, other_mapping, depth + 1))

        elif isinstance(term, Application) and isinstance(other, Application):
            stack.append((term.argument, other.argument, mapping, other_mapping, depth))
            stack.append((term.function, other.function, mapping, other_mapping, depth))

        else:
            return False

    return True


def subscript(name, num):
    """Returns name with subscript of num."""
    return name + "".join(SUBS[int(digit)] for digit in str(num))


def split(name):
    """Splits name into base and subscript (-1 if name has no subscript)."""
    digits = []
    while name and name[-1] in SUBS:
        digits.insert(0, str(SUBS.index(name[-1])))
        name = name[:-1]
    return name, int("".join(digits)) if digits else -1


def fresh_name(name, avoid):
    """Returns a name like name that isn't in avoid: the base of name with the next unused subscript."""
    base, __ = split(name)
    max_subscript = -1

    for used in avoid:
        used_base, used_subscript = split(used)
        if used_base == base and used_subscript > max_subscript:
            max_subscript = used_subscript

    return subscript(base, max_subscript + 1)


def to_lc(term, color=False):
    """Renders term in surface syntax: λx.body, (f a), x. Abstractions in application position are parenthesized."""
    if not isinstance(term, Term):
        raise TypeError(f"not a λ-term: {term!r}")

    def punct(char):
        return colored(char, "dark_grey") if color else char

    def operand(node):
        if isinstance(node, Abstraction):
            return [punct("("), node, punct(")")]
        return [node]

    lam = colored("λ", "yellow") if color else "λ"

    pieces = []
    stack = [term]  # terms still to render, and text (str) to emit as-is
    while stack:
        node = stack.pop()
        if isinstance(node, str):
            pieces.append(node)
        elif isinstance(node, Variable):
            pieces.append(node.name)
        elif isinstance(node, Abstraction):
            stack.extend([node.body, punct("."), node.bound, lam])
        elif isinstance(node, Application):
            parts = [punct("("), *operand(node.function), " ", *operand(node.argument), punct(")")]
            stack.extend(reversed(parts))
        else:
            raise TypeError(f"not a λ-term: {node!r}")

    return "".join(pieces)


def display(term, indents=0):
    """Displays term as a tree with readable format.

    Format:
    Application(
        Abstraction(bound='x',
            Variable('x')
        ),
        Variable('y')
    )
    """
    pieces = []
    stack = [(term, indents)]
    while stack:
        node, indents = stack.pop()
        if isinstance(node, str):
            pieces.append(node)
            continue

        pad = "    " * indents
        if isinstance(node, Variable):
            pieces.append(f"{pad}Variable('{node.name}')")
        elif isinstance(node, Abstraction):
            stack.append((f"\n{pad})", None))
            stack.append((node.body, indents + 1))
            pieces.append(f"{pad}Abstraction(bound='{node.bound}',\n")
        elif isinstance(node, Application):
            stack.append((f"\n{pad})", None))
            stack.append((node.argument, indents + 1))
            stack.append((",\n", None))
            stack.append((node.function, indents + 1))
            pieces.append(f"{pad}Application(\n")
        else:
            raise TypeError(f"not a λ-term: {node!r}")

    return "".join(pieces)
