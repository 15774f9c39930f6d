"""Assignment table for a lambdacalc session, and name expansion.

Names are expanded like macros, not captured like closures: a name used in a statement behaves exactly as if the term
last assigned to it had been written out in its place. Stored terms are kept unreduced and are expanded when used, so
a definition may refer to names that are only assigned later:

```
A = B
B = λx.x
A          ; -> λx.x
```

Expansion is capture-avoiding: if a stored term has a free variable that an abstraction of the using statement binds,
that abstraction is alpha-converted. Names with no assignment are left as free variables.
"""

from lambdacalc.lang.error import GenericException
from lambdacalc.pure.substitution import substitute_all
from lambdacalc.pure.term import free_vars


class RecursiveDefinitionError(GenericException):
    """A name's stored term refers back to the name itself, directly or through other names."""

    def __init__(self, cycle):
        super().__init__("recursive definitions not supported: '{}'", " -> ".join(cycle), diagnosis=False)
        self.cycle = cycle


class Environment:
    """Ordered mapping of name to the exact term last assigned to it. One instance per session."""

    def __init__(self):
        self._terms = {}

    def assign(self, name, term):
        """Binds term to name, replacing any earlier assignment (which keeps its original position in the order)."""
        self._terms[name] = term

    def lookup(self, name):
        """Returns the term assigned to name, or None."""
        return self._terms.get(name)

    def expand(self, term):
        """Returns term with every free assigned name replaced by its (transitively expanded) term."""
        return expand(term, self)

    def __contains__(self, name):
        return name in self._terms

    def __len__(self):
        return len(self._terms)

    def __iter__(self):
        return iter(self._terms.items())

    def __repr__(self):
        return f"Environment({', '.join(self._terms)})"


def expand(term, env):
    """Name expansion of term against env. Raises RecursiveDefinitionError if a used name's definition refers back to
    itself.
    """
    expanded = {}

    def expansion(name, chain):
        if name in chain:
            raise RecursiveDefinitionError(chain[chain.index(name):] + [name])
        if name not in expanded:
            expanded[name] = expand_names(env.lookup(name), chain + [name])
        return expanded[name]

    def expand_names(node, chain):
        mapping = {name: expansion(name, chain) for name in sorted(free_vars(node)) if name in env}
        return substitute_all(node, mapping)

    return expand_names(term, [])
