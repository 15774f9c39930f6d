"""Capture-avoiding substitution, used both by the reducer (beta-reduction) and by name expansion in the environment.

substitute(t, x, N) replaces every free occurrence of x in t with N. If an abstraction in t binds a name that is free
in N, and x actually occurs under that abstraction, the bound name is alpha-converted to a fresh one first so that N's
free variable is not captured:

```
(λy.(x y))[x := y]  =  λy₀.(y y₀)
```

Subtrees that contain no free occurrence of a substituted name are returned as-is, so the result shares them with the
input, and substituting a name that isn't free in t returns t itself.
"""

from lambdacalc.pure.term import Abstraction, Application, Variable, free_vars, fresh_name


_VISIT, _APPLY, _ABSTRACT = "visit", "apply", "abstract"


def substitute(term, name, new_term):
    """Returns term[name := new_term]."""
    return substitute_all(term, {name: new_term})


def substitute_all(term, mapping):
    """Simultaneous substitution: replaces every free occurrence of each name in mapping with its term."""
    if not mapping:
        return term
    return _substitute(term, dict(mapping), _free_in(mapping))


def _free_in(mapping):
    free = set()
    for new_term in mapping.values():
        free |= free_vars(new_term)
    return free


def _substitute(term, mapping, free):
    """free is the union of the free variables of mapping's terms."""
    done = []  # finished subterms, consumed by the APPLY and ABSTRACT tasks that rebuild their parents
    stack = [(_VISIT, term, mapping, free)]
    while stack:
        task, node, mapping, free = stack.pop()

        if task == _APPLY:
            argument, function = done.pop(), done.pop()
            if function is node.function and argument is node.argument:
                done.append(node)
            else:
                done.append(Application(function, argument))

        elif task == _ABSTRACT:  # node is the (possibly renamed) bound name
            done.append(Abstraction(node, done.pop()))

        elif isinstance(node, Variable):
            done.append(mapping.get(node.name, node))

        elif isinstance(node, Application):
            stack.append((_APPLY, node, None, None))
            stack.append((_VISIT, node.argument, mapping, free))
            stack.append((_VISIT, node.function, mapping, free))

        elif isinstance(node, Abstraction):
            bound, body = node.bound, node.body
            body_free = free_vars(body)

            # bound shadows its own name; names that don't occur in body need no work
            inner = {name: new for name, new in mapping.items() if name != bound and name in body_free}
            if not inner:
                done.append(node)
                continue
            inner_free = free if len(inner) == len(mapping) else _free_in(inner)

            if bound in inner_free:
                renamed = fresh_name(bound, body_free | inner_free | set(inner))
                body = _substitute(body, {bound: Variable(renamed)}, {renamed})
                bound = renamed

            stack.append((_ABSTRACT, bound, None, None))
            stack.append((_VISIT, body, inner, inner_free))

        else:
            raise TypeError(f"not a λ-term: {node!r}")

    return done.pop()
