"""Normal-order beta reduction.

A redex is an application whose function is an abstraction, (λx.M) N; contracting it gives M[x := N]. The reducer
always contracts the leftmost outermost redex: the function position of an application is searched completely before
its argument, and an application is checked for being a redex before either of its children. By the standardization
theorem this strategy reaches the beta-normal form whenever one exists, even if some unused argument diverges:

```
((λx.λy.y) ((λx.(x x)) (λx.(x x))))  ->  λy.y
```

Reduction is an explicit loop over single steps, bounded by max_steps (and optionally a cancelled() callback), so a
divergent term such as ((λx.(x x)) (λx.(x x))) ends in NonTerminationError instead of hanging the host.
"""

from dataclasses import replace

from lambdacalc.lang.error import GenericException
from lambdacalc.pure.substitution import substitute
from lambdacalc.pure.term import Abstraction, Application


class NonTerminationError(GenericException):
    """Reduction was stopped before reaching a beta-normal form. term is the partially reduced term."""

    def __init__(self, original, term, steps, cancelled=False):
        if cancelled:
            msg = "reduction of '{}' was cancelled after {} steps"
        else:
            msg = "'{}' did not reach a beta-normal form within {} steps"
        super().__init__(msg, (original, steps), diagnosis=False)

        self.original = original
        self.term = term
        self.steps = steps
        self.cancelled = cancelled


def left_outer_redex(term):
    """Returns the path (list of field names) to the leftmost outermost redex in term, or None if term is in normal
    form.
    """
    stack = [(term, [])]
    while stack:
        node, path = stack.pop()
        if isinstance(node, Application):
            if isinstance(node.function, Abstraction):
                return path
            stack.append((node.argument, path + ["argument"]))
            stack.append((node.function, path + ["function"]))  # popped first
        elif isinstance(node, Abstraction):
            stack.append((node.body, path + ["body"]))
    return None


def get_node(term, path):
    """Gets node at position specified by path. path=[] will return term."""
    for field in path:
        term = getattr(term, field)
    return term


def set_node(term, path, node):
    """Returns a copy of term with the node at path replaced by node. Nodes off the path are shared, not copied."""
    spine = [term]
    for field in path:
        spine.append(getattr(spine[-1], field))

    for parent, field in zip(reversed(spine[:-1]), reversed(path)):
        node = replace(parent, **{field: node})
    return node


def contract(redex):
    """(λx.M) N -> M[x := N]"""
    abstraction, argument = redex.function, redex.argument
    return substitute(abstraction.body, abstraction.bound, argument)


class NormalOrderReducer:
    """Implements normal-order beta reduction of a term."""
    MAX_STEPS = 10000

    def __init__(self, term, max_steps=None, cancelled=None):
        self.original = term
        self.tree = term

        self.max_steps = max_steps if max_steps is not None else NormalOrderReducer.MAX_STEPS
        self.cancelled = cancelled

        self.steps = 0
        self.reduced = False

    def step(self):
        """Contracts the leftmost outermost redex of self.tree. Returns False if self.tree is already in normal
        form.
        """
        path = left_outer_redex(self.tree)
        if path is None:
            return False

        self.tree = set_node(self.tree, path, contract(get_node(self.tree, path)))
        self.steps += 1
        return True

    def beta_reduce(self, error_handler=None):
        """Reduces self.tree to beta-normal form and returns it. error_handler, if given, is told about every step.
        Raises NonTerminationError if max_steps is exceeded or cancelled() returns True.
        """
        while True:
            if self.cancelled is not None and self.cancelled():
                raise NonTerminationError(self.original, self.tree, self.steps, cancelled=True)

            if self.steps >= self.max_steps:
                if left_outer_redex(self.tree) is None:
                    break
                raise NonTerminationError(self.original, self.tree, self.steps)

            if not self.step():
                break
            if error_handler is not None:
                error_handler.register_step("β", self.tree)

        self.reduced = True
        return self.tree

    def __repr__(self):
        return f"NormalOrderReducer('{self.tree}', steps={self.steps})"


def reduce_to_normal_form(term, max_steps=None, cancelled=None):
    """Returns the beta-normal form of term. Raises NonTerminationError if it isn't reached within max_steps."""
    return NormalOrderReducer(term, max_steps, cancelled).beta_reduce()
