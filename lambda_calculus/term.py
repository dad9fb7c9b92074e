"""Lambda terms in de Bruijn notation.

Formally, a term is one of

```
<term> ::= <index>           ; "variable": positive integer, 1 refers to the nearest enclosing abstraction
         | "λ" <term>        ; "abstraction": introduces one anonymous binder
         | <term> <term>     ; "application": associating by left, 1 2 3 = ((1 2) 3)
```

An index larger than the number of enclosing abstractions is a free variable. Terms are trees: every node owns its
children, and clone() produces a copy that shares no nodes with the original.

Decomposition helpers come in three flavours, mirroring how a caller wants to use the result:
- unabs/unapp/lhs/rhs return independent clones of the requested parts;
- the *_ref variants return the live child nodes themselves;
- the *_mut variants return Slots, writable handles that replace a child in place without rebuilding its parent.
"""

from abc import abstractmethod, ABC
from enum import Enum

from lambda_calculus.error import NotAbstraction, NotApplication, NotVariable


class Notation(Enum):
    """Concrete syntaxes understood by the parser and produced by Term.display."""
    CLASSIC = "classic"      # named variables: λx.λy.x
    DE_BRUIJN = "de_bruijn"  # anonymous binders and indices: λλ2


class Slot:
    """Writable reference to one child position of a term node."""

    def __init__(self, parent, attr):
        self.parent = parent
        self.attr = attr

    @property
    def term(self):
        return getattr(self.parent, self.attr)

    @term.setter
    def term(self, node):
        setattr(self.parent, self.attr, node)

    def __repr__(self):
        return f"Slot({self.attr}={self.term!r})"


class Term(ABC):
    """Superclass of the three kinds of lambda term. Provides construction sugar, decomposition and the structural
    queries used by the reduction engine.
    """
    _children = ()  # attribute names of child nodes, in path order

    @abstractmethod
    def clone(self):
        """Returns a deep copy of self that shares no nodes with self."""

    @abstractmethod
    def _display(self, notation, depth, free):
        """Renders self in notation, depth being the number of enclosing abstractions and free the names already
        given to free variables.
        """

    @abstractmethod
    def _max_free_index(self, depth):
        """Returns how far beyond the depth enclosing abstractions the deepest free variable of self reaches."""

    def app(self, other):
        """Returns self applied to other. Chains associate by left: t1.app(t2).app(t3) = (t1 t2) t3."""
        return Application(self, other)

    apply_to = app

    def is_redex(self):
        """Whether or not self is an abstraction applied to an argument."""
        return isinstance(self, Application) and isinstance(self.function, Abstraction)

    def unvar(self):
        """Returns the index of a Variable."""
        if not isinstance(self, Variable):
            raise NotVariable(self)
        return self.index

    def unabs(self):
        return self.unabs_ref().clone()

    def unabs_ref(self):
        if not isinstance(self, Abstraction):
            raise NotAbstraction(self)
        return self.body

    def unabs_mut(self):
        if not isinstance(self, Abstraction):
            raise NotAbstraction(self)
        return Slot(self, "body")

    def unapp(self):
        function, argument = self.unapp_ref()
        return function.clone(), argument.clone()

    def unapp_ref(self):
        if not isinstance(self, Application):
            raise NotApplication(self)
        return self.function, self.argument

    def unapp_mut(self):
        if not isinstance(self, Application):
            raise NotApplication(self)
        return Slot(self, "function"), Slot(self, "argument")

    def lhs(self):
        return self.unapp_ref()[0].clone()

    def lhs_ref(self):
        return self.unapp_ref()[0]

    def lhs_mut(self):
        return self.unapp_mut()[0]

    def rhs(self):
        return self.unapp_ref()[1].clone()

    def rhs_ref(self):
        return self.unapp_ref()[1]

    def rhs_mut(self):
        return self.unapp_mut()[1]

    def abstraction_depth(self):
        """Returns the number of abstractions directly nested at the top of self: λλ1 2 has depth 2."""
        depth = 0
        node = self
        while isinstance(node, Abstraction):
            depth += 1
            node = node.body
        return depth

    def spine(self):
        """Returns (head, arguments) of a chain of applications: 1 2 (3 4) gives (1, [2, 3 4]). The returned nodes
        are the live children of self.
        """
        arguments = []
        node = self
        while isinstance(node, Application):
            arguments.append(node.argument)
            node = node.function
        arguments.reverse()
        return node, arguments

    def arity(self):
        """Number of arguments the head of self is applied to."""
        return len(self.spine()[1])

    def max_free_index(self):
        """Returns the largest free index of self relative to its own top, 0 if self is closed."""
        return self._max_free_index(0)

    def is_closed(self):
        return self.max_free_index() == 0

    def get(self, idxs):
        """Gets node at positions specified by idxs. idxs=[] will return self."""
        node = self
        for idx in idxs:
            node = getattr(node, node._children[idx])
        return node

    def set(self, idxs, node):
        """Sets node at positions specified by idxs. idxs=[] will raise an error."""
        if not idxs:
            raise ValueError("idxs cannot be empty")

        *parents, this = idxs
        parent = self.get(parents)
        setattr(parent, parent._children[this], node)

    def display(self, notation=Notation.DE_BRUIJN):
        """Returns self as source text the parser accepts in the same notation. Free variables are displayed as
        capitalized names in classic notation.
        """
        return self._display(notation, 0, {})

    def __str__(self):
        return self.display()


class Variable(Term):
    """de Bruijn index referring to the index-th enclosing abstraction."""

    def __init__(self, index):
        self.index = index

    def clone(self):
        return Variable(self.index)

    def _display(self, notation, depth, free):
        if notation is Notation.DE_BRUIJN:
            return str(self.index)
        if self.index <= depth:
            return _bound_name(depth - self.index)
        outer = self.index - depth
        if outer not in free:
            free[outer] = _bound_name(len(free)).upper()
        return free[outer]

    def _max_free_index(self, depth):
        return max(self.index - depth, 0)

    def __eq__(self, other):
        return isinstance(other, Variable) and self.index == other.index

    def __repr__(self):
        return f"Variable({self.index})"


class Abstraction(Term):
    """Abstraction over one anonymous variable."""
    _children = ("body",)

    def __init__(self, body):
        self.body = body

    def clone(self):
        return Abstraction(self.body.clone())

    def _display(self, notation, depth, free):
        body = self.body._display(notation, depth + 1, free)
        if notation is Notation.DE_BRUIJN:
            return f"λ{body}"
        return f"λ{_bound_name(depth)}.{body}"

    def _max_free_index(self, depth):
        return self.body._max_free_index(depth + 1)

    def __eq__(self, other):
        return isinstance(other, Abstraction) and self.body == other.body

    def __repr__(self):
        return f"Abstraction({self.body!r})"


class Application(Term):
    """Application of function to argument. Chains of applications are walked along their spine, so long
    left-nested chains such as x x x ... x do not nest Python calls.
    """
    _children = ("function", "argument")

    def __init__(self, function, argument):
        self.function = function
        self.argument = argument

    def clone(self):
        head, arguments = self.spine()
        return application(head.clone(), *(argument.clone() for argument in arguments))

    def _display(self, notation, depth, free):
        head, arguments = self.spine()

        parts = [head._display(notation, depth, free)]
        if isinstance(head, Abstraction):
            parts[0] = f"({parts[0]})"

        for argument in arguments:
            text = argument._display(notation, depth, free)
            parts.append(text if isinstance(argument, Variable) else f"({text})")

        return " ".join(parts)

    def _max_free_index(self, depth):
        head, arguments = self.spine()
        return max(node._max_free_index(depth) for node in [head] + arguments)

    def __eq__(self, other):
        if not isinstance(other, Application):
            return False

        head, arguments = self.spine()
        other_head, other_arguments = other.spine()
        return len(arguments) == len(other_arguments) and head == other_head and arguments == other_arguments

    def __repr__(self):
        head, arguments = self.spine()
        result = repr(head)
        for argument in arguments:
            result = f"Application({result}, {argument!r})"
        return result


def _bound_name(n):
    """Returns the n-th variable name: a, b, ..., z, a1, b1, ..."""
    letter, generation = "abcdefghijklmnopqrstuvwxyz"[n % 26], n // 26
    return letter + str(generation) if generation else letter


def variable(index):
    return Variable(index)


def abstraction(body, count=1):
    """Wraps body in count abstractions: abstraction(Variable(2), 2) is λλ2."""
    for _ in range(count):
        body = Abstraction(body)
    return body


def application(function, argument, *arguments):
    """Applies function to every argument in turn: application(1, 2, 3) is (1 2) 3."""
    term = Application(function, argument)
    for arg in arguments:
        term = Application(term, arg)
    return term
