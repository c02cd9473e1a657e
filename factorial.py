# See README.md for the derivation in prose. The code follows it
# step-by-step: direct recursion, factories, bounded chains, and
# finally the Y combinator built from self-application.

from contextlib import contextmanager
from pprint import pprint
from typing import Any, Callable
import operator
import sys

import numpy

# Types

IntFn = Callable[[int], int]  # what we're after
Factory = Callable[[IntFn], IntFn]  # domain code
SelfApplicable = Callable[["SelfApplicable"], IntFn]  # half of an IntFn


# Direct recursion
# ================

def factorial(x: int) -> int:
    """The one everybody writes first. It names itself."""
    if x == 0:
        return 1
    return x * factorial(x - 1)


# Factories
# =========

def factorial_factory(f: IntFn) -> IntFn:
    """Domain code. Given a stand-in, f, for 'the recursive call,'
    return business code that calls f instead of itself."""

    def fn(n: int) -> int:
        if n == 0:
            return 1
        return n * f(n - 1)

    return fn


def fibonacci_factory(f: IntFn) -> IntFn:
    """Domain code for slow Fibonacci with Fib(0) = Fib(1) = 1."""

    def fn(n: int) -> int:
        if n == 0 or n == 1:
            return 1
        return f(n - 2) + f(n - 1)

    return fn


# Bounded approximations
# ======================

_RNG = numpy.random.default_rng()


def noise(_n: int) -> float:
    """A deliberately wrong 'recursive call.' Ignores its argument.
    Anything that reaches me comes back as a float in [0, 1), which
    is easy to spot next to a factorial."""
    return float(_RNG.random())


def constantly(value: Any) -> Callable[[int], Any]:
    """Seed that ignores its argument, like Haskell's 'const'."""
    return lambda _n: value


def factorial_up_to(bound: int, seed: Callable[[int], Any] = noise) -> IntFn:
    """Wrap the seed in bound + 1 layers of factorial_factory. The
    result is exact for 0 <= n <= bound. Past that, the innermost
    layer calls the seed. No self-reference anywhere: depth k is
    built only from depth k - 1."""
    try:
        if isinstance(bound, bool):
            raise TypeError(bound)
        depth = operator.index(bound)
    except TypeError:
        raise ValueError(
            f'factorial_up_to: bound {bound!r} must be a '
            f'non-negative integer.') from None
    if depth < 0:
        raise ValueError(
            f'factorial_up_to: bound {bound!r} must be a '
            f'non-negative integer.')
    result = factorial_factory(seed)  # exact at 0 only
    for _ in range(depth):
        result = factorial_factory(result)
    return result


factorial_up_to_0 = factorial_up_to(0)
factorial_up_to_10 = factorial_up_to(10)


# Y, the easy way: native self-reference
# ======================================

def y(f):
    """Y(f) = f(Y(f)), with the right-hand side delayed in a thunk
    of the call arguments. Still cheats: y names itself."""

    def thunk(*args):
        return f(y(f))(*args)

    return thunk


def eager_y(f):
    """Y(f) = f(Y(f)) with no thunk. Python evaluates the argument
    before calling f, so this never reaches a base case. Raises
    RecursionError. Don't use it; look at it."""
    return f(eager_y(f))


class Promise:
    """Call-by-need cell. The computation runs on the first force
    and its value is kept for later forces. Calling a Promise forces
    it and applies the value."""

    def __init__(self, compute: Callable[[], Any]):
        self._compute = compute
        self._forced = False
        self._value = None

    def force(self) -> Any:
        if not self._forced:
            self._value = self._compute()
            self._forced = True
            self._compute = None
        return self._value

    def __call__(self, *args):
        return self.force()(*args)


def lazy_y(f):
    """The undelayed law, y f = f (y f), under lazy semantics: the
    argument is a Promise, so it unfolds only as deep as the base
    case demands."""
    return f(Promise(lambda: lazy_y(f)))


# Y, the hard way: self-application
# =================================

def x(other_x):
    """Generator meant to be applied to itself. Nothing in here
    refers to x by name; the recursion comes in through other_x."""

    def y(f):
        def thunk(*args):
            return f(other_x(other_x)(f))(*args)

        return thunk

    return y


new_y = x(x)

newest_y = \
    (lambda x: lambda f: lambda *a: f(x(x)(f))(*a)) \
        (lambda x: lambda f: lambda *a: f(x(x)(f))(*a))


def self_apply(g: SelfApplicable) -> IntFn:
    return g(g)


def yc(factory: Factory) -> IntFn:
    """new_y for one int argument, with the types spelled out. half
    is half of the function we want; self_apply(half) is all of it.
    half hands the factory a recur that rebuilds the whole function
    only when it is called."""

    def half(me: SelfApplicable) -> IntFn:
        def recur(n: int) -> int:
            return self_apply(me)(n)

        return factory(recur)

    return self_apply(half)


def fully_typed(factory: Factory, n: int) -> int:
    return yc(factory)(n)


# Configuration
# =============

@contextmanager
def recursion_limit(limit: int):
    """Every Y here costs two Python frames per level of n. Raise
    the limit for big n; the old limit comes back on exit."""
    old = sys.getrecursionlimit()
    sys.setrecursionlimit(limit)
    try:
        yield old
    finally:
        sys.setrecursionlimit(old)


if __name__ == '__main__':
    pprint({'factorial(6)': factorial(6)})
    pprint({f'factorial_up_to_0({n})': factorial_up_to_0(n)
            for n in range(3)})
    pprint({f'factorial_up_to_10({n})': factorial_up_to_10(n)
            for n in (10, 11)})

    try:
        eager_y(factorial_factory)
    except RecursionError as e:
        pprint({'eager_y(factorial_factory)': repr(e)})

    pprint({'y(factorial_factory)(6)': y(factorial_factory)(6),
            'lazy_y(factorial_factory)(6)': lazy_y(factorial_factory)(6),
            'new_y(factorial_factory)(6)': new_y(factorial_factory)(6),
            'newest_y(factorial_factory)(6)':
                newest_y(factorial_factory)(6),
            'yc(fibonacci_factory)(20)': fully_typed(fibonacci_factory, 20)})

    with recursion_limit(2000) as old:
        pprint({'old recursion limit': old,
                'newest_y(factorial_factory)(600) digits':
                    len(str(newest_y(factorial_factory)(600)))})
