"""Checks for the laws a value and modifier algebra has to obey.

The tree never checks these at runtime. Broken algebra gives quietly wrong
aggregates, so run these over generated samples in the host's own tests.
"""

from __future__ import annotations
from typing import Any


def check_associative(a: Any, b: Any, c: Any) -> bool:
    """`a.merge(b.merge(c)) == a.merge(b).merge(c)`"""
    return a.merge(b.merge(c)) == a.merge(b).merge(c)


def check_identity(a: Any) -> bool:
    """`empty().merge(a) == a.merge(empty()) == a`

    The identity comes from `type(a).empty()`, so a Pair value has to be an
    instance of a `Pair.of(A, B)` class. A bare `Pair` raises TypeError.
    """
    empty = type(a).empty()
    return empty.merge(a) == a and a.merge(empty) == a


def check_distributive(m: Any, a: Any, b: Any) -> bool:
    """`m.apply(a.merge(b)) == m.apply(a).merge(m.apply(b))`"""
    return m.apply(a.merge(b)) == m.apply(a).merge(m.apply(b))


def check_composition(new: Any, old: Any, a: Any) -> bool:
    """`new.merge(old).apply(a) == new.apply(old.apply(a))`

    The newer modifier is always on the left. Order sensitive modifiers
    (assignment, affine maps) fail this if they compose the other way round.
    """
    return new.merge(old).apply(a) == new.apply(old.apply(a))


def check_modifier_identity(a: Any, identity: Any) -> bool:
    """The identity modifier leaves values untouched"""
    return identity.apply(a) == a
