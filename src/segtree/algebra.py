from __future__ import annotations
from functools import lru_cache
from typing import (
    Any,
    ClassVar,
    Iterator,
    Optional,
    Protocol,
    TypeVar,
)

S = TypeVar("S", bound="Semigroup")
V = TypeVar("V")


class Semigroup(Protocol):
    """A value with an associative merge

    `a.merge(b.merge(c)) == a.merge(b).merge(c)`
    """

    def merge(self: S, other: S) -> S: ...


class Monoid(Semigroup, Protocol):
    """A semigroup with an identity

    `cls.empty().merge(a) == a.merge(cls.empty()) == a`
    """

    @classmethod
    def empty(cls: type[S]) -> S: ...


class Applier(Protocol[V]):
    """An action on values that distributes over merge

    `m.apply(a.merge(b)) == m.apply(a).merge(m.apply(b))`
    """

    def apply(self, to: V) -> V: ...


class Modifier(Monoid, Applier[V], Protocol[V]):
    """A composable action on values

    Composition applies the right hand side first:
    `new.merge(old).apply(a) == new.apply(old.apply(a))`
    """


class Pair:
    """A tuple-ish group of two algebra values that merge and apply component-wise

    A Pair of values merges into a Pair of values, and a Pair of modifiers
    applies to a Pair of values. Use `Pair.of(A, B)` to get a class that
    also knows its identity.
    """

    __slots__: tuple[str, ...] = ("first", "second")
    first_type: ClassVar[Optional[type]] = None
    second_type: ClassVar[Optional[type]] = None

    def __init__(self, first: Any, second: Any):
        self.first = first
        self.second = second

    @staticmethod
    @lru_cache(maxsize=None)
    def of(first_type: type, second_type: type) -> type[Pair]:
        """Get the Pair class bound to the given component types"""
        name = f"Pair[{first_type.__name__}, {second_type.__name__}]"
        attrs = {
            "__slots__": (),
            "first_type": first_type,
            "second_type": second_type,
        }
        return type(name, (Pair,), attrs)

    @classmethod
    def empty(cls) -> Pair:
        if cls.first_type is None or cls.second_type is None:
            raise TypeError("Pair has no component types, use Pair.of(A, B)")
        return cls(cls.first_type.empty(), cls.second_type.empty())

    def merge(self, other: Pair) -> Pair:
        return type(self)(
            self.first.merge(other.first), self.second.merge(other.second)
        )

    def apply(self, to: Pair) -> Pair:
        return type(to)(self.first.apply(to.first), self.second.apply(to.second))

    def __getitem__(self, index: int) -> Any:
        if index in (0, -2):
            return self.first
        if index in (1, -1):
            return self.second
        raise IndexError("Pair index out of range")

    def __iter__(self) -> Iterator[Any]:
        yield self.first
        yield self.second

    def __len__(self) -> int:
        return 2

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pair):
            return NotImplemented
        return self.first == other.first and self.second == other.second

    def __hash__(self) -> int:
        return hash((self.first, self.second))

    def __repr__(self):
        return f"<Pair {self.first!r}, {self.second!r}>"
