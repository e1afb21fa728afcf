from __future__ import annotations
from collections.abc import Iterable
import logging
from typing import (
    Callable,
    Generic,
    Optional,
    TypeVar,
    Union,
    overload,
)

from .algebra import Modifier, Monoid

log = logging.getLogger(__name__)

V = TypeVar("V", bound=Monoid)
M = TypeVar("M", bound=Modifier)


# --- Core Node Structure ---
# Every node works in its own coordinates: its range is always [0, size).
# Nodes are never changed after construction, so any node can be shared
# between any number of tree versions.
class EmptyNode(Generic[V, M]):
    """A zero length range"""

    __slots__: tuple[str, ...] = ()

    def size(self) -> int:
        return 0

    def all(self, empty: Optional[V] = None) -> Optional[V]:
        """The aggregate of the whole node"""
        return empty

    def apply_all(self, m: M) -> Node[V, M]:
        return self

    def query(self, start: int, end: int, empty: V) -> V:
        return empty

    def apply(self, start: int, end: int, m: M, identity: M) -> Node[V, M]:
        return self

    def flatten(self, m: Optional[M] = None) -> list[V]:
        return []

    def __repr__(self):
        return "<EmptyNode>"


class UnitNode(Generic[V, M]):
    """A single position"""

    __slots__: tuple[str, ...] = ("value",)

    def __init__(self, value: V):
        self.value: V = value

    def size(self) -> int:
        return 1

    def all(self, empty: Optional[V] = None) -> V:
        """The aggregate of the whole node"""
        return self.value

    def apply_all(self, m: M) -> Node[V, M]:
        return UnitNode(m.apply(self.value))

    def query(self, start: int, end: int, empty: V) -> V:
        if start <= 0 < end:
            return self.value
        return empty

    def apply(self, start: int, end: int, m: M, identity: M) -> Node[V, M]:
        if start <= 0 < end:
            return UnitNode(m.apply(self.value))
        return self

    def flatten(self, m: Optional[M] = None) -> list[V]:
        if m is None:
            return [self.value]
        return [m.apply(self.value)]

    def __repr__(self):
        return f"<UnitNode {self.value!r}>"


class BranchNode(Generic[V, M]):
    """Two or more positions, split into `size // 2` on the left and the rest
    on the right.

    `value` is the aggregate of the whole range with `modifier` already
    applied. `modifier` has not been pushed down to the children yet.
    """

    __slots__: tuple[str, ...] = ("left", "right", "length", "value", "modifier")

    def __init__(self, left: Node[V, M], right: Node[V, M], value: V, modifier: M):
        self.left: Node[V, M] = left
        self.right: Node[V, M] = right
        self.length: int = left.size() + right.size()
        self.value: V = value
        self.modifier: M = modifier

    def size(self) -> int:
        return self.length

    def all(self, empty: Optional[V] = None) -> V:
        """The aggregate of the whole node"""
        return self.value

    def apply_all(self, m: M) -> Node[V, M]:
        """Apply a modifier to this node only, leaving the children pending"""
        return BranchNode(
            self.left, self.right, m.apply(self.value), m.merge(self.modifier)
        )

    def query(self, start: int, end: int, empty: V) -> V:
        """Get the aggregate of [start:end) intersected with this node

        Args:
            start: The first local index (included)
            end: The last local index (excluded)
            empty: The value identity, returned for anything out of range

        Returns:
            The merged value of the range
        """
        start = max(start, 0)
        end = min(end, self.length)
        if start >= end:
            return empty
        if start == 0 and end == self.length:
            return self.value

        mid = self.length // 2
        if end <= mid:
            ret = self.left.query(start, end, empty)
        elif mid <= start:
            ret = self.right.query(start - mid, end - mid, empty)
        else:
            ret = self.left.query(start, mid, empty).merge(
                self.right.query(0, end - mid, empty)
            )
        # The children don't know about our pending modifier yet
        return self.modifier.apply(ret)

    def apply(self, start: int, end: int, m: M, identity: M) -> Node[V, M]:
        """Build a new node with `m` applied to [start:end)

        Args:
            start: The first local index (included)
            end: The last local index (excluded)
            m: The modifier to apply
            identity: The modifier identity, used for rebuilt branches

        Returns:
            The new node. Any child that the range misses is reused
        """
        start = max(start, 0)
        end = min(end, self.length)
        if start >= end:
            return self
        if start == 0 and end == self.length:
            return self.apply_all(m)

        mid = self.length // 2
        # Push our modifier down a level first so it is older than `m`
        # everywhere below this node
        left = self.left.apply_all(self.modifier)
        right = self.right.apply_all(self.modifier)

        if start < mid:
            left = left.apply(start, min(end, mid), m, identity)
        if mid < end:
            right = right.apply(max(start, mid) - mid, end - mid, m, identity)

        return BranchNode(left, right, left.all().merge(right.all()), identity)

    def flatten(self, m: Optional[M] = None) -> list[V]:
        """Collect the current value of every position under this node"""
        pending = self.modifier if m is None else m.merge(self.modifier)
        return self.left.flatten(pending) + self.right.flatten(pending)

    def __repr__(self):
        return f"<BranchNode size: {self.length} value: {self.value!r}>"


Node = Union[EmptyNode[V, M], UnitNode[V, M], BranchNode[V, M]]


def _build(
    offset: int, length: int, init: Callable[[int], V], identity: M
) -> Node[V, M]:
    """Build a balanced tree over [offset:offset + length)"""
    if length == 0:
        return EmptyNode()
    if length == 1:
        return UnitNode(init(offset))

    mid = length // 2
    left = _build(offset, mid, init, identity)
    right = _build(offset + mid, length - mid, init, identity)
    return BranchNode(left, right, left.all().merge(right.all()), identity)


# --- Main Tree Class ---
class SegTree(Generic[V, M]):
    """Persistent sequence with range aggregates and lazy range updates.

    `value_type` must be a monoid (`merge` and a classmethod `empty`), and
    `modifier_type` a monoid whose instances also `apply` to values.
    A tree is never changed. `apply` returns a new tree that shares every
    untouched subtree with this one.
    """

    __slots__: tuple[str, ...] = ("root", "value_type", "modifier_type")

    def __init__(self, root: Node[V, M], value_type: type[V], modifier_type: type[M]):
        self.root: Node[V, M] = root
        self.value_type: type[V] = value_type
        self.modifier_type: type[M] = modifier_type

    @classmethod
    def build(
        cls,
        length: int,
        init: Callable[[int], V],
        value_type: type[V],
        modifier_type: type[M],
    ) -> SegTree[V, M]:
        """Build a tree of `length` positions, where position i holds `init(i)`"""
        if length < 0:
            raise ValueError("SegTree length must be >= 0")
        log.debug(
            "Building SegTree of %d %s with %s",
            length,
            value_type.__name__,
            modifier_type.__name__,
        )
        root = _build(0, length, init, modifier_type.empty())
        return cls(root, value_type, modifier_type)

    @classmethod
    def from_values(
        cls, values: Iterable[V], value_type: type[V], modifier_type: type[M]
    ) -> SegTree[V, M]:
        vals = list(values)
        return cls.build(len(vals), vals.__getitem__, value_type, modifier_type)

    # --- Public API ---
    def size(self) -> int:
        return self.root.size()

    def __len__(self) -> int:
        return self.root.size()

    def query(self, start: int, end: int) -> V:
        """Return the merged value of [start:end).

        Anything outside of the tree counts as `value_type.empty()`
        """
        return self.root.query(start, end, self.value_type.empty())

    def apply(self, start: int, end: int, m: M) -> SegTree[V, M]:
        """Return a new tree with `m` applied to every position in [start:end).

        Anything outside of the tree is left alone
        """
        root = self.root.apply(start, end, m, self.modifier_type.empty())
        return type(self)(root, self.value_type, self.modifier_type)

    def total(self) -> V:
        """Return the merged value of the whole tree"""
        return self.root.all(self.value_type.empty())

    def get_single(self, index: int) -> V:
        if index < 0 or index >= len(self):
            raise IndexError("SegTree index out of range")
        return self.query(index, index + 1)

    @overload
    def __getitem__(self, key: int) -> V: ...

    @overload
    def __getitem__(self, key: slice) -> V: ...

    def __getitem__(self, key: Union[int, slice]) -> V:
        if isinstance(key, slice):
            start, stop, step = key.indices(len(self))
            if step != 1:
                raise ValueError("Slice step must be 1")
            return self.query(start, stop)
        if key < 0:
            key += len(self)
        return self.get_single(key)

    def to_list(self) -> list[V]:
        """Return the current value of every position as a flat list"""
        log.debug("Flattening SegTree of %d", len(self))
        return self.root.flatten()

    def __repr__(self):
        return (
            f"<SegTree {self.value_type.__name__}/{self.modifier_type.__name__}"
            f" size: {len(self)}>"
        )


def build(
    length: int,
    init: Callable[[int], V],
    value_type: type[V],
    modifier_type: type[M],
) -> SegTree[V, M]:
    """Build a SegTree. Shorthand for `SegTree.build`"""
    return SegTree.build(length, init, value_type, modifier_type)
