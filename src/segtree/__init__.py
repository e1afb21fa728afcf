from .algebra import Applier, Modifier, Monoid, Pair, Semigroup
from .segtree import BranchNode, EmptyNode, SegTree, UnitNode, build
from . import laws

__all__ = [
    "Applier",
    "BranchNode",
    "EmptyNode",
    "Modifier",
    "Monoid",
    "Pair",
    "SegTree",
    "Semigroup",
    "UnitNode",
    "build",
    "laws",
]
