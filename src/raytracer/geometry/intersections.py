"""Intersection records and the hit selection policy.

An Intersection pairs a ray parameter ``t`` with the object that was struck.
``Intersections`` is an ordered, read-only collection of them; it is not
assumed to be sorted. ``hit`` picks the visible intersection: the one with
the smallest non-negative ``t``. Intersections behind the ray origin are
mathematically valid (the origin may be inside or past the object) but are
never visible.

Example:
    >>> from src.raytracer.geometry.intersections import Intersection, hit, intersections
    >>> from src.raytracer.geometry.sphere import Sphere
    >>> s = Sphere()
    >>> xs = intersections(Intersection(-1.0, s), Intersection(1.0, s))
    >>> hit(xs).t
    1.0
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, overload

if TYPE_CHECKING:
    from src.raytracer.geometry.sphere import Sphere


@dataclass(frozen=True)
class Intersection:
    """A single ray-object intersection.

    Attributes:
        t: The ray parameter at which the intersection occurs.
        object: The object that was intersected.
    """

    t: float
    object: Sphere


class Intersections(Sequence[Intersection]):
    """An ordered, immutable collection of intersections."""

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[Intersection] = ()) -> None:
        self._items = tuple(items)

    @overload
    def __getitem__(self, index: int) -> Intersection: ...

    @overload
    def __getitem__(self, index: slice) -> Intersections: ...

    def __getitem__(self, index: int | slice) -> Intersection | Intersections:
        if isinstance(index, slice):
            return Intersections(self._items[index])
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Intersection]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Intersections):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"Intersections({list(self._items)!r})"

    def sorted(self) -> Intersections:
        """Return a copy ordered by increasing t."""
        return Intersections(sorted(self._items, key=lambda i: i.t))


def intersections(*items: Intersection) -> Intersections:
    """Aggregate intersections into a collection, keeping their order."""
    return Intersections(items)


def hit(xs: Iterable[Intersection]) -> Intersection | None:
    """Select the visible intersection.

    Args:
        xs: Candidate intersections in any order.

    Returns:
        The intersection with the smallest t >= 0, or None if every
        intersection lies behind the ray origin (or there are none).
    """
    visible = [i for i in xs if i.t >= 0.0]
    if not visible:
        return None
    return min(visible, key=lambda i: i.t)
