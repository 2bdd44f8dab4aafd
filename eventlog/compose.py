"""
Predicate composition helpers.

Filters are built up one clause at a time. A filter that is still None
matches everything, so callers start from None and fold clauses in.
"""

from typing import Callable, List, Optional, TypeVar

T = TypeVar("T")
Predicate = Callable[[T], bool]


def compose_and(previous: Optional[Predicate], next_: Predicate) -> Predicate:
    """Combine two predicates with a short-circuiting logical AND."""
    if previous is None:
        return next_
    return lambda x: previous(x) and next_(x)


def compose_or(previous: Optional[Predicate], next_: Predicate) -> Predicate:
    """Combine two predicates with a short-circuiting logical OR."""
    if previous is None:
        return next_
    return lambda x: previous(x) or next_(x)


def filter_events(items: List[T], predicate: Optional[Predicate]) -> List[T]:
    """
    Return a new list holding the items that satisfy the predicate.

    A None predicate applies no filtering and returns a copy of the items.
    """
    if predicate is None:
        return list(items)
    return [item for item in items if predicate(item)]
