"""Ordered full outer join of two key-sorted sequences."""

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Generic, TypeVar

from traduora_sync.sync.records import DuplicateKeyError

L = TypeVar("L")
R = TypeVar("R")
T = TypeVar("T")


@dataclass(frozen=True)
class Both(Generic[L, R]):
    left: L
    right: R


@dataclass(frozen=True)
class LeftOnly(Generic[L]):
    left: L


@dataclass(frozen=True)
class RightOnly(Generic[R]):
    right: R


JoinOutcome = Both[L, R] | LeftOnly[L] | RightOnly[R]


def sort_by_key(records: Iterable[T]) -> list[T]:
    """Return a new list sorted ascending by each record's ``key``."""
    return sorted(records, key=lambda r: r.key)


def _checked(items: Iterable[T], key: Callable[[T], str], name: str) -> Iterator[T]:
    """Yield items unchanged, rejecting two consecutive items with the same key."""
    previous = None
    first = True
    for item in items:
        k = key(item)
        if not first and k == previous:
            raise DuplicateKeyError(name, k)
        previous = k
        first = False
        yield item


def merge_join(
    left: Iterable[L],
    right: Iterable[R],
    *,
    left_key: Callable[[L], str] = lambda r: r.key,
    right_key: Callable[[R], str] = lambda r: r.key,
    name_left: str = "left",
    name_right: str = "right",
) -> Iterator[JoinOutcome]:
    """Join two sequences that are already sorted ascending by key.

    Walks both heads at once, always advancing the side with the smaller key,
    so every key of either input is yielded exactly once and in ascending
    order.

    Raises:
        DuplicateKeyError: if either side carries the same key twice.
    """
    left_iter = _checked(left, left_key, name_left)
    right_iter = _checked(right, right_key, name_right)
    sentinel = object()

    lhs = next(left_iter, sentinel)
    rhs = next(right_iter, sentinel)

    while lhs is not sentinel and rhs is not sentinel:
        lk = left_key(lhs)
        rk = right_key(rhs)
        if lk < rk:
            yield LeftOnly(lhs)
            lhs = next(left_iter, sentinel)
        elif rk < lk:
            yield RightOnly(rhs)
            rhs = next(right_iter, sentinel)
        else:
            yield Both(lhs, rhs)
            lhs = next(left_iter, sentinel)
            rhs = next(right_iter, sentinel)

    while lhs is not sentinel:
        yield LeftOnly(lhs)
        lhs = next(left_iter, sentinel)

    while rhs is not sentinel:
        yield RightOnly(rhs)
        rhs = next(right_iter, sentinel)
