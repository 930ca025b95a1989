"""Bounded worker-pool fan-out for independent file operations"""

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, TypeVar


T = TypeVar("T")
R = TypeVar("R")


def bounded_map(fn: Callable[[T], R], items: Iterable[T], max_workers: int) -> list[R]:
    """Apply fn to every item with at most max_workers calls in flight.

    Results keep input order. The first exception raised by fn propagates.
    """
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(fn, items))
