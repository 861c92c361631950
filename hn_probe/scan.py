"""
Linear search over ranked ID lists.
"""

from typing import Callable, Iterable, Optional, TypeVar

from hn_probe.models import Item, Story

T = TypeVar("T")


def find_first(
    ids: Iterable[int],
    predicate: Callable[[T], bool],
    fetch: Callable[[int], Optional[T]],
) -> Optional[T]:
    """
    Fetch items one at a time and return the first one matching a predicate.

    IDs are visited strictly in the given order, so "first" means the lowest
    index in ``ids``, not the lowest ID. IDs that fetch to None are skipped.
    There is no limit on how many items are fetched.

    Args:
        ids: Item IDs in the order to visit them
        predicate: Test applied to each present item
        fetch: Callable returning the item for an ID, or None

    Returns:
        The first matching item, or None if nothing matched
    """
    for item_id in ids:
        item = fetch(item_id)
        if item is None:
            continue
        if predicate(item):
            return item
    return None


def has_kids(item: Item) -> bool:
    return item.has_kids


def has_no_kids(item: Item) -> bool:
    return not item.has_kids


def has_no_url(story: Story) -> bool:
    return not story.has_url


def is_dead(item: Item) -> bool:
    return item.is_dead
