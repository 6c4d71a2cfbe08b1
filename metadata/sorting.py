from typing import Callable, List, TypeVar

T = TypeVar("T")


def sort_entries(entries: List[T], key: Callable[[T], str]) -> List[T]:
    """
    Sort registry entries in place by `key` and return the same list.

    Plain str ordering: code-point, case-sensitive, independent of locale.
    The sort is stable; generated identifiers are unique so ties do not occur
    in a well-formed registry.
    """
    entries.sort(key=key)
    return entries
