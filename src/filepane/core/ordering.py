"""
Ordering policy for the shown file list

Comparators are plain ``cmp(a, b) -> int`` callables over BrowserEntry.
Directories always sort before everything else; an optional secondary
comparator breaks ties within each group.
"""
from enum import IntEnum
from typing import Callable, Optional

from PyQt6.QtCore import Qt

from filepane.core.file_entry import BrowserEntry

Comparator = Callable[[BrowserEntry, BrowserEntry], int]


class SortColumn(IntEnum):
    """Sortable columns, numbered like the list view's header sections"""
    NAME = 0
    SIZE = 1
    MODIFIED = 2


def _cmp(left, right):
    return (left > right) - (left < right)


def directories_first(left: BrowserEntry, right: BrowserEntry) -> int:
    """Primary key: directories (after link resolution) come first"""
    return _cmp(not left.is_directory, not right.is_directory)


def compose_order(secondary: Optional[Comparator]) -> Comparator:
    """Build the total order used to sort the shown list"""
    if secondary is None:
        return directories_first

    def order(left: BrowserEntry, right: BrowserEntry) -> int:
        result = directories_first(left, right)
        if result != 0:
            return result
        return secondary(left, right)

    return order


def by_name(left: BrowserEntry, right: BrowserEntry) -> int:
    result = _cmp(left.file_name.casefold(), right.file_name.casefold())
    if result == 0:
        result = _cmp(left.file_name, right.file_name)
    return result


def _with_missing_first(left_value, right_value):
    # Entries without a value (directories, remote records without stat) go first
    if left_value is None or right_value is None:
        return _cmp(left_value is not None, right_value is not None)
    return _cmp(left_value, right_value)


def by_size(left: BrowserEntry, right: BrowserEntry) -> int:
    return _with_missing_first(left.raw_file_entry.size, right.raw_file_entry.size)


def by_modified(left: BrowserEntry, right: BrowserEntry) -> int:
    return _with_missing_first(left.raw_file_entry.modified, right.raw_file_entry.modified)


def reversed_comparator(comparator: Comparator) -> Comparator:
    def reverse(left: BrowserEntry, right: BrowserEntry) -> int:
        return comparator(right, left)
    return reverse


_COLUMN_COMPARATORS = {
    SortColumn.NAME: by_name,
    SortColumn.SIZE: by_size,
    SortColumn.MODIFIED: by_modified,
}


def column_comparator(column, sort_order=Qt.SortOrder.AscendingOrder) -> Comparator:
    """Secondary comparator for a header column.

    The descending variant only reverses the secondary key; directories_first
    is applied on top of it, so directories stay first in both orders.
    """
    comparator = _COLUMN_COMPARATORS[SortColumn(column)]
    if sort_order == Qt.SortOrder.DescendingOrder:
        comparator = reversed_comparator(comparator)
    return comparator
