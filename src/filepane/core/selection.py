"""
Multi-item selection with automatic previous-selection tracking
"""
from enum import Enum
from typing import Iterable, List

from PyQt6.QtCore import QObject, pyqtSignal

from filepane.core.file_entry import BrowserEntry


class SelectionMode(Enum):
    SINGLE = "single"
    MULTIPLE = "multiple"

    @classmethod
    def parse(cls, value, default=None):
        """Parse a settings value, falling back to default (MULTIPLE)"""
        try:
            return cls(value)
        except ValueError:
            return default or cls.MULTIPLE


class TrackedSelection(QObject):
    """Ordered selection of entries.

    Every mutation that changes the contents first snapshots the current
    contents into ``previous``, so ``previous`` is always the selection as it
    was right before the latest change. The selection mode is only exposed
    here; callers decide whether to honour it.
    """

    changed = pyqtSignal()

    def __init__(self, mode=SelectionMode.MULTIPLE, parent=None):
        super().__init__(parent)
        self._mode = mode
        self._items: List[BrowserEntry] = []
        self._previous: List[BrowserEntry] = []

    @property
    def mode(self) -> SelectionMode:
        return self._mode

    @property
    def previous(self) -> List[BrowserEntry]:
        return list(self._previous)

    def items(self) -> List[BrowserEntry]:
        return list(self._items)

    def _replace(self, new_items):
        if new_items == self._items:
            return
        self._previous = list(self._items)
        self._items = new_items
        self.changed.emit()

    def set_all(self, entries: Iterable[BrowserEntry]):
        self._replace(_unique(entries))

    def add(self, entry: BrowserEntry):
        if entry in self._items:
            return
        self._replace(self._items + [entry])

    def extend(self, entries: Iterable[BrowserEntry]):
        self._replace(_unique(self._items + list(entries)))

    def remove(self, entry: BrowserEntry):
        if entry not in self._items:
            return
        self._replace([e for e in self._items if e is not entry])

    def clear(self):
        self._replace([])

    def remap(self, by_path):
        """Swap entries for the ones with the same path in ``by_path``.

        Used after a relisting. Entries whose path is gone are dropped from
        both the selection and ``previous``. This is not a selection change of
        its own, so ``previous`` is remapped rather than overwritten.
        """
        new_items = _unique(by_path[e.path] for e in self._items if e.path in by_path)
        self._previous = _unique(by_path[e.path] for e in self._previous if e.path in by_path)
        if new_items != self._items:
            self._items = new_items
            self.changed.emit()

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(list(self._items))

    def __contains__(self, entry):
        return any(e is entry for e in self._items)

    def __getitem__(self, index):
        return self._items[index]

    def __repr__(self):
        return f"TrackedSelection({self._items!r})"


def _unique(entries):
    result = []
    for entry in entries:
        if not any(e is entry for e in result):
            result.append(entry)
    return result
