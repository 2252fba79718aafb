"""
Observable single-value holder
"""
from PyQt6.QtCore import QObject, pyqtSignal


class ObservableValue(QObject):
    """Holds one value and emits ``changed(old, new)`` when it changes.

    Setting an equal value is a no-op and emits nothing.
    """

    changed = pyqtSignal(object, object)  # old value, new value

    def __init__(self, value=None, parent=None):
        super().__init__(parent)
        self._value = value

    def get(self):
        return self._value

    def set(self, value):
        old = self._value
        if old is value or old == value:
            return
        self._value = value
        self.changed.emit(old, value)

    def __repr__(self):
        return f"ObservableValue({self._value!r})"
