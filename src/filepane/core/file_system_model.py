"""
Browsing pane model: current directory, filter text and navigation
"""
import threading
from typing import List, Optional

from PyQt6.QtCore import QObject, Qt, pyqtSignal, pyqtSlot

from filepane.core import file_names
from filepane.core.file_list_model import FileListModel
from filepane.core.observable import ObservableValue
from filepane.core.ordering import SortColumn, column_comparator
from filepane.core.selection import SelectionMode
from filepane.utils.error_events import ErrorEvent
from filepane.utils.settings import Settings


def _close(listing):
    close = getattr(listing, 'close', None)
    if callable(close):
        close()


class DirectoryLoadTask(QObject):
    """Reads one directory on a worker thread.

    ``finished`` is emitted from the worker thread; receivers living on the
    GUI thread get it through a queued connection.
    """

    finished = pyqtSignal(object, object, object)  # task, list of FileEntry or None, exception or None

    def __init__(self, file_system, path: str, show_hidden=True):
        super().__init__()
        self.file_system = file_system
        self.path = path
        self.show_hidden = show_hidden
        self._thread: Optional[threading.Thread] = None

    def start(self):
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def _run(self):
        try:
            if not self.file_system.directory_exists(self.path):
                raise NotADirectoryError(f"Directory {self.path} does not exist")
            listing = self.file_system.list_directory(self.path, self.show_hidden)
            try:
                entries = list(listing)
            finally:
                _close(listing)
        except Exception as e:
            self.finished.emit(self, None, e)
            return
        self.finished.emit(self, entries, None)


class FileSystemModel(QObject):
    """One open browsing pane on a filesystem"""

    path_changed = pyqtSignal(str)
    navigation_finished = pyqtSignal(str, bool)  # requested path, success

    def __init__(self, file_system, selection_mode: Optional[SelectionMode] = None,
                 settings: Optional[Settings] = None, parent=None):
        super().__init__(parent)
        self.file_system = file_system
        self.settings = settings or Settings()
        self.filter = ObservableValue(None, self)
        self.current_path: Optional[str] = None
        self.show_hidden = bool(self.settings.get("show_hidden", True))
        self._tasks: List[DirectoryLoadTask] = []

        if selection_mode is None:
            selection_mode = SelectionMode.parse(self.settings.get("selection_mode"))
        self.file_list = FileListModel(selection_mode, self, self)

        self.sort_column = SortColumn.NAME
        self.sort_order = Qt.SortOrder.AscendingOrder
        self._restore_sort()

    def _restore_sort(self):
        """Install the column comparator saved in the settings"""
        sort_col = self.settings.get("sort_column", 0)
        try:
            self.sort_column = SortColumn(int(sort_col))
        except (TypeError, ValueError):
            self.sort_column = SortColumn.NAME

        sort_order = self.settings.get("sort_order", 0)
        try:
            self.sort_order = Qt.SortOrder(int(sort_order))
        except (TypeError, ValueError):
            self.sort_order = Qt.SortOrder.AscendingOrder

        self.file_list.set_comparator(column_comparator(self.sort_column, self.sort_order))

    def sort_by(self, column, order=Qt.SortOrder.AscendingOrder):
        """Sort the list by a column and remember the choice"""
        self.sort_column = SortColumn(column)
        self.sort_order = order
        self.settings.set("sort_column", int(self.sort_column))
        self.settings.set("sort_order", order.value)
        self.file_list.set_comparator(column_comparator(self.sort_column, self.sort_order))

    def set_show_hidden(self, show_hidden):
        if show_hidden == self.show_hidden:
            return
        self.show_hidden = show_hidden
        self.settings.set("show_hidden", show_hidden)
        self.refresh()

    def _apply_listing(self, path, listing) -> bool:
        if not self.file_list.set_all(listing):
            return False
        normalized = file_names.normalize(path)
        if normalized != self.current_path:
            self.current_path = normalized
            # A new directory starts unfiltered
            self.filter.set(None)
            self.path_changed.emit(normalized)
        return True

    def cd_sync(self, path: str) -> bool:
        """Change to a directory, blocking until it has been listed"""
        try:
            if not self.file_system.directory_exists(path):
                ErrorEvent.from_message(f"Directory {path} does not exist").expected().handle()
                return False
            listing = self.file_system.list_directory(path, self.show_hidden)
        except Exception as e:
            ErrorEvent.from_throwable(e).handle()
            return False
        return self._apply_listing(path, listing)

    def cd_async(self, path: str) -> DirectoryLoadTask:
        """Start changing to a directory and return immediately.

        The listing is applied on this object's thread once the task
        finishes. Concurrent requests are not ordered; the last one to finish
        wins.
        """
        task = DirectoryLoadTask(self.file_system, path, self.show_hidden)
        self._tasks.append(task)
        task.finished.connect(self._on_load_finished)
        task.start()
        return task

    @pyqtSlot(object, object, object)
    def _on_load_finished(self, task, entries, error):
        path = task.path
        if task in self._tasks:
            self._tasks.remove(task)

        if error is not None:
            if isinstance(error, NotADirectoryError):
                ErrorEvent.from_throwable(error).expected().handle()
            else:
                ErrorEvent.from_throwable(error).handle()
            self.navigation_finished.emit(path, False)
            return
        success = self._apply_listing(path, iter(entries))
        self.navigation_finished.emit(path, success)

    def active_tasks(self):
        return list(self._tasks)

    def refresh(self) -> bool:
        """Re-read the current directory"""
        if self.current_path is None:
            return False
        try:
            listing = self.file_system.list_directory(self.current_path, self.show_hidden)
        except Exception as e:
            ErrorEvent.from_throwable(e).handle()
            return False
        return self.file_list.set_all(listing)
