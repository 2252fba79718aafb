"""
State of the file list shown in one browsing pane

FileListModel owns the raw entries of the current directory and derives the
filtered and sorted ``shown`` view from them. It also carries the selection
and the transient drag/rename markers the view layer sets, and performs
renames against the pane's filesystem.

All mutation happens on the thread that owns the pane (the Qt GUI thread).
"""
from functools import cmp_to_key
from typing import Iterable, Optional, Tuple

from PyQt6.QtCore import QObject, pyqtSignal

from filepane.core import file_names
from filepane.core.file_entry import BrowserEntry, FileEntry
from filepane.core.observable import ObservableValue
from filepane.core.ordering import Comparator, compose_order
from filepane.core.selection import SelectionMode, TrackedSelection
from filepane.utils.error_events import ErrorEvent


class FileListModel(QObject):
    """Entries of one directory, as listed and as shown.

    ``file_system_model`` is the owning pane. It must provide ``filter`` (an
    ObservableValue holding the filter text), ``current_path``,
    ``file_system``, ``refresh()`` and ``cd_async(path)``.
    """

    all_changed = pyqtSignal(object)  # tuple of BrowserEntry
    shown_changed = pyqtSignal(object)  # tuple of BrowserEntry
    comparator_changed = pyqtSignal()

    def __init__(self, selection_mode: SelectionMode, file_system_model, parent=None):
        super().__init__(parent)
        self._selection_mode = selection_mode
        self._file_system_model = file_system_model
        self._comparator: Optional[Comparator] = None
        self._all: Tuple[BrowserEntry, ...] = ()
        self._shown: Tuple[BrowserEntry, ...] = ()

        self.selection = TrackedSelection(selection_mode, self)
        self.dragged_over_directory = ObservableValue(None, self)
        self.dragged_over_empty = ObservableValue(False, self)
        self.editing = ObservableValue(None, self)

        file_system_model.filter.changed.connect(self._on_filter_changed)

    @property
    def selection_mode(self) -> SelectionMode:
        return self._selection_mode

    @property
    def file_system_model(self):
        return self._file_system_model

    @property
    def all(self) -> Tuple[BrowserEntry, ...]:
        return self._all

    @property
    def shown(self) -> Tuple[BrowserEntry, ...]:
        return self._shown

    @property
    def previous_selection(self):
        return self.selection.previous

    @property
    def comparator(self) -> Optional[Comparator]:
        return self._comparator

    def _on_filter_changed(self, _old, _new):
        self.refresh_shown()

    def set_all(self, new_files: Iterable[Optional[FileEntry]]) -> bool:
        """Replace the listed entries with a fresh directory listing.

        ``new_files`` is consumed once and closed afterwards (when it has a
        ``close()``), even if reading it fails. On failure the previous
        entries are kept and the error is reported. Returns True on success.
        """
        try:
            try:
                entries = tuple(BrowserEntry(entry, self) for entry in new_files if entry is not None)
            finally:
                close = getattr(new_files, 'close', None)
                if callable(close):
                    close()
        except Exception as e:
            ErrorEvent.from_throwable(e).handle()
            return False

        self._all = entries
        self.all_changed.emit(entries)
        self.refresh_shown()
        self._reconcile_interaction_state()
        return True

    def set_comparator(self, comparator: Optional[Comparator]):
        self._comparator = comparator
        self.comparator_changed.emit()
        self.refresh_shown()

    def order(self) -> Comparator:
        return compose_order(self._comparator)

    def refresh_shown(self):
        """Recompute ``shown`` from ``all``, the filter text and the order"""
        filter_text = self._file_system_model.filter.get()
        try:
            if filter_text:
                needle = filter_text.casefold()
                filtered = [entry for entry in self._all if needle in entry.file_name.casefold()]
            else:
                filtered = list(self._all)
            # list.sort is stable, ties keep listing order
            filtered.sort(key=cmp_to_key(self.order()))
        except Exception as e:
            ErrorEvent.from_throwable(e).handle()
            return

        self._shown = tuple(filtered)
        self.shown_changed.emit(self._shown)

    def _reconcile_interaction_state(self):
        """Point selection and markers at the fresh wrappers of the same paths"""
        by_path = {}
        for entry in self._all:
            by_path.setdefault(entry.path, entry)

        self.selection.remap(by_path)
        for marker in (self.editing, self.dragged_over_directory):
            current = marker.get()
            if current is not None and current not in self._all:
                marker.set(by_path.get(current.path))

    def rename(self, old: BrowserEntry, new_name: str) -> BrowserEntry:
        """Rename an entry within the current directory.

        Returns the entry for the renamed item from the refreshed listing.
        Whenever the rename does not happen, or the new item can't be found
        after refreshing, ``old`` is returned as is.

        An empty name is ignored without touching the filesystem. Renaming to
        the unchanged name goes through the normal checks and is reported as
        an existing target.
        """
        if not new_name:
            return old

        fs_model = self._file_system_model
        file_system = fs_model.file_system
        full_path = file_names.join(fs_model.current_path, old.file_name)
        new_full_path = file_names.join(fs_model.current_path, new_name)

        exists = False
        try:
            # The existence check reports the old file itself when only the
            # case changes on a case-insensitive host, so it is skipped there
            skip_exist_check = (file_system.os_type.case_insensitive_by_convention
                                and old.file_name.casefold() == new_name.casefold())
            if not skip_exist_check:
                exists = (file_system.file_exists(new_full_path)
                          or file_system.directory_exists(new_full_path))
        except Exception as e:
            ErrorEvent.from_throwable(e).handle()
            return old

        if exists:
            ErrorEvent.from_message(f"Target {new_full_path} does already exist").expected().handle()
            fs_model.refresh()
            return old

        try:
            file_system.move(full_path, new_full_path)
        except Exception as e:
            ErrorEvent.from_throwable(e).handle()
            return old

        fs_model.refresh()
        for entry in self._all:
            if entry.path == new_full_path:
                return entry
        # Listings may spell the path with the host's own separator
        for entry in self._all:
            if file_names.same_path(entry.path, new_full_path):
                return entry
        return old

    def on_double_click(self, entry: BrowserEntry):
        if entry.is_directory:
            self._file_system_model.cd_async(entry.raw_file_entry.resolved().path)
