import os
import sys
import pytest
from pathlib import Path

# Add src directory to Python path for imports
PROJECT_ROOT = Path(__file__).parent.parent
SRC_DIR = PROJECT_ROOT / 'src'
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

# Force offscreen platform early for all tests before any Qt import
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtCore import QCoreApplication

from filepane.core import file_names
from filepane.core.file_entry import FileEntry, FileKind
from filepane.core.file_list_model import FileListModel
from filepane.core.file_system import OsType
from filepane.core.observable import ObservableValue
from filepane.core.selection import SelectionMode
from filepane.utils.error_events import ErrorEventHandler


@pytest.fixture(scope="session", autouse=True)
def qapp():
    """Provide a single QCoreApplication instance for the whole test session.

    Queued signal delivery from worker threads needs an application object.
    """
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


class FakeFileSystem:
    """In-memory filesystem with switchable failures"""

    def __init__(self, os_type=OsType.LINUX):
        self.os_type = os_type
        self.entries = {}
        self.exists_checks = []
        self.moves = []
        self.fail_exists = None
        self.fail_move = None
        self.fail_listing = None
        self.hide_after_move = False

    def add(self, path, kind=FileKind.FILE, **kwargs):
        entry = FileEntry(path=path, kind=kind, **kwargs)
        self.entries[path] = entry
        return entry

    def file_exists(self, path):
        self.exists_checks.append(path)
        if self.fail_exists:
            raise self.fail_exists
        entry = self.entries.get(path)
        return entry is not None and entry.kind != FileKind.DIRECTORY

    def directory_exists(self, path):
        self.exists_checks.append(path)
        if self.fail_exists:
            raise self.fail_exists
        entry = self.entries.get(path)
        return entry is not None and entry.kind == FileKind.DIRECTORY

    def move(self, old_path, new_path):
        self.moves.append((old_path, new_path))
        if self.fail_move:
            raise self.fail_move
        entry = self.entries.pop(old_path)
        if not self.hide_after_move:
            self.entries[new_path] = FileEntry(path=new_path, kind=entry.kind, size=entry.size)

    def list_directory(self, path, show_hidden=True):
        if self.fail_listing:
            raise self.fail_listing
        for entry_path, entry in list(self.entries.items()):
            if file_names.get_parent(entry_path) == path:
                yield entry


class FakePane:
    """Stands in for FileSystemModel around a FileListModel"""

    def __init__(self, file_system, current_path="/home/user"):
        self.file_system = file_system
        self.current_path = current_path
        self.filter = ObservableValue(None)
        self.refresh_count = 0
        self.cd_requests = []
        self.file_list = None

    def refresh(self):
        self.refresh_count += 1
        return self.file_list.set_all(self.file_system.list_directory(self.current_path))

    def cd_async(self, path):
        self.cd_requests.append(path)


@pytest.fixture
def fake_fs():
    return FakeFileSystem()


@pytest.fixture
def pane(fake_fs):
    pane = FakePane(fake_fs)
    pane.file_list = FileListModel(SelectionMode.MULTIPLE, pane)
    return pane


@pytest.fixture
def model(pane):
    return pane.file_list


@pytest.fixture
def error_events():
    """Collect error events instead of writing them to the error log"""
    events = []
    ErrorEventHandler.add_listener(events.append)
    yield events
    ErrorEventHandler.remove_listener(events.append)


@pytest.fixture(autouse=True)
def _isolated_error_log(tmp_path, monkeypatch):
    """Keep unhandled error events out of the user's real log file"""
    from filepane.utils.error_log import ErrorLog
    monkeypatch.setattr(ErrorLog, "LOG_DIR", tmp_path / "logs")
    monkeypatch.setattr(ErrorLog, "LOG_FILE", tmp_path / "logs" / "errors.log")
