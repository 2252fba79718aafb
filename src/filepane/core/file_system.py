"""
Filesystem service used by the file list

FileSystem is the interface the list model talks to; LocalFileSystem is the
implementation backed by the machine we run on. Remote implementations only
need to provide the same methods.
"""
import os
import sys
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Iterator, Protocol

from filepane.core.file_entry import FileEntry, FileKind


class OsType(Enum):
    WINDOWS = "windows"
    LINUX = "linux"
    MACOS = "macos"
    BSD = "bsd"
    OTHER = "other"

    @property
    def case_insensitive_by_convention(self):
        # Case-only renames must skip the collision check on these hosts
        return self is OsType.WINDOWS

    @classmethod
    def from_platform(cls, platform=None):
        platform = platform if platform is not None else sys.platform
        if platform.startswith(('win', 'cygwin', 'msys')):
            return cls.WINDOWS
        if platform.startswith('linux'):
            return cls.LINUX
        if platform == 'darwin':
            return cls.MACOS
        if 'bsd' in platform:
            return cls.BSD
        return cls.OTHER


class FileSystem(Protocol):
    """Operations the file list needs from a (possibly remote) filesystem.

    Every method may raise on I/O or connection failures.
    """

    @property
    def os_type(self) -> OsType: ...

    def file_exists(self, path: str) -> bool: ...

    def directory_exists(self, path: str) -> bool: ...

    def move(self, old_path: str, new_path: str) -> None: ...

    def list_directory(self, path: str, show_hidden: bool = True) -> Iterator[FileEntry]: ...


class LocalFileSystem:
    """FileSystem backed by pathlib/os on the local machine"""

    def __init__(self, os_type=None):
        self._os_type = os_type or OsType.from_platform()

    @property
    def os_type(self):
        return self._os_type

    def file_exists(self, path):
        path_obj = Path(path)
        if path_obj.is_symlink():
            return True
        return path_obj.is_file() or (path_obj.exists() and not path_obj.is_dir())

    def directory_exists(self, path):
        return Path(path).is_dir()

    def move(self, old_path, new_path):
        """Rename old_path to new_path, never overwriting another item"""
        old_path_obj = Path(old_path)
        new_path_obj = Path(new_path)
        if new_path_obj.exists() or new_path_obj.is_symlink():
            # Same file under a different case on a case-insensitive filesystem
            if not (new_path_obj.exists() and new_path_obj.samefile(old_path_obj)):
                raise FileExistsError(f"'{new_path}' already exists")
        old_path_obj.rename(new_path_obj)

    def list_directory(self, path, show_hidden=True):
        """Lazily list a directory.

        The returned generator holds an open scandir handle until it is
        exhausted or closed.
        """
        with os.scandir(path) as it:
            for dir_entry in it:
                if not show_hidden and dir_entry.name.startswith('.'):
                    continue
                entry = self._to_file_entry(dir_entry.path, dir_entry.name.startswith('.'))
                if entry is not None:
                    yield entry

    @staticmethod
    def _stat_entry(path, hidden):
        path_obj = Path(path)
        try:
            stat_info = path_obj.stat()
        except OSError:
            return None
        if path_obj.is_dir():
            kind = FileKind.DIRECTORY
        elif path_obj.is_file():
            kind = FileKind.FILE
        else:
            kind = FileKind.OTHER
        return FileEntry(
            path=str(path_obj),
            kind=kind,
            size=None if kind == FileKind.DIRECTORY else stat_info.st_size,
            modified=datetime.fromtimestamp(stat_info.st_mtime),
            hidden=hidden,
        )

    def _to_file_entry(self, path, hidden):
        path_obj = Path(path)
        if path_obj.is_symlink():
            target = None
            try:
                target_path = path_obj.resolve(strict=True)
                target = self._stat_entry(target_path, target_path.name.startswith('.'))
            except (OSError, RuntimeError):
                pass  # Dangling or looping link
            try:
                modified = datetime.fromtimestamp(path_obj.lstat().st_mtime)
            except OSError:
                modified = None
            return FileEntry(path=str(path_obj), kind=FileKind.LINK, modified=modified,
                             hidden=hidden, link_target=target)
        return self._stat_entry(path, hidden)
