"""
Filesystem records and their display wrappers
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from functools import cached_property
from typing import Optional, TYPE_CHECKING

from filepane.core import file_names

if TYPE_CHECKING:
    from filepane.core.file_list_model import FileListModel


class FileKind(Enum):
    FILE = "file"
    DIRECTORY = "directory"
    LINK = "link"
    OTHER = "other"


@dataclass(frozen=True)
class FileEntry:
    """Raw record produced by a directory listing"""
    path: str
    kind: FileKind
    size: Optional[int] = None
    modified: Optional[datetime] = None
    hidden: bool = False
    link_target: Optional['FileEntry'] = None

    def resolved(self) -> 'FileEntry':
        """Follow links to the record they point at.

        A link with an unknown target resolves to itself, so it behaves like
        a plain non-directory entry.
        """
        entry = self
        seen = set()
        while entry.kind == FileKind.LINK and entry.link_target is not None:
            if id(entry) in seen:
                break
            seen.add(id(entry))
            entry = entry.link_target
        return entry

    @property
    def name(self) -> str:
        return file_names.get_file_name(self.path)


class BrowserEntry:
    """Display-ready wrapper around one FileEntry.

    The owner is the list model that created this entry. It is only a
    back-reference; entries are replaced wholesale on every listing.
    """

    def __init__(self, raw_file_entry: FileEntry, owner: 'FileListModel'):
        self._raw_file_entry = raw_file_entry
        self._owner = owner

    @property
    def raw_file_entry(self) -> FileEntry:
        return self._raw_file_entry

    @property
    def owner(self) -> 'FileListModel':
        return self._owner

    @cached_property
    def resolved_kind(self) -> FileKind:
        # Resolution may walk link chains, keep it stable for this generation
        return self._raw_file_entry.resolved().kind

    @property
    def is_directory(self) -> bool:
        return self.resolved_kind == FileKind.DIRECTORY

    @property
    def path(self) -> str:
        return self._raw_file_entry.path

    @cached_property
    def file_name(self) -> str:
        return self._raw_file_entry.name

    def __repr__(self):
        return f"BrowserEntry({self.path!r}, {self.resolved_kind.value})"
