"""Directory browsing for the file-tree mode.

A ``DirectorySnapshot`` is an immutable listing of one directory. The
browser keeps the current snapshot plus a selection and scroll window; the
renderer reads ``visible_entries`` from it, so drawing never re-reads the
file system.
"""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirectoryEntry:
    name: str
    path: Path
    is_dir: bool


@dataclass(frozen=True)
class DirectorySnapshot:
    path: Path
    entries: tuple[DirectoryEntry, ...] = ()

    @classmethod
    def read(cls, path: Path, show_hidden: bool = True) -> "DirectorySnapshot":
        """List ``path``, sorted by full path.

        An unreadable directory yields an empty snapshot; the error is logged.
        """
        entries = []
        try:
            with os.scandir(path) as it:
                for entry in it:
                    if not show_hidden and entry.name.startswith('.'):
                        continue
                    try:
                        is_dir = entry.is_dir()
                    except OSError:
                        is_dir = False
                    entries.append(DirectoryEntry(entry.name, Path(entry.path), is_dir))
        except OSError as e:
            logger.warning(f"Could not list directory {path}: {e}")
        entries.sort(key=lambda e: e.path)
        return cls(Path(path), tuple(entries))

    def __len__(self) -> int:
        return len(self.entries)

    def index_of(self, path: Path) -> Optional[int]:
        for i, entry in enumerate(self.entries):
            if entry.path == path:
                return i
        return None


class FileTreeBrowser:
    """Selection and scroll state over the current directory snapshot."""

    def __init__(self, root: Optional[Path] = None, show_hidden: bool = True):
        self.show_hidden = show_hidden
        self.snapshot = DirectorySnapshot.read(Path(root or os.getcwd()), show_hidden)
        self.selected = 0
        self.scroll_offset = 0

    @property
    def current_path(self) -> Path:
        return self.snapshot.path

    @property
    def selected_entry(self) -> Optional[DirectoryEntry]:
        if not self.snapshot.entries:
            return None
        return self.snapshot.entries[self.selected]

    def refresh(self, path: Optional[Path] = None):
        """Re-read ``path`` (default: the current directory) and reset the cursor."""
        self.snapshot = DirectorySnapshot.read(path or self.current_path, self.show_hidden)
        self.selected = 0
        self.scroll_offset = 0

    def move_up(self):
        if self.selected > 0:
            self.selected -= 1

    def move_down(self):
        if self.selected + 1 < len(self.snapshot):
            self.selected += 1

    def enter(self) -> Optional[Path]:
        """Descend into the selected directory, or return the selected file's path."""
        entry = self.selected_entry
        if entry is None:
            return None
        if entry.is_dir:
            self.refresh(entry.path)
            return None
        return entry.path

    def go_up(self):
        parent = self.current_path.parent
        if parent != self.current_path:
            self.refresh(parent)

    def select_number(self, number: int) -> bool:
        """Select the ``number``-th (1-based) entry of the scroll window."""
        target = self.scroll_offset + number - 1
        if number < 1 or target >= len(self.snapshot):
            return False
        self.selected = target
        return True

    def select_path(self, path: Path):
        index = self.snapshot.index_of(path)
        if index is not None:
            self.selected = index

    def delete_selected(self) -> bool:
        """Remove the selected file or directory tree, then re-list."""
        entry = self.selected_entry
        if entry is None:
            return False
        try:
            if entry.is_dir:
                shutil.rmtree(entry.path)
            else:
                entry.path.unlink()
        except OSError as e:
            logger.warning(f"Could not delete {entry.path}: {e}")
            return False
        logger.info(f"Deleted {entry.path}")
        self.refresh()
        return True

    def update_scroll(self, visible: int):
        if visible <= 0:
            return
        if self.selected < self.scroll_offset:
            self.scroll_offset = self.selected
        elif self.selected >= self.scroll_offset + visible:
            self.scroll_offset = self.selected - visible + 1

    def visible_entries(self, visible: int) -> list[tuple[int, DirectoryEntry]]:
        """Entries in the scroll window as (absolute index, entry) pairs."""
        self.update_scroll(visible)
        window = self.snapshot.entries[self.scroll_offset:self.scroll_offset + visible]
        return [(self.scroll_offset + i, entry) for i, entry in enumerate(window)]
