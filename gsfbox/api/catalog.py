"""
Catalog Manager - Directory listing and selection for the browser.

Handles:
- Listing directories and playable tracks under a path
- Selection movement with clamping
- Circular next/previous track lookup
- Scroll window for the list view
"""
import logging
from pathlib import Path
from typing import Optional, List

from ..models import Entry
from ..config import PLAYABLE_EXTENSION

logger = logging.getLogger(__name__)


def is_playable_name(name: str, extension: str = PLAYABLE_EXTENSION) -> bool:
    """Check a file name against the playable extension (case-insensitive)."""
    return name.lower().endswith(extension.lower())


def sort_entries(entries: List[Entry]) -> List[Entry]:
    """Directories first, then files; alphabetical within each group."""
    return sorted(entries, key=lambda e: (not e.is_directory, e.name))


def list_directory(path: Path, extension: str = PLAYABLE_EXTENSION) -> List[Entry]:
    """
    List sub-directories and playable tracks directly under `path`.

    An unreadable path yields an empty list rather than an error.
    """
    entries = []
    try:
        children = list(Path(path).iterdir())
    except OSError as e:
        logger.warning(f'Cannot open directory {path}: {e}')
        return entries

    for child in children:
        try:
            is_dir = child.is_dir()
        except OSError:
            continue
        if is_dir or is_playable_name(child.name, extension):
            entries.append(Entry(name=child.name, is_directory=is_dir))

    return sort_entries(entries)


class DirectoryCatalog:
    """
    Current directory listing plus selection state.

    The root path is a floor: `go_up()` never leaves it.
    """

    def __init__(self, root: Path, extension: str = PLAYABLE_EXTENSION):
        self.root = Path(root)
        self.path = self.root
        self.extension = extension
        self.entries: List[Entry] = []
        self.selected_index = 0
        self.scroll_offset = 0

    # ============================================
    # LISTING
    # ============================================

    def load(self) -> List[Entry]:
        """Relist the current path and reset the selection."""
        self.entries = list_directory(self.path, self.extension)
        self.selected_index = 0
        self.scroll_offset = 0
        logger.info(f'Listed {self.path}: {len(self.entries)} entries')
        return self.entries

    def enter_selected(self) -> bool:
        """Descend into the selected directory. Returns True if the path changed."""
        entry = self.selected_entry
        if entry is None or not entry.is_directory:
            return False
        self.path = self.path / entry.name
        self.load()
        return True

    def go_up(self) -> bool:
        """Move to the parent directory unless already at the root."""
        if self.path == self.root:
            return False
        self.path = self.path.parent
        self.load()
        return True

    @property
    def at_root(self) -> bool:
        return self.path == self.root

    # ============================================
    # SELECTION
    # ============================================

    @property
    def selected_entry(self) -> Optional[Entry]:
        if 0 <= self.selected_index < len(self.entries):
            return self.entries[self.selected_index]
        return None

    @property
    def selected_path(self) -> Optional[Path]:
        entry = self.selected_entry
        return self.path / entry.name if entry else None

    def select(self, index: int) -> int:
        """Select `index`, clamped to the listing."""
        if not self.entries:
            self.selected_index = 0
        else:
            self.selected_index = max(0, min(index, len(self.entries) - 1))
        return self.selected_index

    def move(self, delta: int) -> int:
        """Move the selection by `delta` without wrapping."""
        return self.select(self.selected_index + delta)

    def is_playable(self, entry: Optional[Entry]) -> bool:
        return (entry is not None and not entry.is_directory
                and is_playable_name(entry.name, self.extension))

    def find_adjacent_track(self, current: int, forward: bool = True) -> int:
        """
        Index of the next playable track from `current`, stepping circularly.

        Returns `current` unchanged when no other playable track exists.
        """
        size = len(self.entries)
        if size == 0:
            return current
        step = 1 if forward else -1
        idx = current
        for _ in range(size):
            idx = (idx + step) % size
            if self.is_playable(self.entries[idx]):
                return idx
            if idx == current:
                break
        return current

    def jump_to_adjacent_track(self, forward: bool = True) -> bool:
        """Select the adjacent playable track. Returns True if the selection moved."""
        target = self.find_adjacent_track(self.selected_index, forward)
        if target == self.selected_index:
            return False
        self.selected_index = target
        return True

    # ============================================
    # SCROLL WINDOW
    # ============================================

    def update_scroll(self, visible_rows: int) -> int:
        """Keep the selection centred in a window of `visible_rows` lines."""
        visible_rows = max(1, visible_rows)
        total = len(self.entries)
        half = visible_rows // 2
        if self.selected_index <= half:
            offset = 0
        elif self.selected_index >= total - half:
            offset = total - visible_rows
        else:
            offset = self.selected_index - half
        self.scroll_offset = max(0, min(offset, total - visible_rows))
        return self.scroll_offset
