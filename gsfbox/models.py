"""
GsfBox Data Models - Core data structures.
"""
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple


@dataclass(frozen=True)
class Entry:
    """A directory or playable track in the current catalog."""
    name: str
    is_directory: bool = False


@dataclass
class TrackMetadata:
    """Descriptive fields read from a track's tag block."""
    path: Optional[str] = None
    title: Optional[str] = None
    artist: Optional[str] = None
    game: Optional[str] = None
    year: Optional[str] = None
    copyright: Optional[str] = None
    produced_by: Optional[str] = None
    length_text: Optional[str] = None

    @property
    def length_seconds(self) -> int:
        """Track length in whole seconds, 0 if unknown."""
        return parse_length(self.length_text)

    @property
    def length_display(self) -> Optional[str]:
        """Length text without its fractional part."""
        if not self.length_text:
            return None
        return self.length_text.split('.', 1)[0]


class Mode(Enum):
    """Top-level controller state."""
    BROWSING = 'browsing'
    PLAYING = 'playing'


class LoopPolicy(Enum):
    """What happens when a track ends on its own."""
    OFF = 'OFF'
    REPEAT_ONE = 'ONE'
    REPEAT_ALL = 'ALL'

    @property
    def label(self) -> str:
        return self.value

    def next(self) -> 'LoopPolicy':
        """Cycle OFF -> REPEAT_ONE -> REPEAT_ALL -> OFF."""
        order = list(LoopPolicy)
        return order[(order.index(self) + 1) % len(order)]


class Action(Enum):
    """Discrete inputs understood by the playback controller."""
    UP = 'up'
    DOWN = 'down'
    PAGE_UP = 'page_up'
    PAGE_DOWN = 'page_down'
    LEFT = 'left'
    RIGHT = 'right'
    SELECT = 'select'
    BACK = 'back'
    LOOP = 'loop'
    PAUSE = 'pause'
    SCREEN_POWER = 'screen_power'
    EXIT = 'exit'  # Exit button: an ordinary input, gated while the screen is off
    QUIT = 'quit'  # Window close / signal: always honoured


@dataclass(frozen=True)
class PendingSwitch:
    """A requested move to the adjacent track, resolved on the next observed exit."""
    forward: bool = True


@dataclass
class PlaybackSession:
    """
    Timing for one spawned track.

    Elapsed time only accrues while unpaused.
    """
    started_at: float
    duration_seconds: int = 0
    paused_at: Optional[float] = None
    paused_total: float = 0.0

    def pause(self, now: float):
        if self.paused_at is None:
            self.paused_at = now

    def resume(self, now: float):
        if self.paused_at is not None:
            self.paused_total += now - self.paused_at
            self.paused_at = None

    def elapsed(self, now: float) -> int:
        """Whole seconds played so far."""
        end = self.paused_at if self.paused_at is not None else now
        return max(0, int(end - self.started_at - self.paused_total))


@dataclass(frozen=True)
class RenderContext:
    """Read-only snapshot of controller state for drawing a frame."""
    mode: Mode
    path: Path
    entries: Tuple[Entry, ...]
    selected_index: int
    scroll_offset: int
    metadata: TrackMetadata
    elapsed: int
    loop_label: str
    paused: bool
    screen_blanked: bool


def parse_length(text: Optional[str]) -> int:
    """
    Parse a tag length into seconds.

    Accepts "m:ss", "ss.fraction" and plain integer seconds. Anything
    unparsable yields 0, meaning unknown length.
    """
    if not text:
        return 0
    text = text.strip()
    try:
        if ':' in text:
            minutes, seconds = text.split(':', 1)
            return int(minutes) * 60 + int(seconds.split('.', 1)[0])
        if '.' in text:
            return int(text.split('.', 1)[0])
        return int(text)
    except ValueError:
        return 0
