"""
Playback Controller - Browsing/playing state machine.

Each tick runs three checks in a fixed order:
1. exit detection: the only place a new track is spawned after another ends
2. duration enforcement: kills a track that overran its tagged length
3. trigger edges: request a switch and kill the current track

Skip input never spawns directly while a decoder is alive. It records a
PendingSwitch and kills the decoder; the next exit detection consumes the
switch. This keeps at most one decoder process alive at any time.
"""
import time
import logging
from dataclasses import replace
from typing import Callable, Optional, Tuple

from ..api.catalog import DirectoryCatalog
from ..api.psftag import read_metadata
from ..config import PAGE_SIZE, REPEAT_ALL_GRACE
from ..models import (
    Action, LoopPolicy, Mode, PendingSwitch, PlaybackSession, RenderContext, TrackMetadata,
)
from .triggers import TriggerEdgeDetector

logger = logging.getLogger(__name__)


class PlaybackController:
    """Owns navigation, loop policy and the decoder session."""

    def __init__(self,
                 catalog: DirectoryCatalog,
                 player,
                 metadata_reader: Callable = read_metadata,
                 clock: Callable[[], float] = time.monotonic,
                 on_screen_power: Optional[Callable[[bool], None]] = None,
                 triggers: Optional[TriggerEdgeDetector] = None,
                 page_size: int = PAGE_SIZE,
                 repeat_all_grace: int = REPEAT_ALL_GRACE):
        """
        Args:
            catalog: Directory listing and selection
            player: PlayerProcess (or NullPlayerProcess) owning the decoder
            metadata_reader: path -> TrackMetadata, or None when unreadable
            clock: Monotonic time source in seconds
            on_screen_power: Called with the new blanked state on screen toggle
        """
        self.catalog = catalog
        self.player = player
        self._read_metadata = metadata_reader
        self._clock = clock
        self._on_screen_power = on_screen_power
        self.triggers = triggers or TriggerEdgeDetector()
        self.page_size = page_size
        self.repeat_all_grace = repeat_all_grace

        self.mode = Mode.BROWSING
        self.loop_policy = LoopPolicy.REPEAT_ALL
        self.pending_switch: Optional[PendingSwitch] = None
        self.metadata = TrackMetadata()
        self.session: Optional[PlaybackSession] = None
        self.elapsed = 0

        self.screen_blanked = False
        self.running = True
        self.dirty = True
        self.visible_rows = 1

    def start(self):
        """List the root directory."""
        self.catalog.load()
        self._refresh_list()

    def shutdown(self):
        """Kill and reap any running decoder."""
        self.player.close()
        self.session = None

    @property
    def paused(self) -> bool:
        return self.player.paused

    # ============================================
    # TICK
    # ============================================

    def tick(self, axes: Optional[Tuple[int, int]] = None):
        """
        Advance one tick.

        Args:
            axes: (left, right) analog trigger samples, None without a controller
        """
        if self.mode is Mode.PLAYING and not self.player.paused:
            self._check_exit()
        if self.mode is Mode.PLAYING and not self.player.paused:
            self._enforce_duration()
        if self.mode is Mode.PLAYING and axes is not None and self.player.is_running:
            self._check_triggers(*axes)

    def _check_exit(self):
        """React to the decoder exiting, by itself or because we killed it."""
        if not self.player.poll_exit():
            return
        self.dirty = True

        switch, self.pending_switch = self.pending_switch, None
        if switch is not None:
            target = self.catalog.find_adjacent_track(self.catalog.selected_index, switch.forward)
            logger.info(f'Switching {"next" if switch.forward else "previous"}: index {self.catalog.selected_index} -> {target}')
            self.catalog.select(target)
            self._play_selected()
            return

        logger.info(f'Track finished (loop={self.loop_policy.label})')
        if self.loop_policy is LoopPolicy.OFF:
            self._enter_browsing()
        elif self.loop_policy is LoopPolicy.REPEAT_ONE:
            self._play_selected()
        else:
            self.catalog.jump_to_adjacent_track(forward=True)
            self._play_selected()

    def _enforce_duration(self):
        """Update elapsed time and kill a track that reached its length."""
        if self.session is None or not self.player.is_running:
            return

        elapsed = self.session.elapsed(self._clock())
        if elapsed != self.elapsed:
            self.elapsed = elapsed
            self.dirty = True

        duration = self.session.duration_seconds
        if duration <= 0:
            return
        limit = duration
        if self.loop_policy is LoopPolicy.REPEAT_ALL:
            limit += self.repeat_all_grace
        if elapsed >= limit:
            logger.info(f'Length reached ({elapsed}s >= {limit}s), stopping decoder')
            # Exit detection on the next tick decides what plays next
            self.player.terminate()

    def _check_triggers(self, left: int, right: int):
        left_edge, right_edge = self.triggers.update(left, right)
        if left_edge:
            self._request_switch(forward=False)
        if right_edge:
            self._request_switch(forward=True)

    # ============================================
    # INPUT
    # ============================================

    def handle(self, action: Optional[Action]):
        """Apply one discrete input action."""
        if action is None:
            return

        if action is Action.QUIT:
            logger.info('Quit requested')
            self.running = False
            return

        if action is Action.SCREEN_POWER:
            self._toggle_screen()
            return

        if self.screen_blanked:
            return

        if action is Action.EXIT:
            logger.info('Exit requested')
            self.running = False
        elif self.mode is Mode.PLAYING:
            self._handle_playing(action)
        else:
            self._handle_browsing(action)

    def _handle_browsing(self, action: Action):
        catalog = self.catalog
        if action is Action.UP:
            catalog.move(-1)
        elif action is Action.DOWN:
            catalog.move(1)
        elif action is Action.PAGE_UP:
            catalog.move(-self.page_size)
        elif action is Action.PAGE_DOWN:
            catalog.move(self.page_size)
        elif action is Action.LEFT:
            catalog.jump_to_adjacent_track(forward=False)
        elif action is Action.RIGHT:
            catalog.jump_to_adjacent_track(forward=True)
        elif action is Action.SELECT:
            self._activate_selection()
            return
        elif action is Action.BACK:
            if catalog.at_root:
                logger.debug('Already at music root')
                return
            catalog.go_up()
        else:
            return
        self._refresh_list()

    def _handle_playing(self, action: Action):
        if action is Action.BACK:
            logger.info('Back to list')
            self._enter_browsing()
        elif action is Action.LEFT:
            self._request_switch(forward=False)
        elif action is Action.RIGHT:
            self._request_switch(forward=True)
        elif action is Action.LOOP:
            self.loop_policy = self.loop_policy.next()
            logger.info(f'Loop mode: {self.loop_policy.label}')
            self.dirty = True
        elif action is Action.PAUSE:
            self._toggle_pause()

    def _activate_selection(self):
        entry = self.catalog.selected_entry
        if entry is None:
            return
        if entry.is_directory:
            self.catalog.enter_selected()
            self._refresh_list()
            return
        self.pending_switch = None
        self._play_selected()

    def _toggle_pause(self):
        if not self.player.is_running:
            return
        paused = self.player.toggle_pause()
        if self.session is not None:
            if paused:
                self.session.pause(self._clock())
            else:
                self.session.resume(self._clock())
        self.dirty = True

    def _toggle_screen(self):
        self.screen_blanked = not self.screen_blanked
        logger.info(f'Screen {"blanked" if self.screen_blanked else "restored"}')
        if self._on_screen_power:
            self._on_screen_power(self.screen_blanked)
        self.dirty = True

    # ============================================
    # TRANSITIONS
    # ============================================

    def _request_switch(self, forward: bool):
        """Ask for the adjacent track once the current decoder is gone."""
        self.dirty = True
        if self.pending_switch is not None:
            # A kill is already in flight; only the direction changes
            self.pending_switch = PendingSwitch(forward=forward)
            return
        if self.player.is_running:
            self.pending_switch = PendingSwitch(forward=forward)
            logger.info(f'Skip {"next" if forward else "previous"} requested')
            self.player.terminate()
            return
        # Idle in Playing (nothing spawned): switch right away
        self.catalog.jump_to_adjacent_track(forward)
        self._play_selected()

    def _play_selected(self) -> bool:
        """Spawn the selected track and enter Playing."""
        self.mode = Mode.PLAYING
        self.session = None
        self.elapsed = 0
        self.dirty = True

        entry = self.catalog.selected_entry
        if not self.catalog.is_playable(entry):
            logger.warning('No playable track to start, idling')
            return False

        path = self.catalog.selected_path
        meta = self._read_metadata(path)
        if meta is None:
            # Keep the last good metadata on screen; length is unknown
            logger.warning(f'Unreadable metadata: {path.name}')
            duration = 0
        else:
            self.metadata = meta
            duration = meta.length_seconds

        if not self.player.spawn(path):
            return False

        self.session = PlaybackSession(started_at=self._clock(), duration_seconds=duration)
        logger.info(f'Playing {entry.name} (length {duration}s, loop={self.loop_policy.label})')
        return True

    def _enter_browsing(self):
        self.player.terminate()
        self.pending_switch = None
        self.session = None
        self.elapsed = 0
        self.triggers.reset()
        self.mode = Mode.BROWSING
        self._refresh_list()

    def _refresh_list(self):
        self.catalog.update_scroll(self.visible_rows)
        self.dirty = True

    # ============================================
    # SNAPSHOT
    # ============================================

    def snapshot(self) -> RenderContext:
        """Read-only view of the current state for the renderer."""
        return RenderContext(
            mode=self.mode,
            path=self.catalog.path,
            entries=tuple(self.catalog.entries),
            selected_index=self.catalog.selected_index,
            scroll_offset=self.catalog.scroll_offset,
            metadata=replace(self.metadata),
            elapsed=self.elapsed,
            loop_label=self.loop_policy.label,
            paused=self.player.paused,
            screen_blanked=self.screen_blanked,
        )
