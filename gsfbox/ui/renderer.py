"""
Renderer - List and now-playing screens.
"""
import logging
from typing import Optional, Tuple

import pygame

from .helpers import format_clock, fit_text
from ..models import Mode, RenderContext
from ..config import (
    SCREEN_WIDTH, SCREEN_HEIGHT, COLORS,
    FONT_PATH, FONT_SIZE,
    LIST_HELP, PLAYBACK_HELP,
)

logger = logging.getLogger(__name__)


class Renderer:
    """Handles all drawing for the GsfBox UI."""

    def __init__(self, screen: pygame.Surface, font: Optional[pygame.font.Font] = None):
        self.screen = screen
        self.font = font or self._load_font()
        self.line_height = self.font.get_linesize()

    def _load_font(self) -> pygame.font.Font:
        try:
            return pygame.font.Font(FONT_PATH, FONT_SIZE)
        except OSError as e:
            logger.warning(f'Font {FONT_PATH} unavailable ({e}), using default font')
            return pygame.font.Font(None, FONT_SIZE + 6)

    @property
    def visible_rows(self) -> int:
        """Number of list rows that fit above the help text."""
        help_height = self.line_height * 4
        return max(1, (SCREEN_HEIGHT - help_height) // self.line_height - 1)

    def draw(self, ctx: RenderContext):
        """Draw one frame from a controller snapshot."""
        self.screen.fill(COLORS['background'])
        if ctx.screen_blanked:
            return
        if ctx.mode is Mode.PLAYING:
            self._draw_playback(ctx)
        else:
            self._draw_list(ctx)

    def _text(self, text: str, pos: Tuple[int, int], color: tuple, max_width: int = 0):
        if not text:
            return
        surface = self.font.render(fit_text(self.font, text, max_width), True, color)
        self.screen.blit(surface, pos)

    # ============================================
    # LIST VIEW
    # ============================================

    def _draw_list(self, ctx: RenderContext):
        if not ctx.entries:
            self._text('No items found', (30, 50), COLORS['text'])
            return

        width = SCREEN_WIDTH - 20
        self._text(f'Directory: {ctx.path}', (5, 2), COLORS['text'], width)

        y = self.line_height + 5
        end = min(len(ctx.entries), ctx.scroll_offset + self.visible_rows)
        for i in range(ctx.scroll_offset, end):
            entry = ctx.entries[i]
            if i == ctx.selected_index:
                color = COLORS['highlight']
            elif entry.is_directory:
                color = COLORS['directory']
            else:
                color = COLORS['text']
            prefix = '[DIR] ' if entry.is_directory else ' '
            self._text(prefix + entry.name, (10, y), color, width)
            y += self.line_height

        help_y = SCREEN_HEIGHT - 60
        for i, line in enumerate(LIST_HELP):
            self._text(line, (10, help_y + self.line_height * i), COLORS['text'])

    # ============================================
    # NOW PLAYING VIEW
    # ============================================

    def _draw_playback(self, ctx: RenderContext):
        label, value = COLORS['label'], COLORS['value']
        meta = ctx.metadata

        y = 20
        self._text('Paused' if ctx.paused else 'Now Playing...', (20, y), label)
        y += 40

        rows = [
            ('Game: ', meta.game),
            ('Title: ', meta.title),
            ('Artist: ', meta.artist),
            ('Length: ', meta.length_display),
            ('Elapsed: ', format_clock(ctx.elapsed)),
            ('Year: ', meta.year),
            ('GSF By: ', meta.produced_by),
            ('Copyright: ', meta.copyright),
        ]
        for name, text in rows:
            if not text:
                continue
            self._text(name, (20, y), label)
            x = 20 + self.font.size(name)[0] + 10
            self._text(text.replace('\n', ' '), (x, y), value, SCREEN_WIDTH - x - 10)
            y += 30

        self._text('Loop: ', (500, SCREEN_HEIGHT - 100), label)
        self._text(ctx.loop_label, (570, SCREEN_HEIGHT - 100), value)

        self._text(PLAYBACK_HELP[0], (10, SCREEN_HEIGHT - 70), label)
        self._text(PLAYBACK_HELP[1], (10, SCREEN_HEIGHT - 40), label)
