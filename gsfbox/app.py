"""
GsfBox Application - Main application class.
"""
import signal
import logging

import pygame

from .config import (
    SCREEN_WIDTH, SCREEN_HEIGHT,
    MUSIC_ROOT, MOCK_MODE, TARGET_FPS,
    DECODER_PATH, DECODER_ARGS,
)
from .api import DirectoryCatalog, PlayerProcess, NullPlayerProcess, read_metadata
from .controllers import PlaybackController
from .handlers import InputMapper
from .managers import ScreenPowerManager
from .ui import Renderer

logger = logging.getLogger(__name__)


class GsfBox:
    """Main GsfBox application."""

    def __init__(self, fullscreen: bool = False):
        pygame.init()
        pygame.display.set_caption('playgsf selector')

        self._init_display(fullscreen)
        self._init_components()

    def _init_display(self, fullscreen: bool):
        """Initialize the display."""
        flags = 0
        if fullscreen:
            flags |= pygame.FULLSCREEN | pygame.NOFRAME
        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT), flags)
        self.clock = pygame.time.Clock()
        pygame.mouse.set_visible(not fullscreen)
        logger.info(f'Display: {pygame.display.get_driver()} {SCREEN_WIDTH}x{SCREEN_HEIGHT}')

    def _init_components(self):
        """Initialize all application components."""
        self.mock_mode = MOCK_MODE

        # Decoder (simulated tracks in mock mode)
        if self.mock_mode:
            self.player = NullPlayerProcess()
        else:
            self.player = PlayerProcess(DECODER_PATH, DECODER_ARGS)

        self.renderer = Renderer(self.screen)
        self.input = InputMapper()
        self.input.open_controller()
        self.screen_power = ScreenPowerManager()

        self.controller = PlaybackController(
            DirectoryCatalog(MUSIC_ROOT),
            self.player,
            metadata_reader=read_metadata,
            on_screen_power=self.screen_power.on_blanked_changed,
        )
        self.controller.visible_rows = self.renderer.visible_rows

        # Register signal handlers for graceful shutdown
        signal.signal(signal.SIGTERM, self._handle_signal)
        signal.signal(signal.SIGINT, self._handle_signal)

    def _handle_signal(self, signum, frame):
        """Handle SIGTERM/SIGINT for graceful shutdown."""
        sig_name = 'SIGTERM' if signum == signal.SIGTERM else 'SIGINT'
        logger.info(f'Received {sig_name}, shutting down...')
        self.controller.running = False

    def start(self):
        """Start the application."""
        logger.info(f'Starting GsfBox (root: {MUSIC_ROOT})')
        if self.mock_mode:
            logger.info('Running in MOCK MODE')

        self.controller.start()

        logger.info('Entering main loop...')
        try:
            while self.controller.running:
                self.controller.tick(self.input.read_triggers())
                self._handle_events()
                if self.controller.dirty:
                    self._draw()
                self.clock.tick(TARGET_FPS)
        finally:
            self._shutdown()

    def _handle_events(self):
        """Drain pygame events into the controller."""
        for event in pygame.event.get():
            action = self.input.map_event(event)
            if action is not None:
                logger.debug(f'Input: {action.name}')
                self.controller.handle(action)

    def _draw(self):
        self.renderer.draw(self.controller.snapshot())
        pygame.display.flip()
        self.controller.dirty = False

    def _shutdown(self):
        logger.info('Shutting down...')
        self.controller.shutdown()
        if self.controller.screen_blanked:
            self.screen_power.set_power(True, wait=True)
        self.input.close()
        pygame.quit()
        logger.info('GsfBox stopped')
