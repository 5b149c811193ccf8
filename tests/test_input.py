"""
Tests for InputMapper - event translation and trigger sampling.
"""
import pygame
from pathlib import Path
from unittest.mock import MagicMock

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from gsfbox.handlers.input import Action, InputMapper


class TestEventMapping:
    """Tests for pygame event -> Action translation."""

    def test_window_close_is_quit(self):
        mapper = InputMapper()
        assert mapper.map_event(pygame.event.Event(pygame.QUIT)) is Action.QUIT

    def test_controller_buttons(self):
        mapper = InputMapper()

        def press(button):
            return mapper.map_event(pygame.event.Event(pygame.CONTROLLERBUTTONDOWN, button=button))

        assert press(pygame.CONTROLLER_BUTTON_DPAD_UP) is Action.UP
        assert press(pygame.CONTROLLER_BUTTON_RIGHTSHOULDER) is Action.PAGE_DOWN
        assert press(pygame.CONTROLLER_BUTTON_A) is Action.SELECT
        assert press(pygame.CONTROLLER_BUTTON_B) is Action.BACK
        assert press(pygame.CONTROLLER_BUTTON_Y) is Action.LOOP
        assert press(pygame.CONTROLLER_BUTTON_START) is Action.PAUSE
        assert press(pygame.CONTROLLER_BUTTON_GUIDE) is Action.SCREEN_POWER
        assert press(pygame.CONTROLLER_BUTTON_BACK) is Action.EXIT
        assert press(pygame.CONTROLLER_BUTTON_X) is None

    def test_keyboard(self):
        mapper = InputMapper()

        def key(k):
            return mapper.map_event(pygame.event.Event(pygame.KEYDOWN, key=k))

        assert key(pygame.K_DOWN) is Action.DOWN
        assert key(pygame.K_RETURN) is Action.SELECT
        assert key(pygame.K_ESCAPE) is Action.EXIT
        assert key(pygame.K_a) is None

    def test_other_events_ignored(self):
        mapper = InputMapper()
        assert mapper.map_event(pygame.event.Event(pygame.KEYUP, key=pygame.K_DOWN)) is None


class TestTriggerSampling:
    """Tests for reading the analog triggers."""

    def test_no_controller(self):
        assert InputMapper().read_triggers() is None

    def test_reads_both_axes(self):
        mapper = InputMapper()
        axes = {
            pygame.CONTROLLER_AXIS_TRIGGERLEFT: 100,
            pygame.CONTROLLER_AXIS_TRIGGERRIGHT: 32767,
        }
        mapper.controller = MagicMock()
        mapper.controller.get_axis.side_effect = axes.get

        assert mapper.read_triggers() == (100, 32767)

    def test_lost_controller_dropped(self):
        mapper = InputMapper()
        mapper.controller = MagicMock()
        mapper.controller.get_axis.side_effect = pygame.error('gone')

        assert mapper.read_triggers() is None
        assert mapper.controller is None
