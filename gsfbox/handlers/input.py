"""
Input Mapper - Game controller and keyboard events to controller actions.
"""
import logging
from typing import Optional, Tuple

import pygame

from ..models import Action

logger = logging.getLogger(__name__)


BUTTON_ACTIONS = {
    pygame.CONTROLLER_BUTTON_DPAD_UP: Action.UP,
    pygame.CONTROLLER_BUTTON_DPAD_DOWN: Action.DOWN,
    pygame.CONTROLLER_BUTTON_LEFTSHOULDER: Action.PAGE_UP,
    pygame.CONTROLLER_BUTTON_RIGHTSHOULDER: Action.PAGE_DOWN,
    pygame.CONTROLLER_BUTTON_DPAD_LEFT: Action.LEFT,
    pygame.CONTROLLER_BUTTON_DPAD_RIGHT: Action.RIGHT,
    pygame.CONTROLLER_BUTTON_A: Action.SELECT,
    pygame.CONTROLLER_BUTTON_B: Action.BACK,
    pygame.CONTROLLER_BUTTON_Y: Action.LOOP,
    pygame.CONTROLLER_BUTTON_START: Action.PAUSE,
    pygame.CONTROLLER_BUTTON_GUIDE: Action.SCREEN_POWER,
    pygame.CONTROLLER_BUTTON_BACK: Action.EXIT,
}

# Keyboard equivalents for desktop development
KEY_ACTIONS = {
    pygame.K_UP: Action.UP,
    pygame.K_DOWN: Action.DOWN,
    pygame.K_PAGEUP: Action.PAGE_UP,
    pygame.K_PAGEDOWN: Action.PAGE_DOWN,
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_RETURN: Action.SELECT,
    pygame.K_BACKSPACE: Action.BACK,
    pygame.K_l: Action.LOOP,
    pygame.K_SPACE: Action.PAUSE,
    pygame.K_F12: Action.SCREEN_POWER,
    pygame.K_ESCAPE: Action.EXIT,
}


class InputMapper:
    """Maps pygame events to actions and samples the analog triggers."""

    def __init__(self):
        self.controller = None

    def open_controller(self) -> bool:
        """Open the first connected game controller. Returns True if found."""
        try:
            from pygame._sdl2 import controller as sdl_controller
            sdl_controller.init()
            for index in range(sdl_controller.get_count()):
                if sdl_controller.is_controller(index):
                    self.controller = sdl_controller.Controller(index)
                    logger.info(f'Game controller: {getattr(self.controller, "name", index)}')
                    return True
        except (pygame.error, ImportError) as e:
            logger.warning(f'Could not open game controller: {e}')
            return False
        logger.info('No game controller found, keyboard only')
        return False

    def close(self):
        if self.controller is not None:
            try:
                self.controller.quit()
            except pygame.error as e:
                logger.debug(f'Controller close failed: {e}')
            self.controller = None

    def map_event(self, event) -> Optional[Action]:
        """Translate one pygame event, or None if it is not an input we use."""
        if event.type == pygame.QUIT:
            return Action.QUIT
        if event.type == pygame.CONTROLLERBUTTONDOWN:
            return BUTTON_ACTIONS.get(event.button)
        if event.type == pygame.KEYDOWN:
            return KEY_ACTIONS.get(event.key)
        return None

    def read_triggers(self) -> Optional[Tuple[int, int]]:
        """Current (left, right) trigger axis values, or None without a controller."""
        if self.controller is None:
            return None
        try:
            return (
                self.controller.get_axis(pygame.CONTROLLER_AXIS_TRIGGERLEFT),
                self.controller.get_axis(pygame.CONTROLLER_AXIS_TRIGGERRIGHT),
            )
        except pygame.error as e:
            logger.warning(f'Lost game controller: {e}')
            self.controller = None
            return None
