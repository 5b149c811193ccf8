"""
Screen Power Manager - Display blanking for the lock button.
"""
import os
import logging
import subprocess
from typing import Optional

from ..config import BACKLIGHT_DIR, DISPLAY_OUTPUT
from ..utils import run_async

logger = logging.getLogger(__name__)


class ScreenPowerManager:
    """Turns the panel output and backlight on or off."""

    def __init__(self, output: str = DISPLAY_OUTPUT, backlight_dir: str = BACKLIGHT_DIR):
        self.output = output
        self.backlight_dir = backlight_dir
        self.is_on = True
        self.backlight_path = self._detect_backlight()

        if self.backlight_path:
            logger.info(f'Backlight detected: {self.backlight_path}')
        else:
            logger.info('No backlight found')

    def _detect_backlight(self) -> Optional[str]:
        """Path of the first backlight's bl_power file."""
        try:
            backlights = sorted(os.listdir(self.backlight_dir))
            if backlights:
                return os.path.join(self.backlight_dir, backlights[0], 'bl_power')
        except OSError:
            pass
        return None

    def set_power(self, on: bool, wait: bool = False):
        """Switch the display on or off. `wait` runs the output switch inline."""
        if on == self.is_on:
            return
        logger.info(f'Screen {"on" if on else "off"}')
        self.is_on = on
        if wait:
            self._set_output(on)
        else:
            run_async(self._set_output, on)
        self._set_backlight(on)

    def on_blanked_changed(self, blanked: bool):
        """Controller callback: blanked=True turns the screen off."""
        self.set_power(not blanked)

    def _set_output(self, on: bool):
        """Toggle the compositor output (wlroots)."""
        try:
            subprocess.run(
                ['wlr-randr', '--output', self.output, '--on' if on else '--off'],
                capture_output=True,
                check=True
            )
        except (subprocess.SubprocessError, FileNotFoundError) as e:
            logger.debug(f'Could not switch display output: {e}')

    def _set_backlight(self, on: bool):
        if not self.backlight_path:
            return
        try:
            # 0 = on, 1 = off (inverted logic)
            with open(self.backlight_path, 'w') as f:
                f.write('0\n' if on else '1\n')
            logger.debug(f'Backlight {"on" if on else "off"}')
        except OSError as e:
            logger.warning(f'Could not control backlight: {e}')
