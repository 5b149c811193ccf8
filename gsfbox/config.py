"""
GsfBox Configuration - All constants and settings.
"""
import os
import sys
from pathlib import Path

# ============================================
# SCREEN & DISPLAY
# ============================================

SCREEN_WIDTH = 640
SCREEN_HEIGHT = 480

FONT_PATH = os.environ.get('GSFBOX_FONT', '/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf')
FONT_SIZE = 24

# Display output toggled by the screen-power button (wlroots compositor)
DISPLAY_OUTPUT = os.environ.get('GSFBOX_DISPLAY_OUTPUT', 'DSI-1')
BACKLIGHT_DIR = '/sys/class/backlight'

# ============================================
# COMMAND LINE FLAGS
# ============================================

MOCK_MODE = '--mock' in sys.argv or '-m' in sys.argv
FULLSCREEN = '--fullscreen' in sys.argv or '-f' in sys.argv


def _arg_value(flag: str):
    """Return the value following `flag` on the command line, if any."""
    if flag in sys.argv:
        idx = sys.argv.index(flag)
        if idx + 1 < len(sys.argv):
            return sys.argv[idx + 1]
    return None


# ============================================
# PATHS
# ============================================

# Navigation never ascends above this directory
MUSIC_ROOT = Path(_arg_value('--root') or os.environ.get('GSFBOX_MUSIC_ROOT', '/roms/music/GBA'))

# Logging directory
LOG_DIR = Path.home() / 'gsfbox' / 'logs'
LOG_FILE = LOG_DIR / 'gsfbox.log'
LOG_MAX_BYTES = 1024 * 1024  # 1MB per file
LOG_BACKUP_COUNT = 5

# ============================================
# DECODER
# ============================================

PLAYABLE_EXTENSION = '.minigsf'

DECODER_PATH = os.environ.get('GSFBOX_DECODER', '/usr/bin/playgsf')
# -c: no looping, -s: single track, -q: quiet
DECODER_ARGS = ('-c', '-s', '-q')

# Length of a simulated track in --mock mode
MOCK_TRACK_SECONDS = 20

# ============================================
# COLORS
# ============================================

COLORS = {
    'background': (0, 0, 0),
    'text': (255, 255, 255),
    'highlight': (255, 255, 0),
    'directory': (0, 255, 255),
    'label': (0, 255, 0),
    'value': (255, 165, 0),
}

# ============================================
# TIMING
# ============================================

TARGET_FPS = 60  # ~16ms per tick
REPEAT_ALL_GRACE = 5  # Seconds past nominal length before forcing the next track

# ============================================
# INPUT
# ============================================

TRIGGER_THRESHOLD = 16000  # Analog trigger axis range is 0..32767
PAGE_SIZE = 10

# ============================================
# HELP TEXT
# ============================================

LIST_HELP = [
    'A: Play/Enter  B: Back  L1/R1: Jump',
    'SL: Exit  Menu: Lock',
]

PLAYBACK_HELP = [
    'B:Back  L2/R2:Prev/Next  Y:Loop Mode  Menu:Lock',
    'ST:Pause  SL:exit',
]
