#!/usr/bin/env python3
"""
GsfBox - Pygame front-end for playgsf on handheld devices

Usage:
    python -m gsfbox                     # Windowed (development)
    python -m gsfbox --fullscreen        # Fullscreen (device)
    python -m gsfbox --mock              # Simulated decoder (UI testing)
    python -m gsfbox --root ~/music/gsf  # Different music root
"""
import os
import sys
import logging
import platform
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .config import (
    SCREEN_WIDTH, SCREEN_HEIGHT,
    MUSIC_ROOT, DECODER_PATH, MOCK_MODE, FULLSCREEN,
    LOG_DIR, LOG_FILE, LOG_MAX_BYTES, LOG_BACKUP_COUNT,
)
from .app import GsfBox


def setup_logging():
    """Configure logging with console and rotating file handler."""
    level_name = os.environ.get('GSFBOX_LOG_LEVEL', 'INFO').upper()
    level = getattr(logging, level_name, logging.INFO)

    console_formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S'
    )
    file_formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(console_formatter)
    console.setLevel(level)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.addHandler(console)

    # File handler only when LOG_DIR is writable
    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            LOG_FILE,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding='utf-8'
        )
        file_handler.setFormatter(file_formatter)
        file_handler.setLevel(logging.DEBUG)
        root.addHandler(file_handler)
        root.info(f'Logging to: {LOG_FILE}')
    except OSError as e:
        root.warning(f'Could not create log file: {e}')


def log_system_info(logger: logging.Logger):
    """Log system information at startup."""
    logger.info('=' * 50)
    logger.info('GSFBOX STARTUP')
    logger.info('=' * 50)
    logger.info(f'Python: {sys.version.split()[0]}')
    logger.info(f'Platform: {platform.system()} {platform.release()}')

    model_path = Path('/proc/device-tree/model')
    if model_path.exists():
        try:
            logger.info(f"Device: {model_path.read_text().replace(chr(0), '').strip()}")
        except OSError:
            pass

    logger.info('=' * 50)


def main():
    """Entry point for GsfBox."""
    setup_logging()

    logger = logging.getLogger(__name__)
    log_system_info(logger)

    logger.info(f'Music root: {MUSIC_ROOT}')
    if MOCK_MODE:
        logger.info('Decoder: MOCK')
    else:
        logger.info(f'Decoder: {DECODER_PATH}')
    logger.info(f'Screen: {SCREEN_WIDTH}x{SCREEN_HEIGHT}, fullscreen: {FULLSCREEN}')

    app = GsfBox(fullscreen=FULLSCREEN)
    app.start()


if __name__ == '__main__':
    main()
