"""
GsfBox Managers - Device state and side effects.
"""
from .screen import ScreenPowerManager

__all__ = ['ScreenPowerManager']
