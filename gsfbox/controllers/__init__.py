"""
GsfBox Controllers - Playback and navigation state.
"""
from .playback import PlaybackController
from .triggers import TriggerEdgeDetector

__all__ = ['PlaybackController', 'TriggerEdgeDetector']
