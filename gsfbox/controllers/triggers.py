"""
Trigger Edge Detector - Turns analog trigger samples into press edges.
"""
import logging
from typing import Tuple

from ..config import TRIGGER_THRESHOLD

logger = logging.getLogger(__name__)


class TriggerEdgeDetector:
    """Detect rising edges on the left/right analog triggers."""

    def __init__(self, threshold: int = TRIGGER_THRESHOLD):
        self.threshold = threshold
        self.left_pressed = False
        self.right_pressed = False

    def update(self, left: int, right: int) -> Tuple[bool, bool]:
        """
        Feed one sample per trigger.

        Returns (left_edge, right_edge): True only on the tick a trigger
        crosses the threshold.
        """
        left_now = left > self.threshold
        right_now = right > self.threshold
        edges = (left_now and not self.left_pressed, right_now and not self.right_pressed)
        self.left_pressed = left_now
        self.right_pressed = right_now
        if any(edges):
            logger.debug(f'Trigger edge: left={edges[0]} right={edges[1]}')
        return edges

    def reset(self):
        self.left_pressed = False
        self.right_pressed = False
