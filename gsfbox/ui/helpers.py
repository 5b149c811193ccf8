"""
UI Helpers - Text formatting utilities.
"""
import pygame


def format_clock(seconds: int) -> str:
    """Format seconds as mm:ss."""
    seconds = max(0, int(seconds))
    return f'{seconds // 60:02d}:{seconds % 60:02d}'


def fit_text(font: pygame.font.Font, text: str, max_width: int) -> str:
    """Truncate `text` with an ellipsis so it renders within `max_width` pixels."""
    if max_width <= 0 or font.size(text)[0] <= max_width:
        return text
    ellipsis = '...'
    while text and font.size(text + ellipsis)[0] > max_width:
        text = text[:-1]
    return text + ellipsis
