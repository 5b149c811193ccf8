"""
GsfBox UI - Rendering and visual components.
"""
from .helpers import format_clock, fit_text
from .renderer import Renderer
from ..models import RenderContext

__all__ = [
    'format_clock',
    'fit_text',
    'Renderer',
    'RenderContext',
]
