"""
GsfBox Handlers - Input and event handling.
"""
from ..models import Action
from .input import InputMapper

__all__ = ['Action', 'InputMapper']
