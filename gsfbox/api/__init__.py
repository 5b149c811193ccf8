"""
GsfBox API modules - Filesystem, tag and decoder collaborators.
"""
from .catalog import DirectoryCatalog, list_directory
from .player import PlayerProcess, NullPlayerProcess
from .psftag import read_metadata

__all__ = ['DirectoryCatalog', 'list_directory', 'PlayerProcess', 'NullPlayerProcess', 'read_metadata']
