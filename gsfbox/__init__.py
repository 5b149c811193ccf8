"""
GsfBox - Browse (mini)GSF music and play it through playgsf.
"""

__version__ = '1.0.0'
