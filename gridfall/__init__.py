"""
Gridfall: a ten-player hidden-role elimination game with two Hunters and eight Targets.
"""

__version__ = "0.1.0"
