"""
storygen - topic to fully-timed short-video scenes.
"""

__version__ = "1.0.0"
