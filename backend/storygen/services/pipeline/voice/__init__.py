"""
Voice Stage
"""

from .synthesizer import VoiceSynthesizer, PassThroughVoiceSynthesizer

__all__ = [
    "VoiceSynthesizer",
    "PassThroughVoiceSynthesizer",
]
