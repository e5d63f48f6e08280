"""Audio output for the CHIP-8 Python port."""

from .beeper import TONE_FREQUENCY, ToneBeeper, build_tone_samples

__all__ = [
    "TONE_FREQUENCY",
    "ToneBeeper",
    "build_tone_samples",
]
