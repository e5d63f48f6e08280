"""Sine tone played while the CHIP-8 sound timer is running."""

from __future__ import annotations

from array import array
import math
from typing import Optional

TONE_FREQUENCY = 441.0
TONE_AMPLITUDE = 28_000


class ToneBeeper:
    """Manage a looping tone using pygame's mixer."""

    def __init__(
        self,
        *,
        sample_rate: int = 44_100,
        frequency: float = TONE_FREQUENCY,
        volume: float = 0.35,
    ) -> None:
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required for audio output") from exc

        if pygame.mixer.get_init() is None:
            raise RuntimeError("pygame mixer must be initialised before creating ToneBeeper")

        self._pygame = pygame
        self._sample_rate = max(1, sample_rate)
        self._frequency = frequency
        self._volume = max(0.0, min(1.0, volume))
        self._channel: Optional[pygame.mixer.Channel] = None
        self._sound: Optional[pygame.mixer.Sound] = None
        self._playing = False

    # ------------------------------------------------------------------
    # Public API

    def set_state(self, enabled: bool) -> None:
        """Start or stop the tone."""

        if not enabled:
            self._stop()
            return
        if self._playing:
            return

        if self._sound is None:
            self._sound = self._pygame.mixer.Sound(buffer=build_tone_samples(self._sample_rate, self._frequency).tobytes())

        channel = self._channel
        if channel is None:
            channel = self._pygame.mixer.find_channel(True)
            if channel is None:
                return
            self._channel = channel

        channel.play(self._sound, loops=-1)
        channel.set_volume(self._volume)
        self._playing = True

    def shutdown(self) -> None:
        """Stop any active tone and release resources."""

        self._stop()
        self._channel = None
        self._sound = None

    def _stop(self) -> None:
        if self._channel is not None and self._playing:
            self._channel.stop()
        self._playing = False


def build_tone_samples(sample_rate: int, frequency: float, *, amplitude: int = TONE_AMPLITUDE) -> array:
    """Return one whole number of sine periods as signed 16-bit mono samples."""

    if frequency <= 0.0:
        raise ValueError("frequency must be positive")
    # Loop length spans whole periods.
    periods = max(1, int(round(frequency / 10.0)))
    count = max(1, int(round(sample_rate * periods / frequency)))
    buffer = array("h")
    for index in range(count):
        phase = 2.0 * math.pi * frequency * index / sample_rate
        buffer.append(int(amplitude * math.sin(phase)))
    return buffer


__all__ = ["ToneBeeper", "build_tone_samples", "TONE_FREQUENCY"]
