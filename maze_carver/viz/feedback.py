import logging

import numpy as np
import pygame

logger = logging.getLogger(__name__)

SAMPLE_RATE = 22050


def synth_tone(freq: float, duration: float, volume: float = 0.3, sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    """Sine tone with a linear fade-out, as 16-bit stereo samples."""
    t = np.linspace(0.0, duration, int(sample_rate * duration), endpoint=False)
    envelope = np.linspace(1.0, 0.0, t.size)
    wave = np.sin(2 * np.pi * freq * t) * envelope * volume
    samples = (wave * 32767).astype(np.int16)
    return np.column_stack((samples, samples))


def synth_chime(sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    notes = [synth_tone(f, 0.12, sample_rate=sample_rate) for f in (523.25, 659.25, 783.99)]
    return np.concatenate(notes)


class SoundFeedback:
    """Blip on every carving step, chime when the maze is finished."""

    def __init__(self, muted: bool = False):
        self.muted = muted
        self.enabled = False
        self.step_sound = None
        self.done_sound = None

    def init(self):
        try:
            pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=2)
        except pygame.error as e:
            logger.warning(f"Audio unavailable, running silent: {e}")
            return
        self.step_sound = pygame.sndarray.make_sound(synth_tone(880.0, 0.03))
        self.done_sound = pygame.sndarray.make_sound(synth_chime())
        self.enabled = True

    def toggle_mute(self):
        self.muted = not self.muted
        logger.info(f"Sound {'muted' if self.muted else 'on'}")

    def on_step(self, index):
        if self.enabled and not self.muted:
            self.step_sound.play()

    def on_complete(self, openings):
        if self.enabled and not self.muted:
            self.done_sound.play()
