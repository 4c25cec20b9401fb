"""
Theo Runner audio engine - three chiptune cues.

The simulation core only emits PLAY_* events; this engine turns them into
short synthesised blips through pygame's mixer.
"""

import array
import logging
import math
from typing import Callable, Dict, List, Optional

import pygame

from theorunner.core.events import Event, EventBus, EventType

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100


def sine(phase: float) -> float:
    """Sine wave at a phase given in cycles."""
    return math.sin(2 * math.pi * phase)


def saw(phase: float) -> float:
    """Sawtooth wave - buzzy crash sound."""
    return 2 * (phase % 1) - 1


def exp_ramp(start: float, end: float, t: float, duration: float) -> float:
    """Exponential ramp from start to end over duration seconds."""
    if t >= duration:
        return end
    return start * (end / start) ** (t / duration)


def render_tone(
    duration: float,
    freq_at: Callable[[float], float],
    gain_at: Callable[[float], float],
    wave: Callable[[float], float] = sine,
    sample_rate: int = SAMPLE_RATE,
) -> array.array:
    """Render a mono 16-bit tone with time-varying frequency and gain."""
    samples = array.array('h')
    phase = 0.0
    for i in range(int(sample_rate * duration)):
        t = i / sample_rate
        phase += freq_at(t) / sample_rate
        val = wave(phase) * gain_at(t)
        samples.append(int(max(-1.0, min(1.0, val)) * 32767))
    return samples


def synth_jump(sample_rate: int = SAMPLE_RATE) -> array.array:
    """Rising 400 -> 600 Hz chirp."""
    return render_tone(
        0.1,
        lambda t: exp_ramp(400, 600, t, 0.1),
        lambda t: exp_ramp(0.1, 0.01, t, 0.1),
        sample_rate=sample_rate,
    )


def synth_collect(sample_rate: int = SAMPLE_RATE) -> array.array:
    """Two-note C5 -> E5 pickup."""
    return render_tone(
        0.2,
        lambda t: 523 if t < 0.1 else 659,
        lambda t: exp_ramp(0.1, 0.01, t, 0.2),
        sample_rate=sample_rate,
    )


def synth_hit(sample_rate: int = SAMPLE_RATE) -> array.array:
    """Falling sawtooth crash."""
    return render_tone(
        0.3,
        lambda t: exp_ramp(200, 50, t, 0.3),
        lambda t: exp_ramp(0.15, 0.01, t, 0.3),
        wave=saw,
        sample_rate=sample_rate,
    )


SOUND_FOR_EVENT: Dict[EventType, str] = {
    EventType.PLAY_JUMP: "jump",
    EventType.PLAY_COLLECT: "collect",
    EventType.PLAY_HIT: "hit",
}


class AudioEngine:
    """Plays the game's sound cues. Silent if no audio device is available."""

    def __init__(self, volume: float = 1.0, muted: bool = False) -> None:
        self._initialized = False
        self._sounds: Dict[str, pygame.mixer.Sound] = {}
        self._volume = volume
        self._muted = muted
        self._unsubscribers: List[Callable[[], None]] = []

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def init(self) -> bool:
        """Initialize the mixer and generate the cues."""
        try:
            pygame.mixer.pre_init(SAMPLE_RATE, -16, 2, 512)
            pygame.mixer.init()
            self._initialized = True
            logger.info("Audio engine initialized")
        except pygame.error as e:
            logger.error(f"Failed to initialize audio: {e}")
            return False

        self._sounds["jump"] = self._create_sound(synth_jump())
        self._sounds["collect"] = self._create_sound(synth_collect())
        self._sounds["hit"] = self._create_sound(synth_hit())
        logger.info(f"Generated {len(self._sounds)} sounds")
        return True

    def _create_sound(self, samples: array.array) -> pygame.mixer.Sound:
        """Create a pygame Sound from mono samples (auto-converted to stereo)."""
        stereo = array.array('h')
        for s in samples:
            stereo.append(s)
            stereo.append(s)
        return pygame.mixer.Sound(buffer=stereo)

    def play(self, sound_name: str) -> Optional[pygame.mixer.Channel]:
        """Play a sound effect."""
        if not self._initialized or self._muted:
            return None

        sound = self._sounds.get(sound_name)
        if not sound:
            logger.warning(f"Sound not found: {sound_name}")
            return None

        sound.set_volume(self._volume)
        return sound.play()

    def handle_event(self, event: Event) -> None:
        sound_name = SOUND_FOR_EVENT.get(event.type)
        if sound_name:
            self.play(sound_name)

    def attach(self, event_bus: EventBus) -> None:
        """Subscribe to the sound cues on a bus."""
        for event_type in SOUND_FOR_EVENT:
            self._unsubscribers.append(event_bus.subscribe(event_type, self.handle_event))
        self._unsubscribers.append(
            event_bus.subscribe(EventType.TOGGLE_SOUND, lambda _e: self.toggle_mute())
        )

    def is_muted(self) -> bool:
        return self._muted

    def toggle_mute(self) -> bool:
        """Toggle mute state."""
        self._muted = not self._muted
        logger.info("Audio muted" if self._muted else "Audio unmuted")
        return self._muted

    def cleanup(self) -> None:
        """Cleanup audio resources."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        if self._initialized:
            pygame.mixer.quit()
            self._initialized = False
            logger.info("Audio engine cleaned up")
