"""
Theo Runner audio - synthesised jump, pickup and crash cues.
"""

from .engine import AudioEngine

__all__ = ["AudioEngine"]
