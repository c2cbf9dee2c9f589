"""Input layer - Read notes from files."""

from .midi import MidiLoader

__all__ = ["MidiLoader"]
