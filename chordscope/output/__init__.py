"""Output layer - Export notes and chords to MIDI."""

from .midi import MIDIExporter

__all__ = ["MIDIExporter"]
