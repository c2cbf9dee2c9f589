"""Core types and constants for chordscope."""

from .note import NoteEvent
from .pitch import PitchClass, Note, resolve_pitch, is_valid_chroma, is_valid_midi
from .interval import Interval
from .pcset import PitchClassSet
from .constants import (
    PITCH_NAMES,
    FLAT_PITCH_NAMES,
    LETTERS,
    MIDI_MIN,
    MIDI_MAX,
)

__all__ = [
    "NoteEvent",
    "PitchClass",
    "Note",
    "resolve_pitch",
    "is_valid_chroma",
    "is_valid_midi",
    "Interval",
    "PitchClassSet",
    "PITCH_NAMES",
    "FLAT_PITCH_NAMES",
    "LETTERS",
    "MIDI_MIN",
    "MIDI_MAX",
]
