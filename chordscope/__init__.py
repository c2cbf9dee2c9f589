"""chordscope - Chord identification and music-theory toolkit.

Architecture Layers:
    1. core/      - Value types (pitch classes, notes, intervals, pitch-class sets)
    2. inference/ - Musical understanding (chord types, chord guessing, scales, keys)
    3. input/     - MIDI file loading
    4. output/    - MIDI export
"""

__version__ = "0.1.0"

# Core types
from .core import NoteEvent, PitchClass, Note, Interval, PitchClassSet, resolve_pitch

# Inference layer
from .inference import (
    ChordType,
    ChordTypeNode,
    ChordTypeIndex,
    build_chord_type_index,
    get_chord_type_index,
    Chord,
    GuessOptions,
    ChordGuessResult,
    ChordGuesser,
    ChordAnalyzer,
    ChordProgression,
    Scale,
    Key,
    KeyDetector,
    progression_from_degrees,
)

# Input / output layers
from .input import MidiLoader
from .output import MIDIExporter

__all__ = [
    # Core
    "NoteEvent",
    "PitchClass",
    "Note",
    "Interval",
    "PitchClassSet",
    "resolve_pitch",
    # Chord types and guessing
    "ChordType",
    "ChordTypeNode",
    "ChordTypeIndex",
    "build_chord_type_index",
    "get_chord_type_index",
    "Chord",
    "GuessOptions",
    "ChordGuessResult",
    "ChordGuesser",
    # Analysis
    "ChordAnalyzer",
    "ChordProgression",
    "Scale",
    "Key",
    "KeyDetector",
    "progression_from_degrees",
    # Input / output
    "MidiLoader",
    "MIDIExporter",
]
