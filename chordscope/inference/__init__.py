"""Inference layer - Musical understanding built on the core types.

This layer turns pitches and timed notes into musical meaning:
- Chord type index (every known chord shape, looked up by fingerprint)
- Chord guessing from sounding notes
- Chord recognition and progression analysis over time
- Scales, keys and key detection

Pipeline: Pitches → [Chord types] → Chord guesses → Progression (+ Key)
"""

from .chord_data import CHORD_TYPE_DATABASE
from .chord_types import (
    ChordType,
    ChordTypeNode,
    ChordTypeIndex,
    build_chord_type_index,
    get_chord_type_index,
    interval_signature,
)
from .chords import (
    Chord,
    GuessOptions,
    ChordGuessResult,
    ChordGuesser,
    ChordSegment,
    ChordProgression,
    ChordAnalyzer,
)
from .scale import Scale, SCALE_MODES
from .key import Key, KeyDetector, KeyInfo, KeyCandidate, chord_quality, resolve_key
from .progression import COMMON_PROGRESSIONS, progression_from_degrees

__all__ = [
    # Chord types
    "CHORD_TYPE_DATABASE",
    "ChordType",
    "ChordTypeNode",
    "ChordTypeIndex",
    "build_chord_type_index",
    "get_chord_type_index",
    "interval_signature",
    # Chord guessing and analysis
    "Chord",
    "GuessOptions",
    "ChordGuessResult",
    "ChordGuesser",
    "ChordSegment",
    "ChordProgression",
    "ChordAnalyzer",
    # Scales and keys
    "Scale",
    "SCALE_MODES",
    "Key",
    "KeyDetector",
    "KeyInfo",
    "KeyCandidate",
    "chord_quality",
    "resolve_key",
    # Progressions
    "COMMON_PROGRESSIONS",
    "progression_from_degrees",
]
