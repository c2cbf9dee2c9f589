"""Tests for chord analysis of timed notes and key detection.

Tests cover:
- Key detection with various keys and modes
- Chord detection from simultaneous notes
- Progression analysis (Roman numerals, cadences, common progressions)
- Edge cases and error handling
"""

import pytest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from chordscope.core import NoteEvent, PITCH_NAMES
from chordscope.inference import (
    ChordAnalyzer,
    ChordGuesser,
    ChordProgression,
    GuessOptions,
    Key,
    KeyDetector,
    KeyInfo,
)


# ============================================================================
# Test Fixtures - Helper functions to create test data
# ============================================================================

def create_scale_notes(root: str, mode: str, octave: int = 4, duration: float = 0.5) -> list:
    """Create notes for a scale."""
    root_pc = PITCH_NAMES.index(root)

    if mode == "major":
        intervals = [0, 2, 4, 5, 7, 9, 11]
    else:  # minor
        intervals = [0, 2, 3, 5, 7, 8, 10]

    notes = []
    time = 0.0
    base_pitch = (octave + 1) * 12 + root_pc

    for interval in intervals:
        notes.append(NoteEvent(
            pitch=base_pitch + interval,
            onset=time,
            offset=time + duration,
            velocity=80,
        ))
        time += duration

    return notes


def create_chord_notes(root: str, quality: str, octave: int = 4,
                       onset: float = 0.0, duration: float = 1.0) -> list:
    """Create notes for a chord."""
    root_pc = PITCH_NAMES.index(root)
    base_pitch = (octave + 1) * 12 + root_pc

    templates = {
        "major": [0, 4, 7],
        "minor": [0, 3, 7],
        "diminished": [0, 3, 6],
        "dominant7": [0, 4, 7, 10],
        "major7": [0, 4, 7, 11],
        "first_inversion": [4, 7, 12],
    }

    return [
        NoteEvent(
            pitch=base_pitch + interval,
            onset=onset,
            offset=onset + duration,
            velocity=80,
        )
        for interval in templates[quality]
    ]


def create_chord_progression_notes(progression: list, duration: float = 1.0) -> list:
    """Create notes for a chord progression.

    progression: list of (root, quality) tuples
    """
    notes = []
    time = 0.0

    for root, quality in progression:
        notes.extend(create_chord_notes(root, quality, onset=time, duration=duration))
        time += duration

    return notes


C_MAJOR = Key.from_name("C major")


# ============================================================================
# Key Detection Tests
# ============================================================================

class TestKeyDetector:
    """Tests for KeyDetector."""

    def test_c_major_scale(self):
        """Test detection of C major scale."""
        notes = create_scale_notes("C", "major")
        detector = KeyDetector()

        key, mode, confidence = detector.detect_from_notes(notes)

        assert key == "C"
        assert mode == "major"
        assert confidence > 0.5

    def test_a_minor_scale(self):
        """Test detection of A minor scale."""
        notes = create_scale_notes("A", "minor")
        detector = KeyDetector()

        key, mode, confidence = detector.detect_from_notes(notes)

        # A minor and C major share notes, so both are valid
        assert key in ["A", "C"]
        assert confidence > 0.3

    def test_g_major_scale(self):
        """Test detection of G major scale."""
        notes = create_scale_notes("G", "major")
        detector = KeyDetector()

        key, mode, _ = detector.detect_from_notes(notes)

        assert key == "G"
        assert mode == "major"

    def test_analyze_returns_key_info(self):
        """Test that analyze returns KeyInfo with all fields."""
        notes = create_scale_notes("C", "major")
        detector = KeyDetector()

        result = detector.analyze(notes)

        assert isinstance(result, KeyInfo)
        assert 0 <= result.confidence <= 1
        assert len(result.pitch_class_distribution) == 12
        assert result.pitch_class_distribution.sum() == pytest.approx(1.0)
        assert result.key == Key.from_name(result.name)

    def test_related_keys(self):
        """Test relative and parallel key labels."""
        notes = create_scale_notes("C", "major")

        result = KeyDetector().analyze(notes)

        assert result.relative_key == "A minor"
        assert result.parallel_key == "C minor"

    def test_alternatives_provided(self):
        """Test that alternative keys are provided."""
        notes = create_scale_notes("C", "major")
        detector = KeyDetector()

        result = detector.analyze(notes, return_alternatives=True)
        assert 0 < len(result.alternatives) <= 3

        result = detector.analyze(notes, return_alternatives=False)
        assert result.alternatives == []

    def test_empty_notes(self):
        """Test handling of empty note list."""
        detector = KeyDetector()

        with pytest.warns(UserWarning, match="at least 3 notes"):
            result = detector.analyze([])

        assert result.confidence == 0.0
        assert result.ambiguity_score == 1.0

    def test_single_note(self):
        """Test handling of single note."""
        notes = [NoteEvent(pitch=60, onset=0, offset=1, velocity=80)]
        detector = KeyDetector()

        with pytest.warns(UserWarning):
            result = detector.analyze(notes)

        assert result.confidence < 0.5

    def test_weighted_detection(self):
        """Test that longer notes are weighted more."""
        notes = [
            NoteEvent(pitch=60, onset=0, offset=2.0, velocity=80),  # C - long
            NoteEvent(pitch=62, onset=2, offset=2.5, velocity=80),  # D - short
            NoteEvent(pitch=64, onset=2.5, offset=3.0, velocity=80),  # E - short
        ]
        detector = KeyDetector()

        key, mode, _ = detector.detect_from_notes(notes, weighted=True)

        assert key == "C"

    def test_temperley_profile(self):
        """Test with Temperley key profiles."""
        notes = create_scale_notes("C", "major")
        detector = KeyDetector(profile_type="temperley")

        key, mode, _ = detector.detect_from_notes(notes)

        assert key == "C"
        assert mode == "major"

    def test_unknown_profile(self):
        """Test rejected profile names."""
        with pytest.raises(ValueError, match="Unknown key profile"):
            KeyDetector(profile_type="nope")


# ============================================================================
# Chord Detection Tests
# ============================================================================

class TestChordAnalyzer:
    """Tests for ChordAnalyzer."""

    def test_detect_c_major_chord(self):
        """Test detection of C major chord."""
        notes = create_chord_notes("C", "major")
        analyzer = ChordAnalyzer()

        chords = analyzer.detect_chords(notes)

        assert len(chords) == 1
        assert chords[0].chord.root.name == "C"
        assert chords[0].chord.type.name == "major"
        assert chords[0].notes == [60, 64, 67]
        assert chords[0].duration == pytest.approx(1.0)

    def test_detect_a_minor_chord(self):
        """Test detection of A minor chord."""
        notes = create_chord_notes("A", "minor")
        analyzer = ChordAnalyzer()

        chords = analyzer.detect_chords(notes)

        assert len(chords) == 1
        assert chords[0].symbol == "Amin"

    def test_detect_g_dominant7(self):
        """Test detection of G7 chord."""
        notes = create_chord_notes("G", "dominant7")
        analyzer = ChordAnalyzer()

        chords = analyzer.detect_chords(notes)

        assert len(chords) == 1
        assert chords[0].symbol == "Gdom7"
        assert chords[0].confidence == 1.0

    def test_detect_inversion(self):
        """Test that the lowest note is the bass."""
        notes = create_chord_notes("C", "first_inversion")
        analyzer = ChordAnalyzer()

        chords = analyzer.detect_chords(notes)

        assert chords[0].symbol == "Cmaj/E"
        assert chords[0].inversion == 1

    def test_detect_chord_progression(self):
        """Test detection of I-IV-V-I progression."""
        progression = [("C", "major"), ("F", "major"), ("G", "major"), ("C", "major")]
        notes = create_chord_progression_notes(progression)
        analyzer = ChordAnalyzer()

        chords = analyzer.detect_chords(notes)

        assert [c.symbol for c in chords] == ["Cmaj", "Fmaj", "Gmaj", "Cmaj"]
        assert [c.onset for c in chords] == pytest.approx([0.0, 1.0, 2.0, 3.0])

    def test_repeated_chord_merged(self):
        """Test that repeated chords are merged."""
        progression = [("C", "major"), ("C", "major"), ("G", "major")]
        notes = create_chord_progression_notes(progression)
        analyzer = ChordAnalyzer()

        chords = analyzer.detect_chords(notes)

        assert [c.symbol for c in chords] == ["Cmaj", "Gmaj"]
        assert chords[0].offset == pytest.approx(2.0)

    def test_staccato_chords(self):
        """Test very short notes still form the chord attacked with them."""
        notes = []
        for i, root in enumerate(["C", "F", "G"]):
            notes.extend(create_chord_notes(root, "major", onset=i * 0.5, duration=0.04))

        chords = ChordAnalyzer().detect_chords(notes)

        # The last block spans only its own 40 ms
        assert [c.symbol for c in chords] == ["Cmaj", "Fmaj"]
        assert chords[0].notes == [60, 64, 67]

        chords = ChordAnalyzer(min_chord_duration=0.0).detect_chords(notes)
        assert [c.symbol for c in chords] == ["Cmaj", "Fmaj", "Gmaj"]

    def test_released_notes_not_carried_over(self):
        """Test notes ending at the next attack do not join the next chord."""
        notes = (create_chord_notes("C", "major", onset=0.0, duration=1.0)
                 + create_chord_notes("A", "minor", onset=1.0, duration=1.0))

        chords = ChordAnalyzer().detect_chords(notes)

        assert chords[1].notes == [69, 72, 76]

    def test_guesser_options_respected(self):
        """Test a supplied guesser keeps its own tolerances."""
        notes = create_chord_notes("C", "first_inversion")
        strict = ChordGuesser(options=GuessOptions(allow_inversions=False))

        assert ChordAnalyzer(guesser=strict).detect_chords(notes) == []
        assert ChordAnalyzer(guesser=strict, options=GuessOptions()).detect_chords(notes) != []

    def test_short_segments_skipped(self):
        """Test the minimum chord duration."""
        notes = create_chord_notes("C", "major", duration=0.1)
        analyzer = ChordAnalyzer(min_chord_duration=0.25)

        assert analyzer.detect_chords(notes) == []

    def test_single_pitch_class(self):
        """Test that octaves alone do not form a chord."""
        notes = [
            NoteEvent(pitch=48, onset=0, offset=1),
            NoteEvent(pitch=60, onset=0, offset=1),
        ]

        assert ChordAnalyzer().detect_chords(notes) == []

    def test_empty_notes(self):
        """Test handling of empty note list."""
        assert ChordAnalyzer().detect_chords([]) == []

    def test_key_context_caps_confidence(self):
        """Test confidence stays within 0-1 with a key bonus."""
        notes = create_chord_notes("C", "major")

        chords = ChordAnalyzer().detect_chords(notes, C_MAJOR)

        assert chords[0].confidence == 1.0


# ============================================================================
# Progression Analysis Tests
# ============================================================================

class TestProgressionAnalysis:
    """Tests for progression analysis."""

    def test_roman_numerals(self):
        """Test full progression analysis."""
        progression = [("C", "major"), ("F", "major"), ("G", "dominant7"), ("C", "major")]
        notes = create_chord_progression_notes(progression)
        analyzer = ChordAnalyzer()

        result = analyzer.analyze(notes, C_MAJOR)

        assert isinstance(result, ChordProgression)
        assert result.key == C_MAJOR
        assert result.roman_numerals == ["I", "IV", "V7", "I"]
        assert result.symbols == ["Cmaj", "Fmaj", "Gdom7", "Cmaj"]

    def test_no_key_no_numerals(self):
        """Test analysis without a key."""
        notes = create_chord_progression_notes([("C", "major"), ("G", "major")])

        result = ChordAnalyzer().analyze(notes)

        assert result.roman_numerals == []
        assert result.get_common_progressions() == []

    def test_cadences(self):
        """Test cadence identification."""
        progression = [("C", "major"), ("F", "major"), ("G", "dominant7"), ("C", "major"),
                       ("G", "major"), ("A", "minor")]
        notes = create_chord_progression_notes(progression)
        analyzer = ChordAnalyzer()

        result = analyzer.analyze(notes, C_MAJOR)
        cadences = analyzer.identify_cadences(result)

        assert (2, "half") in cadences
        assert (3, "authentic") in cadences
        assert (5, "deceptive") in cadences

    def test_plagal_cadence(self):
        """Test IV-I."""
        notes = create_chord_progression_notes([("F", "major"), ("C", "major")])
        analyzer = ChordAnalyzer()

        result = analyzer.analyze(notes, C_MAJOR)

        assert analyzer.identify_cadences(result) == [(1, "plagal")]

    def test_common_progressions(self):
        """Test recognition of well known progressions."""
        progression = [("C", "major"), ("F", "major"), ("G", "major"), ("C", "major")]
        notes = create_chord_progression_notes(progression)

        result = ChordAnalyzer().analyze(notes, C_MAJOR)
        found = dict(result.get_common_progressions())

        assert found["I-IV-V"] == pytest.approx(0.75)
        assert "ii-V-I" not in found
