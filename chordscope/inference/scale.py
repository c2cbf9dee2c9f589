"""Scales - modes, spelling and diatonic chord generation."""

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from ..core import PitchClass, PitchClassSet
from .chords import Chord, ChordGuesser


# Interval patterns in semitones from the root
SCALE_MODES = {
    # Modes of the major scale
    "ionian": (0, 2, 4, 5, 7, 9, 11),
    "dorian": (0, 2, 3, 5, 7, 9, 10),
    "phrygian": (0, 1, 3, 5, 7, 8, 10),
    "lydian": (0, 2, 4, 6, 7, 9, 11),
    "mixolydian": (0, 2, 4, 5, 7, 9, 10),
    "aeolian": (0, 2, 3, 5, 7, 8, 10),
    "locrian": (0, 1, 3, 5, 6, 8, 10),
    # Common scales
    "major": (0, 2, 4, 5, 7, 9, 11),
    "minor": (0, 2, 3, 5, 7, 8, 10),
    "harmonic_minor": (0, 2, 3, 5, 7, 8, 11),
    "melodic_minor": (0, 2, 3, 5, 7, 9, 11),
    # Pentatonic and blues
    "major_pentatonic": (0, 2, 4, 7, 9),
    "minor_pentatonic": (0, 3, 5, 7, 10),
    "blues": (0, 3, 5, 6, 7, 10),
    "major_blues": (0, 2, 3, 4, 7, 9),
    # Symmetric
    "chromatic": tuple(range(12)),
    "whole_tone": (0, 2, 4, 6, 8, 10),
    "diminished": (0, 2, 3, 5, 6, 8, 9, 11),
    "augmented": (0, 3, 4, 7, 8, 11),
    # Others
    "phrygian_dominant": (0, 1, 4, 5, 7, 8, 10),
    "lydian_dominant": (0, 2, 4, 6, 7, 9, 10),
    "super_locrian": (0, 1, 3, 4, 6, 8, 10),
    "bebop_major": (0, 2, 4, 5, 7, 8, 9, 11),
    "bebop_dominant": (0, 2, 4, 5, 7, 9, 10, 11),
}

_RELATIVE_MINOR = ("major", "ionian")
_RELATIVE_MAJOR = ("minor", "aeolian")


@dataclass(frozen=True)
class Scale:
    """A scale: root pitch class plus semitone pattern."""

    root: PitchClass
    intervals: Tuple[int, ...]
    mode: Optional[str] = None

    @classmethod
    def from_mode(cls, root: Union[str, PitchClass], mode: str) -> "Scale":
        """
        Create a scale from a root and a SCALE_MODES name.

        Raises:
            ValueError: If the mode is unknown or the root is malformed
        """
        if mode not in SCALE_MODES:
            raise ValueError(
                f"Unknown scale mode: {mode}. Expected one of: {', '.join(SCALE_MODES)}"
            )
        root_pc = PitchClass.from_name(root) if isinstance(root, str) else root
        return cls(root_pc, SCALE_MODES[mode], mode)

    @property
    def name(self) -> str:
        """e.g. 'C major', 'D dorian', 'C scale' for custom patterns."""
        return f"{self.root.name} {self.mode or 'scale'}"

    @property
    def notes(self) -> List[PitchClass]:
        """
        Scale tones.

        Seven-note scales use one letter per degree (F major has Bb, not
        A#); other scales fall back to sharps or flats following the root.
        """
        if len(self.intervals) == 7:
            return [
                PitchClass.from_step(self.root.step + i, self.root.chroma + semitones)
                for i, semitones in enumerate(self.intervals)
            ]
        use_sharps = not (self.root.accidental or "").startswith("b")
        notes = [self.root]
        for semitones in self.intervals[1:]:
            notes.append(PitchClass.from_chroma((self.root.chroma + semitones) % 12, use_sharps))
        return notes

    @property
    def pcset(self) -> PitchClassSet:
        return PitchClassSet.create((self.root.chroma + i) % 12 for i in self.intervals)

    def degree(self, n: int) -> Optional[PitchClass]:
        """Scale tone at 1-based degree n, or None when out of range."""
        if n < 1 or n > len(self.intervals):
            return None
        return self.notes[n - 1]

    def degree_of(self, pc: PitchClass) -> Optional[int]:
        """1-based degree of a pitch class (by chroma), or None."""
        position = self.pcset.index(pc.chroma)
        return None if position == -1 else position + 1

    def contains(self, pc: PitchClass) -> bool:
        return pc.chroma in self.pcset

    def transpose(self, semitones: int) -> "Scale":
        root = PitchClass.from_chroma((self.root.chroma + semitones) % 12)
        return Scale(root, self.intervals, self.mode)

    def relative(self) -> Optional["Scale"]:
        """Relative aeolian/ionian scale, None for other modes."""
        if self.mode in _RELATIVE_MINOR:
            return Scale.from_mode(self.degree(6), "aeolian")
        if self.mode in _RELATIVE_MAJOR:
            return Scale.from_mode(self.degree(3), "ionian")
        return None

    def diatonic_chords(self, guesser: Optional[ChordGuesser] = None) -> List[Tuple[int, Optional[Chord]]]:
        """
        Stacked-third triads on every degree.

        Returns:
            List of (degree, chord) tuples; chord is None when the stacked
            tones form no known chord
        """
        return self._stacked_chords(3, guesser)

    def diatonic_sevenths(self, guesser: Optional[ChordGuesser] = None) -> List[Tuple[int, Optional[Chord]]]:
        """Stacked-third seventh chords on every degree (Cmaj7, Dm7, ... Bm7b5)."""
        return self._stacked_chords(4, guesser)

    def _stacked_chords(
        self, size: int, guesser: Optional[ChordGuesser]
    ) -> List[Tuple[int, Optional[Chord]]]:
        guesser = guesser or ChordGuesser()
        notes = self.notes
        chords = []
        for i in range(len(notes)):
            tones = [notes[(i + 2 * k) % len(notes)] for k in range(size)]
            results = guesser.guess(tones)
            chords.append((i + 1, results[0].chord if results else None))
        return chords

    def to_dict(self) -> dict:
        return {"root": self.root.to_dict(), "intervals": list(self.intervals), "mode": self.mode}

    @classmethod
    def from_dict(cls, data: dict) -> "Scale":
        return cls(PitchClass.from_dict(data["root"]), tuple(data["intervals"]), data.get("mode"))

    def __str__(self) -> str:
        return self.name
