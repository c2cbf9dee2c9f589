"""Spelled pitches - pitch classes (letter + accidental) and octave-bearing notes.

A PitchClass is octave independent: its chroma (0-11) is what the set and
chord layers work with. A Note adds an octave and therefore an absolute
height / MIDI number. resolve_pitch() turns the loose inputs accepted by the
chord guesser (names, MIDI numbers, instances) into one of these.
"""

import re
from dataclasses import dataclass
from typing import Optional, Union

from .constants import (
    LETTERS,
    STEP_SIZES,
    PITCH_NAMES,
    FLAT_PITCH_NAMES,
    PITCH_CLASS_PATTERN,
    NOTE_PATTERN,
    A4_FREQUENCY,
    A4_MIDI,
    MIDI_MIN,
    MIDI_MAX,
    OCTAVE_MIN,
    OCTAVE_MAX,
    DEFAULT_OCTAVE,
)

_PITCH_CLASS_RE = re.compile(PITCH_CLASS_PATTERN)
_NOTE_RE = re.compile(NOTE_PATTERN)
_ACCIDENTAL_RE = re.compile(r"^(?:#+|b+|x+|n)?$")


def is_valid_chroma(chroma) -> bool:
    """Check that a value is an integer chroma in [0, 11]."""
    return isinstance(chroma, int) and not isinstance(chroma, bool) and 0 <= chroma < 12


def is_valid_midi(midi) -> bool:
    """Check that a value is an integer MIDI number in [0, 127]."""
    return isinstance(midi, int) and not isinstance(midi, bool) and MIDI_MIN <= midi <= MIDI_MAX


def _normalize_accidental(accidental: Optional[str]) -> Optional[str]:
    if not accidental:
        return None
    if not isinstance(accidental, str) or not _ACCIDENTAL_RE.match(accidental):
        raise ValueError(
            f"Invalid accidental: {accidental!r}. Must be #, b, x, n, or empty."
        )
    return accidental.replace("x", "##")


@dataclass(frozen=True)
class PitchClass:
    """A pitch class: letter name plus optional accidental.

    Two pitch classes compare equal only when spelled the same; use
    enharmonic_equals() to compare by chroma.
    """

    letter: str
    accidental: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.letter, str) or self.letter.upper() not in LETTERS:
            raise ValueError(
                f"Invalid pitch class letter: {self.letter!r}. Must be A-G (case-insensitive)."
            )
        object.__setattr__(self, "letter", self.letter.upper())
        object.__setattr__(self, "accidental", _normalize_accidental(self.accidental))

    @property
    def name(self) -> str:
        """Pitch class name (e.g., 'C#', 'Bb')."""
        return f"{self.letter}{self.accidental or ''}"

    @property
    def step(self) -> int:
        """Diatonic step, C=0 ... B=6."""
        return LETTERS.index(self.letter)

    @property
    def alteration(self) -> int:
        """Signed semitone alteration (# = 1, bb = -2, n = 0)."""
        if not self.accidental or self.accidental == "n":
            return 0
        sign = 1 if self.accidental.startswith("#") else -1
        return sign * len(self.accidental)

    @property
    def chroma(self) -> int:
        """Pitch class number 0-11 (C=0)."""
        return (STEP_SIZES[self.step] + self.alteration) % 12

    @property
    def pitch_class(self) -> "PitchClass":
        return PitchClass(self.letter, self.accidental)

    def enharmonic_equals(self, other: "PitchClass") -> bool:
        """True if both pitch classes sound the same (same chroma)."""
        return self.chroma == other.chroma

    def copy(self) -> "PitchClass":
        return PitchClass(self.letter, self.accidental)

    def __str__(self) -> str:
        return self.name

    @classmethod
    def from_parts(cls, letter: str, accidental: Optional[str] = None) -> "PitchClass":
        """Create from a letter and an accidental string."""
        return cls(letter, accidental)

    @classmethod
    def from_name(cls, name: str) -> "PitchClass":
        """
        Parse a pitch class name.

        Args:
            name: Name such as "C", "F#", "Bb", "Cx", "En"

        Returns:
            PitchClass

        Raises:
            TypeError: If name is not a string
            ValueError: If name is malformed
        """
        if not isinstance(name, str):
            raise TypeError(f"Invalid pitch class name: {name!r}. Name must be a string.")
        match = _PITCH_CLASS_RE.match(name)
        if not match:
            raise ValueError(
                f"Invalid pitch class name: {name}. Expected format: [A-G][#/b/x/n]"
            )
        letter, accidental = match.groups()
        return cls(letter, accidental)

    @classmethod
    def from_chroma(cls, chroma: int, use_sharps: bool = True) -> "PitchClass":
        """Create the default spelling of a chroma (sharps or flats)."""
        if not is_valid_chroma(chroma):
            raise ValueError(
                f"Invalid chroma: {chroma!r}. Chroma must be an integer between 0 and 11."
            )
        names = PITCH_NAMES if use_sharps else FLAT_PITCH_NAMES
        return PitchClass.from_name(names[chroma])

    @classmethod
    def from_step(cls, step: int, chroma: int) -> "PitchClass":
        """
        Spell a chroma on a given diatonic step (0 = C ... 6 = B).

        Steps and chromas wrap, so from_step(6, 0) is B# and from_step(1, 0)
        is Dbb.
        """
        step %= 7
        alteration = (chroma - STEP_SIZES[step]) % 12
        if alteration > 6:
            alteration -= 12
        accidental = "#" * alteration if alteration > 0 else "b" * -alteration
        return PitchClass(LETTERS[step], accidental or None)

    def to_dict(self) -> dict:
        return {"letter": self.letter, "accidental": self.accidental}

    @classmethod
    def from_dict(cls, data: dict) -> "PitchClass":
        return cls(data["letter"], data.get("accidental"))


@dataclass(frozen=True)
class Note(PitchClass):
    """A pitch class in a specific octave (scientific pitch notation, C4 = 60)."""

    octave: int = DEFAULT_OCTAVE

    def __post_init__(self):
        super().__post_init__()
        if (
            not isinstance(self.octave, int)
            or isinstance(self.octave, bool)
            or not OCTAVE_MIN <= self.octave <= OCTAVE_MAX
        ):
            raise ValueError(
                f"Invalid note octave: {self.octave!r}. "
                f"Must be an integer between {OCTAVE_MIN} and {OCTAVE_MAX}."
            )

    @property
    def pc_name(self) -> str:
        """Name without the octave (e.g., 'C#')."""
        return super().name

    @property
    def name(self) -> str:
        """Full name with octave (e.g., 'C#4')."""
        return f"{self.pc_name}{self.octave}"

    @property
    def height(self) -> int:
        """Semitones above C-1. B#3 and C4 share a height of 60."""
        return STEP_SIZES[self.step] + self.alteration + (self.octave + 1) * 12

    @property
    def midi(self) -> Optional[int]:
        """MIDI number, or None if the height falls outside 0-127."""
        return self.height if is_valid_midi(self.height) else None

    @property
    def frequency(self) -> float:
        """Frequency in Hz, equal temperament with A4 = 440 Hz."""
        return A4_FREQUENCY * 2 ** ((self.height - A4_MIDI) / 12)

    def transpose(self, semitones: int) -> "Note":
        """Transpose by semitones, respelled with sharps."""
        target = self.height + semitones
        if not is_valid_midi(target):
            raise ValueError(
                f"Transposition results in invalid MIDI number: {target}. Must be 0-127."
            )
        return Note.from_midi(target)

    def copy(self) -> "Note":
        return Note(self.letter, self.accidental, self.octave)

    @classmethod
    def from_parts(
        cls, letter: str, accidental: Optional[str] = None, octave: int = DEFAULT_OCTAVE
    ) -> "Note":
        return cls(letter, accidental, octave)

    @classmethod
    def from_name(cls, name: str) -> "Note":
        """
        Parse a note name with octave.

        Args:
            name: Name such as "C4", "F#3", "Bb-1"

        Returns:
            Note

        Raises:
            TypeError: If name is not a string
            ValueError: If name is malformed or the octave is out of range
        """
        if not isinstance(name, str):
            raise TypeError(f"Invalid note name: {name!r}. Name must be a string.")
        match = _NOTE_RE.match(name)
        if not match:
            raise ValueError(
                f"Invalid note name: {name}. Expected format: [A-G][#/b/x/n][octave]"
            )
        letter, accidental, octave = match.groups()
        return cls(letter, accidental, int(octave))

    @classmethod
    def from_midi(cls, midi: int, use_sharps: bool = True) -> "Note":
        """Create a note from a MIDI number (0-127)."""
        if not is_valid_midi(midi):
            raise ValueError(
                f"Invalid MIDI number: {midi!r}. Must be an integer between 0 and 127."
            )
        pc = PitchClass.from_chroma(midi % 12, use_sharps)
        return cls(pc.letter, pc.accidental, midi // 12 - 1)

    def to_dict(self) -> dict:
        return {"letter": self.letter, "accidental": self.accidental, "octave": self.octave}

    @classmethod
    def from_dict(cls, data: dict) -> "Note":
        return cls(data["letter"], data.get("accidental"), data["octave"])


PitchLike = Union[PitchClass, str, int]


def resolve_pitch(value: PitchLike, default_octave: int = DEFAULT_OCTAVE) -> Note:
    """
    Resolve a loose pitch description to a Note.

    Args:
        value: Note, PitchClass, note name ("C#4"), pitch class name ("C#",
            placed in default_octave) or MIDI number
        default_octave: Octave used for octave-less inputs

    Returns:
        Note

    Raises:
        TypeError: For unsupported input kinds
        ValueError: For malformed names or out of range numbers
    """
    if isinstance(value, Note):
        return value
    if isinstance(value, PitchClass):
        return Note(value.letter, value.accidental, default_octave)
    if isinstance(value, bool):
        raise TypeError(f"Cannot resolve pitch from: {value!r}")
    if isinstance(value, int):
        return Note.from_midi(value)
    if isinstance(value, str):
        if any(ch.isdigit() for ch in value):
            return Note.from_name(value)
        pc = PitchClass.from_name(value)
        return Note(pc.letter, pc.accidental, default_octave)
    raise TypeError(
        f"Cannot resolve pitch from: {value!r}. Expected Note, PitchClass, str, or int."
    )
