"""Intervals - quality plus signed diatonic number (M3, P5, -m7, 9M)."""

import re
from dataclasses import dataclass

from .constants import (
    STEP_SIZES,
    INTERVAL_PATTERN,
    INTERVAL_QUALITY_PATTERN,
    INTERVAL_QUALITY_NAMES,
    INTERVAL_NUMBER,
    INTERVAL_QUALITY,
    PERFECT_STEPS,
)
from .pitch import PitchClass

_INTERVAL_RE = re.compile(INTERVAL_PATTERN)
_QUALITY_RE = re.compile(INTERVAL_QUALITY_PATTERN)


def number_to_ordinal(n: int) -> str:
    """1 -> '1st', 2 -> '2nd', 11 -> '11th', 23 -> '23rd'."""
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


@dataclass(frozen=True)
class Interval:
    """A musical interval.

    Attributes:
        quality: "P", "M", "m", "A".."AAAA" or "d".."dddd"
        number: Diatonic number, negative for descending (never 0)
    """

    quality: str
    number: int

    def __post_init__(self):
        if not isinstance(self.quality, str) or not _QUALITY_RE.match(self.quality):
            raise ValueError(
                f"Invalid interval quality: {self.quality!r}. Must be P, M, m, A, d, or variations."
            )
        if not isinstance(self.number, int) or isinstance(self.number, bool) or self.number == 0:
            raise ValueError(
                f"Invalid interval number: {self.number!r}. Must be a non-zero integer."
            )
        perfect = self.step in PERFECT_STEPS
        if perfect and self.quality in ("M", "m"):
            raise ValueError(
                f"Invalid interval: {self.quality}{self.number}. "
                "Unisons, fourths and fifths take P, A or d."
            )
        if not perfect and self.quality == "P":
            raise ValueError(
                f"Invalid interval: {self.quality}{self.number}. "
                "Seconds, thirds, sixths and sevenths take M, m, A or d."
            )

    @property
    def name(self) -> str:
        """Short name, e.g. 'M3', '-P5'."""
        sign = "-" if self.number < 0 else ""
        return f"{sign}{self.quality}{abs(self.number)}"

    @property
    def full_name(self) -> str:
        """Long name, e.g. 'Major 3rd'."""
        quality = INTERVAL_QUALITY_NAMES.get(self.quality, self.quality)
        return f"{quality} {number_to_ordinal(abs(self.number))}"

    @property
    def direction(self) -> int:
        return 1 if self.number > 0 else -1

    @property
    def step(self) -> int:
        """Step of the simple interval (0 = unison ... 6 = seventh)."""
        return (abs(self.number) - 1) % 7

    @property
    def octaves(self) -> int:
        """Whole octaves spanned (P8 and M10 are 1, P15 is 2)."""
        return (abs(self.number) - 1) // 7

    @property
    def alteration(self) -> int:
        """Semitones away from the perfect or major interval of the same number."""
        q = self.quality
        if q in ("P", "M"):
            return 0
        if q == "m":
            return -1
        if q.startswith("A"):
            return len(q)
        # diminished
        if self.step in PERFECT_STEPS:
            return -len(q)
        return -(len(q) + 1)

    @property
    def semitones(self) -> int:
        """Signed size in semitones (M9 is 14, -P5 is -7)."""
        return self.direction * (STEP_SIZES[self.step] + self.alteration + 12 * self.octaves)

    @property
    def chroma(self) -> int:
        """Size folded into a single octave, 0-11."""
        return (self.direction * (STEP_SIZES[self.step] + self.alteration)) % 12

    def invert(self) -> "Interval":
        """Complementary interval within the octave (M3 -> m6, A4 -> d5)."""
        simple_number = self.step + 1
        number = self.direction * (9 - simple_number + 7 * self.octaves)
        q = self.quality
        if q == "M":
            quality = "m"
        elif q == "m":
            quality = "M"
        elif q.startswith("A"):
            quality = "d" * len(q)
        elif q.startswith("d"):
            quality = "A" * len(q)
        else:
            quality = q
        return Interval(quality, number)

    def above(self, pc: PitchClass) -> PitchClass:
        """Pitch class this interval away from pc, spelled by number (C + m3 = Eb)."""
        return PitchClass.from_step(pc.step + self.direction * self.step, pc.chroma + self.chroma)

    def __str__(self) -> str:
        return self.name

    @classmethod
    def from_parts(cls, quality: str, number: int) -> "Interval":
        return cls(quality, number)

    @classmethod
    def from_name(cls, name: str) -> "Interval":
        """
        Parse an interval name.

        Both quality-first ("M3", "-P5") and number-first ("3M", "-5P")
        spellings are accepted; the chord database uses the latter.

        Raises:
            TypeError: If name is not a string
            ValueError: If name is malformed
        """
        if not isinstance(name, str):
            raise TypeError(f"Invalid interval name: {name!r}. Name must be a string.")
        match = _INTERVAL_RE.match(name)
        if not match:
            raise ValueError(
                f"Invalid interval name: {name}. "
                "Expected format: [quality][number] or [number][quality]."
            )
        number1, quality1, sign, quality2, number2 = match.groups()
        if quality1:
            return cls(quality1, int(number1))
        return cls(quality2, int(f"{sign}{number2}"))

    @classmethod
    def from_semitones(cls, semitones: int) -> "Interval":
        """Default spelling of a semitone distance (6 -> d5, 14 -> M9)."""
        direction = -1 if semitones < 0 else 1
        octaves, simple = divmod(abs(semitones), 12)
        quality = INTERVAL_QUALITY[simple]
        number = direction * (INTERVAL_NUMBER[simple] + 7 * octaves)
        return cls(quality, number)

    @classmethod
    def between(cls, low: PitchClass, high: PitchClass) -> "Interval":
        """Ascending interval from one pitch class up to another."""
        return cls.from_semitones((high.chroma - low.chroma) % 12)

    def to_dict(self) -> dict:
        return {"quality": self.quality, "number": self.number}

    @classmethod
    def from_dict(cls, data: dict) -> "Interval":
        return cls(data["quality"], data["number"])
