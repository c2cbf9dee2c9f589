"""Pitch-class sets - set-theoretic analysis of chroma collections.

A PitchClassSet keeps its members in first-seen order (the chord guesser
relies on that order to know which note is the root candidate) while
behaving as a set for membership. Derived quantities:

- binary: 12-bit fingerprint, bit i set iff chroma i is present
- interval_vector: interval-class histogram (transposition and inversion invariant)
- normal(): most left-compact rotation, zero-anchored
- prime(): more compact of normal() and invert().normal()
"""

from typing import Iterable, Iterator, List, Sequence, Tuple, Union

from .pitch import PitchClass, Note, is_valid_chroma


ChromaLike = Union[int, str, PitchClass]


def _chroma_of(value: ChromaLike) -> int:
    if isinstance(value, PitchClass):
        return value.chroma
    if isinstance(value, bool):
        raise TypeError(f"Cannot extract chroma from: {value!r}")
    if isinstance(value, int):
        if is_valid_chroma(value):
            return value
        raise ValueError(f"Invalid chroma number: {value}. Must be an integer between 0 and 11.")
    if isinstance(value, str):
        if value.isdigit():
            return _chroma_of(int(value))
        if any(ch.isdigit() for ch in value):
            return Note.from_name(value).chroma
        return PitchClass.from_name(value).chroma
    raise TypeError(f"Cannot extract chroma from: {value!r}")


def _most_left_compact(sets: Sequence["PitchClassSet"]) -> "PitchClassSet":
    best = sets[0]
    for candidate in sets[1:]:
        if candidate.binary < best.binary:
            best = candidate
    return best


class PitchClassSet:
    """An immutable, ordered collection of unique chromas (0-11)."""

    __slots__ = ("_chromas",)

    def __init__(self, chromas: Iterable[int] = ()):
        seen = []
        for chroma in chromas:
            if chroma not in seen:
                seen.append(chroma)
        self._chromas: Tuple[int, ...] = tuple(seen)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def create(cls, chromas: Iterable[int]) -> "PitchClassSet":
        """Dedup (first occurrence wins) without range validation."""
        return cls(chromas)

    @classmethod
    def from_chromas(cls, chromas: Iterable[int]) -> "PitchClassSet":
        """Create from chroma numbers, validating each is in [0, 11]."""
        return cls(_chroma_of(c) for c in chromas)

    @classmethod
    def from_pitches(cls, pitches: Iterable[ChromaLike]) -> "PitchClassSet":
        """Create from notes, pitch classes, names ("C#", "Eb4") or chroma numbers."""
        return cls(_chroma_of(p) for p in pitches)

    @classmethod
    def from_binary(cls, binary: int) -> "PitchClassSet":
        """Inverse of .binary; members come out in ascending order."""
        if not isinstance(binary, int) or not 0 <= binary < 4096:
            raise ValueError(f"Invalid pitch-class set fingerprint: {binary!r}. Must be 0-4095.")
        return cls(i for i in range(12) if binary & (1 << i))

    @classmethod
    def from_string(cls, bits: str) -> "PitchClassSet":
        """
        Create from a 12-character bit string ("100010010000" is C major).

        Raises:
            TypeError: If bits is not a string
            ValueError: If the string is not 12 characters of 0/1
        """
        if not isinstance(bits, str):
            raise TypeError(f"Invalid input type: {type(bits).__name__}. Expected a string.")
        if len(bits) != 12 or set(bits) - {"0", "1"}:
            raise ValueError(
                f"Invalid pitch-class set string: {bits!r}. Expected 12 characters of 0 or 1."
            )
        return cls(i for i, bit in enumerate(bits) if bit == "1")

    # ------------------------------------------------------------------
    # Sequence protocol
    # ------------------------------------------------------------------

    @property
    def chromas(self) -> Tuple[int, ...]:
        return self._chromas

    def __iter__(self) -> Iterator[int]:
        return iter(self._chromas)

    def __len__(self) -> int:
        return len(self._chromas)

    def __contains__(self, chroma) -> bool:
        return chroma in self._chromas

    def __getitem__(self, i):
        return self._chromas[i]

    def index(self, chroma: int) -> int:
        """Position of a chroma, -1 when absent."""
        try:
            return self._chromas.index(chroma)
        except ValueError:
            return -1

    def __eq__(self, other) -> bool:
        if isinstance(other, PitchClassSet):
            return self._chromas == other._chromas
        if isinstance(other, (list, tuple)):
            return list(self._chromas) == list(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._chromas)

    def __repr__(self) -> str:
        return f"PitchClassSet({list(self._chromas)})"

    def __str__(self) -> str:
        bits = ["0"] * 12
        for chroma in self._chromas:
            bits[chroma] = "1"
        return "".join(bits)

    def same_members(self, other: "PitchClassSet") -> bool:
        """Set equality, ignoring order."""
        return self.binary == other.binary

    # ------------------------------------------------------------------
    # Derived quantities
    # ------------------------------------------------------------------

    @property
    def binary(self) -> int:
        """Fingerprint: sum of 2**chroma."""
        return sum(1 << chroma for chroma in self._chromas)

    @property
    def interval_vector(self) -> Tuple[int, ...]:
        """Counts of interval classes 1-6 over every unordered pair."""
        vector = [0] * 6
        members = self._chromas
        for i in range(len(members)):
            for j in range(i + 1, len(members)):
                diff = (members[j] - members[i]) % 12
                if diff > 6:
                    diff = 12 - diff
                # Chromas are unique, so diff is never 0
                vector[diff - 1] += 1
        return tuple(vector)

    # ------------------------------------------------------------------
    # Transformations (all return new sets)
    # ------------------------------------------------------------------

    def transpose(self, n: int) -> "PitchClassSet":
        return PitchClassSet((c + n) % 12 for c in self._chromas)

    def zero(self) -> "PitchClassSet":
        """Transpose so the first member becomes 0."""
        if not self._chromas:
            return self
        return self.transpose(-self._chromas[0])

    def invert(self) -> "PitchClassSet":
        """Reflect around pitch class 0."""
        return PitchClassSet((12 - c) % 12 for c in self._chromas)

    def complement(self) -> "PitchClassSet":
        return PitchClassSet(c for c in range(12) if c not in self._chromas)

    def rotate(self, n: int) -> "PitchClassSet":
        """Cyclically shift the member order left by n positions."""
        if not self._chromas:
            return self
        n %= len(self._chromas)
        return PitchClassSet(self._chromas[n:] + self._chromas[:n])

    def reverse(self) -> "PitchClassSet":
        return PitchClassSet(reversed(self._chromas))

    def sorted(self) -> "PitchClassSet":
        return PitchClassSet(sorted(self._chromas))

    def normal(self) -> "PitchClassSet":
        """Zero-anchored rotation of the sorted set with the smallest binary."""
        if not self._chromas:
            return self
        ordered = self.sorted()
        rotations: List[PitchClassSet] = [
            ordered.rotate(i).zero() for i in range(len(ordered))
        ]
        return _most_left_compact(rotations)

    def prime(self) -> "PitchClassSet":
        """Transposition and inversion invariant representative."""
        if not self._chromas:
            return self
        return _most_left_compact([self.normal(), self.invert().normal()])

    @staticmethod
    def is_z_related(a: Iterable[int], b: Iterable[int]) -> bool:
        """
        True when two sets share an interval vector.

        Sets with the same prime form also satisfy this; compare prime forms
        to tell genuine Z-pairs from equivalent sets.
        """
        set_a = a if isinstance(a, PitchClassSet) else PitchClassSet(a)
        set_b = b if isinstance(b, PitchClassSet) else PitchClassSet(b)
        return set_a.interval_vector == set_b.interval_vector
