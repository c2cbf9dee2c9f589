"""Keys - key values, Roman numeral analysis and key detection.

Key detection implements:
- Krumhansl-Schmuckler key profiles
- Temperley key profiles (alternative weighting)
- Ambiguity detection (relative major/minor, close candidates)
- Confidence scoring from profile correlation
"""

import warnings
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

import numpy as np

from ..core import NoteEvent, PitchClass, PITCH_NAMES
from ..core.constants import KEY_SIGNATURES
from .chords import Chord
from .scale import Scale


KEY_MODES = ("major", "minor")

_ROMAN = ["", "I", "II", "III", "IV", "V", "VI", "VII"]


def chord_quality(chord: Chord) -> Tuple[str, bool]:
    """
    Triad quality and seventh flag of a chord, read from its tones.

    Returns:
        ("major" | "minor" | "diminished" | "augmented", has_seventh)
    """
    tones = set(chord.type.pcset)
    minor_third = 3 in tones and 4 not in tones
    if minor_third and 6 in tones and 7 not in tones:
        quality = "diminished"
    elif minor_third:
        quality = "minor"
    elif 4 in tones and 8 in tones and 7 not in tones:
        quality = "augmented"
    else:
        quality = "major"
    seventh = len(chord.type.intervals) >= 4 and (
        10 in tones or 11 in tones or (quality == "diminished" and 9 in tones)
    )
    return quality, seventh


@dataclass(frozen=True)
class Key:
    """A major or minor key."""

    root: PitchClass
    mode: str = "major"

    def __post_init__(self):
        if self.mode not in KEY_MODES:
            raise ValueError(f"Invalid key mode: {self.mode!r}. Must be 'major' or 'minor'.")

    @property
    def name(self) -> str:
        """Key name (e.g., 'C major', 'F# minor')."""
        return f"{self.root.name} {self.mode}"

    @property
    def scale(self) -> Scale:
        return Scale.from_mode(self.root, self.mode)

    @property
    def signature(self) -> int:
        """Accidentals in the key signature: positive sharps, negative flats."""
        major_root = self.root if self.mode == "major" else self.scale.degree(3)
        if major_root.name in KEY_SIGNATURES:
            return KEY_SIGNATURES[major_root.name]
        # Theoretical keys (D# major) fall back to an enharmonic equivalent
        for name, count in KEY_SIGNATURES.items():
            if PitchClass.from_name(name).chroma == major_root.chroma:
                return count
        return 0

    @property
    def relative(self) -> "Key":
        if self.mode == "major":
            return Key(self.scale.degree(6), "minor")
        return Key(self.scale.degree(3), "major")

    @property
    def parallel(self) -> "Key":
        return Key(self.root, "minor" if self.mode == "major" else "major")

    @classmethod
    def from_name(cls, name: str) -> "Key":
        """
        Parse a key name: "C major", "A minor", "Am", "Ebmaj", "F#".

        Raises:
            TypeError: If name is not a string
            ValueError: If the root or mode is malformed
        """
        if not isinstance(name, str):
            raise TypeError(f"Invalid key name: {name!r}. Name must be a string.")
        parts = name.split()
        if not parts or len(parts) > 2:
            raise ValueError(f"Invalid key name: {name!r}. Expected format: [root] [major|minor]")

        root, mode = parts[0], parts[1].lower() if len(parts) == 2 else None
        if mode is None:
            mode = "major"
            for suffix, suffix_mode in (("maj", "major"), ("min", "minor"), ("m", "minor")):
                if len(root) > len(suffix) and root.endswith(suffix):
                    root, mode = root[: -len(suffix)], suffix_mode
                    break
        elif mode in ("maj", "major"):
            mode = "major"
        elif mode in ("m", "min", "minor"):
            mode = "minor"
        else:
            raise ValueError(f"Invalid key mode in: {name!r}. Must be major or minor.")
        return cls(PitchClass.from_name(root), mode)

    def degree_of(self, chord: Chord) -> Optional[int]:
        """Scale degree (1-7) of the chord root, None when not diatonic."""
        return self.scale.degree_of(chord.root)

    def roman_numeral(self, chord: Chord) -> str:
        """
        Roman numeral of a chord in this key.

        Args:
            chord: Chord to label

        Returns:
            Numeral such as "IV", "ii", "V7", "vii°", "viiø7"; chords on
            non-diatonic roots come back as their symbol in parentheses
        """
        degree = self.degree_of(chord)
        if degree is None:
            return f"({chord})"

        quality, seventh = chord_quality(chord)
        numeral = _ROMAN[degree]
        if quality in ("minor", "diminished"):
            numeral = numeral.lower()

        if quality == "diminished":
            if seventh:
                numeral += "ø7" if 10 in chord.type.pcset else "°7"
            else:
                numeral += "°"
        elif quality == "augmented":
            numeral += "+7" if seventh else "+"
        elif seventh:
            numeral += "7"
        return numeral

    def to_dict(self) -> dict:
        return {"root": self.root.to_dict(), "mode": self.mode}

    @classmethod
    def from_dict(cls, data: dict) -> "Key":
        return cls(PitchClass.from_dict(data["root"]), data.get("mode", "major"))

    def __str__(self) -> str:
        return self.name


@dataclass
class KeyCandidate:
    """A candidate key with its score."""
    root: str
    mode: str
    correlation: float

    @property
    def name(self) -> str:
        return f"{self.root} {self.mode}"


@dataclass
class KeyInfo:
    """Container for key detection results."""

    root: str  # Key root note (e.g., "C", "F#")
    mode: str  # "major" or "minor"
    confidence: float  # 0.0 - 1.0
    pitch_class_distribution: Optional[np.ndarray] = None  # 12-element array
    alternatives: List[KeyCandidate] = field(default_factory=list)  # Other likely keys
    ambiguity_score: float = 0.0  # How ambiguous the detection is (0=clear, 1=very ambiguous)
    relative_key: Optional[str] = None  # Relative major/minor
    parallel_key: Optional[str] = None  # Parallel major/minor

    @property
    def name(self) -> str:
        return f"{self.root} {self.mode}"

    @property
    def key(self) -> Key:
        return Key(PitchClass.from_name(self.root), self.mode)


class KeyDetector:
    """Detect the key of a list of timed notes.

    Features:
    - Multiple key profile algorithms (Krumhansl-Schmuckler, Temperley)
    - Ambiguity detection for closely-scoring keys
    - Duration and velocity weighted pitch-class histogram
    """

    # Krumhansl-Schmuckler key profiles (cognitive-based)
    KRUMHANSL_MAJOR = np.array(
        [6.35, 2.23, 3.48, 2.33, 4.38, 4.09, 2.52, 5.19, 2.39, 3.66, 2.29, 2.88]
    )
    KRUMHANSL_MINOR = np.array(
        [6.33, 2.68, 3.52, 5.38, 2.60, 3.53, 2.54, 4.75, 3.98, 2.69, 3.34, 3.17]
    )

    # Temperley key profiles (corpus-based)
    TEMPERLEY_MAJOR = np.array(
        [5.0, 2.0, 3.5, 2.0, 4.5, 4.0, 2.0, 4.5, 2.0, 3.5, 1.5, 4.0]
    )
    TEMPERLEY_MINOR = np.array(
        [5.0, 2.0, 3.5, 4.5, 2.0, 4.0, 2.0, 4.5, 3.5, 2.0, 1.5, 4.0]
    )

    PROFILE_TYPES = ("krumhansl", "temperley")

    def __init__(
        self,
        profile_type: str = "krumhansl",
        ambiguity_threshold: float = 0.05,
        min_notes: int = 3,
    ):
        """
        Initialize KeyDetector.

        Args:
            profile_type: Key profile algorithm ("krumhansl" or "temperley")
            ambiguity_threshold: Correlation difference to flag ambiguity
            min_notes: Minimum notes required for valid detection

        Raises:
            ValueError: If profile_type is unknown
        """
        if profile_type not in self.PROFILE_TYPES:
            raise ValueError(
                f"Unknown key profile: {profile_type}. Expected 'krumhansl' or 'temperley'."
            )
        self.profile_type = profile_type
        self.ambiguity_threshold = ambiguity_threshold
        self.min_notes = min_notes

        if profile_type == "temperley":
            self.major_profile = self.TEMPERLEY_MAJOR
            self.minor_profile = self.TEMPERLEY_MINOR
        else:
            self.major_profile = self.KRUMHANSL_MAJOR
            self.minor_profile = self.KRUMHANSL_MINOR

    def detect_from_notes(
        self,
        notes: List[NoteEvent],
        weighted: bool = True,
    ) -> Tuple[str, str, float]:
        """
        Detect key from note list.

        Args:
            notes: List of NoteEvent objects
            weighted: Weight by duration and velocity

        Returns:
            Tuple of (key root, mode, correlation score)
        """
        pitch_classes = self.pitch_class_distribution(notes, weighted)
        candidates = self._get_all_candidates(pitch_classes)
        best = max(candidates, key=lambda c: c.correlation)
        return best.root, best.mode, best.correlation

    def pitch_class_distribution(
        self,
        notes: List[NoteEvent],
        weighted: bool = True,
    ) -> np.ndarray:
        """
        Build a normalized 12-element pitch class histogram.

        Args:
            notes: List of notes
            weighted: Weight by duration and velocity
        """
        pitch_classes = np.zeros(12)

        for note in notes:
            if weighted:
                weight = note.duration * (note.velocity / 127.0)
            else:
                weight = 1.0
            pitch_classes[note.pitch_class] += weight

        if pitch_classes.sum() > 0:
            pitch_classes /= pitch_classes.sum()

        return pitch_classes

    def analyze(
        self,
        notes: List[NoteEvent],
        return_alternatives: bool = True,
    ) -> KeyInfo:
        """
        Perform full key analysis with ambiguity detection.

        Args:
            notes: List of notes
            return_alternatives: Include alternative key candidates

        Returns:
            KeyInfo; C major with zero confidence when there are fewer
            than min_notes notes
        """
        if len(notes) < self.min_notes:
            warnings.warn(
                f"Key detection needs at least {self.min_notes} notes, got {len(notes)}"
            )
            return KeyInfo(
                root="C",
                mode="major",
                confidence=0.0,
                pitch_class_distribution=np.zeros(12),
                ambiguity_score=1.0,
            )

        pitch_classes = self.pitch_class_distribution(notes, weighted=True)
        candidates = self._get_all_candidates(pitch_classes)
        candidates.sort(key=lambda c: c.correlation, reverse=True)
        best = candidates[0]

        # Correlation lies in [-1, 1]
        confidence = max(0.0, min(1.0, (best.correlation + 1) / 2))
        best_key = Key(PitchClass.from_name(best.root), best.mode)

        return KeyInfo(
            root=best.root,
            mode=best.mode,
            confidence=confidence,
            pitch_class_distribution=pitch_classes,
            alternatives=candidates[1:4] if return_alternatives else [],
            ambiguity_score=self._calculate_ambiguity(candidates),
            relative_key=self._key_label(best_key.relative),
            parallel_key=self._key_label(best_key.parallel),
        )

    @staticmethod
    def _key_label(key: Key) -> str:
        # Candidate roots are spelled with sharps
        return f"{PITCH_NAMES[key.root.chroma]} {key.mode}"

    def _get_all_candidates(self, pitch_classes: np.ndarray) -> List[KeyCandidate]:
        """Score all 24 major and minor keys against the distribution."""
        candidates = []

        for shift in range(12):
            root = PITCH_NAMES[shift]
            rotated = np.roll(pitch_classes, -shift)
            candidates.append(KeyCandidate(root, "major", self._correlate(rotated, self.major_profile)))
            candidates.append(KeyCandidate(root, "minor", self._correlate(rotated, self.minor_profile)))

        return candidates

    def _correlate(self, distribution: np.ndarray, profile: np.ndarray) -> float:
        """Pearson correlation; 0.0 for flat or degenerate input."""
        if distribution.std() == 0 or profile.std() == 0:
            return 0.0

        corr = np.corrcoef(distribution, profile)[0, 1]
        if np.isnan(corr):
            return 0.0

        return float(corr)

    def _calculate_ambiguity(self, candidates: List[KeyCandidate]) -> float:
        """
        Calculate how ambiguous the key detection is.

        Returns:
            Ambiguity score 0.0 (clear) to 1.0 (very ambiguous)
        """
        if len(candidates) < 2:
            return 0.0

        best_corr = candidates[0].correlation
        close_candidates = [
            c for c in candidates[1:]
            if abs(c.correlation - best_corr) < self.ambiguity_threshold
        ]
        candidate_ambiguity = min(1.0, len(close_candidates) / 3.0)

        return max(candidate_ambiguity, self._check_relative_ambiguity(candidates))

    def _check_relative_ambiguity(self, candidates: List[KeyCandidate]) -> float:
        """Check if relative major/minor are both strong candidates."""
        best = candidates[0]
        relative = self._key_label(Key(PitchClass.from_name(best.root), best.mode).relative)

        for c in candidates[1:6]:
            if c.name == relative:
                diff = abs(best.correlation - c.correlation)
                if diff < self.ambiguity_threshold:
                    return 0.8
                elif diff < self.ambiguity_threshold * 2:
                    return 0.5

        return 0.0


KeyLike = Union[Key, str]


def resolve_key(value: Optional[KeyLike]) -> Optional[Key]:
    """Accept a Key, a key name ("Am") or None."""
    if value is None or isinstance(value, Key):
        return value
    return Key.from_name(value)
