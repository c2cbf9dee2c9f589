"""Chord identification - name chords and guess them from sounding notes.

Implements:
- Chord values (root, chord type, optional slash bass) with names, symbols
  and inversion
- Chord guessing: every rotation of the sounding notes is probed against
  the chord type index by pitch-class fingerprint
- Weighting that penalizes omitted tones and non-root basses
- Chord analysis of timed notes, with Roman numerals in key context
"""

import re
from collections import defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Tuple

from ..core import NoteEvent, PitchClass, PitchClassSet, Note, Interval, resolve_pitch
from ..core.constants import DETECT_INVERSION_SCORE, DETECT_OMISSION_SCORE
from ..core.pitch import PitchLike
from .chord_types import (
    ChordType,
    ChordTypeIndex,
    get_chord_type_index,
    interval_signature,
)

if TYPE_CHECKING:
    from .key import Key


_SYMBOL_ROOT_RE = re.compile(r"^([A-Ga-g])(#+|b+|x+)?")


def _as_pitch_class(value: PitchClass) -> PitchClass:
    # Notes are reduced to their octave-less pitch class
    if isinstance(value, Note):
        return value.pitch_class
    return value


@dataclass(frozen=True)
class GuessOptions:
    """Tolerances for chord guessing."""

    allow_omissions: bool = True  # Accept shapes missing optional tones
    allow_inversions: bool = True  # Accept a chord-tone bass other than the root
    allow_slash: bool = True  # Accept any bass other than the root


@dataclass(frozen=True, eq=False)
class Chord:
    """A chord: root, chord type and (slash) bass.

    bass is None whenever it has the same chroma as the root. Two chords are
    equal when root chroma, chord type (by identity) and effective bass
    chroma all match; spelling is ignored.
    """

    root: PitchClass
    type: ChordType
    bass: Optional[PitchClass] = None

    def __post_init__(self):
        root = _as_pitch_class(self.root)
        bass = _as_pitch_class(self.bass) if self.bass is not None else None
        if bass is not None and bass.chroma == root.chroma:
            bass = None
        object.__setattr__(self, "root", root)
        object.__setattr__(self, "bass", bass)

    @property
    def pcset(self) -> PitchClassSet:
        """Chord tones as absolute chromas, root first."""
        return self.type.pcset.transpose(self.root.chroma)

    @property
    def notes(self) -> List[PitchClass]:
        """Chord tones spelled by interval from the root (Eb G Bb for Eb major)."""
        return [interval.above(self.root) for interval in self.type.intervals]

    @property
    def inversion(self) -> Optional[int]:
        """Position of the bass among the chord tones (0 = root position).

        None when the bass is not a chord tone.
        """
        bass = self.bass or self.root
        position = self.pcset.index(bass.chroma)
        return None if position == -1 else position

    @property
    def omission(self) -> Optional[Tuple[Interval, ...]]:
        return self.type.omission

    @property
    def name(self) -> str:
        """Full name, e.g. 'C major seventh' or 'C major over E'."""
        type_name = self.type.name or (self.type.symbols[0] if self.type.symbols else "")
        name = self.root.name
        if type_name:
            name += f" {type_name}"
        if self.bass:
            name += f" over {self.bass.name}"
        return name

    @property
    def symbols(self) -> List[str]:
        """Every symbol spelling, e.g. ['Cmaj7', 'CM7', 'CΔ7', 'CΔ']."""
        suffix = f"/{self.bass.name}" if self.bass else ""
        return [f"{self.root.name}{symbol}{suffix}" for symbol in self.type.symbols]

    def __str__(self) -> str:
        symbols = self.symbols
        return symbols[0] if symbols else self.name

    def __repr__(self) -> str:
        return f"Chord({self.name!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Chord):
            return NotImplemented
        return (
            self.root.chroma == other.root.chroma
            and self.type is other.type
            and (self.bass or self.root).chroma == (other.bass or other.root).chroma
        )

    def __hash__(self) -> int:
        return hash((self.root.chroma, id(self.type), (self.bass or self.root).chroma))

    @classmethod
    def from_symbol(cls, symbol: str, index: Optional[ChordTypeIndex] = None) -> "Chord":
        """
        Parse a chord symbol such as "Cmaj7", "F#m7b5", "Bb" or "C/E".

        Args:
            symbol: Root name, chord type symbol, optional "/bass"
            index: Chord type index (defaults to the shared one)

        Returns:
            Chord

        Raises:
            TypeError: If symbol is not a string
            ValueError: If the root, type or bass cannot be recognized
        """
        if not isinstance(symbol, str):
            raise TypeError(f"Invalid chord symbol: {symbol!r}. Symbol must be a string.")
        index = index or get_chord_type_index()

        body, bass = symbol, None
        head, sep, tail = symbol.rpartition("/")
        if sep and tail and _SYMBOL_ROOT_RE.fullmatch(tail):
            body, bass = head, PitchClass.from_name(tail)

        match = _SYMBOL_ROOT_RE.match(body)
        if not match:
            raise ValueError(
                f"Invalid chord symbol: {symbol}. Expected format: [root][type][/bass]"
            )
        # A trailing "b" may belong to the type rather than the root
        for root_length in (match.end(), 1):
            chord_type = index.find_by_symbol(body[root_length:])
            if chord_type is not None:
                root = PitchClass.from_name(body[:root_length])
                return cls(root, chord_type, bass)
        raise ValueError(f"Unknown chord symbol: {symbol}")

    @classmethod
    def guess(
        cls, pitches: Iterable[PitchLike], options: Optional[GuessOptions] = None
    ) -> List["ChordGuessResult"]:
        """Guess chords with the shared index; see ChordGuesser.guess()."""
        return ChordGuesser().guess(pitches, options)

    def to_dict(self) -> dict:
        return {
            "root": self.root.to_dict(),
            "intervals": [i.to_dict() for i in self.type.intervals],
            "bass": self.bass.to_dict() if self.bass else None,
        }

    @classmethod
    def from_dict(cls, data: dict, index: Optional[ChordTypeIndex] = None) -> "Chord":
        """Rebuild a chord; known shapes resolve to their registered chord type."""
        index = index or get_chord_type_index()
        intervals = [Interval.from_dict(i) for i in data["intervals"]]
        chord_type = index.find_by_intervals(interval_signature(intervals))
        if chord_type is None:
            chord_type = ChordType.from_intervals(intervals)
        bass = PitchClass.from_dict(data["bass"]) if data.get("bass") else None
        return cls(PitchClass.from_dict(data["root"]), chord_type, bass)


@dataclass(frozen=True)
class ChordGuessResult:
    """A chord hypothesis and its confidence weight in (0, 1]."""

    chord: Chord
    weight: float


class ChordGuesser:
    """Guess chords from sounding notes.

    Callers supply notes bass first; the guesser does not reorder them by
    pitch height.
    """

    def __init__(
        self,
        index: Optional[ChordTypeIndex] = None,
        options: Optional[GuessOptions] = None,
    ):
        """
        Initialize ChordGuesser.

        Args:
            index: Chord type index to probe (defaults to the shared one)
            options: Default tolerances for guess()
        """
        self.index = index if index is not None else get_chord_type_index()
        self.options = options or GuessOptions()

    def guess(
        self,
        pitches: Iterable[PitchLike],
        options: Optional[GuessOptions] = None,
    ) -> List[ChordGuessResult]:
        """
        Guess every chord the notes may form, best first.

        Results are distinct by root, chord type and bass. A complete type and
        the same type with an omitted tone are different types, so one symbol
        such as "Cdom7/E" can appear twice: once complete, once without the
        tone the bass would otherwise supply.

        Args:
            pitches: Notes, pitch classes, names ("C", "E4") or MIDI numbers,
                bass first. Repeated chromas are ignored.
            options: Tolerances (defaults to the guesser's options)

        Returns:
            ChordGuessResult list sorted by weight, descending

        Raises:
            TypeError, ValueError: If a pitch cannot be resolved
        """
        options = options or self.options
        notes = self._unique_notes(pitches)
        if not notes:
            return []

        bass = notes[0]
        found: List[ChordGuessResult] = []
        seen = set()
        self._probe(notes, bass, options, found, seen)
        if len(notes) > 3:
            # The bass may be an added tone below the real chord
            self._probe(notes[1:], bass, options, found, seen)

        found.sort(key=lambda r: r.weight, reverse=True)
        return found

    @staticmethod
    def _unique_notes(pitches: Iterable[PitchLike]) -> List[Note]:
        notes = []
        chromas = set()
        for pitch in pitches:
            note = resolve_pitch(pitch)
            if note.chroma not in chromas:
                chromas.add(note.chroma)
                notes.append(note)
        return notes

    @staticmethod
    def rotations(notes: List[Note]) -> List[List[Note]]:
        """Every cyclic rotation; two notes or fewer only keep their order."""
        if len(notes) <= 2:
            return [list(notes)]
        return [notes[i:] + notes[:i] for i in range(len(notes))]

    def _probe(
        self,
        notes: List[Note],
        bass: Note,
        options: GuessOptions,
        found: List[ChordGuessResult],
        seen: set,
    ) -> None:
        for rotation in self.rotations(notes):
            root = rotation[0]
            fingerprint = PitchClassSet.create(n.chroma for n in rotation).zero().binary
            chord_type = self.index.find_by_binary(fingerprint)
            if chord_type is None:
                continue
            if not options.allow_slash and root.chroma != bass.chroma:
                continue

            chord = Chord(root, chord_type, bass)
            if not options.allow_inversions and (chord.inversion or 0) > 0:
                continue
            has_omission = chord_type.omission is not None
            if not options.allow_omissions and has_omission:
                continue

            weight = DETECT_OMISSION_SCORE if has_omission else 1.0
            if chord.bass is not None:
                weight *= DETECT_INVERSION_SCORE
            if chord not in seen:
                seen.add(chord)
                found.append(ChordGuessResult(chord, weight))


@dataclass
class ChordSegment:
    """A chord sounding over a time span."""

    chord: Chord
    onset: float  # Start time in seconds
    offset: float  # End time in seconds
    notes: List[int] = field(default_factory=list)  # MIDI pitches in the segment
    confidence: float = 1.0  # Guess weight (0-1)

    @property
    def duration(self) -> float:
        return self.offset - self.onset

    @property
    def symbol(self) -> str:
        return str(self.chord)

    @property
    def inversion(self) -> Optional[int]:
        return self.chord.inversion


@dataclass
class ChordProgression:
    """Container for chord progression analysis."""

    segments: List[ChordSegment]
    key: Optional["Key"] = None
    roman_numerals: List[str] = field(default_factory=list)  # e.g., ["I", "IV", "V", "I"]

    @property
    def chords(self) -> List[Chord]:
        return [s.chord for s in self.segments]

    @property
    def symbols(self) -> List[str]:
        """Get list of chord symbols."""
        return [s.symbol for s in self.segments]

    def get_common_progressions(self) -> List[Tuple[str, float]]:
        """
        Identify common chord progressions in the sequence.

        Returns:
            List of (progression_name, coverage) tuples, best first
        """
        from .progression import COMMON_PROGRESSIONS

        if self.key is None or len(self.segments) < 2:
            return []

        degrees = [self.key.degree_of(chord) for chord in self.chords]
        found = []
        for name, pattern in COMMON_PROGRESSIONS.items():
            size = len(pattern)
            if any(degrees[i:i + size] == list(pattern) for i in range(len(degrees) - size + 1)):
                found.append((name, min(1.0, size / len(degrees))))

        found.sort(key=lambda x: x[1], reverse=True)
        return found


class ChordAnalyzer:
    """Detect chords in timed notes and analyze the progression.

    Notes are grouped by onset; the notes sounding at each onset are passed
    to the chord guesser lowest pitch first, so the lowest note is the bass.
    """

    # Weight bonus for a chord whose root belongs to the key
    KEY_CONTEXT_WEIGHT = 0.2

    def __init__(
        self,
        min_chord_duration: float = 0.25,
        min_notes_for_chord: int = 2,
        onset_tolerance: float = 0.05,
        options: Optional[GuessOptions] = None,
        guesser: Optional[ChordGuesser] = None,
        use_key_context: bool = True,
    ):
        """
        Initialize ChordAnalyzer.

        Args:
            min_chord_duration: Minimum duration for a chord segment (seconds)
            min_notes_for_chord: Minimum distinct pitch classes to form a chord
            onset_tolerance: Onsets closer than this are one attack (seconds)
            options: Guess tolerances (defaults to the guesser's own)
            guesser: Chord guesser (defaults to one over the shared index)
            use_key_context: Prefer diatonic roots when a key is given
        """
        self.min_chord_duration = min_chord_duration
        self.min_notes_for_chord = min_notes_for_chord
        self.onset_tolerance = onset_tolerance
        self.options = options
        self.guesser = guesser or ChordGuesser(options=options)
        self.use_key_context = use_key_context

    def detect_chords(
        self,
        notes: List[NoteEvent],
        key: Optional["Key"] = None,
    ) -> List[ChordSegment]:
        """
        Detect chords from a list of notes.

        Args:
            notes: List of NoteEvent objects
            key: Optional key for context

        Returns:
            List of ChordSegment objects, consecutive repeats merged
        """
        if not notes or len(notes) < self.min_notes_for_chord:
            return []

        segments: List[ChordSegment] = []
        prev: Optional[ChordSegment] = None

        for onset, offset, segment_notes in self._segment_by_onset(notes):
            segment = self._detect_single_chord(segment_notes, onset, offset, key)
            if segment is None:
                continue

            # Merge with previous if same chord
            if (prev and prev.chord == segment.chord
                    and segment.onset - prev.offset < 0.1):
                prev.offset = segment.offset
                prev.notes = sorted(set(prev.notes + segment.notes))
            else:
                segments.append(segment)
                prev = segment

        return segments

    def _segment_by_onset(
        self, notes: List[NoteEvent]
    ) -> List[Tuple[float, float, List[NoteEvent]]]:
        """
        Segment notes by onset times, grouping simultaneous notes.

        Returns:
            List of (onset, offset, notes) tuples
        """
        onset_groups: Dict[float, List[NoteEvent]] = defaultdict(list)
        sorted_notes = sorted(notes, key=lambda n: n.onset)

        current_onset = sorted_notes[0].onset
        for note in sorted_notes:
            if note.onset - current_onset > self.onset_tolerance:
                current_onset = note.onset
            onset_groups[current_onset].append(note)

        segments = []
        onsets = sorted(onset_groups.keys())

        for i, onset in enumerate(onsets):
            group_notes = onset_groups[onset]
            if i + 1 < len(onsets):
                offset = onsets[i + 1]
            else:
                offset = max(n.offset for n in group_notes)

            # Notes attacked here always count, however short; earlier notes
            # count only if still sounding just after the attack
            probe = onset + self.onset_tolerance
            active_notes = group_notes + [
                n for n in notes if n.onset < onset and n.sounds_at(probe)
            ]

            if offset - onset >= self.min_chord_duration:
                segments.append((onset, offset, active_notes))

        return segments

    def _detect_single_chord(
        self,
        notes: List[NoteEvent],
        onset: float,
        offset: float,
        key: Optional["Key"],
    ) -> Optional[ChordSegment]:
        pitches = sorted(n.pitch for n in notes)
        if len({p % 12 for p in pitches}) < self.min_notes_for_chord:
            return None

        results = self.guesser.guess(pitches, self.options)
        if not results:
            return None

        best_chord, best_score = self._rank(results, key)[0]
        return ChordSegment(
            chord=best_chord,
            onset=onset,
            offset=offset,
            notes=pitches,
            confidence=min(1.0, best_score),
        )

    def _rank(
        self, results: List[ChordGuessResult], key: Optional["Key"]
    ) -> List[Tuple[Chord, float]]:
        ranked = []
        for result in results:
            score = result.weight
            if self.use_key_context and key is not None and key.scale.contains(result.chord.root):
                score += self.KEY_CONTEXT_WEIGHT * result.weight
            ranked.append((result.chord, score))
        ranked.sort(key=lambda x: x[1], reverse=True)
        return ranked

    def analyze_progression(
        self,
        segments: List[ChordSegment],
        key: Optional["Key"] = None,
    ) -> ChordProgression:
        """
        Analyze chord progression in context of key.

        Args:
            segments: Detected chords
            key: Key for Roman numerals (none are produced without one)

        Returns:
            ChordProgression with roman numeral analysis
        """
        roman_numerals = []
        if key is not None:
            roman_numerals = [key.roman_numeral(s.chord) for s in segments]
        return ChordProgression(segments=segments, key=key, roman_numerals=roman_numerals)

    def analyze(
        self,
        notes: List[NoteEvent],
        key: Optional["Key"] = None,
    ) -> ChordProgression:
        """Full chord analysis: detect chords and analyze progression."""
        segments = self.detect_chords(notes, key)
        return self.analyze_progression(segments, key)

    def identify_cadences(
        self,
        progression: ChordProgression,
    ) -> List[Tuple[int, str]]:
        """
        Identify cadences in a chord progression.

        Args:
            progression: Analyzed chord progression

        Returns:
            List of (chord_index, cadence_type) tuples
        """
        numerals = progression.roman_numerals
        if len(numerals) < 2:
            return []

        cadences = []
        for i in range(1, len(numerals)):
            prev = numerals[i - 1].upper().rstrip("7°ø+")
            curr = numerals[i].upper().rstrip("7°ø+")

            # Authentic cadence: V-I
            if prev == "V" and curr == "I":
                cadences.append((i, "authentic"))
            # Plagal cadence: IV-I
            elif prev == "IV" and curr == "I":
                cadences.append((i, "plagal"))
            # Deceptive cadence: V-vi
            elif prev == "V" and curr == "VI":
                cadences.append((i, "deceptive"))
            # Half cadence: ?-V
            elif curr == "V":
                cadences.append((i, "half"))

        return cadences
