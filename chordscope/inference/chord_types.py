"""Chord type index - a trie over every known chord shape.

Every database row expands into one trie entry per subset of its optional
tones (a row with k starred tokens yields 2**k entries). Intervals are
sorted by size and each edge is keyed by the semitone step from the parent
node, so shapes sharing a lower structure (all the dominant extensions
share P1-M3-P5-m7) share nodes.

Besides the trie the index keeps four lookup maps: interval signature
("0,4,7"), name, symbol and pitch-class fingerprint. The fingerprint map is
what the chord guesser queries for every rotation of the sounding notes.
"""

import itertools
import threading
from collections import deque
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from ..core import Interval, PitchClassSet
from .chord_data import CHORD_TYPE_DATABASE


IntervalLike = Union[Interval, str, int]


def _to_interval(value: IntervalLike) -> Interval:
    if isinstance(value, Interval):
        return value
    if isinstance(value, str):
        return Interval.from_name(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return Interval.from_semitones(value)
    raise TypeError(f"Cannot create Interval from: {value!r}. Expected Interval, str, or int.")


def _by_size(intervals: Iterable[Interval]) -> Tuple[Interval, ...]:
    return tuple(sorted(intervals, key=lambda i: i.semitones))


def interval_signature(intervals: Iterable[IntervalLike]) -> str:
    """Comma-joined ascending semitone sizes, e.g. "0,4,7,11"."""
    semitones = sorted(_to_interval(i).semitones for i in intervals)
    return ",".join(str(s) for s in semitones)


class ChordType:
    """A chord shape: intervals above an implicit root, plus its names."""

    def __init__(
        self,
        intervals: Sequence[Interval],
        name: Optional[str] = None,
        symbols: Optional[Sequence[str]] = None,
        omission: Optional[Sequence[Interval]] = None,
    ):
        self._intervals = tuple(intervals)
        self._name = name
        self._symbols = tuple(symbols) if symbols else ()
        self._omission = tuple(omission) if omission else None

    @classmethod
    def from_intervals(
        cls,
        intervals: Iterable[IntervalLike],
        name: Optional[str] = None,
        symbols: Optional[Sequence[str]] = None,
    ) -> "ChordType":
        """Ad-hoc chord type (not registered in any index)."""
        return cls(_by_size(_to_interval(i) for i in intervals), name, symbols)

    @property
    def intervals(self) -> Tuple[Interval, ...]:
        return self._intervals

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def symbols(self) -> Tuple[str, ...]:
        return self._symbols

    @property
    def omission(self) -> Optional[Tuple[Interval, ...]]:
        """Optional tones left out of this shape, or None if complete."""
        return self._omission

    @property
    def pcset(self) -> PitchClassSet:
        return PitchClassSet.create(i.chroma for i in self._intervals)

    @property
    def binary(self) -> int:
        return self.pcset.binary

    @property
    def semitones(self) -> Tuple[int, ...]:
        return tuple(i.semitones for i in self._intervals)

    @property
    def signature(self) -> str:
        return ",".join(str(s) for s in self.semitones)

    def __repr__(self) -> str:
        intervals = " ".join(i.name for i in self._intervals)
        return f"{type(self).__name__}({self._name!r}, [{intervals}])"


class ChordTypeNode(ChordType):
    """A node of the chord type trie.

    Nodes created only as shared structure have no name or symbols until a
    database row terminates on them.
    """

    def __init__(
        self,
        intervals: Sequence[Interval],
        interval_to_next: int,
        name: Optional[str] = None,
        symbols: Optional[Sequence[str]] = None,
        omission: Optional[Sequence[Interval]] = None,
    ):
        super().__init__(intervals, name, symbols, omission)
        self.interval_to_next = interval_to_next
        self._children: Dict[int, "ChordTypeNode"] = {}

    @property
    def children(self) -> Mapping[int, "ChordTypeNode"]:
        """Child nodes keyed by their semitone step from this node."""
        return MappingProxyType(self._children)

    @property
    def is_terminal(self) -> bool:
        return self._name is not None

    def _add_child(self, node: "ChordTypeNode") -> None:
        self._children[node.interval_to_next] = node

    def _terminate(
        self,
        intervals: Sequence[Interval],
        name: str,
        symbols: Sequence[str],
        omission: Optional[Sequence[Interval]],
    ) -> None:
        # Only called while the index is being built
        self._intervals = tuple(intervals)
        self._name = name
        self._symbols = tuple(symbols)
        self._omission = tuple(omission) if omission else None


class ChordTypeIndex:
    """Trie of chord shapes with O(1) lookup maps.

    Build with build_chord_type_index(); the shared, lazily built instance
    is returned by get_chord_type_index().
    The index is read-only once built; there is no public insert.
    """

    def __init__(self):
        self._root = ChordTypeNode((), 0)
        self._interval_map: Dict[str, ChordTypeNode] = {}
        self._name_map: Dict[str, ChordTypeNode] = {}
        self._symbol_map: Dict[str, ChordTypeNode] = {}
        self._binary_map: Dict[int, ChordTypeNode] = {}

    @property
    def root(self) -> ChordTypeNode:
        return self._root

    def __len__(self) -> int:
        return len(self._interval_map)

    def iter_nodes(self) -> Iterator[ChordTypeNode]:
        """Breadth-first walk over every node below the root."""
        queue = deque(self._root.children.values())
        while queue:
            node = queue.popleft()
            yield node
            queue.extend(node.children.values())

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def _add(
        self,
        intervals: Sequence[Interval],
        name: str,
        symbols: Sequence[str],
        omission: Optional[Sequence[Interval]] = None,
    ) -> ChordTypeNode:
        """
        Insert one shape and register it if its terminal node is unnamed.

        Args:
            intervals: Chord tones above the root (any order)
            name: Full name
            symbols: Abbreviations, canonical first
            omission: Optional tones missing from this shape

        Returns:
            The terminal node (which keeps an earlier registration if the
            same shape was already named)
        """
        intervals = _by_size(intervals)
        if not intervals:
            raise ValueError(f"Chord type {name!r} has no intervals")

        node = self._root
        previous = 0
        for i, interval in enumerate(intervals):
            step = interval.semitones - previous
            previous = interval.semitones
            child = node.children.get(step)
            if child is None:
                child = ChordTypeNode(intervals[: i + 1], step)
                node._add_child(child)
            node = child

        if not node.is_terminal:
            node._terminate(intervals, name, symbols, _by_size(omission) if omission else None)
            self._register(node)
        return node

    def _register(self, node: ChordTypeNode) -> None:
        self._interval_map[node.signature] = node
        current = self._binary_map.get(node.binary)
        # A complete shape displaces a partial one registered earlier
        if current is None or (current.omission is not None and node.omission is None):
            self._binary_map[node.binary] = node
        self._name_map[node.name] = node
        for symbol in node.symbols:
            self._symbol_map[symbol] = node

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_by_binary(self, binary: int) -> Optional[ChordTypeNode]:
        return self._binary_map.get(binary)

    def find_by_symbol(self, symbol: str) -> Optional[ChordTypeNode]:
        return self._symbol_map.get(symbol)

    def find_by_name(self, name: str) -> Optional[ChordTypeNode]:
        return self._name_map.get(name)

    def find_by_intervals(
        self, signature: str, allow_omissions: bool = True
    ) -> Optional[ChordTypeNode]:
        """Exact interval match, e.g. "0,4,7,11"; see interval_signature()."""
        node = self._interval_map.get(signature)
        if node is not None and (allow_omissions or node.omission is None):
            return node
        return None

    def find(
        self, key: Union[str, int], allow_omissions: bool = True
    ) -> Optional[ChordTypeNode]:
        """
        Find a chord type by interval signature, symbol, name or fingerprint.

        The omission flag is only applied to the interval signature match;
        symbol, name and fingerprint matches are returned as registered.

        Args:
            key: "0,4,7" / "maj7" / "major seventh" / 2193
            allow_omissions: Accept signature matches with omitted tones

        Returns:
            ChordTypeNode or None
        """
        if isinstance(key, bool) or not isinstance(key, (str, int)):
            return None
        node = self.find_by_intervals(str(key), allow_omissions)
        if node is not None:
            return node
        if isinstance(key, str):
            return self.find_by_symbol(key) or self.find_by_name(key)
        return self.find_by_binary(key)

    def search(self, key: Union[str, int]) -> List[ChordTypeNode]:
        """Every node whose name, fingerprint or one of its symbols equals key."""
        if isinstance(key, bool) or not isinstance(key, (str, int)):
            return []
        results = []
        for node in self.iter_nodes():
            if isinstance(key, int):
                if node.binary == key:
                    results.append(node)
            elif node.name == key or key in node.symbols:
                results.append(node)
        return results


def _combinations(tokens: Sequence[str]) -> List[Tuple[List[str], List[str]]]:
    """
    Expand optional tokens into (chosen intervals, omitted intervals) pairs.

    The last pair always holds every optional token (the complete shape).
    """
    mandatory = [t for t in tokens if not t.endswith("*")]
    optional = [t.rstrip("*") for t in tokens if t.endswith("*")]
    combinations = []
    for mask in itertools.product((False, True), repeat=len(optional)):
        chosen = [t for t, keep in zip(optional, mask) if keep]
        omitted = [t for t, keep in zip(optional, mask) if not keep]
        combinations.append((mandatory + chosen, omitted))
    return combinations


def build_chord_type_index(
    rows: Iterable[Tuple[str, str, str]] = CHORD_TYPE_DATABASE,
) -> ChordTypeIndex:
    """
    Build a new index from (pattern, name, symbols) rows.

    Raises:
        ValueError: If a pattern holds a malformed interval
    """
    index = ChordTypeIndex()
    for pattern, name, symbol_string in rows:
        symbols = symbol_string.split(" ")
        for chosen, omitted in _combinations(pattern.split()):
            intervals = [Interval.from_name(token) for token in chosen]
            omission = [Interval.from_name(token) for token in omitted] or None
            index._add(intervals, name.strip(), symbols, omission)
    return index


_shared_index: Optional[ChordTypeIndex] = None
_shared_index_lock = threading.Lock()


def get_chord_type_index() -> ChordTypeIndex:
    """Return the process-wide index, building it on first use (thread safe)."""
    global _shared_index
    if _shared_index is None:
        with _shared_index_lock:
            if _shared_index is None:
                _shared_index = build_chord_type_index()
    return _shared_index
