"""Tests for the chord type index.

Tests cover:
- Lookups on the full chord database (symbol, name, signature, fingerprint)
- Power-set expansion of optional tones and omission lists
- Registration order when shapes collide
- Trie structure and the shared, lazily built index
"""

import threading

import pytest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from chordscope.inference import (
    CHORD_TYPE_DATABASE,
    ChordType,
    build_chord_type_index,
    get_chord_type_index,
    interval_signature,
)
from chordscope.inference import chord_types


# ============================================================================
# Test Fixtures - Reduced databases
# ============================================================================

MAJOR_SEVENTH_ONLY = [
    ("1P 3M* 5P* 7M", "major seventh", "maj7 M7"),
]

INTERVAL_THEN_CHORD = [
    ("P1 M7", "major seventh interval", "M7i"),
    ("1P 3M* 5P* 7M", "major seventh", "maj7"),
]

SEVENTH_THEN_TRIAD = [
    ("1P 3M 5P 7m", "dominant seventh", "7"),
    ("1P 3M 5P", "major", "M"),
]


def chroma_fingerprint(signature: str) -> int:
    """Fingerprint of a comma-separated chroma list."""
    return sum(1 << (int(s) % 12) for s in signature.split(","))


@pytest.fixture(scope="module")
def index():
    return get_chord_type_index()


# ============================================================================
# Full Database Lookup Tests
# ============================================================================

class TestLookups:
    """Tests for lookups on the full chord database."""

    def test_find_by_symbol(self, index):
        """Test that maj7 resolves to the complete four-note shape."""
        node = index.find("maj7")

        assert "maj7" in node.symbols
        assert len(node.intervals) == 4
        assert node.semitones == (0, 4, 7, 11)
        assert node.omission is None

    def test_find_by_name(self, index):
        """Test name lookup returns the same node as the symbol."""
        assert index.find("major seventh") is index.find("maj7")

    def test_empty_symbol_is_major(self, index):
        """Test the bare-root symbol."""
        assert index.find_by_symbol("").name == "major"

    def test_find_by_signature(self, index):
        """Test exact interval signatures."""
        node = index.find("0,4,7")

        assert node.name == "major"
        assert node.signature == "0,4,7"

    def test_find_by_fingerprint(self, index):
        """Test numeric keys fall back to the fingerprint map."""
        assert index.find(145).name == "major"
        assert index.find_by_binary(145) is index.find("0,4,7")

    def test_signature_omission_filter(self, index):
        """Test that omission variants can be excluded by signature."""
        node = index.find("0,4,11")

        assert node.name == "major seventh"
        assert [i.name for i in node.omission] == ["P5"]
        assert index.find("0,4,11", allow_omissions=False) is None

    def test_omission_filter_only_on_signature(self, index):
        """Test that fingerprint lookups ignore the omission flag."""
        fingerprint = index.find("0,4,11").binary

        assert index.find(fingerprint, allow_omissions=False) is not None

    def test_complete_shape_owns_fingerprint(self, index):
        """Test a complete shape wins the fingerprint over a partial one."""
        # min7#11 without its fifth has the half-diminished pitch classes
        node = index.find_by_binary(chroma_fingerprint("0,3,6,10"))

        assert node.name == "half-diminished"
        assert node.omission is None

    def test_unknown_keys(self, index):
        """Test that misses return None rather than raising."""
        assert index.find("nonexistent") is None
        assert index.find(3.5) is None
        assert index.find(None) is None
        assert index.find(True) is None
        assert index.search(None) == []

    def test_search_by_name(self, index):
        """Test search returns every variant of a chord type."""
        results = index.search("dominant seventh")

        assert len(results) >= 2
        assert all(node.name == "dominant seventh" for node in results)
        assert any(node.omission is None for node in results)

    def test_search_by_fingerprint(self, index):
        """Test search by binary."""
        results = index.search(145)

        assert results
        assert all(node.binary == 145 for node in results)
        assert index.find("major") in results

    def test_index_size(self, index):
        """Test that optional tones add entries beyond the database rows."""
        assert len(index) > len(CHORD_TYPE_DATABASE)

    def test_signature_helper(self):
        """Test interval signatures from names."""
        assert interval_signature(["P5", "M3", "P1"]) == "0,4,7"
        assert interval_signature(["1P", "9M"]) == "0,14"


# ============================================================================
# Index Construction Tests
# ============================================================================

class TestConstruction:
    """Tests for building an index from a reduced database."""

    def test_power_set_expansion(self):
        """Test that k optional tones yield 2**k entries."""
        index = build_chord_type_index(MAJOR_SEVENTH_ONLY)

        assert len(index) == 4
        assert index.find_by_intervals("0,4,7,11").omission is None
        assert [i.name for i in index.find_by_intervals("0,7,11").omission] == ["M3"]
        assert [i.name for i in index.find_by_intervals("0,4,11").omission] == ["P5"]
        assert [i.name for i in index.find_by_intervals("0,11").omission] == ["M3", "P5"]

    def test_variants_share_names(self):
        """Test that every variant carries the row's name and symbols."""
        index = build_chord_type_index(MAJOR_SEVENTH_ONLY)

        for signature in ("0,11", "0,7,11", "0,4,11", "0,4,7,11"):
            node = index.find_by_intervals(signature)
            assert node.name == "major seventh"
            assert node.symbols == ("maj7", "M7")

    def test_name_and_symbol_point_to_complete_shape(self):
        """Test that name and symbol maps end on the full shape."""
        index = build_chord_type_index(MAJOR_SEVENTH_ONLY)

        assert index.find_by_name("major seventh").semitones == (0, 4, 7, 11)
        assert index.find_by_symbol("M7").semitones == (0, 4, 7, 11)

    def test_first_registration_wins(self):
        """Test that an existing shape keeps its earlier name."""
        index = build_chord_type_index(INTERVAL_THEN_CHORD)

        assert index.find_by_intervals("0,11").name == "major seventh interval"
        assert len(index) == 4

    def test_intermediate_node_promoted(self):
        """Test a later row naming a node first created as structure."""
        index = build_chord_type_index(SEVENTH_THEN_TRIAD)

        node = index.find_by_symbol("M")
        assert node.name == "major"
        assert node.semitones == (0, 4, 7)
        assert node.is_terminal
        assert len(index) == 2

    def test_trie_edges_are_steps(self):
        """Test that edges are keyed by the step from the parent."""
        index = build_chord_type_index(SEVENTH_THEN_TRIAD)

        triad = index.root.children[0].children[4].children[3]
        assert triad.name == "major"
        assert triad.interval_to_next == 3
        assert triad.children[3].name == "dominant seventh"

    def test_children_are_read_only(self):
        """Test the trie cannot be modified through a node."""
        index = build_chord_type_index(SEVENTH_THEN_TRIAD)

        with pytest.raises(TypeError):
            index.root.children[5] = index.root

    def test_no_public_insert(self):
        """Test a built index offers no way to register more shapes."""
        index = build_chord_type_index(SEVENTH_THEN_TRIAD)

        assert not hasattr(index, "add")
        assert not hasattr(get_chord_type_index(), "add")

    def test_malformed_row(self):
        """Test that bad interval tokens fail the build."""
        with pytest.raises(ValueError):
            build_chord_type_index([("1P 3X", "broken", "broken")])

    def test_iter_nodes_is_breadth_first(self):
        """Test node walk order."""
        index = build_chord_type_index(SEVENTH_THEN_TRIAD)

        depths = [len(node.intervals) for node in index.iter_nodes()]
        assert depths == sorted(depths)


# ============================================================================
# Ad-hoc Chord Type Tests
# ============================================================================

class TestChordType:
    """Tests for unregistered chord types."""

    def test_from_intervals_sorts(self):
        """Test interval order and derived values."""
        chord_type = ChordType.from_intervals(["M3", "P1", "P5"])

        assert chord_type.semitones == (0, 4, 7)
        assert chord_type.binary == 145
        assert chord_type.name is None
        assert chord_type.omission is None

    def test_from_semitones(self):
        """Test integer intervals."""
        assert ChordType.from_intervals([0, 3, 6]).signature == "0,3,6"


# ============================================================================
# Shared Index Tests
# ============================================================================

class TestSharedIndex:
    """Tests for the lazily built process-wide index."""

    def test_same_instance(self):
        """Test the index is built once."""
        assert get_chord_type_index() is get_chord_type_index()

    def test_concurrent_first_use(self, monkeypatch):
        """Test that racing callers trigger a single build."""
        builds = []
        original = chord_types.build_chord_type_index

        def counting_build():
            builds.append(1)
            return original(SEVENTH_THEN_TRIAD)

        monkeypatch.setattr(chord_types, "_shared_index", None)
        monkeypatch.setattr(chord_types, "build_chord_type_index", counting_build)

        results = []
        threads = [
            threading.Thread(target=lambda: results.append(chord_types.get_chord_type_index()))
            for _ in range(8)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(builds) == 1
        assert len(results) == 8
        assert all(r is results[0] for r in results)
