"""Tests for pitch-class sets.

Tests cover:
- Construction from chromas, pitches, fingerprints and bit strings
- Transformations (transpose, invert, complement, rotate)
- Normal form, prime form and interval vectors
- Z-relation
"""

import pytest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from chordscope.core import PitchClass, PitchClassSet


SAMPLE_SETS = [
    [0, 4, 7],
    [0, 3, 7],
    [0, 1, 4, 6],
    [0, 1, 3, 7],
    [2, 5, 9, 11],
    [0, 2, 4, 5, 7, 9, 11],
    [3],
    [],
]


# ============================================================================
# Construction Tests
# ============================================================================

class TestConstruction:
    """Tests for PitchClassSet constructors."""

    def test_create_dedups_in_order(self):
        """Test that the first occurrence of a chroma wins."""
        pcs = PitchClassSet.create([7, 0, 4, 0, 7])

        assert list(pcs) == [7, 0, 4]
        assert len(pcs) == 3

    def test_from_chromas_validates(self):
        """Test range validation."""
        assert PitchClassSet.from_chromas([0, 11]) == [0, 11]

        with pytest.raises(ValueError):
            PitchClassSet.from_chromas([0, 12])

    def test_from_pitches(self):
        """Test mixed pitch inputs."""
        assert PitchClassSet.from_pitches(["C", "E", "G"]) == [0, 4, 7]
        assert PitchClassSet.from_pitches(["C4", 7, PitchClass.from_name("Bb")]) == [0, 7, 10]

    def test_binary(self):
        """Test the 12-bit fingerprint."""
        assert PitchClassSet.create([0, 4, 7]).binary == 145
        assert PitchClassSet.create([]).binary == 0

    def test_from_binary(self):
        """Test decoding a fingerprint."""
        assert PitchClassSet.from_binary(145) == [0, 4, 7]

        with pytest.raises(ValueError):
            PitchClassSet.from_binary(5000)

    @pytest.mark.parametrize("chromas", SAMPLE_SETS)
    def test_binary_round_trip(self, chromas):
        """Test that decoding the fingerprint gives back the same members."""
        pcs = PitchClassSet.create(chromas)

        assert PitchClassSet.from_binary(pcs.binary).same_members(pcs)

    def test_bit_string(self):
        """Test the 12-character string form."""
        pcs = PitchClassSet.create([0, 4, 7])

        assert str(pcs) == "100010010000"
        assert PitchClassSet.from_string("100010010000").binary == 145

    def test_invalid_bit_string(self):
        """Test rejected bit strings."""
        with pytest.raises(ValueError):
            PitchClassSet.from_string("101")
        with pytest.raises(ValueError):
            PitchClassSet.from_string("10001001000x")
        with pytest.raises(TypeError):
            PitchClassSet.from_string(5)

    def test_order_matters_for_equality(self):
        """Test equality versus set membership."""
        a = PitchClassSet.create([0, 4, 7])
        b = PitchClassSet.create([7, 0, 4])

        assert a != b
        assert a.same_members(b)

    def test_index(self):
        """Test member positions."""
        pcs = PitchClassSet.create([0, 4, 7])

        assert pcs.index(4) == 1
        assert pcs.index(5) == -1
        assert 7 in pcs


# ============================================================================
# Transformation Tests
# ============================================================================

class TestTransformations:
    """Tests for set transformations."""

    def test_transpose(self):
        """Test transposition wraps around the octave."""
        pcs = PitchClassSet.create([0, 4, 7])

        assert pcs.transpose(2) == [2, 6, 9]
        assert pcs.transpose(-1) == [11, 3, 6]

    @pytest.mark.parametrize("chroma", range(12))
    @pytest.mark.parametrize("n", [-13, -5, 0, 1, 7, 25])
    def test_transpose_is_invertible(self, chroma, n):
        """Test that transposing back restores the set."""
        pcs = PitchClassSet.create([chroma])

        assert pcs.transpose(n).transpose(-n) == pcs

    def test_zero(self):
        """Test anchoring the first member at 0."""
        assert PitchClassSet.create([4, 7, 11]).zero() == [0, 3, 7]
        assert PitchClassSet.create([]).zero() == []

    def test_invert(self):
        """Test inversion around 0."""
        assert PitchClassSet.create([0, 4, 7]).invert() == [0, 8, 5]

    def test_complement(self):
        """Test the missing chromas."""
        assert PitchClassSet.create([0, 4, 7]).complement() == [1, 2, 3, 5, 6, 8, 9, 10, 11]

    def test_rotate_and_reverse(self):
        """Test member order operations."""
        pcs = PitchClassSet.create([0, 4, 7])

        assert pcs.rotate(1) == [4, 7, 0]
        assert pcs.rotate(4) == [4, 7, 0]
        assert pcs.reverse() == [7, 4, 0]


# ============================================================================
# Set Class Tests
# ============================================================================

class TestSetClass:
    """Tests for normal form, prime form and interval vectors."""

    def test_normal_form(self):
        """Test the most compact rotation."""
        assert PitchClassSet.create([7, 0, 4]).normal() == [0, 4, 7]

    def test_prime_form_of_triads(self):
        """Test that major and minor triads share a prime form."""
        major = PitchClassSet.create([0, 4, 7])
        minor = PitchClassSet.create([0, 3, 7])

        assert major.prime() == [0, 3, 7]
        assert minor.prime() == major.prime()

    @pytest.mark.parametrize("chromas", SAMPLE_SETS)
    @pytest.mark.parametrize("n", [1, 5, 11])
    def test_prime_is_transposition_invariant(self, chromas, n):
        """Test prime form under transposition."""
        pcs = PitchClassSet.create(chromas)

        assert pcs.transpose(n).prime() == pcs.prime()

    def test_interval_vector(self):
        """Test the major triad interval vector."""
        assert PitchClassSet.create([0, 4, 7]).interval_vector == (0, 0, 1, 1, 1, 0)
        assert PitchClassSet.create([]).interval_vector == (0, 0, 0, 0, 0, 0)

    @pytest.mark.parametrize("chromas", SAMPLE_SETS)
    def test_interval_vector_total(self, chromas):
        """Test one tally per unordered pair."""
        pcs = PitchClassSet.create(chromas)
        size = len(pcs)

        assert sum(pcs.interval_vector) == size * (size - 1) // 2

    def test_z_related_pair(self):
        """Test the all-interval tetrachords."""
        a = PitchClassSet.create([0, 1, 4, 6])
        b = PitchClassSet.create([0, 1, 3, 7])

        assert PitchClassSet.is_z_related(a, b)
        assert a.interval_vector == (1, 1, 1, 1, 1, 1)
        assert a.prime() != b.prime()

    def test_not_z_related(self):
        """Test sets with different interval content."""
        assert not PitchClassSet.is_z_related([0, 4, 7], [0, 1, 2])
