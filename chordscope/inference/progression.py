"""Chord progressions built from scale degrees."""

from typing import List, Optional, Sequence

from .chords import Chord, ChordGuesser
from .scale import Scale


# Scale degrees (1-based) of well known progressions
COMMON_PROGRESSIONS = {
    "ii-V-I": (2, 5, 1),
    "I-IV-V": (1, 4, 5),
    "I-vi-IV-V": (1, 6, 4, 5),  # 50s progression
    "I-V-vi-IV": (1, 5, 6, 4),  # Pop progression
    "i-bVI-bIII-bVII": (1, 6, 3, 7),  # Minor pop progression
    "12-bar-blues": (1, 1, 1, 1, 4, 4, 1, 1, 5, 4, 1, 5),
}


def progression_from_degrees(
    scale: Scale,
    degrees: Sequence[int],
    sevenths: bool = False,
    guesser: Optional[ChordGuesser] = None,
) -> List[Chord]:
    """
    Diatonic chords of a scale for a list of degrees.

    Args:
        scale: Scale to harmonize
        degrees: 1-based scale degrees, e.g. (2, 5, 1)
        sevenths: Use seventh chords instead of triads
        guesser: Chord guesser (defaults to one over the shared index)

    Returns:
        One Chord per degree

    Raises:
        ValueError: If a degree is out of range or its stacked thirds form
            no known chord
    """
    if sevenths:
        diatonic = dict(scale.diatonic_sevenths(guesser))
    else:
        diatonic = dict(scale.diatonic_chords(guesser))

    chords = []
    for degree in degrees:
        chord = diatonic.get(degree)
        if chord is None:
            raise ValueError(f"Could not generate chord for degree {degree} in {scale.name}")
        chords.append(chord)
    return chords
