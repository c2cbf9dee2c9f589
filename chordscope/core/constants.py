"""Global constants for chordscope."""

# Pitch names
PITCH_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]
FLAT_PITCH_NAMES = ["C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B"]

# Diatonic letters and their semitone distance from C
LETTERS = ["C", "D", "E", "F", "G", "A", "B"]
STEP_SIZES = [0, 2, 4, 5, 7, 9, 11]

# Pitch class names: letter plus sharps, flats, double sharps or natural
PITCH_CLASS_PATTERN = r"^([A-Ga-g])(#+|b+|x+|n)?$"
NOTE_PATTERN = r"^([A-Ga-g])(#+|b+|x+|n)?(-?\d+)$"

# Interval names: "M3", "3M", "-P5", "d7", "AA4"
INTERVAL_QUALITY_PATTERN = r"^(?:d{1,4}|m|M|P|A{1,4})$"
INTERVAL_PATTERN = (
    r"^([+-]?\d+)(d{1,4}|m|M|P|A{1,4})$|^([+-]?)(d{1,4}|m|M|P|A{1,4})(\d+)$"
)

INTERVAL_QUALITY_NAMES = {
    "dddd": "Quadruply Diminished",
    "ddd": "Triply Diminished",
    "dd": "Doubly Diminished",
    "d": "Diminished",
    "m": "Minor",
    "P": "Perfect",
    "M": "Major",
    "A": "Augmented",
    "AA": "Doubly Augmented",
    "AAA": "Triply Augmented",
    "AAAA": "Quadruply Augmented",
}

# Simple interval spelling for each chroma (0-11)
INTERVAL_NUMBER = [1, 2, 2, 3, 3, 4, 5, 5, 6, 6, 7, 7]
INTERVAL_QUALITY = ["P", "m", "M", "m", "M", "P", "d", "P", "m", "M", "m", "M"]

# Steps (0-based) that take perfect qualities: unison, fourth, fifth
PERFECT_STEPS = {0, 3, 4}

# Major keys around the circle of fifths and their signatures
KEY_SIGNATURES = {
    "C": 0,
    "G": 1, "D": 2, "A": 3, "E": 4, "B": 5, "F#": 6, "C#": 7,
    "F": -1, "Bb": -2, "Eb": -3, "Ab": -4, "Db": -5, "Gb": -6, "Cb": -7,
}

# Tuning reference
A4_FREQUENCY = 440.0
A4_MIDI = 69

# MIDI ranges
MIDI_MIN = 0
MIDI_MAX = 127
OCTAVE_MIN = -1
OCTAVE_MAX = 9
DEFAULT_OCTAVE = 4

# Chord guessing weights
DETECT_INVERSION_SCORE = 0.5
DETECT_OMISSION_SCORE = 0.75
