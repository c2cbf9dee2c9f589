"""MIDI file loading."""

import warnings
from pathlib import Path
from typing import List

import pretty_midi

from ..core import NoteEvent


class MidiLoader:
    """Read the notes of a standard MIDI file."""

    SUPPORTED_FORMATS = {".mid", ".midi"}

    def __init__(self, include_drums: bool = False):
        """
        Initialize MidiLoader.

        Args:
            include_drums: Keep notes of percussion tracks (their pitches
                are drum sounds, not notes)
        """
        self.include_drums = include_drums

    def load(self, path: str) -> List[NoteEvent]:
        """
        Load all notes of a MIDI file.

        Args:
            path: Path to MIDI file

        Returns:
            NoteEvents sorted by onset, then pitch

        Raises:
            ValueError: If file format not supported
            FileNotFoundError: If file doesn't exist
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"MIDI file not found: {path}")

        if path.suffix.lower() not in self.SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported format: {path.suffix}. "
                f"Supported: {self.SUPPORTED_FORMATS}"
            )

        return self.from_pretty_midi(pretty_midi.PrettyMIDI(str(path)))

    def from_pretty_midi(self, midi: pretty_midi.PrettyMIDI) -> List[NoteEvent]:
        """Convert an in-memory PrettyMIDI object."""
        notes = []
        skipped = 0

        for instrument in midi.instruments:
            if instrument.is_drum and not self.include_drums:
                skipped += 1
                continue
            name = instrument.name or pretty_midi.program_to_instrument_name(instrument.program)
            for note in instrument.notes:
                notes.append(NoteEvent(
                    pitch=note.pitch,
                    onset=float(note.start),
                    offset=float(note.end),
                    velocity=note.velocity,
                    instrument=name,
                ))

        if skipped:
            warnings.warn(f"Skipped {skipped} percussion track(s)")
        if not notes:
            warnings.warn("MIDI data holds no pitched notes")

        notes.sort(key=lambda n: (n.onset, n.pitch))
        return notes
