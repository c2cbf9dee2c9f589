"""MIDI export functionality."""

from pathlib import Path
from typing import List, Sequence

import pretty_midi

from ..core import NoteEvent, is_valid_midi
from ..inference.chords import Chord


class MIDIExporter:
    """Export notes and chord sequences to MIDI format."""

    def __init__(
        self,
        tempo: float = 120.0,
        instrument_name: str = "Acoustic Grand Piano",
        instrument_program: int = 0,
    ):
        """
        Initialize MIDIExporter.

        Args:
            tempo: Tempo in BPM
            instrument_name: MIDI instrument name
            instrument_program: MIDI program number (0-127)
        """
        self.tempo = tempo
        self.instrument_name = instrument_name
        self.instrument_program = instrument_program

    def export(self, notes: List[NoteEvent], output_path: str) -> None:
        """
        Export notes to MIDI file.

        Args:
            notes: List of NoteEvent objects
            output_path: Path to output MIDI file
        """
        midi = self.notes_to_pretty_midi(notes)

        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        midi.write(str(output_path))

    def export_chords(
        self,
        chords: Sequence[Chord],
        output_path: str,
        beats_per_chord: float = 4.0,
    ) -> None:
        """Voice a chord sequence (see voice_chords) and write it out."""
        self.export(self.voice_chords(chords, beats_per_chord), output_path)

    def voice_chords(
        self,
        chords: Sequence[Chord],
        beats_per_chord: float = 4.0,
        octave: int = 4,
        velocity: int = 80,
    ) -> List[NoteEvent]:
        """
        Block voicing of each chord, one after another.

        Chord tones are stacked upwards from the root in the given octave;
        a slash bass is added an octave below.

        Raises:
            ValueError: If a voiced pitch falls outside the MIDI range
        """
        seconds = beats_per_chord * 60.0 / self.tempo
        notes = []

        for i, chord in enumerate(chords):
            onset, offset = i * seconds, (i + 1) * seconds
            base = (octave + 1) * 12 + chord.root.chroma
            pitches = [base + semitones for semitones in chord.type.semitones]
            if chord.bass is not None:
                pitches.insert(0, (octave * 12) + chord.bass.chroma)

            for pitch in pitches:
                if not is_valid_midi(pitch):
                    raise ValueError(f"Voiced pitch {pitch} of {chord} is outside 0-127")
                notes.append(NoteEvent(pitch, onset, offset, velocity))

        return notes

    def notes_to_pretty_midi(self, notes: List[NoteEvent]) -> pretty_midi.PrettyMIDI:
        """Convert notes to PrettyMIDI object without saving."""
        midi = pretty_midi.PrettyMIDI(initial_tempo=self.tempo)

        instrument = pretty_midi.Instrument(
            program=self.instrument_program,
            name=self.instrument_name,
        )

        for note in notes:
            instrument.notes.append(pretty_midi.Note(
                velocity=note.velocity,
                pitch=note.pitch,
                start=note.onset,
                end=note.offset,
            ))

        midi.instruments.append(instrument)
        return midi
