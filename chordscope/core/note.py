"""NoteEvent data class - a timed MIDI note, the unit of note-list analysis."""

from dataclasses import dataclass
from typing import Optional

from .pitch import Note


@dataclass
class NoteEvent:
    """A sounding MIDI note with timing, as read from a MIDI file."""

    pitch: int  # MIDI pitch (0-127)
    onset: float  # Start time in seconds
    offset: float  # End time in seconds
    velocity: int = 64  # MIDI velocity (0-127)
    instrument: Optional[str] = None

    @property
    def duration(self) -> float:
        """Note duration in seconds."""
        return self.offset - self.onset

    @property
    def note(self) -> Note:
        """Spelled note for this pitch (sharps)."""
        return Note.from_midi(self.pitch)

    @property
    def pitch_name(self) -> str:
        """Get note name (e.g., 'C4', 'A#3')."""
        return self.note.name

    @property
    def pitch_class(self) -> int:
        """Get pitch class (0-11, where 0=C)."""
        return self.pitch % 12

    def sounds_at(self, time: float, tolerance: float = 0.0) -> bool:
        """True if the note is sounding at the given time."""
        return self.onset <= time + tolerance and self.offset > time - tolerance
