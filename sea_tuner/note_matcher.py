from typing import Sequence, Tuple

from .logger import get_logger
from .note_types import NoteEntry, NoteMatch

# Get logger for this module
logger = get_logger(__name__)

# Slightly more than one octave, highest first. The outer entries only serve
# as neighbours: a frequency folded into [E2, 2*E2) is always closer to one
# of the inner thirteen.
NOTE_TABLE: Tuple[NoteEntry, ...] = (
    NoteEntry(174.61, "F"),
    NoteEntry(164.81, "E"),
    NoteEntry(155.56, "D#"),
    NoteEntry(146.83, "D"),
    NoteEntry(138.59, "C#"),
    NoteEntry(130.81, "C"),
    NoteEntry(123.47, "B"),
    NoteEntry(116.54, "A#"),
    NoteEntry(110.00, "A"),
    NoteEntry(103.83, "G#"),
    NoteEntry(98.00, "G"),
    NoteEntry(92.50, "F#"),
    NoteEntry(87.31, "F"),
    NoteEntry(82.41, "E"),
    NoteEntry(77.78, "D#"),
)

# Half width of the slider the interpolation value is drawn on
HALF_RANGE = 128


class NoteMatcher:
    """
    Finds the closest reference note for a normalized frequency and how far
    the frequency leans toward the note below or above it.
    """

    def __init__(
        self, table: Sequence[NoteEntry] = NOTE_TABLE, half_range: int = HALF_RANGE
    ):
        if len(table) < 3:
            raise ValueError("Note table needs at least three entries")
        for higher, lower in zip(table, table[1:]):
            if not higher.frequency > lower.frequency:
                raise ValueError(
                    f"Note table must be strictly descending: {higher} before {lower}"
                )
        if half_range <= 0:
            raise ValueError(f"half_range must be positive, got {half_range}")

        self.table = tuple(table)
        self.half_range = half_range

    def closest_index(self, frequency: float) -> int:
        """Index of the entry nearest to ``frequency``; the first of equals wins."""
        return min(
            range(len(self.table)),
            key=lambda i: abs(self.table[i].frequency - frequency),
        )

    def interpolate(self, frequency: float, index: int) -> float:
        """
        Signed position of ``frequency`` between the entry at ``index`` and
        its neighbours: negative toward the lower note, positive toward the
        higher one, reaching +/-half_range at the neighbour itself.

        Args:
            frequency: Normalized frequency in Hz
            index: Table index of the matched note, never the first or last

        Returns:
            float: Interpolation value
        """
        match_freq = self.table[index].frequency
        if frequency < match_freq:
            prev_freq = self.table[index + 1].frequency
            return -self.half_range * (frequency - match_freq) / (prev_freq - match_freq)

        next_freq = self.table[index - 1].frequency
        return self.half_range * (frequency - match_freq) / (next_freq - match_freq)

    def match(self, frequency: float) -> NoteMatch:
        """
        Match a normalized frequency against the table.

        Args:
            frequency: Frequency in Hz, already folded into the table octave

        Returns:
            NoteMatch: The closest note, its neighbours and the interpolation value
        """
        index = self.closest_index(frequency)
        if index == 0 or index == len(self.table) - 1:
            raise ValueError(
                f"{frequency:.2f}Hz is closest to sentinel {self.table[index]}; "
                "normalize it into the table octave first"
            )
        offset = self.interpolate(frequency, index)
        note_match = NoteMatch(
            index=index,
            note=self.table[index],
            previous=self.table[index + 1],
            next=self.table[index - 1],
            offset=offset,
        )
        logger.debug(
            f"Matched {frequency:.2f}Hz to {note_match.note} "
            f"(between {note_match.previous.label} and {note_match.next.label}, offset {offset:.1f})"
        )
        return note_match
