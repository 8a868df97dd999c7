"""Type definitions for the SeaTuner project."""

from typing import Optional
from dataclasses import dataclass


@dataclass(frozen=True)
class NoteEntry:
    """A reference note in the tuning table."""

    frequency: float  # Frequency in Hz
    label: str  # Note name without octave (e.g., 'A', 'C#')

    def __str__(self):
        return f"{self.label} ({self.frequency:.2f}Hz)"


@dataclass(frozen=True)
class NoteMatch:
    """The closest table entry for a frequency and its two neighbours."""

    index: int  # Position of the matched entry in the table
    note: NoteEntry
    previous: NoteEntry  # Lower-frequency neighbour (index + 1)
    next: NoteEntry  # Higher-frequency neighbour (index - 1)
    offset: float  # Interpolation toward a neighbour, in [-R, R]


@dataclass(frozen=True)
class DetectionResult:
    """What the tuner publishes after each analysed window."""

    label: str
    previous_label: str
    next_label: str
    frequency: Optional[float] = None  # Raw detected frequency in Hz
    normalized_frequency: Optional[float] = None  # Folded into the table octave
    offset: int = 0  # Slider value, truncated toward zero

    @property
    def frequency_text(self) -> str:
        """Frequency readout as shown to the user, e.g. '109.98hz'."""
        if self.frequency is None:
            return "--"
        return f"{self.frequency:.2f}hz"


# Shown until the first window yields a usable period
PLACEHOLDER_RESULT = DetectionResult(label="--", previous_label="--", next_label="--")
