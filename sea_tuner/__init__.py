"""SeaTuner: live monophonic pitch detection against a low-octave note table."""

from .note_types import PLACEHOLDER_RESULT, DetectionResult, NoteEntry, NoteMatch
from .note_matcher import NOTE_TABLE, NoteMatcher
from .tuner_loop import TunerLoop, TunerPhase, TunerState

__all__ = [
    "PLACEHOLDER_RESULT",
    "DetectionResult",
    "NoteEntry",
    "NoteMatch",
    "NOTE_TABLE",
    "NoteMatcher",
    "TunerLoop",
    "TunerPhase",
    "TunerState",
]
