"""Single-line terminal display for the tuner."""

import sys
from typing import Optional, TextIO

from ..logger import get_logger
from ..note_matcher import HALF_RANGE
from ..note_types import DetectionResult

logger = get_logger(__name__)


class ConsoleDisplay:
    """Renders each published result as one line of text.

    The line shows the lower neighbour on the left, a slider whose marker sits
    at the interpolation value, the higher neighbour on the right, then the
    matched note and the frequency readout::

        G# [----------------|----------------] A# | A  | 109.98hz
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        half_range: int = HALF_RANGE,
        slider_width: int = 33,
        overwrite: bool = True,
    ):
        """Initialize the display.

        Args:
            stream: Where to write, or None for stdout
            half_range: Value at either end of the slider
            slider_width: Slider width in characters, odd so the centre is exact
            overwrite: Redraw in place with a carriage return instead of new lines
        """
        if slider_width < 3 or slider_width % 2 == 0:
            raise ValueError("slider_width must be odd and at least 3")
        self.stream = stream or sys.stdout
        self.half_range = half_range
        self.slider_width = slider_width
        self.overwrite = overwrite
        self._last_line: Optional[str] = None

    def slider(self, value: int) -> str:
        """Draw the slider with its marker at ``value``."""
        value = max(-self.half_range, min(self.half_range, value))
        centre = self.slider_width // 2
        position = centre + round(value * centre / self.half_range)
        cells = ["-"] * self.slider_width
        cells[position] = "|"
        return "[" + "".join(cells) + "]"

    def render(self, result: DetectionResult) -> str:
        return (
            f"{result.previous_label:>2} {self.slider(result.offset)} "
            f"{result.next_label:<2} | {result.label:<2} | {result.frequency_text}"
        )

    def __call__(self, result: DetectionResult) -> None:
        line = self.render(result)
        if self.overwrite:
            if line == self._last_line:
                return
            self.stream.write("\r" + line)
        else:
            self.stream.write(line + "\n")
        self.stream.flush()
        self._last_line = line

    def finish(self) -> None:
        """End the in-place line so later output starts on a fresh one."""
        if self.overwrite and self._last_line is not None:
            self.stream.write("\n")
            self.stream.flush()
