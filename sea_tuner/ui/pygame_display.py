import pygame
from typing import Callable, Tuple

from ..logger import get_logger
from ..note_matcher import HALF_RANGE
from ..note_types import DetectionResult

# Get logger for this module
logger = get_logger(__name__)


def slider_x(value: int, half_range: int, left: int, width: int) -> int:
    """Horizontal pixel position of ``value`` on a slider spanning ``width`` pixels."""
    value = max(-half_range, min(half_range, value))
    return left + round((value + half_range) * width / (2 * half_range))


class PygameDisplay:
    """Pygame window showing the matched note on a slider between its neighbours"""

    def __init__(self, half_range: int = HALF_RANGE):
        self.screen = None
        self.width = 640
        self.height = 240
        self.bg_color = (20, 20, 30)
        self.text_color = (255, 255, 0)
        self.secondary_color = (180, 255, 180)
        self.track_color = (120, 120, 140)
        self.half_range = half_range
        self.initialized = False
        self.clock = None

        # Fonts
        self.large_font = None
        self.medium_font = None
        self.small_font = None

        logger.debug("Initializing PygameDisplay")

    def init_screen(self):
        """Initialize the Pygame screen and resources"""
        try:
            pygame.init()
            self.screen = pygame.display.set_mode((self.width, self.height))
            pygame.display.set_caption("SeaTuner")

            self.large_font = pygame.font.SysFont("sans", 48)
            self.medium_font = pygame.font.SysFont("sans", 24)
            self.small_font = pygame.font.SysFont("sans", 14)

            self.clock = pygame.time.Clock()
            self.initialized = True
            logger.info("Pygame display initialized")
            return self.screen

        except pygame.error as e:
            logger.error(f"Failed to initialize Pygame: {e}")
            self.cleanup()
            raise

    def _blit_centered(self, font, text: str, color, center: Tuple[int, int]):
        surface = font.render(text, True, color)
        self.screen.blit(surface, surface.get_rect(center=center))

    def draw(self, result: DetectionResult):
        """Draw one frame for ``result``"""
        if not self.initialized or not self.screen:
            return

        self.screen.fill(self.bg_color)

        margin = 60
        track_width = self.width - 2 * margin
        track_y = 70

        # Track with major ticks every half_range/2 and minor every half_range/8
        pygame.draw.line(
            self.screen, self.track_color, (margin, track_y), (margin + track_width, track_y), 2
        )
        minor = max(1, self.half_range // 8)
        for tick in range(-self.half_range, self.half_range + 1, minor):
            x = slider_x(tick, self.half_range, margin, track_width)
            size = 12 if tick % max(1, self.half_range // 2) == 0 else 6
            pygame.draw.line(
                self.screen, self.track_color, (x, track_y - size), (x, track_y + size), 1
            )

        # Marker
        marker_x = slider_x(result.offset, self.half_range, margin, track_width)
        pygame.draw.polygon(
            self.screen,
            self.text_color,
            [(marker_x, track_y - 4), (marker_x - 8, track_y - 22), (marker_x + 8, track_y - 22)],
        )

        # Lower neighbour at -R, matched note at 0, higher neighbour at +R
        label_y = track_y + 50
        self._blit_centered(
            self.medium_font, result.previous_label, self.secondary_color, (margin, label_y)
        )
        self._blit_centered(
            self.large_font, result.label, self.text_color, (self.width // 2, label_y)
        )
        self._blit_centered(
            self.medium_font,
            result.next_label,
            self.secondary_color,
            (margin + track_width, label_y),
        )

        self._blit_centered(
            self.small_font,
            result.frequency_text,
            (200, 200, 255),
            (self.width // 2, self.height - 30),
        )

        pygame.display.flip()

    def run(self, snapshot: Callable[[], DetectionResult], is_running: Callable[[], bool], fps: int = 60):
        """Redraw ``snapshot()`` until the window closes or ``is_running()`` turns False"""
        if not self.initialized:
            self.init_screen()

        try:
            while is_running():
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        logger.info("Display window closed")
                        return
                    if event.type == pygame.KEYDOWN and event.key in (pygame.K_ESCAPE, pygame.K_q):
                        logger.info("Quit requested from keyboard")
                        return

                self.draw(snapshot())
                self.clock.tick(fps)
        finally:
            self.cleanup()

    def cleanup(self):
        """Clean up Pygame resources"""
        if self.initialized:
            pygame.quit()
            self.initialized = False
            logger.debug("Pygame display cleaned up")
