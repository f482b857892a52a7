"""
Freehand drawing capture for signatures and initials.

The surface receives pointer events in CSS pixels and rasterizes them at
device-pixel-ratio resolution. Events are only handled while the surface is
attached (the signing session attaches it while a field is focused in draw
mode).
"""
from PIL import Image, ImageDraw
from app.models.enums import TabKind
from app.services.stamp import BACKGROUND, INK, to_data_url


CANVAS_WIDTH = 352
SIGNATURE_CANVAS_HEIGHT = 140
INITIAL_CANVAS_HEIGHT = 100
STROKE_WIDTH = 2


class DrawingSurface:
    def __init__(self, width: int = CANVAS_WIDTH, height: int = SIGNATURE_CANVAS_HEIGHT,
                 device_pixel_ratio: float = 1.0):
        self.width = width
        self.height = height
        self.device_pixel_ratio = device_pixel_ratio or 1.0
        self.attached = False
        self.image: Image.Image | None = None
        self._draw: ImageDraw.ImageDraw | None = None
        self._pointer_id: int | None = None
        self._last_point: tuple[float, float] | None = None
        self.stroke_count = 0

    # Lifecycle

    def setup(self, width: int | None = None, height: int | None = None,
              device_pixel_ratio: float | None = None) -> None:
        """(Re)initialize the canvas size and fill the background."""
        if width is not None:
            self.width = width
        if height is not None:
            self.height = height
        if device_pixel_ratio is not None:
            self.device_pixel_ratio = device_pixel_ratio or 1.0

        ratio = self.device_pixel_ratio
        size = (max(1, round(self.width * ratio)), max(1, round(self.height * ratio)))
        self.image = Image.new("RGB", size, BACKGROUND)
        self._draw = ImageDraw.Draw(self.image)
        self._pointer_id = None
        self._last_point = None
        self.stroke_count = 0

    def setup_for(self, kind: TabKind) -> None:
        height = SIGNATURE_CANVAS_HEIGHT if kind == TabKind.SIGNATURE else INITIAL_CANVAS_HEIGHT
        self.setup(height=height)

    def attach(self) -> None:
        if self.image is None:
            self.setup()
        self.attached = True

    def detach(self) -> None:
        self.attached = False
        self._pointer_id = None
        self._last_point = None

    def clear(self) -> None:
        """Discard all strokes, keeping the current size."""
        if self._draw is None:
            return
        self._draw.rectangle((0, 0, self.image.width, self.image.height), fill=BACKGROUND)
        self._last_point = None
        self.stroke_count = 0

    # Pointer events

    @property
    def drawing(self) -> bool:
        return self._pointer_id is not None

    def pointer_down(self, pointer_id: int, x: float, y: float) -> None:
        if not self.attached or self._draw is None:
            return
        self._pointer_id = pointer_id
        self._last_point = self._clamp(x, y)
        self.stroke_count += 1

    def pointer_move(self, pointer_id: int, x: float, y: float) -> None:
        # Pointer capture: moves outside the canvas still belong to the stroke
        if not self.attached or pointer_id != self._pointer_id:
            return
        point = self._clamp(x, y)
        # After clear() the captured stroke restarts at the next point
        if self._last_point is not None:
            self._segment(self._last_point, point)
        self._last_point = point

    def pointer_up(self, pointer_id: int) -> None:
        self._end(pointer_id)

    def pointer_leave(self, pointer_id: int) -> None:
        self._end(pointer_id)

    def pointer_cancel(self, pointer_id: int) -> None:
        self._end(pointer_id)

    def _end(self, pointer_id: int) -> None:
        if pointer_id != self._pointer_id:
            return
        self._pointer_id = None
        self._last_point = None

    def _clamp(self, x: float, y: float) -> tuple[float, float]:
        return min(max(x, 0.0), float(self.width)), min(max(y, 0.0), float(self.height))

    def _segment(self, start: tuple[float, float], end: tuple[float, float]) -> None:
        ratio = self.device_pixel_ratio
        line_width = max(1, round(STROKE_WIDTH * ratio))
        points = [(start[0] * ratio, start[1] * ratio), (end[0] * ratio, end[1] * ratio)]
        self._draw.line(points, fill=INK, width=line_width, joint="curve")
        # Round caps
        radius = line_width / 2
        for px, py in points:
            self._draw.ellipse((px - radius, py - radius, px + radius, py + radius), fill=INK)

    # Export

    def export(self) -> str | None:
        """Snapshot of the current canvas as a PNG data URI."""
        if self.image is None:
            return None
        return to_data_url(self.image)

    def capture(self, kind: TabKind) -> str | None:
        return self.export()
