"""
Generated signature and initials stamps.

Both stamps are PNG data URIs so they can be embedded straight into the lease
preview and submitted as-is.
"""
import base64
import io
from functools import lru_cache
from typing import Protocol
from PIL import Image, ImageDraw, ImageFont
from app.core.config import settings
from app.models.enums import TabKind


BACKGROUND = "#ffffff"
INK = "#1a1a2e"

SIGNATURE_SIZE = (400, 120)
SIGNATURE_FONT_SIZE = 48
SIGNATURE_SLANT = -0.1

INITIALS_SIZE = (80, 60)
INITIALS_FONT_SIZE = 32

STYLE_COUNT = 3


class SignatureSource(Protocol):
    """Anything that can produce an image for a field."""

    def capture(self, kind: TabKind) -> str | None:
        ...


def to_data_url(image: Image.Image) -> str:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buffer.getvalue()).decode("ascii")


def generate_initials(name: str) -> str:
    """
    "John Smith" -> "JS", "Jane Q Public" -> "JP", "Cher" -> "CH", "" -> "".
    """
    if not name:
        return ""
    parts = name.split()
    if len(parts) >= 2:
        return (parts[0][0] + parts[-1][0]).upper()
    return name.strip()[:2].upper()


@lru_cache(maxsize=32)
def _load_font(path: str | None, size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    if path:
        try:
            return ImageFont.truetype(path, size)
        except OSError:
            pass
    return ImageFont.load_default(size=size)


def _fit_font(draw: ImageDraw.ImageDraw, text: str, path: str | None, size: int, max_width: int):
    # Shrink long names until they fit the canvas
    while size > 12:
        font = _load_font(path, size)
        if draw.textlength(text, font=font) <= max_width:
            return font
        size -= 4
    return _load_font(path, size)


def _signature_font_path(style: int) -> str | None:
    paths = settings.SIGNATURE_FONT_PATHS
    if not paths:
        return None
    return paths[style % len(paths)]


def render_signature_stamp(name: str, style: int = 0) -> Image.Image | None:
    """Render `name` in one of three signature presets, sheared and centered."""
    if not name:
        return None

    width, height = SIGNATURE_SIZE
    layer = Image.new("RGBA", SIGNATURE_SIZE, (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)
    font = _fit_font(draw, name, _signature_font_path(style % STYLE_COUNT), SIGNATURE_FONT_SIZE, width - 40)
    draw.text((width / 2, height / 2), name, font=font, fill=INK, anchor="mm")

    # Shear around the vertical center so the text stays centered
    slanted = layer.transform(
        SIGNATURE_SIZE,
        Image.Transform.AFFINE,
        (1, -SIGNATURE_SLANT, SIGNATURE_SLANT * height / 2, 0, 1, 0),
        resample=Image.Resampling.BICUBIC,
        fillcolor=(0, 0, 0, 0),
    )

    image = Image.new("RGB", SIGNATURE_SIZE, BACKGROUND)
    image.paste(slanted, mask=slanted)
    return image


def render_initials_stamp(initials: str) -> Image.Image | None:
    if not initials:
        return None

    width, height = INITIALS_SIZE
    image = Image.new("RGB", INITIALS_SIZE, BACKGROUND)
    draw = ImageDraw.Draw(image)
    font = _load_font(settings.INITIALS_FONT_PATH, INITIALS_FONT_SIZE)
    draw.text((width / 2, height / 2), initials, font=font, fill=INK, anchor="mm")
    return image


def generate_stamp_signature(name: str, style: int = 0) -> str | None:
    image = render_signature_stamp(name, style)
    return to_data_url(image) if image else None


def generate_initial_stamp(name: str) -> str | None:
    image = render_initials_stamp(generate_initials(name))
    return to_data_url(image) if image else None


class StampSource:
    """Typed mode: stamps are derived from the signer name and style."""

    def __init__(self, name: str = "", style: int = 0):
        self.name = name
        self.style = style

    def capture(self, kind: TabKind) -> str | None:
        if kind == TabKind.SIGNATURE:
            return generate_stamp_signature(self.name, self.style)
        return generate_initial_stamp(self.name)
