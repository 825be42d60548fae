from __future__ import annotations

from functools import lru_cache
import logging
from pathlib import Path
from typing import Protocol
from xml.sax.saxutils import escape

from PIL import ImageFont


LOGGER = logging.getLogger(__name__)

CHAR_WIDTH_RATIO = 0.6
ELLIPSIS = "…"
DEFAULT_FONT_FAMILY = "sans-serif"
SANS_FONT_FALLBACK_PATTERNS = (
    "dejavusans",
    "dejavu sans",
    "liberationsans",
    "arial",
    "helvetica",
    "verdana",
)

_XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}


def escape_xml(text: str) -> str:
    return escape(str(text), _XML_ENTITIES)


def estimate_text_width(text: str, font_size: float) -> float:
    return len(text) * float(font_size) * CHAR_WIDTH_RATIO


class TextMeasurer(Protocol):
    """Width oracle used by axes and legends when sizing labels."""

    def text_width(self, text: str, font_size: float, font_family: str = DEFAULT_FONT_FAMILY) -> float:
        ...


class HeuristicMeasurer:
    def text_width(self, text: str, font_size: float, font_family: str = DEFAULT_FONT_FAMILY) -> float:
        return estimate_text_width(text, font_size)


class PillowMeasurer:
    """Measures advance widths from real font files via Pillow.

    Families are matched against font files found in the usual system font
    directories; when nothing matches the Pillow default font is used.
    """

    def __init__(self, font_dirs: tuple[Path, ...] | None = None) -> None:
        self._font_dirs = font_dirs

    def text_width(self, text: str, font_size: float, font_family: str = DEFAULT_FONT_FAMILY) -> float:
        if not text:
            return 0.0
        font = _load_font(font_family, float(font_size), self._font_dirs)
        return float(font.getlength(text))


DEFAULT_MEASURER: TextMeasurer = HeuristicMeasurer()


def elide(
    text: str,
    max_width: float,
    font_size: float,
    *,
    measurer: TextMeasurer | None = None,
    font_family: str = DEFAULT_FONT_FAMILY,
) -> str:
    m = measurer or DEFAULT_MEASURER
    if m.text_width(text, font_size, font_family) <= max_width:
        return text
    if m.text_width(ELLIPSIS, font_size, font_family) > max_width:
        return ""
    lo, hi = 0, len(text)
    # Binary search on the kept prefix length.
    while lo < hi:
        mid = (lo + hi + 1) // 2
        if m.text_width(text[:mid] + ELLIPSIS, font_size, font_family) <= max_width:
            lo = mid
        else:
            hi = mid - 1
    return text[:lo].rstrip() + ELLIPSIS


@lru_cache(maxsize=64)
def _load_font(
    font_family: str,
    font_size: float,
    font_dirs: tuple[Path, ...] | None,
) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    size = max(1, int(round(font_size)))
    font_path = _resolve_font_path(font_family, font_dirs)
    if font_path is None:
        LOGGER.debug("no font file for %r; using Pillow default font", font_family)
        return ImageFont.load_default()
    try:
        return ImageFont.truetype(str(font_path), size=size)
    except OSError as exc:
        LOGGER.warning("failed to load font %s (%s); using Pillow default font", font_path, exc)
        return ImageFont.load_default()


def _resolve_font_path(font_family: str, font_dirs: tuple[Path, ...] | None) -> Path | None:
    families = [f.strip().strip("'\"").lower() for f in font_family.split(",") if f.strip()]
    patterns = tuple(families) + SANS_FONT_FALLBACK_PATTERNS

    dirs = font_dirs or (
        Path.home() / "Library" / "Fonts",
        Path("/Library/Fonts"),
        Path("/System/Library/Fonts"),
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
    )
    candidates: list[Path] = []
    for base in dirs:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(sorted(base.rglob(ext)))

    for pattern in patterns:
        p = pattern.replace(" ", "")
        if not p:
            continue
        for path in candidates:
            stem = path.stem.lower().replace(" ", "")
            if p in stem:
                return path
    return None
