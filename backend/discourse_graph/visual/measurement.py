"""
Measurement adapters.

The size calculator never touches fonts or image files itself; it asks a
MeasurementAdapter. `PillowMeasurementAdapter` is the real implementation:
it lays the node text out with Pillow font metrics using the same box model
as the rendered shape, and reads image dimensions from the vault or over
HTTP.
"""

from __future__ import annotations

import asyncio
import io
import logging
import os
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple
from urllib.parse import unquote, urlparse

import requests
from PIL import Image, ImageFont

from discourse_graph.config import IMAGE_LOAD_TIMEOUT
from discourse_graph.ir.errors import MeasurementFailure, MeasurementTimeout
from discourse_graph.visual.node_style import (
    CONTAINER_BORDER_WIDTH,
    CONTAINER_PADDING,
    DEFAULT_FONT_FAMILY,
    DEFAULT_SIZE,
    FONT_FAMILIES,
    FONT_SIZES,
    MAX_NODE_WIDTH,
    MIN_NODE_WIDTH,
    SUBTITLE_LINE_HEIGHT,
    SUBTITLE_MARGIN,
    SUBTITLE_SCALE,
    TITLE_LINE_HEIGHT,
    TITLE_MARGIN,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextExtent:
    w: float
    h: float


@dataclass(frozen=True)
class ImageSize:
    width: int
    height: int


class MeasurementAdapter(ABC):
    @abstractmethod
    def measure_text(self, title: str, subtitle: str, size: str, font_family: str) -> TextExtent:
        """Extent of the rendered title + subtitle block, including the box chrome."""
        pass

    @abstractmethod
    async def load_image(self, src: str) -> ImageSize:
        """
        Natural dimensions of the image at `src`.

        Must raise MeasurementTimeout after the configured timeout and
        MeasurementFailure on any load error.
        """
        pass


class _FontCache:
    """Caches Pillow fonts per (family, size) and measures string widths."""

    FONT_DIRS = [
        Path("/System/Library/Fonts"),
        Path("/System/Library/Fonts/Supplemental"),
        Path("/Library/Fonts"),
        Path("~/Library/Fonts").expanduser(),
        Path("~/.fonts").expanduser(),
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
        Path("C:/Windows/Fonts"),
    ]
    GENERIC_FALLBACKS = {
        "sans-serif": ["Helvetica", "Arial", "Liberation Sans", "DejaVu Sans"],
        "serif": ["Times New Roman", "Times", "Liberation Serif", "DejaVu Serif"],
        "monospace": ["Courier New", "Courier", "Liberation Mono", "DejaVu Sans Mono"],
    }

    def __init__(self) -> None:
        self._fonts: Dict[Tuple[str, int], Optional[ImageFont.ImageFont]] = {}
        self._paths: Dict[str, Optional[str]] = {}

    def font(self, size: float, family: str) -> Optional[ImageFont.ImageFont]:
        key = (family, max(1, int(round(size))))
        if key in self._fonts:
            return self._fonts[key]

        candidates: List[str] = []
        for name in FONT_FAMILIES.get(family, FONT_FAMILIES[DEFAULT_FONT_FAMILY])["fallbacks"]:
            for fam in self.GENERIC_FALLBACKS.get(name, [name]):
                resolved = self._locate(fam)
                if resolved:
                    candidates.append(resolved)
        candidates.append("DejaVuSans.ttf")

        font = None
        for candidate in candidates:
            try:
                font = ImageFont.truetype(candidate, key[1])
                break
            except OSError:
                continue

        self._fonts[key] = font
        return font

    def width(self, text: str, size: float, family: str) -> float:
        font = self.font(size, family)
        if font is None:
            return _heuristic_width(text, size)
        return float(font.getlength(text))

    def _locate(self, family: str) -> Optional[str]:
        key = family.lower()
        if key in self._paths:
            return self._paths[key]

        normalized = re.sub(r"[^a-z0-9]+", "", key)
        best: Optional[Tuple[int, str]] = None
        for directory in self.FONT_DIRS:
            if not normalized or not directory.exists():
                continue
            for path in directory.rglob("*.ttf"):
                stem = re.sub(r"[^a-z0-9]+", "", path.stem.lower())
                if stem == normalized:
                    score = 0
                elif stem.startswith(normalized):
                    score = 1
                else:
                    continue
                if best is None or score < best[0]:
                    best = (score, str(path))

        self._paths[key] = best[1] if best else None
        return self._paths[key]


def _heuristic_width(text: str, font_size: float) -> float:
    width = 0.0
    for ch in text:
        if ch.isspace():
            width += font_size * 0.33
        elif ch in "il":
            width += font_size * 0.3
        elif ch in "mwMW@#":
            width += font_size * 0.9
        else:
            width += font_size * 0.6
    return width


class PillowMeasurementAdapter(MeasurementAdapter):
    def __init__(
        self,
        vault_root: Optional[str] = None,
        timeout: float = IMAGE_LOAD_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.vault_root = vault_root
        self.timeout = timeout
        self.session = session or requests.Session()
        self._fonts = _FontCache()

    # ---- text ----

    def measure_text(
        self,
        title: str,
        subtitle: str,
        size: str = DEFAULT_SIZE,
        font_family: str = DEFAULT_FONT_FAMILY,
    ) -> TextExtent:
        font_size = FONT_SIZES.get(size, FONT_SIZES[DEFAULT_SIZE])
        family = font_family if font_family in FONT_FAMILIES else DEFAULT_FONT_FAMILY
        subtitle_size = font_size * SUBTITLE_SCALE

        chrome = 2 * (CONTAINER_PADDING + CONTAINER_BORDER_WIDTH)
        content_limit = MAX_NODE_WIDTH - chrome

        title_lines = self._wrap(title or "...", content_limit - 2 * TITLE_MARGIN, font_size, family)
        subtitle_lines = self._wrap(subtitle, content_limit - 2 * SUBTITLE_MARGIN, subtitle_size, family) if subtitle else []

        title_width = max(self._fonts.width(line, font_size, family) for line in title_lines) + 2 * TITLE_MARGIN
        subtitle_width = max(
            (self._fonts.width(line, subtitle_size, family) for line in subtitle_lines), default=0.0
        ) + 2 * SUBTITLE_MARGIN

        w = min(max(max(title_width, subtitle_width) + chrome, MIN_NODE_WIDTH), MAX_NODE_WIDTH)
        h = (
            chrome
            + len(title_lines) * font_size * TITLE_LINE_HEIGHT + 2 * TITLE_MARGIN
            + len(subtitle_lines) * subtitle_size * SUBTITLE_LINE_HEIGHT
        )
        if subtitle_lines:
            h += 2 * SUBTITLE_MARGIN
        return TextExtent(w=w, h=h)

    def _wrap(self, text: str, width_limit: float, font_size: float, family: str) -> List[str]:
        chunks = re.split(r"(\s+)", text.strip())
        lines: List[str] = []
        current = ""
        for chunk in chunks:
            if not chunk:
                continue
            candidate = (current + chunk) if current else chunk
            if self._fonts.width(candidate.strip(), font_size, family) <= width_limit:
                current = candidate
                continue
            if current:
                lines.append(current.strip())
            current = chunk.strip()
        if current:
            lines.append(current.strip())
        return lines or [""]

    # ---- images ----

    async def load_image(self, src: str) -> ImageSize:
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self._read_image_size, src),
                timeout=self.timeout,
            )
        except MeasurementFailure:
            raise
        except (asyncio.TimeoutError, requests.Timeout) as e:
            raise MeasurementTimeout("Failed to load image: timeout", src=src) from e
        except Exception as e:
            # Decoder errors (DecompressionBombError, bad paths) are not OSErrors.
            raise MeasurementFailure(f"Failed to load image: {e}", src=src) from e

    def _read_image_size(self, src: str) -> ImageSize:
        if re.match(r"^https?://", src, re.IGNORECASE):
            response = self.session.get(src, timeout=self.timeout)
            response.raise_for_status()
            with Image.open(io.BytesIO(response.content)) as img:
                width, height = img.size
        else:
            with Image.open(self._resolve_local_path(src)) as img:
                width, height = img.size

        if width <= 0 or height <= 0:
            raise MeasurementFailure("Failed to load image: empty dimensions", src=src)
        return ImageSize(width=width, height=height)

    def _resolve_local_path(self, src: str) -> str:
        """Map vault resource references (app://, file://, vault-relative) to a file path."""
        parsed = urlparse(src)
        if parsed.scheme in ("app", "file"):
            path = unquote(parsed.path)
            # app://<host-id>/<absolute path>?<mtime>
            if parsed.scheme == "app" and self.vault_root and not os.path.exists(path):
                path = os.path.join(self.vault_root, path.lstrip("/"))
            return path
        if self.vault_root and not os.path.isabs(src):
            return os.path.join(self.vault_root, src)
        return src
