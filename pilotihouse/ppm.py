"""Reader for binary (P6) PPM images, returning rows bottom-up for texture upload."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

_WHITESPACE = b" \t\n\r\v\f"


class PPMError(Exception):
    """Raised when a PPM file cannot be opened or decoded."""


@dataclass(frozen=True)
class PPMImage:
    """An RGB image with 8-bit channels; ``data`` starts at the bottom row."""

    width: int
    height: int
    data: bytes


class _HeaderReader:
    """Pulls whitespace-separated header fields out of the raw file bytes."""

    def __init__(self, raw: bytes) -> None:
        self.raw = raw
        self.pos = 0

    def _skip_whitespace(self) -> None:
        while self.pos < len(self.raw) and self.raw[self.pos] in _WHITESPACE:
            self.pos += 1

    def _skip_blanks_and_comments(self) -> None:
        self._skip_whitespace()
        while self.pos < len(self.raw) and self.raw[self.pos] == ord("#"):
            end = self.raw.find(b"\n", self.pos)
            self.pos = len(self.raw) if end < 0 else end + 1
            self._skip_whitespace()

    def token(self) -> bytes:
        self._skip_whitespace()
        start = self.pos
        while self.pos < len(self.raw) and self.raw[self.pos] not in _WHITESPACE:
            self.pos += 1
        return self.raw[start:self.pos]

    def unsigned(self) -> int:
        self._skip_blanks_and_comments()
        start = self.pos
        while self.pos < len(self.raw) and chr(self.raw[self.pos]).isdigit():
            self.pos += 1
        if start == self.pos:
            raise ValueError("expected an unsigned integer")
        return int(self.raw[start:self.pos])


def load_ppm(path) -> PPMImage:
    """Load a P6 image and flip it vertically so the first row is the bottom one."""
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        raise PPMError(f"Cannot open PPM file: {path}") from exc

    reader = _HeaderReader(raw)
    magic = reader.token()
    if magic != b"P6":
        raise PPMError(f"Invalid PPM header: {magic.decode('latin-1')}")

    try:
        width = reader.unsigned()
        height = reader.unsigned()
        reader.unsigned()  # maxval is read but not used
    except ValueError as exc:
        raise PPMError("Error reading PPM data") from exc

    start = reader.pos + 1  # exactly one whitespace byte follows maxval
    row_size = width * 3
    total = row_size * height
    pixels = raw[start:start + total]
    if start > len(raw) or len(pixels) < total:
        raise PPMError("Error reading PPM data")

    logger.info("PPM Loaded: %s %dx%d", path, width, height)

    if row_size == 0:
        return PPMImage(width, height, b"")
    flipped = b"".join(
        pixels[offset:offset + row_size]
        for offset in reversed(range(0, total, row_size))
    )
    return PPMImage(width, height, flipped)