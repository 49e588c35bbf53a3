from __future__ import annotations
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

from .errors import PreviewError


@dataclass
class PreviewInfo:
    path: Path
    size_bytes: int
    decoded: bool = False
    format: Optional[str] = None
    dimensions: Optional[Tuple[int, int]] = None
    mode: Optional[str] = None

    def describe(self) -> str:
        if not self.decoded or not self.dimensions:
            return "(no preview)"
        w, h = self.dimensions
        return f"{self.format or '?'} {w}x{h} {self.mode or ''}".rstrip()


def load_preview(path: Path) -> PreviewInfo:
    """Read the whole file and decode it with Pillow.

    Read failures raise PreviewError. A file that reads fine but does not
    decode gives an undecoded PreviewInfo.
    """
    path = Path(path)
    try:
        with open(path, "rb") as f:
            buf = f.read()
    except OSError as e:
        raise PreviewError(f"Error reading file: {e}") from e
    info = PreviewInfo(path=path, size_bytes=len(buf))
    try:
        with Image.open(BytesIO(buf)) as img:
            img.load()
            info.format = img.format
            info.dimensions = img.size
            info.mode = img.mode
            info.decoded = True
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError):
        info.decoded = False
    return info
