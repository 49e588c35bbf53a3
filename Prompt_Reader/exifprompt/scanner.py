from __future__ import annotations
import os
import sys
from pathlib import Path
from typing import List, Optional, Set

DEFAULT_EXTS = "png,jpg,jpeg,webp"


def parse_exts(csv: str) -> Set[str]:
    out = set()
    for part in csv.split(","):
        s = part.strip().lower()
        if not s:
            continue
        if s.startswith("."):
            s = s[1:]
        out.add(s)
    return out


IMAGE_EXTS = parse_exts(DEFAULT_EXTS)


def is_image_name(name: str, exts: Optional[Set[str]] = None) -> bool:
    ext = os.path.splitext(name)[1].lower()
    if ext.startswith("."):
        ext = ext[1:]
    return ext in (IMAGE_EXTS if exts is None else exts)


def scan(folder: Path, exts: Optional[Set[str]] = None) -> List[Path]:
    """List the images directly inside `folder`, sorted by path string.

    Hidden entries and directories are skipped and nothing is recursed into.
    A folder that cannot be read yields an empty list.
    """
    folder = Path(folder)
    files: List[Path] = []
    try:
        with os.scandir(folder) as it:
            entries = list(it)
    except OSError as e:
        print(f"WARNING: cannot read folder {folder}: {e}", file=sys.stderr)
        return []
    for entry in entries:
        if entry.name.startswith("."):
            continue
        try:
            if entry.is_dir(follow_symlinks=False):
                continue
        except OSError:
            continue
        if is_image_name(entry.name, exts):
            files.append(folder / entry.name)
    files.sort(key=str)
    return files
