from __future__ import annotations
from pathlib import Path
from typing import Dict, List, Optional, Sequence

QUOTES = ("'", '"')


def read_line(prompt: str, default: Optional[str] = None) -> str:
    """input() with the default shown; quotes pasted around a path are dropped."""
    shown = f"{prompt} [{default}]: " if default else f"{prompt}: "
    text = input(shown).strip()
    if len(text) >= 2 and text[0] in QUOTES and text[-1] == text[0]:
        text = text[1:-1].strip()
    return text or (default or "")


def ask_folder(prompt: str = "Image folder", default: Optional[str] = None) -> str:
    """Ask until an existing folder or nothing is entered."""
    while True:
        text = read_line(prompt, default)
        if not text or Path(text).is_dir():
            return text
        print(f"Not a folder: {text}")


def choose(title: str, options: Sequence[str], shortcuts: Optional[Dict[str, int]] = None) -> int:
    """Numbered menu returning a 1-based choice; `shortcuts` maps letters to choices."""
    keys = shortcuts or {}
    print(title)
    for i, name in enumerate(options, 1):
        letters = "/".join(k for k, v in keys.items() if v == i)
        print(f"  {i:>2}. {name}" + (f"  [{letters}]" if letters else ""))
    while True:
        sel = input(f"Choice 1-{len(options)}: ").strip().lower()
        if sel in keys:
            return keys[sel]
        if sel.isdigit() and 1 <= int(sel) <= len(options):
            return int(sel)
        print(f"Unknown choice: {sel!r}")


def choose_file(files: List[Path], current: int = -1) -> int:
    """Pick one of `files` by number; returns a 0-based index. Enter keeps `current`."""
    print(f"{len(files)} image(s):")
    for i, p in enumerate(files):
        mark = "*" if i == current else " "
        print(f" {mark}{i + 1:>4}  {p.name}")
    while True:
        sel = input("Image number: ").strip()
        if not sel and 0 <= current < len(files):
            return current
        if sel.isdigit() and 1 <= int(sel) <= len(files):
            return int(sel) - 1
        print(f"Enter 1..{len(files)}")


def rule(title: str = "", width: int = 60) -> str:
    if not title:
        return "-" * width
    return f" {title} ".center(width, "-")
