"""Terminal viewer: folder listing, selection, preview summary and prompt output.

All presentation state (current folder, file list, selection index, last
output) lives on a `Viewer` instance. The extraction modules it calls keep
no state between calls.
"""
from __future__ import annotations
import argparse
import sys
from pathlib import Path
from typing import List, Optional, Set

from . import pipeline, preview, scanner, ui
from .errors import ExtractionUnavailable, PreviewError

NO_METADATA_TEXT = "No metadata found."
NO_PROMPT_TEXT = "No embedded prompt found."
NO_FOLDER_TEXT = "No folder selected."

ACTIONS = [
    "Open folder",
    "Choose image",
    "Next image",
    "Previous image",
    "Reload current image",
    "Exit",
]
SHORTCUTS = {"o": 1, "c": 2, "n": 3, "p": 4, "r": 5, "q": 6}


def describe_result(result: pipeline.PromptResult) -> str:
    if result.found and result.prompt is not None:
        return pipeline.format_output(result.prompt)
    if result.status == pipeline.STATUS_NO_PROMPT_FIELD:
        return NO_PROMPT_TEXT
    return NO_METADATA_TEXT


class Viewer:
    def __init__(self, exiftool: Optional[str] = None, exts: Optional[Set[str]] = None):
        self.exiftool = exiftool
        self.exts = exts
        self.folder: Optional[Path] = None
        self.files: List[Path] = []
        self.index = -1
        self.preview: Optional[preview.PreviewInfo] = None
        self.result: Optional[pipeline.PromptResult] = None
        self.output = ""

    @property
    def current(self) -> Optional[Path]:
        if 0 <= self.index < len(self.files):
            return self.files[self.index]
        return None

    def clear(self) -> str:
        self.preview = None
        self.result = None
        self.output = ""
        return self.output

    def open_folder(self, folder: Path) -> str:
        """Scan `folder` and load its first image, if any."""
        self.folder = Path(folder)
        self.files = scanner.scan(self.folder, self.exts)
        self.index = -1
        if not self.files:
            return self.clear()
        return self.select(0) or ""

    def select(self, index: int) -> Optional[str]:
        if index < 0 or index >= len(self.files):
            return None
        self.index = index
        return self.load_file(self.files[index])

    def next(self) -> Optional[str]:
        return self.select(self.index + 1)

    def previous(self) -> Optional[str]:
        return self.select(self.index - 1)

    def reload(self) -> Optional[str]:
        return self.select(self.index)

    def load_file(self, path: Optional[Path]) -> str:
        """Preview then extract one file; every failure ends up in the returned text."""
        if not path:
            return self.clear()
        path = Path(path)
        self.result = None
        try:
            self.preview = preview.load_preview(path)
        except PreviewError as e:
            self.preview = None
            self.output = str(e)
            return self.output
        try:
            self.result = pipeline.extract_prompt(path, self.exiftool)
        except ExtractionUnavailable as e:
            self.output = f"Error extracting metadata: {e}"
            return self.output
        self.output = describe_result(self.result)
        return self.output

    def render(self) -> str:
        cur = self.current
        lines = []
        if cur is not None:
            lines.append(ui.rule(f"[{self.index + 1}/{len(self.files)}] {cur.name}"))
            lines.append(f"Preview: {self.preview.describe() if self.preview else '(no preview)'}")
        if self.output:
            lines.append(self.output)
        return "\n".join(lines)


def _open_and_show(viewer: Viewer, folder: str) -> None:
    if not folder:
        viewer.clear()
        print(NO_FOLDER_TEXT)
        return
    viewer.open_folder(Path(folder))
    if not viewer.files:
        print(f"No image files found in {folder}")
        return
    print(f"Found {len(viewer.files)} image file(s) in {folder}")
    print(viewer.render())


def run_interactive(viewer: Viewer, folder: Optional[str] = None) -> None:
    print("EXIF Prompt Reader")
    print("Shows AI prompts stored in image metadata (UserComment, ImageDescription, XPComment).")
    try:
        if folder is None:
            folder = ui.ask_folder()
        _open_and_show(viewer, folder)
        while True:
            choice = ui.choose("Select an action", ACTIONS, SHORTCUTS)
            if choice == 1:
                _open_and_show(viewer, ui.ask_folder(default=str(viewer.folder or "")))
                continue
            if choice == 6:
                return
            if not viewer.files:
                print("Open a folder with images first.")
                continue
            if choice == 2:
                viewer.select(ui.choose_file(viewer.files, viewer.index))
            elif choice == 3:
                if viewer.next() is None:
                    print("Already at the last image.")
                    continue
            elif choice == 4:
                if viewer.previous() is None:
                    print("Already at the first image.")
                    continue
            elif choice == 5:
                viewer.reload()
            print(viewer.render())
    except (EOFError, KeyboardInterrupt):
        print()


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Read AI prompts embedded in image metadata.")
    ap.add_argument("--folder", default=None, help="Folder of images to open at start (not recursive)")
    ap.add_argument("--file", default=None, help="Print the prompt of one image and exit")
    ap.add_argument("--exiftool", default=None, help="Path to the exiftool executable (optional)")
    ap.add_argument("--exts", default=scanner.DEFAULT_EXTS,
                    help=f"Comma-separated image extensions (default: {scanner.DEFAULT_EXTS})")
    ap.add_argument("--interactive", action="store_true", help="Run the interactive menu")
    args = ap.parse_args(argv)

    if args.file and not args.interactive:
        path = Path(args.file)
        if not path.is_file():
            print(f"ERROR: File does not exist: {path}", file=sys.stderr)
            return 2
        try:
            result = pipeline.extract_prompt(path, args.exiftool)
        except ExtractionUnavailable as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 3
        print(describe_result(result))
        return 0

    if args.folder and not Path(args.folder).is_dir():
        print(f"ERROR: Folder does not exist: {args.folder}", file=sys.stderr)
        return 2
    viewer = Viewer(exiftool=args.exiftool, exts=scanner.parse_exts(args.exts))
    run_interactive(viewer, args.folder)
    return 0


if __name__ == "__main__":
    sys.exit(main())
