"""ExifTool session handling and per-file metadata extraction.

One `ExifToolSession` wraps a single `exiftool -stay_open True -@ -`
process. Arguments are written to its stdin one per line, terminated by
`-execute`; ExifTool answers on stdout and finishes every answer with a
`{ready}` line. The session is a context manager so the process is told to
exit (and reaped, or killed) on every exit path.
"""
from __future__ import annotations
import io
import os
import shutil
import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import ijson

from .errors import ExtractionUnavailable

# ----------------------- Defaults -----------------------
DEFAULT_EXIFTOOL_TIMEOUT = 10.0     # seconds to wait for a clean shutdown
EXIFTOOL_ENV = "EXIFTOOL_PATH"
READY_MARKER = b"{ready}"
COMMON_LOCATIONS = [
    "/usr/bin/exiftool",
    "/usr/local/bin/exiftool",
    "/opt/homebrew/bin/exiftool",
    r"C:\Program Files\ExifTool\exiftool.exe",
    r"C:\Program Files (x86)\ExifTool\exiftool.exe",
]


@dataclass
class MetadataRecord:
    """One metadata segment as reported by ExifTool."""
    fields: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def which(program: str) -> Optional[str]:
    return shutil.which(program)


def find_exiftool(user_path: Optional[str] = None) -> Optional[str]:
    # Explicit path, then environment, then PATH, then common locations
    for cand in (user_path, os.environ.get(EXIFTOOL_ENV)):
        if cand and Path(cand).exists():
            return str(Path(cand))
    found = which("exiftool") or which("exiftool.exe")
    if found:
        return found
    for c in COMMON_LOCATIONS:
        if Path(c).exists():
            return str(Path(c))
    return None


def exiftool_args(path: Path) -> List[str]:
    # absolute so a leading "-" is never read as an option; one arg per line
    target = str(Path(path).absolute())
    if "\n" in target or "\r" in target:
        raise ExtractionUnavailable(f"cannot pass a path containing a line break to exiftool: {target!r}")
    return [
        "-j",
        "-charset", "filename=UTF8",
        "-api", "LargeFileSupport=1",
        target,
    ]


def parse_records(buf: bytes) -> List[MetadataRecord]:
    """Stream ExifTool's JSON array into records.

    Numbers stay as `Decimal`, so their text is exactly what ExifTool printed.
    """
    if not buf.strip():
        return []
    out: List[MetadataRecord] = []
    try:
        for item in ijson.items(io.BytesIO(buf), "item"):
            if not isinstance(item, dict):
                continue
            err = item.get("Error")
            out.append(MetadataRecord(
                fields=item,
                error=str(err) if err is not None else None,
            ))
    except ijson.JSONError as e:
        raise ExtractionUnavailable(f"unreadable exiftool output: {e}") from e
    return out


class ExifToolSession:
    """A stay-open ExifTool process scoped to a `with` block."""

    def __init__(self, executable: Optional[str] = None, timeout: float = DEFAULT_EXIFTOOL_TIMEOUT):
        self.executable = executable
        self.timeout = timeout
        self.proc: Optional[subprocess.Popen] = None

    def __enter__(self) -> "ExifToolSession":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def running(self) -> bool:
        return self.proc is not None and self.proc.poll() is None

    def start(self) -> None:
        exe = find_exiftool(self.executable)
        if not exe:
            raise ExtractionUnavailable(
                "exiftool not found. Install ExifTool, pass --exiftool, "
                f"or set {EXIFTOOL_ENV}."
            )
        try:
            self.proc = subprocess.Popen(
                [exe, "-stay_open", "True", "-@", "-"],
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                shell=False,
            )
        except OSError as e:
            raise ExtractionUnavailable(f"failed to start exiftool ({exe}): {e}") from e

    def execute(self, *args: str) -> bytes:
        """Run one command and return its stdout up to the ready marker."""
        if not self.running:
            raise ExtractionUnavailable("exiftool session is not running")
        assert self.proc is not None and self.proc.stdin is not None and self.proc.stdout is not None
        # fsencode keeps undecodable filename bytes as they are on disk
        try:
            payload = b"".join(os.fsencode(a) + b"\n" for a in args) + b"-execute\n"
        except UnicodeError as e:
            raise ExtractionUnavailable(f"cannot encode exiftool arguments: {e}") from e
        try:
            self.proc.stdin.write(payload)
            self.proc.stdin.flush()
        except OSError as e:
            raise ExtractionUnavailable(f"exiftool stopped accepting commands: {e}") from e
        chunks: List[bytes] = []
        while True:
            line = self.proc.stdout.readline()
            if not line:
                raise ExtractionUnavailable("exiftool exited before finishing the command")
            if line.strip() == READY_MARKER:
                break
            chunks.append(line)
        return b"".join(chunks)

    def extract(self, path: Path) -> List[MetadataRecord]:
        return parse_records(self.execute(*exiftool_args(Path(path))))

    def close(self) -> None:
        proc = self.proc
        if proc is None:
            return
        self.proc = None
        if proc.poll() is None and proc.stdin is not None:
            try:
                proc.stdin.write(b"-stay_open\nFalse\n")
                proc.stdin.flush()
            except OSError:
                # already gone; wait() below reaps it
                pass
        try:
            if proc.stdin is not None:
                proc.stdin.close()
        except OSError:
            pass
        try:
            proc.wait(timeout=self.timeout)
        except subprocess.TimeoutExpired:
            print(f"WARNING: exiftool did not exit within {self.timeout:g}s; killing it", file=sys.stderr)
            proc.kill()
            proc.wait()
        if proc.stdout is not None:
            proc.stdout.close()


def extract_metadata(path: Path, exiftool: Optional[str] = None) -> List[MetadataRecord]:
    """Extract every metadata record ExifTool reports for one file.

    A fresh session is opened and closed per call. Raises
    `ExtractionUnavailable` when ExifTool cannot be used; returns an empty
    list when the file carries no metadata at all.
    """
    with ExifToolSession(exiftool) as et:
        return et.extract(Path(path))
