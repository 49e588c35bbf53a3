"""Per-file prompt extraction: ExifTool records -> prompt field -> normalized text."""
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .exiftool import extract_metadata
from .normalize import normalize
from .selector import select_prompt_field

STATUS_OK = "ok"
STATUS_NO_METADATA = "no_metadata"
STATUS_NO_PROMPT_FIELD = "no_prompt_field"

RAW_LABEL = "RAW:"
PARSED_LABEL = "PARSED JSON:"


@dataclass
class ExtractedPrompt:
    field: str
    raw: str
    parsed: Optional[str] = None


@dataclass
class PromptResult:
    status: str
    path: Path
    prompt: Optional[ExtractedPrompt] = None

    @property
    def found(self) -> bool:
        return self.status == STATUS_OK


def extract_prompt(path: Path, exiftool: Optional[str] = None) -> PromptResult:
    """Find and normalize the embedded prompt of one image.

    "No metadata" and "no prompt field" come back as statuses. Only
    `ExtractionUnavailable` is raised.
    """
    path = Path(path)
    records = [r for r in extract_metadata(path, exiftool) if r.ok]
    if not records:
        return PromptResult(STATUS_NO_METADATA, path)
    hit = select_prompt_field(records)
    if hit is None:
        return PromptResult(STATUS_NO_PROMPT_FIELD, path)
    name, value = hit
    raw, parsed = normalize(value)
    return PromptResult(STATUS_OK, path, ExtractedPrompt(name, raw, parsed))


def format_output(prompt: ExtractedPrompt) -> str:
    if prompt.parsed is not None:
        return f"{RAW_LABEL}\n{prompt.raw}\n\n{PARSED_LABEL}\n{prompt.parsed}"
    return f"{RAW_LABEL}\n{prompt.raw}"
