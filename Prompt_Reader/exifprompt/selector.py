from __future__ import annotations
from typing import Any, Iterable, Optional, Tuple

from .exiftool import MetadataRecord
from .normalize import to_text

# Checked in this order within each record
PROMPT_FIELDS: Tuple[str, ...] = ("UserComment", "ImageDescription", "XPComment")


def _present(v: Any) -> bool:
    return v is not None and to_text(v) != ""


def select_prompt_field(records: Iterable[MetadataRecord]) -> Optional[Tuple[str, Any]]:
    """Return (field name, raw value) of the first prompt field found, or None.

    Records are walked in source order and records carrying an error are
    skipped; the first record holding any candidate wins, later ones are
    never consulted.
    """
    for rec in records:
        if not rec.ok:
            continue
        for name in PROMPT_FIELDS:
            val = rec.fields.get(name)
            if _present(val):
                return name, val
    return None
