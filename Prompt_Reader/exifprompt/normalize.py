"""Prompt text normalization.

Generation tools often write comma separated key/value text without line
breaks, which trips JSON parsing. `repair_commas` turns every ", " into
",\\n" across the whole text before a parse is attempted. The rewrite is
unconditional and has no notion of string escaping, so ordinary prose
containing ", " is reflowed as well.
"""
from __future__ import annotations
import decimal
from typing import Any, Optional, Tuple

import orjson

COMMA_SPACE = ", "
COMMA_NEWLINE = ",\n"


def _decimal_json(o: Any) -> Any:
    # ijson hands back non-integral numbers as Decimal
    if isinstance(o, decimal.Decimal):
        return int(o) if o == o.to_integral_value() else float(o)
    raise TypeError(f"cannot serialize {type(o).__name__}")


def to_text(v: Any) -> str:
    """Render a metadata value the way ExifTool printed it."""
    if v is None:
        return ""
    if isinstance(v, str):
        return v
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, decimal.Decimal):
        return str(v)
    if isinstance(v, float):
        return str(int(v)) if v.is_integer() else repr(v)
    if isinstance(v, int):
        return str(v)
    if isinstance(v, (bytes, bytearray)):
        return bytes(v).decode("utf-8", "replace")
    if isinstance(v, (list, tuple, dict)):
        return orjson.dumps(v, default=_decimal_json).decode("utf-8")
    return str(v)


def repair_commas(text: str) -> str:
    return text.replace(COMMA_SPACE, COMMA_NEWLINE)


def pretty_json(text: str) -> Optional[str]:
    """Parse `text` as JSON and return it indented, or None if it does not parse."""
    try:
        obj = orjson.loads(text)
    except orjson.JSONDecodeError:
        return None
    return orjson.dumps(obj, option=orjson.OPT_INDENT_2).decode("utf-8")


def normalize(raw_value: Any) -> Tuple[str, Optional[str]]:
    """Return (cleaned raw text, pretty JSON or None) for a matched field value."""
    cleaned = repair_commas(to_text(raw_value))
    return cleaned, pretty_json(cleaned)
