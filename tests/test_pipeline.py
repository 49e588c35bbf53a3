import sys
from pathlib import Path

import orjson
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1] / "Prompt_Reader"
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))

from exifprompt import pipeline  # noqa: E402
from exifprompt.errors import ExtractionUnavailable  # noqa: E402
from exifprompt.exiftool import MetadataRecord  # noqa: E402
from exifprompt.pipeline import (  # noqa: E402
    STATUS_NO_METADATA,
    STATUS_NO_PROMPT_FIELD,
    STATUS_OK,
    ExtractedPrompt,
    extract_prompt,
    format_output,
)


def _stub_records(monkeypatch, records):
    calls = []

    def fake_extract(path, exiftool=None):
        calls.append((Path(path), exiftool))
        return list(records)

    monkeypatch.setattr(pipeline, "extract_metadata", fake_extract)
    return calls


def test_zero_records_is_no_metadata(monkeypatch):
    _stub_records(monkeypatch, [])
    result = extract_prompt(Path("a.png"))
    assert result.status == STATUS_NO_METADATA
    assert result.prompt is None
    assert not result.found


def test_only_error_records_is_no_metadata(monkeypatch):
    _stub_records(monkeypatch, [MetadataRecord(fields={"UserComment": "x"}, error="bad segment")])
    assert extract_prompt(Path("a.png")).status == STATUS_NO_METADATA


def test_unrelated_fields_is_no_prompt_field(monkeypatch):
    _stub_records(monkeypatch, [MetadataRecord(fields={"Make": "Canon", "Model": "EOS"})])
    result = extract_prompt(Path("a.png"))
    assert result.status == STATUS_NO_PROMPT_FIELD
    assert result.prompt is None


def test_json_prompt_is_parsed(monkeypatch):
    calls = _stub_records(monkeypatch, [
        MetadataRecord(fields={"Make": "X"}),
        MetadataRecord(fields={"ImageDescription": '{"steps": 20, "seed": 7}'}),
    ])
    result = extract_prompt(Path("img.png"), exiftool="/opt/exiftool")
    assert calls == [(Path("img.png"), "/opt/exiftool")]
    assert result.status == STATUS_OK
    assert result.found
    assert result.prompt.field == "ImageDescription"
    assert result.prompt.raw == '{"steps": 20,\n"seed": 7}'
    assert orjson.loads(result.prompt.parsed) == {"steps": 20, "seed": 7}


def test_prose_prompt_has_raw_only(monkeypatch):
    _stub_records(monkeypatch, [MetadataRecord(fields={"UserComment": "a photo of a cat, sitting, on a mat"})])
    result = extract_prompt(Path("img.png"))
    assert result.prompt == ExtractedPrompt("UserComment", "a photo of a cat,\nsitting,\non a mat", None)


def test_unavailable_extractor_propagates(monkeypatch):
    def broken(path, exiftool=None):
        raise ExtractionUnavailable("exiftool not found")

    monkeypatch.setattr(pipeline, "extract_metadata", broken)
    with pytest.raises(ExtractionUnavailable):
        extract_prompt(Path("img.png"))


def test_format_output_labels():
    assert format_output(ExtractedPrompt("UserComment", "a,\nb")) == "RAW:\na,\nb"
    assert format_output(ExtractedPrompt("UserComment", "[1]", "[\n  1\n]")) == "RAW:\n[1]\n\nPARSED JSON:\n[\n  1\n]"
