import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1] / "Prompt_Reader"
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))

from exifprompt.exiftool import MetadataRecord  # noqa: E402
from exifprompt.selector import PROMPT_FIELDS, select_prompt_field  # noqa: E402


def test_first_matching_record_wins():
    records = [
        MetadataRecord(fields={"Make": "X"}),
        MetadataRecord(fields={"UserComment": "p1"}),
        MetadataRecord(fields={"UserComment": "p2"}),
    ]
    assert select_prompt_field(records) == ("UserComment", "p1")


def test_priority_order_within_a_record():
    rec = MetadataRecord(fields={"XPComment": "xp", "ImageDescription": "desc", "UserComment": "user"})
    assert select_prompt_field([rec]) == ("UserComment", "user")
    rec = MetadataRecord(fields={"XPComment": "xp", "ImageDescription": "desc"})
    assert select_prompt_field([rec]) == ("ImageDescription", "desc")
    assert PROMPT_FIELDS == ("UserComment", "ImageDescription", "XPComment")


def test_empty_values_are_skipped():
    rec = MetadataRecord(fields={"UserComment": "", "ImageDescription": None, "XPComment": "xp"})
    assert select_prompt_field([rec]) == ("XPComment", "xp")


def test_record_with_error_is_ignored():
    records = [
        MetadataRecord(fields={"UserComment": "bad"}, error="corrupt segment"),
        MetadataRecord(fields={"ImageDescription": "good"}),
    ]
    assert select_prompt_field(records) == ("ImageDescription", "good")


def test_no_candidate_returns_none():
    assert select_prompt_field([]) is None
    assert select_prompt_field([MetadataRecord(fields={"Make": "X", "Model": "Y"})]) is None


def test_non_string_values_are_returned_as_is():
    assert select_prompt_field([MetadataRecord(fields={"UserComment": 12})]) == ("UserComment", 12)
