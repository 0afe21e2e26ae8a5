"""Tests for mapping source rows onto canonical voter record fields."""

from app.domain.validators.record_normalizer import normalize_source_row


def test_normalize_english_headers():
    row = {"Voter Name": " Asha Devi ", "EPIC NO": "ABC1234567", "Mobile No": 9876543210, "Booth No": 12}
    result = normalize_source_row(row)
    assert result["name"] == "Asha Devi"
    assert result["voter_id"] == "ABC1234567"
    assert result["mobile"] == "9876543210"
    assert result["booth"] == "12"
    assert result["part"] is None
    assert result["raw"] == row


def test_normalize_hindi_headers():
    row = {"नाम": "आशा", "बूथ": "7", "क्रमांक": "101"}
    result = normalize_source_row(row)
    assert result["name"] == "आशा"
    assert result["booth"] == "7"
    assert result["serial"] == "101"


def test_blank_values_fall_through_to_next_key():
    row = {"name": "  ", "Name": "Bhanu"}
    assert normalize_source_row(row)["name"] == "Bhanu"


def test_raw_is_a_copy():
    row = {"name": "Asha"}
    result = normalize_source_row(row)
    result["raw"]["name"] = "changed"
    assert row["name"] == "Asha"
