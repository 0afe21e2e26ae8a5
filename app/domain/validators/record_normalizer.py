"""Map inconsistent source rows onto the canonical voter record fields."""

from typing import Any, Dict, Mapping, Optional, Sequence

# Source exports disagree on header names; first match wins.
NAME_KEYS = ("name", "Name", "NAME", "Full Name", "FULL NAME", "नाम", "Voter Name")
VOTER_ID_KEYS = ("voter_id", "Voter Id", "VoterID", "EPIC", "EPIC_NO", "EPIC NO")
MOBILE_KEYS = ("mobile", "Mobile", "Mobile No", "Phone", "मोबाइल")
BOOTH_KEYS = ("booth", "Booth", "Booth No", "बूथ")
PART_KEYS = ("part", "Part", "Part No")
SERIAL_KEYS = ("serial", "Serial", "Serial No", "Sr No", "क्रमांक")


def _first(row: Mapping[str, Any], keys: Sequence[str]) -> Optional[str]:
    for key in keys:
        value = row.get(key)
        if value is not None and str(value).strip() != "":
            return str(value).strip()
    return None


def normalize_source_row(row: Mapping[str, Any]) -> Dict[str, Any]:
    """Return canonical fields plus the untouched original row under `raw`."""
    return {
        "name": _first(row, NAME_KEYS),
        "voter_id": _first(row, VOTER_ID_KEYS),
        "mobile": _first(row, MOBILE_KEYS),
        "booth": _first(row, BOOTH_KEYS),
        "part": _first(row, PART_KEYS),
        "serial": _first(row, SERIAL_KEYS),
        "raw": dict(row),
    }
