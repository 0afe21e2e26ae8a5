"""Domain validators. Pure validation functions."""

from app.domain.validators.record_normalizer import normalize_source_row
from app.domain.validators.sync_validator import (
    change_identifier,
    parse_client_timestamp,
    parse_sync_change,
)

__all__ = [
    "change_identifier",
    "normalize_source_row",
    "parse_client_timestamp",
    "parse_sync_change",
]
