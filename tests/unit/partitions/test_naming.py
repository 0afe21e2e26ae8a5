"""Partition naming: sanitization, tenant-private convention, display names."""

import pytest

from app.domain.exceptions import InvalidTenantKeyError
from app.partitions.naming import (
    display_name,
    is_private_partition_name,
    is_valid_tenant_key,
    parse_private_partition_name,
    private_partition_name,
    sanitize_partition_name,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("  ward_12 ", "ward_12"),
        ("", ""),
        ("   ", ""),
        (None, ""),
        (42, ""),
        ("system_identities", ""),
        ("sqlite_master", ""),
        ("pg_class", ""),
        ("bad\0name", ""),
    ],
)
def test_sanitize_partition_name(value, expected):
    assert sanitize_partition_name(value, "system_") == expected


def test_private_partition_name_round_trips_to_owner():
    name = private_partition_name("u1", "north_ward")
    assert name == "tenant_u1_north_ward"
    assert parse_private_partition_name(name) == ("u1", "north_ward")
    assert is_private_partition_name(name)


def test_private_partition_name_rejects_underscore_in_tenant_key():
    with pytest.raises(InvalidTenantKeyError):
        private_partition_name("user_1", "voters")


def test_private_partition_name_requires_master():
    with pytest.raises(InvalidTenantKeyError):
        private_partition_name("u1", "  ")


@pytest.mark.parametrize("name", ["voters", "tenant_", "tenant_u1", "tenant__voters", "tenants_u1_voters"])
def test_non_private_names(name):
    assert parse_private_partition_name(name) is None


def test_display_name():
    assert display_name("north_ward-12") == "North Ward 12"
    assert display_name("voters") == "Voters"
    assert display_name("__") == "__"


@pytest.mark.parametrize(
    "key,expected",
    [("u1", True), ("field-team-7", True), (" u1 ", True), ("site_admin", False), ("", False), (None, False)],
)
def test_is_valid_tenant_key(key, expected):
    assert is_valid_tenant_key(key) is expected
