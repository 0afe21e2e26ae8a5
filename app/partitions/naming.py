"""
Partition naming rules: sanitization, reserved namespaces, the tenant-private
convention tenant_<tenantKey>_<masterName>, and catalog display names.
Every call site builds or parses partition names through this module.
"""

import re
from typing import Any, Optional, Tuple

from app.domain.exceptions import InvalidTenantKeyError

# Namespaces owned by the database engine itself.
ENGINE_RESERVED_PREFIXES = ("sqlite_", "pg_")

TENANT_PREFIX = "tenant_"
_TENANT_KEY_RE = re.compile(r"^[A-Za-z0-9-]+$")


def is_reserved_name(name: str, reserved_prefix: str) -> bool:
    if reserved_prefix and name.startswith(reserved_prefix):
        return True
    return name.startswith(ENGINE_RESERVED_PREFIXES)


def sanitize_partition_name(value: Any, reserved_prefix: str) -> str:
    """Trim; return "" for non-strings, empty values, reserved names and values with NUL bytes."""
    name = value.strip() if isinstance(value, str) else ""
    if not name:
        return ""
    if is_reserved_name(name, reserved_prefix):
        return ""
    if "\0" in name:
        return ""
    return name


def is_valid_tenant_key(tenant_key: str) -> bool:
    key = tenant_key.strip() if isinstance(tenant_key, str) else ""
    return bool(key) and _TENANT_KEY_RE.match(key) is not None


def validate_tenant_key(tenant_key: str) -> str:
    if not is_valid_tenant_key(tenant_key):
        raise InvalidTenantKeyError(
            f"Tenant key must be non-empty and contain only letters, digits and '-': {tenant_key!r}"
        )
    return tenant_key.strip()


def private_partition_name(tenant_key: str, master_name: str) -> str:
    """Name of the tenant-private clone of master_name."""
    key = validate_tenant_key(tenant_key)
    master = master_name.strip() if isinstance(master_name, str) else ""
    if not master:
        raise InvalidTenantKeyError("Master partition name is required")
    return f"{TENANT_PREFIX}{key}_{master}"


def parse_private_partition_name(name: str) -> Optional[Tuple[str, str]]:
    """Return (tenant_key, master_name) for a tenant-private name, else None."""
    if not name.startswith(TENANT_PREFIX):
        return None
    key, sep, master = name[len(TENANT_PREFIX):].partition("_")
    if not (key and sep and master) or not _TENANT_KEY_RE.match(key):
        return None
    return key, master


def is_private_partition_name(name: str) -> bool:
    return parse_private_partition_name(name) is not None


def display_name(name: str) -> str:
    """north_ward-12 -> North Ward 12"""
    words = re.sub(r"[_-]+", " ", name).split()
    pretty = " ".join(word[:1].upper() + word[1:] for word in words)
    return pretty or name
