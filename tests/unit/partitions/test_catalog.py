"""Partition catalog: selectable listing filters reserved and tenant-private names; failures degrade to []."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from app.partitions.catalog import PartitionCatalog, PartitionInfo
from app.partitions.exceptions import PartitionUnavailableError


async def test_list_selectable_hides_reserved_and_private(catalog, provisioner):
    await provisioner.ensure_partition("voters")
    await provisioner.ensure_partition("north_ward")
    await provisioner.clone("voters", "tenant_u1_voters")

    selectable = await catalog.list_selectable()

    assert selectable == [
        PartitionInfo(id="north_ward", display_name="North Ward"),
        PartitionInfo(id="voters", display_name="Voters"),
    ]


async def test_list_partition_names_includes_everything(catalog, provisioner):
    await provisioner.ensure_partition("voters")
    await provisioner.clone("voters", "tenant_u1_voters")

    names = await catalog.list_partition_names()

    assert "tenant_u1_voters" in names
    assert "system_identities" in names


async def test_exists(catalog, provisioner):
    await provisioner.ensure_partition("voters")
    assert await catalog.exists("voters") is True
    assert await catalog.exists("missing") is False


def _unreachable_engine():
    engine = MagicMock()
    engine.connect.side_effect = OperationalError("connect", None, Exception("connection refused"))
    return engine


async def test_list_selectable_returns_empty_when_store_unreachable():
    catalog = PartitionCatalog(_unreachable_engine())
    assert await catalog.list_selectable() == []


async def test_list_partition_names_raises_when_store_unreachable():
    catalog = PartitionCatalog(_unreachable_engine())
    with pytest.raises(PartitionUnavailableError):
        await catalog.list_partition_names()
