"""JSON log formatter: request context and extra fields."""

import json
import logging

from app.config.logging import JsonFormatter
from app.core.context import identity_id_ctx, partition_id_ctx


def _record(msg="export_page_served", **extra):
    record = logging.LogRecord("voter-sync", logging.INFO, __file__, 1, msg, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_format_includes_context_and_extra():
    identity_token = identity_id_ctx.set("u1")
    partition_token = partition_id_ctx.set("tenant_u1_M")
    try:
        line = JsonFormatter().format(_record(returned=3))
    finally:
        identity_id_ctx.reset(identity_token)
        partition_id_ctx.reset(partition_token)

    payload = json.loads(line)
    assert payload["message"] == "export_page_served"
    assert payload["level"] == "INFO"
    assert payload["identity_id"] == "u1"
    assert payload["partition_id"] == "tenant_u1_M"
    assert payload["returned"] == 3


def test_format_without_context_uses_nulls():
    payload = json.loads(JsonFormatter().format(_record()))
    assert payload["identity_id"] is None
    assert payload["correlation_id"] is None
