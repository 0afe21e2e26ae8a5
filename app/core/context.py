# app/core/context.py

import contextvars

correlation_id_ctx = contextvars.ContextVar("correlation_id", default=None)
identity_id_ctx = contextvars.ContextVar("identity_id", default=None)
partition_id_ctx = contextvars.ContextVar("partition_id", default=None)
