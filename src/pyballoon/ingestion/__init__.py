"""Ingestion layer.

This package contains the adapters that fetch hourly snapshot documents,
repair and decode them, and emit typed per-hour outcomes.
"""

__all__: list[str] = []
