"""Shared column helpers for models."""

import uuid


def generate_id() -> str:
    """Opaque primary key for every entity."""
    return str(uuid.uuid4())
