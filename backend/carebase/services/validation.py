"""Checks shared by the stores after a partial update is merged."""

from __future__ import annotations

from collections.abc import Sequence

from carebase.exceptions import ValidationError


def check_required(record: object, fields: Sequence[str]) -> None:
    """Raise ValidationError if any of ``fields`` is null or blank on ``record``."""
    missing = []
    for field in fields:
        value = getattr(record, field)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(field)
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}")
