"""Tests for the shared required-field check."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from carebase.exceptions import ValidationError
from carebase.services.validation import check_required


def test_check_required_passes_when_all_present() -> None:
    record = SimpleNamespace(name="Ada", age=0)
    check_required(record, ("name", "age"))


def test_check_required_lists_every_missing_field() -> None:
    record = SimpleNamespace(name="  ", age=None, phone="+1")
    with pytest.raises(ValidationError) as exc_info:
        check_required(record, ("name", "age", "phone"))
    assert exc_info.value.message == "Missing required field(s): name, age"
    assert exc_info.value.status_code == 400
