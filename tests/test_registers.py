from __future__ import annotations

import pytest

from vimline.state.registers import RegisterBank, RegisterValue, is_register_name


def test_named_writes_mirror_into_default() -> None:
    bank = RegisterBank()

    bank.store("a", "foo")

    assert bank.text("a") == "foo"
    assert bank.text() == "foo"


def test_default_write_leaves_named_registers() -> None:
    bank = RegisterBank()
    bank.store("a", "foo")

    bank.store(None, "bar")

    assert bank.text("a") == "foo"
    assert bank.text('"') == "bar"


def test_uppercase_name_appends() -> None:
    bank = RegisterBank()
    bank.store("a", "foo")

    value = bank.store("A", "bar")

    assert value.text == "foobar"
    assert bank.text("a") == "foobar"
    assert bank.text() == "foobar"


def test_missing_register_reads_empty() -> None:
    bank = RegisterBank()

    assert bank.text("z") == ""
    assert "z" not in bank


def test_membership_ignores_case() -> None:
    bank = RegisterBank()
    bank.store("q", "x")

    assert "Q" in bank
    assert 5 not in bank


def test_snapshot_is_a_copy() -> None:
    bank = RegisterBank()
    bank.store("a", "x")

    snapshot = dict(bank.snapshot())
    bank.store("a", "y")

    assert snapshot["a"] == RegisterValue("x")


@pytest.mark.parametrize("name", ["", "ab", "!", "-"])
def test_invalid_register_names(name: str) -> None:
    assert not is_register_name(name)
    with pytest.raises(ValueError):
        RegisterBank().set(name, RegisterValue("x"))


def test_register_value_type_is_checked() -> None:
    with pytest.raises(ValueError):
        RegisterValue("x", type="block")
