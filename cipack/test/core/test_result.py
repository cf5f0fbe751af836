"""Tests for cipack.core.result module."""

from __future__ import annotations

import pytest

from cipack.core.result import Err, Ok, Result, is_err, is_ok


def _parse_int(s: str) -> Result[int, str]:
    try:
        return Ok(int(s))
    except ValueError:
        return Err(f"not an int: {s}")


class TestOk:
    """Test the success variant."""

    def test_unwrap(self) -> None:
        assert Ok(3).unwrap() == 3
        assert Ok(3).unwrap_or(0) == 3

    def test_unwrap_err_raises(self) -> None:
        with pytest.raises(ValueError):
            Ok(3).unwrap_err()

    def test_map_and_flat_map(self) -> None:
        assert Ok("4").map(len) == Ok(1)
        assert Ok("4").flat_map(_parse_int) == Ok(4)
        assert Ok("x").flat_map(_parse_int) == Err("not an int: x")

    def test_map_err_is_noop(self) -> None:
        assert Ok(1).map_err(str.upper) == Ok(1)


class TestErr:
    """Test the failure variant."""

    def test_unwrap_raises(self) -> None:
        with pytest.raises(ValueError, match="boom"):
            Err("boom").unwrap()

    def test_unwrap_or(self) -> None:
        assert Err("boom").unwrap_or(7) == 7

    def test_flat_map_short_circuits(self) -> None:
        called: list[str] = []

        def step(value: object) -> Result[int, str]:
            called.append("step")
            return Ok(1)

        assert Err("first").flat_map(step) == Err("first")
        assert called == []

    def test_map_err(self) -> None:
        assert Err("boom").map_err(str.upper) == Err("BOOM")


def test_type_guards() -> None:
    assert is_ok(Ok(1))
    assert not is_ok(Err(1))
    assert is_err(Err(1))
    assert not is_err(Ok(1))


def test_repr() -> None:
    assert repr(Ok("a")) == "Ok('a')"
    assert repr(Err(2)) == "Err(2)"
