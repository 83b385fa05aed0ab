"""Tests for debstage.core.result module."""

import pytest

from debstage.core.result import Err, Ok, Result, is_err, is_ok


class TestOk:
    def test_unwrap(self) -> None:
        assert Ok(42).unwrap() == 42

    def test_unwrap_or_ignores_default(self) -> None:
        assert Ok(42).unwrap_or(0) == 42

    def test_map(self) -> None:
        assert Ok(21).map(lambda x: x * 2) == Ok(42)

    def test_map_err_is_noop(self) -> None:
        assert Ok(42).map_err(lambda e: f"error: {e}") == Ok(42)

    def test_flat_map_chains(self) -> None:
        result: Result[int, str] = Ok(21)
        assert result.flat_map(lambda x: Ok(x * 2)) == Ok(42)
        assert result.flat_map(lambda _: Err("stop")) == Err("stop")


class TestErr:
    def test_unwrap_raises(self) -> None:
        with pytest.raises(ValueError, match="called unwrap on Err"):
            Err("boom").unwrap()

    def test_unwrap_or_returns_default(self) -> None:
        assert Err("boom").unwrap_or(7) == 7

    def test_map_is_noop(self) -> None:
        assert Err("boom").map(lambda x: x * 2) == Err("boom")

    def test_map_err(self) -> None:
        assert Err("boom").map_err(str.upper) == Err("BOOM")

    def test_flat_map_short_circuits(self) -> None:
        called: list[int] = []
        result: Result[int, str] = Err("boom")
        assert result.flat_map(lambda x: Ok(called.append(x))) == Err("boom")
        assert called == []


def test_type_guards() -> None:
    assert is_ok(Ok(1)) is True
    assert is_err(Ok(1)) is False
    assert is_ok(Err("e")) is False
    assert is_err(Err("e")) is True


def test_pattern_matching() -> None:
    match Err("missing"):
        case Ok(_):
            pytest.fail("expected Err")
        case Err(error):
            assert error == "missing"
