"""Unit tests for the Result container used by edit scripts."""

from __future__ import annotations

import pytest

from patternlab.core.result import Err, Result, err, ok


def test_ok_map_and_flat_map() -> None:
    """`Ok` should map/flat_map and keep values typed."""
    r: Result[int, str] = ok(10)
    r2 = r.map(lambda x: x + 5).flat_map(lambda x: ok(x * 2))
    assert r2.is_ok() and r2.unwrap() == 30


def test_err_propagates_through_combinators() -> None:
    r: Result[int, str] = err("boom")
    assert r.is_err()
    assert r.map(lambda x: x + 1).unwrap_err() == "boom"
    assert isinstance(r.flat_map(lambda x: ok(x)), Err)


def test_unwrap_variants() -> None:
    assert ok("x").unwrap() == "x"
    assert err("e").get_or("fallback") == "fallback"
    with pytest.raises(RuntimeError):
        err("e").unwrap()
    with pytest.raises(RuntimeError):
        ok(1).unwrap_err()
