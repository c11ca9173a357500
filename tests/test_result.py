from __future__ import annotations

import pytest

from xtop.metrics import ErrorType, Result


def test_success_result() -> None:
    result = Result.ok("200 OK", "nginx")
    assert result.is_success
    assert result.error is None


def test_failed_result() -> None:
    result = Result.failed(ErrorType.TIMEOUT)
    assert not result.is_success
    assert result.status is None
    assert result.header_value is None


@pytest.mark.parametrize(
    "kwargs",
    [{}, {"status": "200 OK", "error": ErrorType.OTHER}],
)
def test_result_needs_exactly_one_side(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        Result(**kwargs)
