"""Tests for JoinPoint and Outcome."""

from __future__ import annotations

import dataclasses

import pytest

from flyaop.aop.types import Failure, JoinPoint, Success


class Receiver:
    pass


class TestJoinPoint:
    def test_is_immutable(self) -> None:
        jp = JoinPoint(target=Receiver(), method_name="run")
        with pytest.raises(dataclasses.FrozenInstanceError):
            jp.method_name = "other"  # type: ignore[misc]

    def test_target_type_is_fully_qualified(self) -> None:
        jp = JoinPoint(target=Receiver(), method_name="run")
        assert jp.target_type == f"{__name__}.Receiver"

    def test_describe(self) -> None:
        jp = JoinPoint(target=Receiver(), method_name="run", args=(1, "a"))
        assert jp.describe() == {"method": "run", "args": [1, "a"], "target": f"{__name__}.Receiver"}

    def test_replace_keeps_original_untouched(self) -> None:
        jp = JoinPoint(target=Receiver(), method_name="run")
        with_proceed = dataclasses.replace(jp, proceed=lambda: 1)
        assert jp.proceed is None
        assert with_proceed.proceed is not None


class TestOutcome:
    def test_success(self) -> None:
        outcome = Success("success")
        assert outcome.is_success
        assert outcome.unwrap() == "success"

    def test_failure_reraises_on_unwrap(self) -> None:
        error = RuntimeError("boom")
        outcome = Failure(error)
        assert not outcome.is_success
        with pytest.raises(RuntimeError, match="boom"):
            outcome.unwrap()
