"""Tests for the pointcut expression matcher."""

from __future__ import annotations

import pytest

from flyaop.aop.exceptions import PointcutSyntaxException
from flyaop.aop.pointcut import matches_pointcut, normalize_pointcut

USERS = "flyaop.users.controller.UsersController"


class TestGlobPatterns:
    def test_exact_match(self) -> None:
        assert matches_pointcut(f"{USERS}.list_users", f"{USERS}.list_users")

    def test_trailing_wildcard_matches_any_method(self) -> None:
        assert matches_pointcut(f"{USERS}.*", f"{USERS}.list_users")
        assert matches_pointcut(f"{USERS}.*", f"{USERS}.list_users_faulting")

    def test_star_does_not_cross_dots(self) -> None:
        assert not matches_pointcut("*.list_users", f"{USERS}.list_users")

    def test_doublestar_any_depth(self) -> None:
        assert matches_pointcut("**.*Controller.*", f"{USERS}.list_users")

    def test_partial_glob_in_method_segment(self) -> None:
        assert matches_pointcut(f"{USERS}.list_*", f"{USERS}.list_users_faulting")
        assert not matches_pointcut(f"{USERS}.get_*", f"{USERS}.list_users")

    def test_other_type_does_not_match(self) -> None:
        assert not matches_pointcut(f"{USERS}.*", "flyaop.users.controller.OrdersController.list_users")

    def test_prefix_of_type_name_does_not_match(self) -> None:
        assert not matches_pointcut(f"{USERS}.*", f"{USERS}Extra.list_users")


class TestExecutionExpressions:
    def test_execution_with_return_type_and_args(self) -> None:
        assert matches_pointcut(f"execution(* {USERS}.*(..))", f"{USERS}.list_users")

    def test_execution_without_return_type(self) -> None:
        assert matches_pointcut(f"execution({USERS}.list_users())", f"{USERS}.list_users")

    def test_execution_exact_method_excludes_others(self) -> None:
        assert not matches_pointcut(f"execution(* {USERS}.list_users(..))", f"{USERS}.list_users_faulting")

    def test_within_matches_every_method(self) -> None:
        assert matches_pointcut(f"within({USERS})", f"{USERS}.list_users_faulting")

    def test_normalize_reduces_to_glob(self) -> None:
        assert normalize_pointcut(f"execution(* {USERS}.*(..))") == f"{USERS}.*"
        assert normalize_pointcut(f"within({USERS})") == f"{USERS}.*"


class TestMalformedExpressions:
    @pytest.mark.parametrize(
        "pattern",
        [
            "",
            "   ",
            f"execution(* {USERS}.*(..)",
            f"within({USERS}",
            f"args({USERS})",
            "a..b",
        ],
    )
    def test_rejected(self, pattern: str) -> None:
        with pytest.raises(PointcutSyntaxException):
            matches_pointcut(pattern, f"{USERS}.list_users")

    def test_empty_segment_reports_full_pattern(self) -> None:
        with pytest.raises(PointcutSyntaxException) as info:
            matches_pointcut("a..b", "a.x.b")
        assert info.value.pattern == "a..b"
        assert info.value.context == {"pattern": "a..b"}


class TestDesignatorKeywordsInNames:
    @pytest.mark.parametrize(
        ("pattern", "qualified_name"),
        [
            ("executions.Runner.*", "executions.Runner.go"),
            ("withings.Scale.*", "withings.Scale.weigh"),
            ("execution.Task.run", "execution.Task.run"),
            ("within_app.Job.*", "within_app.Job.start"),
        ],
    )
    def test_plain_globs_starting_with_keywords(self, pattern: str, qualified_name: str) -> None:
        assert matches_pointcut(pattern, qualified_name)
        assert normalize_pointcut(pattern) == pattern
