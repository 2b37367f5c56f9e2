"""Pointcuts: which methods a piece of advice applies to."""

from __future__ import annotations

import functools
import re

from flyaop.aop.exceptions import PointcutSyntaxException

_EXECUTION_RE = re.compile(r"^execution\(\s*(?:\S+\s+)?(?P<target>[^\s(]+)\s*\((?P<params>[^)]*)\)\s*\)$")
_WITHIN_RE = re.compile(r"^within\(\s*(?P<target>[^\s()]+)\s*\)$")
_DESIGNATOR_RE = re.compile(r"^(?P<kind>execution|within)\s*\(")
_GLOB_CHARS = {"*": "[^.]*", "?": "[^.]"}


def matches_pointcut(pattern: str, qualified_name: str) -> bool:
    """True when the method named *qualified_name* is selected by *pattern*.

    *qualified_name* is ``"<module>.<Class>.<method>"``. Patterns are either
    dotted globs or AspectJ-style designators:

    * ``*`` stands for one dotted segment, ``**`` for one or more.
    * ``*`` and ``?`` inside a segment glob within it, so ``list_*`` selects
      ``list_users`` and ``*Controller`` selects ``UsersController``.
    * ``execution(* pkg.Type.method(..))``: the return type and parameter
      list are accepted but not matched.
    * ``within(pkg.Type)``: every method of ``pkg.Type``.

    Examples
    --------
    >>> matches_pointcut("app.*.list_*", "app.UsersController.list_users")
    True
    >>> matches_pointcut("execution(* app.UsersController.*(..))", "app.UsersController.list_users")
    True
    >>> matches_pointcut("within(app.UsersController)", "app.UsersController.list_users")
    True
    >>> matches_pointcut("*.list_users", "app.UsersController.list_users")
    False
    >>> matches_pointcut("app.**", "app.UsersController.list_users")
    True
    """
    regex = _compile(pattern)
    return regex.fullmatch(qualified_name) is not None


def normalize_pointcut(pattern: str) -> str:
    """Reduce an ``execution(...)`` or ``within(...)`` expression to a glob pattern."""
    expr = pattern.strip()
    if not expr:
        raise PointcutSyntaxException("Pointcut expression must not be empty", pattern=pattern)

    designator = _DESIGNATOR_RE.match(expr)
    kind = designator.group("kind") if designator else None

    if kind == "execution":
        match = _EXECUTION_RE.match(expr)
        if match is None:
            raise PointcutSyntaxException(f"Malformed execution pointcut: {pattern!r}", pattern=pattern)
        return match.group("target")

    if kind == "within":
        match = _WITHIN_RE.match(expr)
        if match is None:
            raise PointcutSyntaxException(f"Malformed within pointcut: {pattern!r}", pattern=pattern)
        return f"{match.group('target')}.*"

    if "(" in expr or ")" in expr or " " in expr:
        raise PointcutSyntaxException(f"Unsupported pointcut designator: {pattern!r}", pattern=pattern)
    return expr


def _segment_to_regex(seg: str, pattern: str) -> str:
    """Regex fragment for one dotted segment of a glob pattern."""
    if seg == "**":
        return r"(?:[^.]+\.)*[^.]+"
    if seg == "*":
        return r"[^.]+"
    if not seg:
        raise PointcutSyntaxException(f"Pointcut contains an empty segment: {pattern!r}", pattern=pattern)

    return "".join(_GLOB_CHARS.get(ch) or re.escape(ch) for ch in seg)


@functools.lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str]:
    """Compiled full-name regex for *pattern*; patterns are few and static."""
    segments = normalize_pointcut(pattern).split(".")
    return re.compile(r"\.".join(_segment_to_regex(seg, pattern) for seg in segments))
