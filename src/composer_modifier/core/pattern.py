"""
Package Pattern Engine.

Compiles glob-like package-name patterns (e.g. ``my-org/*``) into matchers.

Syntax:
    *    any sequence of zero or more characters, including ``/``
    ...  every other character matches itself literally

Patterns are anchored at both ends: ``foo/*`` matches ``foo/bar`` and
``foo/`` but not ``foo``. A run of consecutive ``*`` behaves as one.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable

from pydantic_core import core_schema

from composer_modifier.core.errors import PatternCompileError

WILDCARD = "*"


def _to_regex(raw: str) -> str:
    """Translate a pattern into an anchored regular expression source."""
    parts = []
    for index, literal in enumerate(raw.split(WILDCARD)):
        if index:
            # Collapse runs of "*" into a single "match anything".
            if not parts or parts[-1] != ".*":
                parts.append(".*")
        if literal:
            parts.append(re.escape(literal))
    return r"\A" + "".join(parts) + r"\Z"


@dataclass(frozen=True)
class PackagePattern:
    """
    A compiled package-name pattern.

    Identity is the raw string only: two patterns built from the same text are
    equal, hash alike and are interchangeable as mapping keys. The compiled
    matcher is derived state and never takes part in comparison.
    """

    raw: str
    _matcher: re.Pattern = field(init=False, repr=False, compare=False, hash=False)

    def __post_init__(self):
        if not isinstance(self.raw, str):
            raise PatternCompileError(self.raw, f"expected a string, got {type(self.raw).__name__}")
        try:
            matcher = re.compile(_to_regex(self.raw), re.DOTALL)
        except re.error as e:
            raise PatternCompileError(self.raw, str(e)) from e
        object.__setattr__(self, "_matcher", matcher)

    @classmethod
    def compile(cls, raw: str) -> "PackagePattern":
        return cls(raw)

    def matches(self, candidate: str) -> bool:
        """Return True if `candidate` is fully consumed by this pattern."""
        return self._matcher.match(candidate) is not None

    @property
    def is_literal(self) -> bool:
        """True when the pattern has no wildcard and names exactly one package."""
        return WILDCARD not in self.raw

    @property
    def specificity(self) -> tuple[bool, int]:
        """Ranking used when several patterns select the same package."""
        return (self.is_literal, len(self.raw.replace(WILDCARD, "")))

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type, handler):
        # Parsed from and rendered to the raw string.
        return core_schema.no_info_plain_validator_function(
            cls._validate, serialization=core_schema.to_string_ser_schema()
        )

    @classmethod
    def _validate(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except PatternCompileError as e:
            raise ValueError(e.reason) from e

    def __str__(self) -> str:
        return self.raw


def compile_pattern(raw: str) -> PackagePattern:
    """Compile `raw` into a PackagePattern, raising PatternCompileError on failure."""
    return PackagePattern(raw)


def matches(pattern: PackagePattern, candidate: str) -> bool:
    return pattern.matches(candidate)


def select_matching(patterns: Iterable[PackagePattern], candidate: str) -> list[PackagePattern]:
    """Return the patterns matching `candidate`, in their given order."""
    return [p for p in patterns if p.matches(candidate)]


def most_specific(patterns: Iterable[PackagePattern]) -> PackagePattern | None:
    """
    Pick the highest-ranked pattern.

    Literal patterns outrank wildcards, then more literal characters win.
    Ties go to the earliest pattern.
    """
    best: PackagePattern | None = None
    for pattern in patterns:
        if best is None or pattern.specificity > best.specificity:
            best = pattern
    return best
