"""
Tagged variants for Composer fields that accept more than one JSON shape.

Each variant keeps the shape it was given so it renders back exactly: a
license given as ``"MIT"`` stays a string, one given as ``["MIT"]`` stays a
list. Variants with behavior are root models; plain keyword-or-boolean
settings are union aliases.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal, Union

from pydantic import RootModel, StrictBool, StrictStr

from composer_modifier.core.pattern import PackagePattern, most_specific, select_matching


# ──────────────────────────────────────────────
# One or many
# ──────────────────────────────────────────────


class OneOrMany(RootModel[Union[StrictStr, list[StrictStr]]]):
    """A single string or a list of strings (``license``, script commands)."""

    @classmethod
    def one(cls, value: str) -> "OneOrMany":
        return cls(value)

    @classmethod
    def of(cls, *values: str) -> "OneOrMany":
        return cls(list(values))

    @property
    def many(self) -> bool:
        return isinstance(self.root, list)

    @property
    def values(self) -> tuple[str, ...]:
        return tuple(self.root) if self.many else (self.root,)

    def __iter__(self):
        return iter(self.values)


# ──────────────────────────────────────────────
# Abandoned
# ──────────────────────────────────────────────


class Abandoned(RootModel[Union[StrictBool, StrictStr]]):
    """
    The ``abandoned`` marker: ``true``/``false``, or the name of the package
    users should switch to (which implies abandoned).
    """

    @property
    def flag(self) -> bool:
        return self.root if isinstance(self.root, bool) else True

    @property
    def replacement(self) -> str | None:
        return self.root if isinstance(self.root, str) else None


# ──────────────────────────────────────────────
# Keyword toggles
# ──────────────────────────────────────────────

# Boolean or the one keyword the setting accepts.
PromptToggle = Union[StrictBool, Literal["prompt"]]
StashToggle = Union[StrictBool, Literal["stash"]]
PlatformCheck = Union[StrictBool, Literal["php-only"]]

# ``config.platform`` entries: a version to pretend, or false to hide the package.
PlatformPackage = Union[Literal[False], StrictStr]


# ──────────────────────────────────────────────
# Pattern-keyed settings
# ──────────────────────────────────────────────


def _resolve(rules: dict[PackagePattern, Any], package: str):
    best = most_specific(select_matching(rules, package))
    return None if best is None else rules[best]


class AllowPlugins(RootModel[Union[StrictBool, dict[PackagePattern, StrictBool]]]):
    """
    ``config.allow-plugins``: a global switch, or a map of package pattern to
    boolean where the most specific matching pattern decides.
    """

    def allows(self, package: str) -> bool:
        if isinstance(self.root, bool):
            return self.root
        return bool(_resolve(self.root, package))


class PackageSource(Enum):
    """Where Composer installs a package from."""

    DIST = "dist"
    SOURCE = "source"
    AUTO = "auto"


class PreferredInstall(RootModel[Union[PackageSource, dict[PackagePattern, PackageSource]]]):
    """
    ``config.preferred-install``: one mode for every package, or a map of
    package pattern to mode.
    """

    def mode_for(self, package: str, default: PackageSource = PackageSource.DIST) -> PackageSource:
        if isinstance(self.root, PackageSource):
            return self.root
        return _resolve(self.root, package) or default
