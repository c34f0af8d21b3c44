"""
Directive Applier — applies a modify-composer.json directive to a manifest.

Every section (remove / add / replace / modify) reduces to one primitive:
select the dependency-map entries a set of package patterns matches, then
combine them with the section's MergePolicy:

    remove   DELETE                 drop every matched entry
    add      INSERT_IF_ABSENT       insert literal packages nothing matched
    replace  OVERWRITE              overwrite matched entries, insert literals
    modify   OVERWRITE_IF_PRESENT   overwrite matched entries only

Application never mutates its input. A new Manifest is returned along with
the list of changes, so callers can render it or only report it (dry run).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from composer_modifier.core.errors import DocumentParseError
from composer_modifier.core.pattern import PackagePattern, most_specific
from composer_modifier.models.directive import MergePolicy, ModifyDirective, PatternRequire
from composer_modifier.models.manifest import Config, Manifest, link_attribute

logger = logging.getLogger(__name__)


class ChangeAction(Enum):
    REMOVED = "removed"
    ADDED = "added"
    REPLACED = "replaced"
    SKIPPED = "skipped"
    UNMATCHED = "unmatched"
    CONFIGURED = "configured"


@dataclass(frozen=True)
class Change:
    """One line of the change report."""

    section: str
    target: str  # "require", "require-dev" or "config"
    key: str
    action: ChangeAction
    pattern: str | None = None
    old: Any = None
    new: Any = None

    def describe(self) -> str:
        match self.action:
            case ChangeAction.REMOVED:
                return f"remove {self.target} {self.key} ({self.old})"
            case ChangeAction.ADDED:
                return f"add {self.target} {self.key} ({self.new})"
            case ChangeAction.REPLACED:
                return f"set {self.target} {self.key}: {self.old} -> {self.new}"
            case ChangeAction.SKIPPED:
                return f"keep {self.target} {self.key} ({self.old}), already present"
            case ChangeAction.UNMATCHED:
                return f"pattern {self.key} matched nothing in {self.target}"
            case ChangeAction.CONFIGURED:
                return f"set config {self.key}: {self.old} -> {self.new}"
        return f"{self.action.value} {self.target} {self.key}"


@dataclass
class ApplyResult:
    manifest: Manifest
    changes: list[Change] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return any(c.action not in (ChangeAction.SKIPPED, ChangeAction.UNMATCHED) for c in self.changes)


# ──────────────────────────────────────────────
# Selection primitive
# ──────────────────────────────────────────────


def select_entries(
    entries: Mapping[str, str], patterns: Mapping[PackagePattern, str] | list[PackagePattern]
) -> list[tuple[str, list[PackagePattern]]]:
    """
    Find the entries matched by at least one pattern.

    Returns ``(key, matching patterns)`` pairs in the entries' insertion
    order; each pattern list keeps the patterns' own order.
    """
    selected = []
    for key in entries:
        hits = [p for p in patterns if p.matches(key)]
        if hits:
            selected.append((key, hits))
    return selected


def apply_section_map(
    entries: Mapping[str, str] | None,
    patterns: PatternRequire,
    policy: MergePolicy,
    section: str = "",
    target: str = "require",
) -> tuple[dict[str, str] | None, list[Change]]:
    """
    Combine one dependency map with one directive pattern map.

    `entries` may be None (the map is absent); the result stays None unless
    an entry gets inserted. The input map is never modified.
    """
    current = dict(entries) if entries is not None else {}
    changes: list[Change] = []

    selected = select_entries(current, patterns)
    matched = {p for _, hits in selected for p in hits}

    for key, hits in selected:
        old = current[key]
        if policy is MergePolicy.DELETE:
            del current[key]
            changes.append(Change(section, target, key, ChangeAction.REMOVED, hits[0].raw, old=old))
        elif policy is MergePolicy.INSERT_IF_ABSENT:
            changes.append(Change(section, target, key, ChangeAction.SKIPPED, hits[0].raw, old=old))
        else:
            winner = most_specific(hits)
            new = patterns[winner]
            if new != old:
                current[key] = new
                changes.append(Change(section, target, key, ChangeAction.REPLACED, winner.raw, old, new))

    for pattern, constraint in patterns.items():
        if pattern in matched:
            continue
        inserts = policy in (MergePolicy.INSERT_IF_ABSENT, MergePolicy.OVERWRITE)
        if inserts and pattern.is_literal:
            current[pattern.raw] = constraint
            changes.append(Change(section, target, pattern.raw, ChangeAction.ADDED, pattern.raw, new=constraint))
        else:
            changes.append(Change(section, target, pattern.raw, ChangeAction.UNMATCHED, pattern.raw))

    if entries is None and not current:
        return None, changes
    return current, changes


# ──────────────────────────────────────────────
# Manifest-level operations
# ──────────────────────────────────────────────


def apply_remove_require(manifest: Manifest, patterns: PatternRequire) -> Manifest:
    """
    Return a copy of `manifest` whose ``require`` map excludes every package
    matched by any of `patterns`. Patterns matching nothing are ignored.
    """
    require, changes = apply_section_map(manifest.require, patterns, MergePolicy.DELETE, "remove")
    _log_changes(changes)
    return manifest.model_copy(update={"require": require})


def apply_config_overrides(
    config: Config | None, overrides: Mapping[str, Any]
) -> tuple[Config | None, list[Change]]:
    """
    Merge raw ``config`` overrides into a manifest's config section.

    The merged section is decoded again: an override of the wrong type fails
    like a bad manifest would, and a null override drops the key. An absent
    section stays absent when no override changes it.
    """
    base = config.to_dict() if config is not None else {}
    merged = dict(base)
    changes = []
    for key, value in overrides.items():
        old = base.get(key)
        if old == value:
            continue
        merged[key] = value
        changes.append(Change("modify", "config", key, ChangeAction.CONFIGURED, old=old, new=value))
    if config is None and not changes:
        return None, changes
    try:
        new_config = Config.from_dict(merged, "config")
    except DocumentParseError as e:
        raise e.with_source("modify.config") from e
    return new_config, changes


def apply_directive(manifest: Manifest, directive: ModifyDirective) -> ApplyResult:
    """
    Apply every section of `directive` to `manifest`.

    Sections run in the order remove, add, replace, modify; within a section
    ``require`` is handled before ``require-dev``.
    """
    updates: dict[str, Any] = {}
    changes: list[Change] = []

    def current(attr):
        return updates[attr] if attr in updates else getattr(manifest, attr)

    for name, section, policy in directive.sections():
        for target, patterns in section.links().items():
            attr = link_attribute(target)
            new_map, section_changes = apply_section_map(current(attr), patterns, policy, name, target)
            updates[attr] = new_map
            changes.extend(section_changes)

        overrides = getattr(section, "config", None)
        if overrides:
            updates["config"], config_changes = apply_config_overrides(current("config"), overrides)
            changes.extend(config_changes)

    _log_changes(changes)
    return ApplyResult(manifest=manifest.model_copy(update=updates), changes=changes)


def _log_changes(changes: list[Change]) -> None:
    for change in changes:
        logger.info(f"[Applier] {change.section}: {change.describe()}")
