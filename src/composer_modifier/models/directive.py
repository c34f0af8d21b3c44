"""
Modification Directive Model — the ``modify-composer.json`` document.

A directive lists edits to apply to a manifest, grouped in four optional
sections. Each section maps package patterns (``monolog/*``) to version
constraints for ``require`` and ``require-dev``; ``modify`` also carries
free-form ``config`` overrides.

Example::

    {
        "remove": {"require": {"monolog/*": ""}},
        "add": {"require-dev": {"phpunit/phpunit": "^10.0"}},
        "modify": {"config": {"sort-packages": true}}
    }
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import ConfigDict, StrictStr

from composer_modifier.core.pattern import PackagePattern
from composer_modifier.models.base import Document

DIRECTIVE_FILE_NAME = "modify-composer.json"

# Dependency maps a directive section may target, in application order.
DIRECTIVE_LINK_KEYS = ("require", "require-dev")

PatternRequire = dict[PackagePattern, StrictStr]


class MergePolicy(Enum):
    """How a directive section combines its entries with a dependency map."""

    DELETE = "delete"
    INSERT_IF_ABSENT = "insert-if-absent"
    OVERWRITE = "overwrite"
    OVERWRITE_IF_PRESENT = "overwrite-if-present"


class DirectiveSection(Document):
    model_config = ConfigDict(extra="forbid")

    require: PatternRequire | None = None
    require_dev: PatternRequire | None = None

    def links(self) -> dict[str, PatternRequire]:
        """Pattern maps present in this section, keyed by JSON name."""
        found = {}
        if self.require is not None:
            found["require"] = self.require
        if self.require_dev is not None:
            found["require-dev"] = self.require_dev
        return found


class ModifySection(DirectiveSection):
    config: dict[str, Any] | None = None


class ModifyDirective(Document):
    """A parsed ``modify-composer.json``. Every section is optional."""

    model_config = ConfigDict(extra="forbid")

    modify: ModifySection | None = None
    add: DirectiveSection | None = None
    remove: DirectiveSection | None = None
    replace: DirectiveSection | None = None

    def sections(self) -> list[tuple[str, DirectiveSection, MergePolicy]]:
        """Present sections with their merge policy, in application order."""
        ordered = []
        for name in SECTION_ORDER:
            section = getattr(self, name)
            if section is not None:
                ordered.append((name, section, SECTION_POLICIES[name]))
        return ordered


# Sections apply in this order within one pass.
SECTION_ORDER = ("remove", "add", "replace", "modify")

SECTION_POLICIES = {
    "remove": MergePolicy.DELETE,
    "add": MergePolicy.INSERT_IF_ABSENT,
    "replace": MergePolicy.OVERWRITE,
    "modify": MergePolicy.OVERWRITE_IF_PRESENT,
}
