"""
Composer Modifier - pattern-driven editing of composer.json manifests.

Applies modify-composer.json directives (add / remove / replace / modify
sections keyed by glob-like package patterns such as ``my-org/*``) to a
Composer manifest and renders the result.
"""

__version__ = "0.1.0"


def __getattr__(name: str):
    """Lazy import for the public entry points."""
    if name == "ComposerModifier":
        from composer_modifier.core.modifier import ComposerModifier

        return ComposerModifier
    if name == "PackagePattern":
        from composer_modifier.core.pattern import PackagePattern

        return PackagePattern
    if name == "apply_directive":
        from composer_modifier.core.applier import apply_directive

        return apply_directive
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["ComposerModifier", "PackagePattern", "apply_directive", "__version__"]
