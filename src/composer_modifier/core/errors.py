"""
Error taxonomy for composer-modifier.

Every failure the core can surface derives from ComposerModifierError so the
command surface can report it and carry on with the next invocation.
"""

from __future__ import annotations


class ComposerModifierError(Exception):
    """Base class for all recoverable composer-modifier errors."""


class DocumentNotFoundError(ComposerModifierError):
    """A referenced manifest or directive path does not exist."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"File not found: {path}")


class NotAFileError(ComposerModifierError):
    """A referenced path exists but is not a regular file."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Path is not a file: {path}")


class DocumentParseError(ComposerModifierError):
    """
    Text is not valid for the target document shape.

    Raised for malformed JSON, a missing required field, or a field whose
    value does not match its declared type. `source` names the document
    (usually the file path) once the loader knows it.
    """

    def __init__(self, cause: str, source: str | None = None):
        self.cause = cause
        self.source = source
        super().__init__(self._format())

    def _format(self) -> str:
        if self.source:
            return f"error parsing {self.source}: {self.cause}"
        return self.cause

    def with_source(self, source: str) -> "DocumentParseError":
        """Return a copy of this error attributed to `source`."""
        return DocumentParseError(self.cause, source=source)


class PatternCompileError(ComposerModifierError):
    """A package pattern could not be compiled into a matcher."""

    def __init__(self, pattern, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"invalid package pattern {pattern!r}: {reason}")


class SettingsError(ComposerModifierError):
    """The settings file is unreadable or holds an unknown or mistyped key."""
