"""
Composer document loader.

Turns JSON text into one of the two document shapes: a ``composer.json``
Manifest or a ``modify-composer.json`` ModifyDirective.
"""

import json
import logging
from enum import Enum

from composer_modifier.core.errors import DocumentParseError
from composer_modifier.models.directive import DIRECTIVE_FILE_NAME, ModifyDirective
from composer_modifier.models.manifest import MANIFEST_FILE_NAME, Manifest

logger = logging.getLogger(__name__)


class DocumentKind(Enum):
    """The document shapes the loader knows, named by their usual file name."""

    MANIFEST = MANIFEST_FILE_NAME
    DIRECTIVE = DIRECTIVE_FILE_NAME

    @property
    def model(self):
        return Manifest if self is DocumentKind.MANIFEST else ModifyDirective

    def __str__(self) -> str:
        return self.value


def parse_json(text: str, source: str | None = None) -> dict:
    """Parse JSON text whose top level must be an object."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DocumentParseError(f"invalid JSON: {e}", source=source) from e
    if not isinstance(data, dict):
        raise DocumentParseError("top-level value must be a JSON object", source=source)
    return data


def load_document(kind: DocumentKind, text: str, source: str | None = None):
    """
    Load a document of `kind` from JSON text.

    Args:
        kind: Which document shape to build.
        text: The raw JSON text.
        source: Identifier used in error messages (usually the file path).

    Returns:
        A Manifest or a ModifyDirective.

    Raises:
        DocumentParseError: On malformed JSON or a shape violation.
    """
    data = parse_json(text, source)
    try:
        document = kind.model.from_dict(data)
    except DocumentParseError as e:
        if source is None:
            raise
        raise e.with_source(source) from e
    logger.debug(f"[Loader] Parsed {kind} from {source or '<text>'}")
    return document


def load_manifest(text: str, source: str | None = None) -> Manifest:
    return load_document(DocumentKind.MANIFEST, text, source)


def load_directive(text: str, source: str | None = None) -> ModifyDirective:
    return load_document(DocumentKind.DIRECTIVE, text, source)
