"""
Document renderer — serializes a document back to JSON text.

Output matches what Composer itself writes: four-space indentation,
unescaped slashes and unicode, and a trailing newline.
"""

import json

from composer_modifier.models.base import Document


def render_document(document: Document, indent: int = 4) -> str:
    """Render a Manifest or ModifyDirective as JSON text."""
    return json.dumps(document.to_dict(), indent=indent, ensure_ascii=False) + "\n"
