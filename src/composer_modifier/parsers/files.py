"""
Document file access.

Checks that a referenced path exists and is a regular file before reading it
as UTF-8 text.
"""

from pathlib import Path

import aiofiles

from composer_modifier.core.errors import DocumentNotFoundError, NotAFileError


def resolve_document_path(path: str | Path) -> Path:
    """Return `path` as a Path, raising if it is missing or not a regular file."""
    file_path = Path(path)
    if not file_path.exists():
        raise DocumentNotFoundError(file_path)
    if not file_path.is_file():
        raise NotAFileError(file_path)
    return file_path


async def read_document_text(path: str | Path) -> str:
    """Read a document as UTF-8 text."""
    file_path = resolve_document_path(path)
    async with aiofiles.open(file_path, encoding="utf-8") as f:
        return await f.read()
