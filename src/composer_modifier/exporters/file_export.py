"""
File Exporter — Writes the modified manifest back to disk as JSON.
"""

import logging
from pathlib import Path

import aiofiles

from composer_modifier.exporters.render import render_document
from composer_modifier.models.manifest import Manifest

logger = logging.getLogger(__name__)


class ManifestFileExporter:
    """
    Writes a Manifest to `path`, replacing the file's contents.

    The text is rendered in full before the file is opened, so a render
    failure leaves the existing file untouched.
    """

    persists = True

    def __init__(self, path: Path, indent: int = 4):
        self.path = path
        self.indent = indent
        self.count = 0

    async def export(self, manifest: Manifest) -> None:
        """Write one manifest to the target path."""
        text = render_document(manifest, indent=self.indent)
        self.path.parent.mkdir(parents=True, exist_ok=True)

        async with aiofiles.open(self.path, "w", encoding="utf-8") as f:
            await f.write(text)

        self.count += 1
        logger.debug(f"[Export] Wrote {manifest.name} to {self.path}")

    async def finalize(self) -> None:
        """Log export summary."""
        logger.info(f"[Export] Export complete: {self.count} manifest(s) written to {self.path}")
