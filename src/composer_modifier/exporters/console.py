"""
Console Exporter — Pretty-prints the modified manifest with rich.
"""

import logging

from rich.console import Console

from composer_modifier.exporters.render import render_document
from composer_modifier.models.manifest import Manifest

logger = logging.getLogger(__name__)


class ConsoleExporter:
    """Prints each manifest as highlighted JSON, headed by a title line."""

    persists = False

    def __init__(self, console: Console | None = None, indent: int = 4, title: str | None = None):
        self.console = console or Console()
        self.indent = indent
        self.title = title
        self.count = 0

    async def export(self, manifest: Manifest) -> None:
        title = self.title or manifest.name
        self.console.print(f"\n{title}:", markup=False, highlight=False)
        self.console.print_json(render_document(manifest, indent=self.indent), indent=self.indent)
        self.count += 1

    async def finalize(self) -> None:
        logger.debug(f"[Export] Printed {self.count} manifest(s)")
