"""
Composer Modifier — loads a manifest and a directive, applies one to the
other, and hands the result to the configured exporters.

One run is all-or-nothing: the new manifest reaches the exporters only after
both documents have loaded and the directive has applied cleanly, and never
during a dry run for exporters that persist. A run that changes nothing
leaves persisted files untouched.
"""

import logging
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.text import Text

from composer_modifier.core.applier import ApplyResult, ChangeAction, apply_directive
from composer_modifier.core.settings import ModifierSettings
from composer_modifier.exporters.base import Exporter
from composer_modifier.parsers.composer import DocumentKind, load_document
from composer_modifier.parsers.files import read_document_text

logger = logging.getLogger("ComposerModifier")

ACTION_STYLES = {
    ChangeAction.REMOVED: "red",
    ChangeAction.ADDED: "green",
    ChangeAction.REPLACED: "yellow",
    ChangeAction.CONFIGURED: "yellow",
    ChangeAction.SKIPPED: "dim",
    ChangeAction.UNMATCHED: "dim",
}


class ComposerModifier:
    """
    Orchestrates one modification pass.

    Features:
    - Loads composer.json and modify-composer.json from disk
    - Applies the directive through the pattern-matching applier
    - Reports every change as a table
    - Pluggable export backends via Exporter protocol
    """

    def __init__(
        self,
        exporters: list[Exporter] | None = None,
        settings: ModifierSettings | None = None,
        console: Console | None = None,
    ):
        self.exporters = exporters or []
        self.settings = settings or ModifierSettings()
        self.console = console or Console()

    # ──────────────────────────────────────────────
    # Loading
    # ──────────────────────────────────────────────

    async def load(self, kind: DocumentKind, path: str | Path):
        """Read and parse one document, confirming success on the console."""
        text = await read_document_text(path)
        document = load_document(kind, text, source=str(path))
        self.console.print(f"successfully parsed {kind} file: {path}", markup=False, highlight=False)
        logger.info(f"Loaded {kind} from {path}")
        return document

    # ──────────────────────────────────────────────
    # Reporting
    # ──────────────────────────────────────────────

    def _print_changes(self, result: ApplyResult, dry_run: bool) -> None:
        if not result.changes:
            self.console.print("[dim]Directive has nothing to apply.[/dim]")
            return

        title = "Planned changes (dry run)" if dry_run else "Applied changes"
        table = Table(title=title)
        table.add_column("Section", style="cyan")
        table.add_column("Target")
        table.add_column("Package / key")
        table.add_column("Action")
        table.add_column("Before")
        table.add_column("After")

        for change in result.changes:
            table.add_row(
                Text(change.section),
                Text(change.target),
                Text(change.key),
                Text(change.action.value, style=ACTION_STYLES.get(change.action, "")),
                Text("" if change.old is None else str(change.old)),
                Text("" if change.new is None else str(change.new)),
            )
        self.console.print(table)

    # ──────────────────────────────────────────────
    # Orchestration
    # ──────────────────────────────────────────────

    async def run(
        self,
        manifest_path: str | Path | None = None,
        directive_path: str | Path | None = None,
        dry_run: bool | None = None,
    ) -> ApplyResult:
        """
        Apply a directive file to a manifest file.

        Args:
            manifest_path: composer.json to modify (defaults to settings).
            directive_path: modify-composer.json to apply (defaults to settings).
            dry_run: Compute and report only; exporters that persist are skipped.
                They are also skipped when the directive changes nothing.

        Returns:
            The ApplyResult holding the new manifest and its change list.
        """
        manifest_path = manifest_path or self.settings.manifest_file
        directive_path = directive_path or self.settings.directive_file
        dry_run = self.settings.dry_run if dry_run is None else dry_run

        manifest = await self.load(DocumentKind.MANIFEST, manifest_path)
        directive = await self.load(DocumentKind.DIRECTIVE, directive_path)

        logger.info(f"Applying {directive_path} to {manifest_path}")
        result = apply_directive(manifest, directive)
        self._print_changes(result, dry_run)

        skip_persisting = dry_run or not result.changed
        exporters = [e for e in self.exporters if not (skip_persisting and e.persists)]
        if skip_persisting:
            reason = "Dry run" if dry_run else "Nothing changed"
            logger.info(f"{reason}: skipping {len(self.exporters) - len(exporters)} persisting exporter(s).")

        for exporter in exporters:
            await exporter.export(result.manifest)
        for exporter in exporters:
            await exporter.finalize()

        logger.info("Modification complete.")
        return result
