"""Export backends for modified manifests."""

from composer_modifier.exporters.base import Exporter
from composer_modifier.exporters.console import ConsoleExporter
from composer_modifier.exporters.file_export import ManifestFileExporter
from composer_modifier.exporters.render import render_document


def get_exporter(name: str, output: str | None = None, indent: int = 4, console=None) -> Exporter:
    """Factory function to create an exporter by name."""
    from pathlib import Path

    match name:
        case "file":
            if output is None:
                raise ValueError("The 'file' exporter needs an output path.")
            return ManifestFileExporter(path=Path(output), indent=indent)
        case "console":
            return ConsoleExporter(console=console, indent=indent, title=output)
        case _:
            raise ValueError(f"Unknown exporter: {name!r}. Use 'file' or 'console'.")


__all__ = ["Exporter", "ManifestFileExporter", "ConsoleExporter", "get_exporter", "render_document"]
