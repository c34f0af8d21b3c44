"""
Example: Apply a directive built in code to a composer.json file.

Usage:
    python examples/strip_logging_deps.py path/to/composer.json
"""

import asyncio
import sys
from pathlib import Path

from composer_modifier.core.applier import apply_directive
from composer_modifier.exporters.file_export import ManifestFileExporter
from composer_modifier.models.directive import ModifyDirective
from composer_modifier.parsers.composer import load_manifest


async def main(path: Path):
    manifest = load_manifest(path.read_text(encoding="utf-8"), source=str(path))

    # Drop every monolog package, pin psr/log and turn on sorted requirements
    directive = ModifyDirective.from_dict(
        {
            "remove": {"require": {"monolog/*": ""}},
            "replace": {"require": {"psr/log": "^3.0"}},
            "modify": {"config": {"sort-packages": True}},
        }
    )
    result = apply_directive(manifest, directive)

    for change in result.changes:
        print(change.describe())

    output = path.with_name("composer.modified.json")
    exporter = ManifestFileExporter(path=output)
    await exporter.export(result.manifest)
    await exporter.finalize()

    print(f"\n✅ Modified manifest written to: {output.absolute()}")


if __name__ == "__main__":
    asyncio.run(main(Path(sys.argv[1] if len(sys.argv) > 1 else "composer.json")))
