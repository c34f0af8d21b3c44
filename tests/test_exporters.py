"""Tests for manifest exporters."""

import io
import json
import tempfile
from pathlib import Path

import pytest
from rich.console import Console

from composer_modifier.exporters import get_exporter
from composer_modifier.exporters.base import Exporter
from composer_modifier.exporters.console import ConsoleExporter
from composer_modifier.exporters.file_export import ManifestFileExporter
from composer_modifier.models.manifest import Manifest


@pytest.fixture
def sample_manifest():
    return Manifest.from_dict(
        {
            "name": "acme/app",
            "description": "Über app",
            "require": {"php": ">=8.1", "psr/log": "^1.0"},
        }
    )


def buffer_console():
    return Console(file=io.StringIO(), width=120)


# ═══════════════════════════════════════════
# File Exporter Tests
# ═══════════════════════════════════════════


class TestManifestFileExporter:
    @pytest.mark.asyncio
    async def test_writes_json_file(self, sample_manifest):
        with tempfile.TemporaryDirectory() as tmpdir:
            outfile = Path(tmpdir) / "composer.json"
            exporter = ManifestFileExporter(path=outfile)
            await exporter.export(sample_manifest)
            await exporter.finalize()

            assert outfile.exists()
            data = json.loads(outfile.read_text(encoding="utf-8"))
            assert data["name"] == "acme/app"
            assert data["require"] == {"php": ">=8.1", "psr/log": "^1.0"}

    @pytest.mark.asyncio
    async def test_unicode_is_not_escaped(self, sample_manifest):
        with tempfile.TemporaryDirectory() as tmpdir:
            outfile = Path(tmpdir) / "composer.json"
            await ManifestFileExporter(path=outfile).export(sample_manifest)
            text = outfile.read_text(encoding="utf-8")
            assert "Über app" in text
            assert text.endswith("}\n")

    @pytest.mark.asyncio
    async def test_creates_parent_dirs(self, sample_manifest):
        with tempfile.TemporaryDirectory() as tmpdir:
            outfile = Path(tmpdir) / "build" / "out" / "composer.json"
            await ManifestFileExporter(path=outfile).export(sample_manifest)
            assert outfile.exists()

    @pytest.mark.asyncio
    async def test_overwrites_existing(self, sample_manifest):
        with tempfile.TemporaryDirectory() as tmpdir:
            outfile = Path(tmpdir) / "composer.json"
            outfile.write_text('{"name": "old/name", "extra": {"x": 1}}')
            await ManifestFileExporter(path=outfile).export(sample_manifest)
            data = json.loads(outfile.read_text(encoding="utf-8"))
            assert data["name"] == "acme/app"
            assert "extra" not in data

    @pytest.mark.asyncio
    async def test_count_tracking(self, sample_manifest):
        with tempfile.TemporaryDirectory() as tmpdir:
            exporter = ManifestFileExporter(path=Path(tmpdir) / "composer.json")
            await exporter.export(sample_manifest)
            await exporter.export(sample_manifest)
            assert exporter.count == 2

    @pytest.mark.asyncio
    async def test_indent(self, sample_manifest):
        with tempfile.TemporaryDirectory() as tmpdir:
            outfile = Path(tmpdir) / "composer.json"
            await ManifestFileExporter(path=outfile, indent=2).export(sample_manifest)
            assert '\n  "name": "acme/app"' in outfile.read_text(encoding="utf-8")


# ═══════════════════════════════════════════
# Console Exporter Tests
# ═══════════════════════════════════════════


class TestConsoleExporter:
    @pytest.mark.asyncio
    async def test_prints_title_and_json(self, sample_manifest):
        console = buffer_console()
        exporter = ConsoleExporter(console=console, title="composer.json")
        await exporter.export(sample_manifest)
        await exporter.finalize()

        output = console.file.getvalue()
        assert "composer.json:" in output
        assert '"psr/log": "^1.0"' in output
        assert exporter.count == 1

    @pytest.mark.asyncio
    async def test_title_defaults_to_package_name(self, sample_manifest):
        console = buffer_console()
        await ConsoleExporter(console=console).export(sample_manifest)
        assert "acme/app:" in console.file.getvalue()


# ═══════════════════════════════════════════
# Factory Tests
# ═══════════════════════════════════════════


class TestGetExporter:
    def test_file(self):
        exporter = get_exporter("file", "composer.json", indent=2)
        assert isinstance(exporter, ManifestFileExporter)
        assert exporter.path == Path("composer.json")
        assert exporter.indent == 2
        assert exporter.persists is True

    def test_file_needs_output(self):
        with pytest.raises(ValueError, match="needs an output path"):
            get_exporter("file")

    def test_console(self):
        exporter = get_exporter("console", "composer.json")
        assert isinstance(exporter, ConsoleExporter)
        assert exporter.persists is False

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown exporter"):
            get_exporter("sqlite")

    def test_exporters_satisfy_protocol(self):
        assert isinstance(ManifestFileExporter(path=Path("composer.json")), Exporter)
        assert isinstance(ConsoleExporter(), Exporter)
