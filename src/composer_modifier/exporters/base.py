"""
Exporter Protocol — Base interface for all export backends.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from composer_modifier.models.manifest import Manifest


@runtime_checkable
class Exporter(Protocol):
    """
    Protocol that all exporters must implement.

    Exporters receive the manifest produced by applying a directive and
    deliver it somewhere (a file, the console, ...). Exporters with
    `persists` set write to storage and are skipped on a dry run.
    """

    persists: bool

    async def export(self, manifest: Manifest) -> None:
        """Export a single manifest."""
        ...

    async def finalize(self) -> None:
        """Called after every manifest has been exported. Use for cleanup."""
        ...
