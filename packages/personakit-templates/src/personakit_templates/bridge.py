"""Registry bridge: installs discovered templates into a TemplateRegistry."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from personakit_core.errors import DuplicateTemplateError

if TYPE_CHECKING:
    from pathlib import Path

    from personakit_templates.loader import TemplateLoader
    from personakit_templates.registry import TemplateRegistry
    from personakit_templates.types import LoadFailure

logger = logging.getLogger("personakit.templates.bridge")


@dataclass(frozen=True, slots=True)
class SyncReport:
    """What a sync changed in the registry."""

    added: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    conflicts: list[str] = field(default_factory=list)
    failures: list[LoadFailure] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.added or self.updated or self.removed)


class TemplateRegistryBridge:
    """Bridges the filesystem-based TemplateLoader with a TemplateRegistry.

    Discovers templates via the loader and registers, replaces, or
    removes them so the registry mirrors what is on disk.  The bridge
    remembers which names it installed.  Only those are replaced or
    removed; a discovered name that other code already registered is
    reported as a conflict and the registered template is left alone.
    """

    def __init__(self) -> None:
        self._synced: set[str] = set()

    def sync(
        self,
        loader: TemplateLoader,
        registry: TemplateRegistry,
        paths: list[Path] | None = None,
        remove_stale: bool = False,
    ) -> SyncReport:
        """Discover templates and synchronize them with *registry*.

        New names are registered.  Names installed by an earlier sync are
        replaced only when the discovered template differs from the
        registered one.

        Args:
            loader: The TemplateLoader used for filesystem discovery.
            registry: The registry to populate.
            paths: Optional explicit paths to scan.  When *None*, uses
                the loader's search paths.
            remove_stale: Remove templates installed by an earlier sync
                that are no longer on disk.

        Returns:
            A SyncReport describing the changes.
        """
        # Parsing happens here, outside any registry lock
        manifest = loader.discover(paths=paths)
        report = SyncReport(failures=list(manifest.failures))
        owned: set[str] = set()

        for template in manifest.templates:
            name = template.name
            if name in self._synced and name in registry:
                owned.add(name)
                if registry.get(name) == template:
                    report.unchanged.append(name)
                else:
                    registry.replace(template)
                    report.updated.append(name)
                    logger.info("Updated template: %s", name)
                continue
            try:
                registry.register(template)
            except DuplicateTemplateError:
                # Registered by other code; leave it in place
                report.conflicts.append(name)
                logger.warning(
                    "Template '%s' from %s is already registered elsewhere (skipping)",
                    name,
                    template.source_path,
                )
                continue
            owned.add(name)
            report.added.append(name)

        if remove_stale:
            for name in sorted(self._synced - owned):
                if name in registry:
                    registry.remove(name)
                    report.removed.append(name)
                    logger.info("Removed stale template: %s", name)
            self._synced = owned
        else:
            self._synced |= owned

        logger.info(
            "Synced templates: %d added, %d updated, %d removed, %d conflicts, %d failed",
            len(report.added),
            len(report.updated),
            len(report.removed),
            len(report.conflicts),
            len(report.failures),
        )
        return report
