"""Template discovery and loading from the filesystem."""
from __future__ import annotations

import logging
from pathlib import Path

from personakit_core.errors import MalformedTemplateError

from personakit_templates.parser import parse_template_file
from personakit_templates.types import LoadFailure, Template, TemplateManifest

logger = logging.getLogger("personakit.templates.loader")

# Default paths searched for persona documents
DEFAULT_DISCOVERY_PATHS: list[Path] = [
    Path("./personas"),
    Path.home() / ".personakit" / "personas",
]

DEFAULT_PATTERN = "*.md"


class TemplateLoader:
    """Discovers and loads persona documents from the filesystem.

    The loader scans configurable search paths (including nested
    sub-directories) for files matching a glob pattern and parses each
    one.  It never touches a registry; installing templates is a
    separate step.
    """

    def __init__(
        self,
        extra_paths: list[Path] | None = None,
        pattern: str = DEFAULT_PATTERN,
        include_defaults: bool = True,
    ) -> None:
        self._extra_paths: list[Path] = extra_paths or []
        self._pattern = pattern
        self._include_defaults = include_defaults

    @property
    def pattern(self) -> str:
        return self._pattern

    @property
    def search_paths(self) -> list[Path]:
        """All paths that will be scanned for persona documents."""
        defaults = DEFAULT_DISCOVERY_PATHS if self._include_defaults else []
        return defaults + self._extra_paths

    def discover(self, paths: list[Path] | None = None) -> TemplateManifest:
        """Scan directories for persona documents.

        Args:
            paths: Directories to scan.  When *None*, uses the search
                paths configured on this loader.

        Returns:
            A TemplateManifest.  Documents that fail to parse, and later
            documents reusing an earlier name, are recorded in
            ``failures`` and logged; the first occurrence of a name wins.
            A file reached through overlapping roots is parsed once.
        """
        scan_paths = paths if paths is not None else self.search_paths
        templates: list[Template] = []
        failures: list[LoadFailure] = []
        seen: dict[str, Path] = {}
        seen_roots: set[Path] = set()
        seen_files: set[Path] = set()

        for base in scan_paths:
            resolved = base.expanduser().resolve()
            if resolved in seen_roots:
                continue
            seen_roots.add(resolved)
            if not resolved.is_dir():
                logger.debug("Skipping non-existent path: %s", resolved)
                continue

            for doc in sorted(resolved.rglob(self._pattern)):
                if not doc.is_file():
                    continue
                # Overlapping roots reach the same file more than once
                real = doc.resolve()
                if real in seen_files:
                    continue
                seen_files.add(real)
                try:
                    template = self.load(doc)
                except (MalformedTemplateError, OSError, UnicodeDecodeError) as exc:
                    logger.warning("Failed to load template from %s: %s", doc, exc)
                    failures.append(LoadFailure(path=doc, reason=str(exc)))
                    continue

                if template.name in seen:
                    reason = (
                        f"Duplicate template name '{template.name}' "
                        f"(already loaded from {seen[template.name]})"
                    )
                    logger.warning("%s at %s (skipping)", reason, doc)
                    failures.append(LoadFailure(path=doc, reason=reason))
                    continue

                seen[template.name] = doc
                templates.append(template)

        logger.info("Discovered %d template(s)", len(templates))
        return TemplateManifest(
            templates=tuple(templates),
            discovery_paths=tuple(scan_paths),
            failures=tuple(failures),
        )

    def load(self, path: Path) -> Template:
        """Load a single persona document.

        Raises:
            FileNotFoundError: If *path* does not exist.
            MalformedTemplateError: If the document is malformed.
        """
        return parse_template_file(path)
