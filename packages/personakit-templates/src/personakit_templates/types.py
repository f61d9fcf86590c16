"""Template types for persona documents."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True, slots=True)
class Template:
    """A named, versioned unit of instructional content.

    Built once from a persona document: the metadata from the YAML
    frontmatter plus the instruction body.  The body is opaque and is
    handed to consumers verbatim.  Instances are immutable; to change a
    template, build a new one and ``replace`` it in the registry.
    """

    name: str
    body: str
    description: str = ""
    tool_capabilities: frozenset[str] = field(default_factory=frozenset)
    model: str | None = None
    version: str = "0.1.0"
    source_path: Path | None = None


@dataclass(frozen=True, slots=True)
class LoadFailure:
    """A document that could not be turned into a registrable template."""

    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class TemplateManifest:
    """A snapshot of one discovery pass over the filesystem."""

    templates: tuple[Template, ...] = ()
    discovery_paths: tuple[Path, ...] = ()
    failures: tuple[LoadFailure, ...] = ()
    loaded_at: float = field(default_factory=time.time)

    @property
    def names(self) -> list[str]:
        return [t.name for t in self.templates]
