"""Per-invocation CLI state shared by all commands."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from personakit_templates import (
    TemplateLoader,
    TemplateRegistry,
    TemplateRegistryBridge,
    TemplateSelector,
)

if TYPE_CHECKING:
    from pathlib import Path

    from personakit_core.config import PersonakitConfig
    from personakit_templates.bridge import SyncReport


@dataclass
class CLIState:
    config: PersonakitConfig
    extra_paths: list[Path] = field(default_factory=list)
    include_defaults: bool = True

    def build_loader(self) -> TemplateLoader:
        """Loader over the default paths, configured paths, and ``--path`` dirs."""
        return TemplateLoader(
            extra_paths=[*self.config.template_paths, *self.extra_paths],
            pattern=self.config.templates.pattern,
            include_defaults=self.include_defaults,
        )

    def build_registry(self) -> tuple[TemplateRegistry, SyncReport]:
        registry = TemplateRegistry()
        report = TemplateRegistryBridge().sync(self.build_loader(), registry)
        return registry, report

    def build_selector(self, registry: TemplateRegistry) -> TemplateSelector:
        return TemplateSelector(registry, default=self.config.selector.default)
