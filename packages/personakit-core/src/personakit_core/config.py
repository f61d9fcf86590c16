from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from personakit_core.errors import ConfigError


def _load_toml(path: Path) -> dict:
    """Load a TOML file, returning empty dict if missing."""
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        msg = f"Cannot read config file {path}: {exc}"
        raise ConfigError(msg) from exc


def _deep_merge(base: dict, override: dict) -> dict:
    """Merge override into base (1 level deep for TOML sections)."""
    merged = dict(base)
    for key, val in override.items():
        if (
            key in merged
            and isinstance(merged[key], dict)
            and isinstance(val, dict)
        ):
            merged[key] = {**merged[key], **val}
        else:
            merged[key] = val
    return merged


@dataclass(frozen=True, slots=True)
class TemplatesConfig:
    paths: list[str] = field(default_factory=list)
    pattern: str = "*.md"


@dataclass(frozen=True, slots=True)
class SelectorConfig:
    default: str | None = None


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    level: str = "WARNING"
    json: bool = False


@dataclass(frozen=True, slots=True)
class PersonakitConfig:
    """Top-level configuration, parsed from personakit.toml."""
    templates: TemplatesConfig = field(default_factory=TemplatesConfig)
    selector: SelectorConfig = field(default_factory=SelectorConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def template_paths(self) -> list[Path]:
        return [Path(p).expanduser() for p in self.templates.paths]

    @classmethod
    def from_toml(
        cls, path: Path | str = "personakit.toml"
    ) -> PersonakitConfig:
        path = Path(path)
        raw = _load_toml(path)
        return cls._from_raw(raw)

    @classmethod
    def load(
        cls, project_dir: Path | str | None = None
    ) -> PersonakitConfig:
        """Load config with global → project layering.

        Resolution order (later wins):
        1. Built-in defaults
        2. ~/.personakit/config.toml (global)
        3. .personakit/config.toml or personakit.toml (project)
        """
        global_path = Path.home() / ".personakit" / "config.toml"

        project_dir = (
            Path.cwd() if project_dir is None else Path(project_dir)
        )

        # Project config: .personakit/config.toml takes priority
        project_path = project_dir / ".personakit" / "config.toml"
        if not project_path.exists():
            project_path = project_dir / "personakit.toml"

        global_raw = _load_toml(global_path)
        project_raw = _load_toml(project_path)
        merged = _deep_merge(global_raw, project_raw)

        return cls._from_raw(merged)

    @classmethod
    def _from_raw(cls, raw: dict) -> PersonakitConfig:
        """Build PersonakitConfig from a raw TOML dict."""
        templates_raw = raw.get("templates", {})
        selector_raw = raw.get("selector", {})
        logging_raw = raw.get("logging", {})

        def _pick(section: dict, dc: type) -> dict:
            if not isinstance(section, dict):
                msg = f"Config section for {dc.__name__} must be a table"
                raise ConfigError(msg)
            fields = dc.__dataclass_fields__
            return {
                k: v for k, v in section.items() if k in fields
            }

        templates = _pick(templates_raw, TemplatesConfig)
        if isinstance(templates.get("paths"), str):
            templates["paths"] = [templates["paths"]]

        return cls(
            templates=TemplatesConfig(**templates),
            selector=SelectorConfig(**_pick(selector_raw, SelectorConfig)),
            logging=LoggingConfig(**_pick(logging_raw, LoggingConfig)),
        )
