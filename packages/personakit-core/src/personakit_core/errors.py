from __future__ import annotations


class PersonakitError(Exception):
    """Base exception for all personakit errors."""


# ── Config Errors ────────────────────────────────────────────────────

class ConfigError(PersonakitError):
    """Invalid or unreadable configuration."""


# ── Template Errors ──────────────────────────────────────────────────

class TemplateError(PersonakitError):
    """Base for template-related errors."""


class MalformedTemplateError(TemplateError):
    """Template document is missing required metadata or body."""


class DuplicateTemplateError(TemplateError, ValueError):
    """A template with the same name is already registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Template already registered: '{name}'")


class TemplateNotFoundError(TemplateError, LookupError):
    """No template is registered under the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Template not found: '{name}'")
