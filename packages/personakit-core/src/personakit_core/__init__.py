"""Personakit Core: shared config, errors, and logging."""
from __future__ import annotations

from personakit_core._version import __version__
from personakit_core.config import (
    LoggingConfig,
    PersonakitConfig,
    SelectorConfig,
    TemplatesConfig,
)
from personakit_core.errors import (
    ConfigError,
    DuplicateTemplateError,
    MalformedTemplateError,
    PersonakitError,
    TemplateError,
    TemplateNotFoundError,
)
from personakit_core.logging import get_logger, setup_logging

__all__ = [
    # Errors
    "ConfigError",
    "DuplicateTemplateError",
    # Config
    "LoggingConfig",
    "MalformedTemplateError",
    "PersonakitConfig",
    "PersonakitError",
    "SelectorConfig",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplatesConfig",
    # Version
    "__version__",
    # Logging
    "get_logger",
    "setup_logging",
]
