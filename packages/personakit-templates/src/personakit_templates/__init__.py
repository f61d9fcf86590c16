"""Persona template system: document parsing, discovery, registry, and selection."""
from __future__ import annotations

from personakit_templates.bridge import SyncReport, TemplateRegistryBridge
from personakit_templates.loader import TemplateLoader
from personakit_templates.parser import parse_template, parse_template_file
from personakit_templates.registry import TemplateRegistry
from personakit_templates.selector import TemplateSelector
from personakit_templates.types import LoadFailure, Template, TemplateManifest
from personakit_templates.validator import TemplateValidator

__all__ = [
    "LoadFailure",
    "SyncReport",
    "Template",
    "TemplateLoader",
    "TemplateManifest",
    "TemplateRegistry",
    "TemplateRegistryBridge",
    "TemplateSelector",
    "TemplateValidator",
    "parse_template",
    "parse_template_file",
]
