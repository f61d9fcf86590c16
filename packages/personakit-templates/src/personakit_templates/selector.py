"""Name-based template resolution with an optional fallback."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from personakit_core.errors import TemplateNotFoundError

if TYPE_CHECKING:
    from personakit_templates.registry import TemplateRegistry
    from personakit_templates.types import Template

logger = logging.getLogger("personakit.templates.selector")


class TemplateSelector:
    """Resolves a requested name to a single Template.

    Only exact names are resolved.  Matching a task description to a
    persona is the caller's job.
    """

    def __init__(self, registry: TemplateRegistry, default: str | None = None) -> None:
        self._registry = registry
        self._default = default

    @property
    def default(self) -> str | None:
        return self._default

    def select(self, name: str, default: str | None = None) -> Template:
        """Return the template for *name*, or for the fallback if *name* is absent.

        Args:
            name: The requested template name.
            default: Fallback name for this call.  When *None*, the
                selector's configured default is used.

        Raises:
            TemplateNotFoundError: For *name* when neither it nor the
                fallback is registered.
        """
        try:
            return self._registry.get(name)
        except TemplateNotFoundError as exc:
            fallback = default if default is not None else self._default
            if fallback is None or fallback == name:
                raise

            try:
                template = self._registry.get(fallback)
            except TemplateNotFoundError:
                raise exc from None

            logger.info("Template '%s' not found, using default '%s'", name, fallback)
            return template
