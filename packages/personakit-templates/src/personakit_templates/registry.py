"""In-memory template registry."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from personakit_core.errors import DuplicateTemplateError, TemplateNotFoundError

from personakit_templates._rwlock import ReadWriteLock

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from personakit_templates.types import Template

logger = logging.getLogger("personakit.templates.registry")


class TemplateRegistry:
    """Thread-safe name → Template mapping.

    Lookups are exact and case-sensitive.  Listing order is the order in
    which names were first inserted; replacing a template keeps its
    position.  Every operation takes the lock for its own duration only,
    and errors are raised to the caller rather than logged.

    A registry is meant to be built explicitly at startup and passed to
    whatever needs it; there is no module-level instance.
    """

    def __init__(self, templates: Iterable[Template] | None = None) -> None:
        self._templates: dict[str, Template] = {}
        self._lock = ReadWriteLock()
        for template in templates or ():
            self.register(template)

    def register(self, template: Template) -> None:
        """Add *template*.

        Raises:
            DuplicateTemplateError: If the name is taken.  The registered
                template is left untouched.
        """
        with self._lock.write():
            if template.name in self._templates:
                raise DuplicateTemplateError(template.name)
            self._templates[template.name] = template
        logger.debug("Registered template: %s", template.name)

    def replace(self, template: Template) -> Template | None:
        """Insert or overwrite *template*, returning the previous value if any."""
        with self._lock.write():
            previous = self._templates.get(template.name)
            self._templates[template.name] = template
        if previous is None:
            logger.debug("Registered template: %s", template.name)
        else:
            logger.debug("Replaced template: %s", template.name)
        return previous

    def get(self, name: str) -> Template:
        """Return the template registered under exactly *name*.

        Raises:
            TemplateNotFoundError: If no such template exists.
        """
        with self._lock.read():
            template = self._templates.get(name)
        if template is None:
            raise TemplateNotFoundError(name)
        return template

    def remove(self, name: str) -> Template:
        """Remove and return the template registered under *name*.

        Removing an absent name is an error, so a double removal is
        reported rather than ignored.

        Raises:
            TemplateNotFoundError: If no such template exists.
        """
        with self._lock.write():
            template = self._templates.pop(name, None)
        if template is None:
            raise TemplateNotFoundError(name)
        logger.debug("Removed template: %s", name)
        return template

    def list_templates(self) -> tuple[Template, ...]:
        """Snapshot of all templates in insertion order.

        The tuple is copied under the read lock, so it reflects a single
        consistent state and can be iterated any number of times without
        holding the lock.
        """
        with self._lock.read():
            return tuple(self._templates.values())

    def names(self) -> list[str]:
        with self._lock.read():
            return list(self._templates)

    def __contains__(self, name: object) -> bool:
        with self._lock.read():
            return name in self._templates

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._templates)

    def __iter__(self) -> Iterator[Template]:
        return iter(self.list_templates())
