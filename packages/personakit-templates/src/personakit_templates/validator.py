"""Persona linting: advisory checks run on demand by ``personakit validate``.

Parsing only guarantees a non-empty name and body.  The checks here
cover what makes a persona awkward to use: names that are hard to
type on a command line, descriptions that break a listing row, model
hints and capability tags that are not single tokens, and bodies
that still carry a stray frontmatter block.
"""
from __future__ import annotations

import re
from typing import TYPE_CHECKING

from personakit_core.errors import MalformedTemplateError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from personakit_templates.types import Template

_SLUG = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
_SLUG_MAX = 64
_SUMMARY_MAX = 200
_VERSION = re.compile(r"^\d+\.\d+\.\d+(?:[-+][0-9A-Za-z.-]+)?$")


def _check_name(template: Template) -> Iterator[str]:
    name = template.name
    if not name:
        yield "Persona has no name."
        return
    if not _SLUG.match(name):
        yield (
            f"Persona name '{name}' is not a slug "
            "(lowercase letters and digits, single hyphens between words)."
        )
    if len(name) > _SLUG_MAX:
        yield f"Persona name is {len(name)} characters long; the limit is {_SLUG_MAX}."
    source = template.source_path
    if source is not None and source.stem != name:
        yield f"Persona '{name}' is stored in '{source.name}'; rename one to match."


def _check_description(template: Template) -> Iterator[str]:
    description = template.description
    if "\n" in description:
        yield "Description spans several lines; keep it to one summary line."
    if len(description) > _SUMMARY_MAX:
        yield (
            f"Description is {len(description)} characters long; "
            f"summaries are limited to {_SUMMARY_MAX}."
        )


def _check_model(template: Template) -> Iterator[str]:
    if template.model is not None and len(template.model.split()) != 1:
        yield f"Model hint must be a single token: '{template.model}'."


def _check_version(template: Template) -> Iterator[str]:
    if not _VERSION.match(template.version):
        yield f"Version '{template.version}' is not MAJOR.MINOR.PATCH."


def _check_capabilities(template: Template) -> Iterator[str]:
    by_folded: dict[str, list[str]] = {}
    for tag in sorted(template.tool_capabilities):
        if not tag or len(tag.split()) != 1:
            yield f"Capability '{tag}' must be a single token."
        by_folded.setdefault(tag.casefold(), []).append(tag)
    for spellings in by_folded.values():
        if len(spellings) > 1:
            listed = ", ".join(spellings)
            yield f"Capabilities differ only in case: {listed}."


def _check_body(template: Template) -> Iterator[str]:
    body = template.body
    if not body.strip():
        yield "Persona body is empty."
        return
    if body.lstrip().splitlines()[0].rstrip() == "---":
        yield "Body starts with '---'; the document may have a second frontmatter block."


_CHECKS: tuple[Callable[[Template], Iterator[str]], ...] = (
    _check_name,
    _check_description,
    _check_model,
    _check_version,
    _check_capabilities,
    _check_body,
)


class TemplateValidator:
    """Runs the persona lint checks over a Template."""

    def validate(self, template: Template) -> list[str]:
        """Return lint messages for *template*; an empty list means clean."""
        return [message for check in _CHECKS for message in check(template)]

    def validate_strict(self, template: Template) -> None:
        """Raise MalformedTemplateError listing every lint message, if any."""
        problems = self.validate(template)
        if problems:
            label = template.name or "<unnamed>"
            msg = f"Persona '{label}' failed lint: " + "; ".join(problems)
            raise MalformedTemplateError(msg)
