"""Persona document parser: extracts YAML frontmatter and the template body."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

import yaml
from personakit_core.errors import MalformedTemplateError

from personakit_templates.types import Template

if TYPE_CHECKING:
    from pathlib import Path

# Accepted spellings of the capability list, first match wins
_CAPABILITY_KEYS = ("toolCapabilities", "tool-capabilities", "tools")


def parse_template(text: str, source: Path | None = None) -> Template:
    """Parse a persona document into a Template.

    The document format is YAML frontmatter delimited by ``---`` lines,
    followed by the body.  The body is kept verbatim apart from
    surrounding blank lines.

    Args:
        text: Raw document text.
        source: Where the text came from, used in error messages and
            recorded on the template.

    Returns:
        A new, immutable Template.  No registry is touched.

    Raises:
        MalformedTemplateError: If the frontmatter is absent or invalid,
            ``name`` is missing or empty, a scalar field holds a list or
            mapping, or the body is empty.
    """
    where = str(source) if source is not None else "<string>"
    frontmatter, body = _split_frontmatter(text, where)
    meta = _parse_yaml(frontmatter, where)

    name = _as_text(meta.get("name"), "name", where)
    if not name:
        msg = f"Template missing required field 'name': {where}"
        raise MalformedTemplateError(msg)

    body = body.strip("\n")
    if not body.strip():
        msg = f"Template '{name}' has an empty body: {where}"
        raise MalformedTemplateError(msg)

    raw_caps = next(
        (meta[key] for key in _CAPABILITY_KEYS if key in meta), None
    )

    return Template(
        name=name,
        body=body,
        description=_as_text(meta.get("description"), "description", where),
        tool_capabilities=frozenset(_as_str_list(raw_caps, "toolCapabilities", where)),
        model=_as_text(meta.get("model"), "model", where) or None,
        version=_as_text(meta.get("version"), "version", where) or "0.1.0",
        source_path=source,
    )


def parse_template_file(path: Path) -> Template:
    """Read *path* and parse it with :func:`parse_template`.

    Raises:
        FileNotFoundError: If the file does not exist.
        MalformedTemplateError: If the document is malformed.
    """
    if not path.exists():
        msg = f"Template file not found: {path}"
        raise FileNotFoundError(msg)

    return parse_template(path.read_text(encoding="utf-8"), source=path)


def _is_fence(line: str) -> bool:
    return line.rstrip() == "---"


def _split_frontmatter(text: str, where: str) -> tuple[str, str]:
    """Split text into YAML frontmatter and body.

    The frontmatter is enclosed between two lines consisting of exactly
    ``---`` (trailing whitespace allowed) at the start of the document.
    The first such line after the opening one closes the block.

    Returns:
        A (frontmatter, body) tuple.
    """
    lines = text.lstrip("\ufeff").lstrip("\n").splitlines(keepends=True)
    if not lines or not _is_fence(lines[0]):
        msg = f"Template missing YAML frontmatter (no opening '---'): {where}"
        raise MalformedTemplateError(msg)

    for idx in range(1, len(lines)):
        if _is_fence(lines[idx]):
            return "".join(lines[1:idx]), "".join(lines[idx + 1 :])

    msg = f"Template missing closing '---' for frontmatter: {where}"
    raise MalformedTemplateError(msg)


def _parse_yaml(frontmatter: str, where: str) -> dict[str, Any]:
    """Parse the YAML frontmatter string using safe_load.

    Raises:
        MalformedTemplateError: If the YAML is malformed or not a mapping.
    """
    try:
        result = yaml.safe_load(frontmatter)
    except yaml.YAMLError as exc:
        msg = f"Invalid YAML frontmatter in {where}: {exc}"
        raise MalformedTemplateError(msg) from exc

    if result is None:
        return {}
    if not isinstance(result, dict):
        msg = f"YAML frontmatter must be a mapping, got {type(result).__name__}: {where}"
        raise MalformedTemplateError(msg)

    return result


def _as_text(value: Any, field_name: str, where: str) -> str:
    """Return a scalar field as stripped text; ``None`` becomes ``""``."""
    if value is None:
        return ""
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        msg = (
            f"Field '{field_name}' must be a plain string, "
            f"got {type(value).__name__}: {where}"
        )
        raise MalformedTemplateError(msg)
    return str(value).strip()


def _as_str_list(value: Any, field_name: str, where: str) -> list[str]:
    """Coerce a YAML list or a comma-separated string to a list of tags."""
    if value is None:
        return []
    if isinstance(value, str):
        items: list[Any] = value.split(",")
    elif isinstance(value, (list, tuple, set)):
        items = list(value)
    else:
        items = [value]

    tags: list[str] = []
    for item in items:
        if isinstance(item, (dict, list)):
            msg = f"Field '{field_name}' must hold plain strings: {where}"
            raise MalformedTemplateError(msg)
        tag = str(item).strip()
        if tag:
            tags.append(tag)
    return tags
