from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest
from personakit_templates import Template

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def _reset_personakit_logger():
    """Drop handlers installed by setup_logging so each test starts clean."""
    yield
    logger = logging.getLogger("personakit")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME and the working directory at empty temp dirs."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    return work


@pytest.fixture
def make_template():
    """Factory for in-memory templates."""

    def _make(name: str, body: str | None = None, **kwargs) -> Template:
        return Template(
            name=name,
            body=body if body is not None else f"You are the {name} persona.",
            **kwargs,
        )

    return _make


@pytest.fixture
def write_persona():
    """Factory that writes a persona document and returns its path."""

    def _write(
        directory: Path,
        name: str,
        body: str = "Follow the checklist.",
        *,
        filename: str | None = None,
        description: str = "A test persona",
        extra: str = "",
    ) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / (filename or f"{name}.md")
        lines = ["---", f"name: {name}", f"description: {description}"]
        if extra:
            lines.append(extra)
        lines += ["---", "", body, ""]
        path.write_text("\n".join(lines), encoding="utf-8")
        return path

    return _write
