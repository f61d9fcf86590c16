"""Tests for TemplateSelector."""
from __future__ import annotations

import pytest
from personakit_core.errors import TemplateNotFoundError
from personakit_templates import TemplateRegistry, TemplateSelector


@pytest.fixture
def registry(make_template) -> TemplateRegistry:
    return TemplateRegistry([
        make_template("ddd-enforcer"),
        make_template("sceptic"),
    ])


class TestTemplateSelector:

    def test_select_primary(self, registry) -> None:
        selector = TemplateSelector(registry)
        assert selector.select("ddd-enforcer").name == "ddd-enforcer"

    def test_primary_wins_over_default(self, registry) -> None:
        selector = TemplateSelector(registry, default="sceptic")
        assert selector.select("ddd-enforcer", default="sceptic").name == "ddd-enforcer"

    def test_missing_without_default(self, registry) -> None:
        selector = TemplateSelector(registry)
        with pytest.raises(TemplateNotFoundError) as exc_info:
            selector.select("missing")
        assert exc_info.value.name == "missing"

    def test_fallback_from_call(self, registry) -> None:
        selector = TemplateSelector(registry)
        assert selector.select("missing", default="sceptic").name == "sceptic"

    def test_fallback_from_configured_default(self, registry) -> None:
        selector = TemplateSelector(registry, default="sceptic")
        assert selector.default == "sceptic"
        assert selector.select("missing").name == "sceptic"

    def test_call_default_overrides_configured(self, registry) -> None:
        selector = TemplateSelector(registry, default="sceptic")
        assert selector.select("missing", default="ddd-enforcer").name == "ddd-enforcer"

    def test_missing_default_reports_requested_name(self, registry) -> None:
        selector = TemplateSelector(registry)
        with pytest.raises(TemplateNotFoundError) as exc_info:
            selector.select("missing", default="also-missing")
        assert exc_info.value.name == "missing"

    def test_no_partial_matching(self, registry) -> None:
        selector = TemplateSelector(registry)
        for request in ("ddd", "Sceptic", "sceptic "):
            with pytest.raises(TemplateNotFoundError):
                selector.select(request)

    def test_sees_registry_changes(self, registry, make_template) -> None:
        selector = TemplateSelector(registry, default="sceptic")
        registry.register(make_template("fp-typescript"))
        assert selector.select("fp-typescript").name == "fp-typescript"

        registry.remove("sceptic")
        with pytest.raises(TemplateNotFoundError):
            selector.select("missing")
