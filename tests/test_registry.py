"""Tests for TemplateRegistry."""
from __future__ import annotations

import threading
from dataclasses import replace

import pytest
from personakit_core.errors import (
    DuplicateTemplateError,
    MalformedTemplateError,
    TemplateNotFoundError,
)
from personakit_templates import TemplateRegistry, parse_template


@pytest.fixture
def registry() -> TemplateRegistry:
    return TemplateRegistry()


class TestRegistry:
    """register / replace / get / remove / list_templates."""

    def test_load_register_get(self, registry: TemplateRegistry) -> None:
        template = parse_template("---\nname: sceptic\n---\nQuestion everything.\n")
        registry.register(template)

        fetched = registry.get("sceptic")
        assert fetched == template

    def test_register_duplicate_keeps_original(self, registry, make_template) -> None:
        original = make_template("sceptic", "first")
        registry.register(original)

        with pytest.raises(DuplicateTemplateError) as exc_info:
            registry.register(make_template("sceptic", "second"))

        assert exc_info.value.name == "sceptic"
        assert registry.get("sceptic") is original
        assert len(registry) == 1

    def test_replace_existing_returns_previous(self, registry, make_template) -> None:
        old = make_template("sceptic", "old")
        new = make_template("sceptic", "new")
        registry.register(old)

        previous = registry.replace(new)

        assert previous is old
        assert registry.get("sceptic") is new

    def test_replace_new_name_returns_none(self, registry, make_template) -> None:
        template = make_template("fp-typescript")
        assert registry.replace(template) is None
        assert registry.get("fp-typescript") is template

    def test_replace_keeps_listing_position(self, registry, make_template) -> None:
        for name in ("a", "b", "c"):
            registry.register(make_template(name))

        registry.replace(make_template("a", "updated"))

        assert registry.names() == ["a", "b", "c"]
        assert registry.list_templates()[0].body == "updated"

    def test_get_missing(self, registry: TemplateRegistry) -> None:
        with pytest.raises(TemplateNotFoundError) as exc_info:
            registry.get("missing")
        assert exc_info.value.name == "missing"
        assert isinstance(exc_info.value, LookupError)

    def test_get_is_exact(self, registry, make_template) -> None:
        registry.register(make_template("sceptic"))
        for near_miss in ("Sceptic", "SCEPTIC", " sceptic", "scept"):
            with pytest.raises(TemplateNotFoundError):
                registry.get(near_miss)

    def test_remove_then_get(self, registry, make_template) -> None:
        template = make_template("sceptic")
        registry.register(template)

        assert registry.remove("sceptic") is template
        with pytest.raises(TemplateNotFoundError):
            registry.get("sceptic")
        assert "sceptic" not in registry

    def test_double_remove_reports(self, registry, make_template) -> None:
        registry.register(make_template("sceptic"))
        registry.remove("sceptic")
        with pytest.raises(TemplateNotFoundError):
            registry.remove("sceptic")

    def test_remove_missing(self, registry: TemplateRegistry) -> None:
        with pytest.raises(TemplateNotFoundError):
            registry.remove("never-registered")

    def test_reregister_after_remove_moves_to_end(self, registry, make_template) -> None:
        for name in ("a", "b"):
            registry.register(make_template(name))
        registry.remove("a")
        registry.register(make_template("a"))
        assert registry.names() == ["b", "a"]

    def test_list_is_stable_and_restartable(self, registry, make_template) -> None:
        for name in ("x", "y", "z"):
            registry.register(make_template(name))

        first = registry.list_templates()
        second = registry.list_templates()

        assert first == second
        assert [t.name for t in first] == ["x", "y", "z"]
        # Iterating the same snapshot twice gives the same sequence
        assert list(first) == list(first)

    def test_list_snapshot_ignores_later_mutation(self, registry, make_template) -> None:
        registry.register(make_template("x"))
        snapshot = registry.list_templates()

        registry.register(make_template("y"))
        registry.remove("x")

        assert [t.name for t in snapshot] == ["x"]
        assert [t.name for t in registry] == ["y"]

    def test_list_empty(self, registry: TemplateRegistry) -> None:
        assert registry.list_templates() == ()
        assert len(registry) == 0

    def test_update_via_new_instance(self, registry, make_template) -> None:
        original = make_template("sceptic", description="v1")
        registry.register(original)

        registry.replace(replace(original, description="v2"))

        assert original.description == "v1"
        assert registry.get("sceptic").description == "v2"

    def test_initial_templates(self, make_template) -> None:
        registry = TemplateRegistry([make_template("a"), make_template("b")])
        assert registry.names() == ["a", "b"]

    def test_initial_templates_with_duplicate(self, make_template) -> None:
        with pytest.raises(DuplicateTemplateError):
            TemplateRegistry([make_template("a"), make_template("a")])

    def test_malformed_document_registers_nothing(self, registry) -> None:
        for doc in ("---\nname: ''\n---\nbody\n", "---\nname: a\n---\n"):
            with pytest.raises(MalformedTemplateError):
                registry.register(parse_template(doc))
        assert len(registry) == 0


class TestPersonaScenario:
    """The ddd-enforcer / fp-typescript / sceptic walkthrough."""

    def test_scenario(self, registry, make_template) -> None:
        ddd = make_template("ddd-enforcer", "Enforce aggregate invariants.")
        fp = make_template("fp-typescript", "Prefer pure functions.")
        sceptic = make_template("sceptic", "Flag cyclomatic complexity above 10.")
        for template in (ddd, fp, sceptic):
            registry.register(template)

        assert registry.list_templates() == (ddd, fp, sceptic)
        assert registry.get("sceptic") is sceptic

        with pytest.raises(TemplateNotFoundError):
            registry.get("missing")

        second = make_template("sceptic", "Be even more sceptical.")
        with pytest.raises(DuplicateTemplateError):
            registry.register(second)

        assert registry.replace(second) is sceptic
        assert registry.get("sceptic") is second
        assert registry.names() == ["ddd-enforcer", "fp-typescript", "sceptic"]


class TestRegistryConcurrency:
    """Concurrent readers and writers see consistent state."""

    def test_concurrent_register_unique_names(self, registry, make_template) -> None:
        def worker(offset: int) -> None:
            for i in range(50):
                registry.register(make_template(f"t-{offset}-{i}"))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(registry) == 400

    def test_concurrent_duplicate_registration_has_one_winner(
        self, registry, make_template
    ) -> None:
        errors: list[Exception] = []
        barrier = threading.Barrier(8)

        def worker(n: int) -> None:
            barrier.wait()
            try:
                registry.register(make_template("contested", f"body {n}"))
            except DuplicateTemplateError as exc:
                errors.append(exc)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(errors) == 7
        assert len(registry) == 1

    def test_snapshots_are_never_partial(self, registry, make_template) -> None:
        """Readers never see missing or reordered entries while a writer replaces."""
        for i in range(20):
            registry.register(make_template(f"base-{i:02d}"))

        stop = threading.Event()
        problems: list[str] = []

        def writer() -> None:
            i = 0
            while not stop.is_set():
                registry.replace(make_template(f"base-{i % 20:02d}", f"rev {i}"))
                i += 1

        def reader() -> None:
            while not stop.is_set():
                names = [t.name for t in registry.list_templates()]
                if names != sorted(names) or len(names) != 20:
                    problems.append(repr(names))

        threads = [threading.Thread(target=writer)] + [
            threading.Thread(target=reader) for _ in range(4)
        ]
        for t in threads:
            t.start()
        stop.wait(0.3)
        stop.set()
        for t in threads:
            t.join()

        assert problems == []
