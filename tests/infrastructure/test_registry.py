"""Tests for ProcessRegistry - built-in discovery and manual registration."""

from types import SimpleNamespace
from typing import Any

import pytest

from archflow.application.context import ProcessContext
from archflow.application.process import ProcessDefinition, ProcessInputs, process
from archflow.domain.exceptions import ProcessNotFound
from archflow.infrastructure import registry as registry_module
from archflow.infrastructure.registry import ProcessRegistry

BUILTIN_IDS = [
    "software-architecture/c4-model-documentation",
    "software-architecture/event-storming",
    "software-architecture/iac-review",
    "software-architecture/microservices-decomposition",
    "software-architecture/migration-strategy",
    "software-architecture/observability-implementation",
    "software-architecture/performance-optimization",
    "software-architecture/quality-attributes-workshop",
    "software-architecture/security-architecture-review",
]


class EmptyInputs(ProcessInputs):
    pass


@process("custom/noop", description="Does nothing", inputs_model=EmptyInputs)
def noop(inputs: EmptyInputs, ctx: ProcessContext) -> dict[str, Any]:
    return {"success": True}


@pytest.fixture(autouse=True)
def clean_registry() -> Any:
    """Reset the registry around each test."""
    ProcessRegistry.clear()
    yield
    ProcessRegistry.clear()


class TestProcessRegistry:
    """Tests for ProcessRegistry."""

    def test_builtins_available(self) -> None:
        """All nine built-in processes are registered, sorted."""
        assert ProcessRegistry.available() == BUILTIN_IDS

    def test_get_returns_definition(self) -> None:
        """get() returns the ProcessDefinition for an id."""
        definition = ProcessRegistry.get("software-architecture/event-storming")

        assert isinstance(definition, ProcessDefinition)
        assert definition.process_id == "software-architecture/event-storming"

    def test_get_unknown_raises(self) -> None:
        """Unknown ids raise ProcessNotFound listing what is available."""
        with pytest.raises(ProcessNotFound) as exc_info:
            ProcessRegistry.get("software-architecture/unknown")

        message = str(exc_info.value)
        assert "software-architecture/unknown" in message
        assert "Available processes" in message
        assert "software-architecture/iac-review" in message

    def test_not_found_is_key_error(self) -> None:
        """ProcessNotFound can be caught as KeyError."""
        with pytest.raises(KeyError):
            ProcessRegistry.get("nope")

    def test_register_custom_process(self) -> None:
        """Manually registered processes sit alongside the built-ins."""
        ProcessRegistry.register(noop)

        assert ProcessRegistry.get("custom/noop") is noop
        assert "custom/noop" in ProcessRegistry.available()
        assert len(ProcessRegistry.available()) == len(BUILTIN_IDS) + 1

    def test_metadata(self) -> None:
        """metadata() describes a process's inputs and tasks."""
        meta = ProcessRegistry.metadata("software-architecture/event-storming")

        assert "domain" in meta.inputs
        assert "participantCount" in meta.inputs
        assert meta.tasks[0] == "prepare-workshop"
        assert "validate-domain-model" in meta.tasks

    def test_every_builtin_declares_tasks(self) -> None:
        """Each built-in lists at least one task with a unique id."""
        for process_id in ProcessRegistry.available():
            tasks = ProcessRegistry.metadata(process_id).tasks
            assert tasks, process_id
            assert len(tasks) == len(set(tasks)), process_id

    def test_clear_resets(self) -> None:
        """clear() drops manual registrations and reloads built-ins lazily."""
        ProcessRegistry.register(noop)
        ProcessRegistry.clear()

        assert "custom/noop" not in ProcessRegistry.available()
        assert ProcessRegistry.available() == BUILTIN_IDS


def _broken_load() -> Any:
    raise ImportError("No module named 'vendor_processes'")


class TestEntryPointDiscovery:
    """Tests for processes contributed through entry points."""

    def _entry_points(
        self, monkeypatch: pytest.MonkeyPatch, *eps: SimpleNamespace
    ) -> list[str]:
        groups: list[str] = []

        def fake_entry_points(group: str) -> list[SimpleNamespace]:
            groups.append(group)
            return list(eps)

        monkeypatch.setattr(registry_module, "entry_points", fake_entry_points)
        return groups

    def test_entry_point_process_registered(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A ProcessDefinition entry point joins the built-ins."""
        groups = self._entry_points(
            monkeypatch, SimpleNamespace(name="noop", load=lambda: noop)
        )

        assert ProcessRegistry.get("custom/noop") is noop
        assert groups == ["archflow.processes"]
        assert len(ProcessRegistry.available()) == len(BUILTIN_IDS) + 1

    def test_failing_entry_point_warns(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """An entry point that fails to load warns and is skipped."""
        self._entry_points(
            monkeypatch, SimpleNamespace(name="vendor", load=_broken_load)
        )

        with pytest.warns(UserWarning, match="Failed to load process 'vendor'"):
            available = ProcessRegistry.available()

        assert available == BUILTIN_IDS

    def test_non_definition_entry_point_warns(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """An entry point resolving to something else warns and is skipped."""
        self._entry_points(
            monkeypatch, SimpleNamespace(name="helper", load=lambda: print)
        )

        with pytest.warns(UserWarning, match="'helper' is not a ProcessDefinition"):
            available = ProcessRegistry.available()

        assert available == BUILTIN_IDS

    def test_bad_entry_points_keep_good_ones(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Broken plugins do not stop later entry points from loading."""
        self._entry_points(
            monkeypatch,
            SimpleNamespace(name="vendor", load=_broken_load),
            SimpleNamespace(name="helper", load=lambda: print),
            SimpleNamespace(name="noop", load=lambda: noop),
        )

        with pytest.warns(UserWarning) as record:
            available = ProcessRegistry.available()

        assert len(record) == 2
        assert "custom/noop" in available
        assert set(BUILTIN_IDS) <= set(available)
