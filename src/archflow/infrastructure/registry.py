"""
Process Registry with Entry Points Discovery.

Built-in processes come from `archflow.processes`. External packages can
register additional processes in their pyproject.toml:

    [project.entry-points."archflow.processes"]
    my-process = "mypackage.processes:my_process"

The entry point must resolve to a ProcessDefinition (as produced by the
`@process` decorator).
"""

import warnings
from importlib.metadata import entry_points

from archflow.application.process import ProcessDefinition
from archflow.domain.exceptions import ProcessNotFound
from archflow.domain.models import ProcessMetadata

ENTRY_POINT_GROUP = "archflow.processes"


class ProcessRegistry:
    """
    Registry of process definitions keyed by process id.

    Uses lazy loading - built-ins and entry points are only loaded on
    first access.

    Example usage:
        definition = ProcessRegistry.get("software-architecture/event-storming")
    """

    _processes: dict[str, ProcessDefinition] = {}
    _loaded: bool = False

    @classmethod
    def _load(cls) -> None:
        """Load built-in and entry point processes (lazy, called once)."""
        if cls._loaded:
            return
        cls._loaded = True

        from archflow.processes import BUILTIN_PROCESSES

        for definition in BUILTIN_PROCESSES:
            cls._processes.setdefault(definition.process_id, definition)

        for ep in entry_points(group=ENTRY_POINT_GROUP):
            try:
                definition = ep.load()
            except Exception as e:
                warnings.warn(
                    f"Failed to load process '{ep.name}' from entry point: {e}",
                    stacklevel=2,
                )
                continue
            if not isinstance(definition, ProcessDefinition):
                warnings.warn(
                    f"Entry point '{ep.name}' is not a ProcessDefinition",
                    stacklevel=2,
                )
                continue
            cls._processes.setdefault(definition.process_id, definition)

    @classmethod
    def register(cls, definition: ProcessDefinition) -> None:
        """
        Manually register a process.

        Useful for testing or dynamically-built processes. Replaces any
        process already registered under the same id.
        """
        cls._processes[definition.process_id] = definition

    @classmethod
    def get(cls, process_id: str) -> ProcessDefinition:
        """
        Get a process definition by id.

        Raises:
            ProcessNotFound: If the process is not registered
        """
        cls._load()
        if process_id not in cls._processes:
            available = ", ".join(sorted(cls._processes)) or "(none)"
            raise ProcessNotFound(
                f"Process '{process_id}' not found. Available processes: {available}"
            )
        return cls._processes[process_id]

    @classmethod
    def metadata(cls, process_id: str) -> ProcessMetadata:
        return cls.get(process_id).metadata

    @classmethod
    def available(cls) -> list[str]:
        """List registered process ids, sorted."""
        cls._load()
        return sorted(cls._processes)

    @classmethod
    def clear(cls) -> None:
        """
        Clear all registered processes (useful for testing).

        Also resets the loaded flag so built-ins and entry points reload.
        """
        cls._processes.clear()
        cls._loaded = False
