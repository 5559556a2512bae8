"""
Filesystem implementation of the task journal.

Layout under the run directory:

    tasks/{effect_id}/task.json     task definition
    tasks/{effect_id}/input.json    arguments the task was built from
    tasks/{effect_id}/result.json   validated result
    breakpoints/{breakpoint_id}.json
    events.jsonl
    index.json                      effect ids and breakpoint verdicts
"""

import json
from pathlib import Path
from threading import Lock
from typing import Any

from archflow.domain.interfaces import TaskJournalInterface
from archflow.domain.models import (
    BreakpointDecision,
    BreakpointRequest,
    RunEvent,
    RunEventType,
    TaskDefinition,
)


class FilesystemTaskJournal(TaskJournalInterface):
    """
    Persistent journal for one run.

    Results are written to the paths named by each task's TaskIO, so the
    journal directory doubles as the task I/O tree.
    """

    def __init__(self, run_dir: str | Path):
        self._run_dir = Path(run_dir)
        self._events_path = self._run_dir / "events.jsonl"
        self._index_path = self._run_dir / "index.json"
        self._lock = Lock()
        self._index: dict[str, Any] = self._load_or_create_index()

    @property
    def run_dir(self) -> Path:
        return self._run_dir

    def _load_or_create_index(self) -> dict[str, Any]:
        """Load existing index or create new one."""
        (self._run_dir / "tasks").mkdir(parents=True, exist_ok=True)
        (self._run_dir / "breakpoints").mkdir(parents=True, exist_ok=True)

        if self._index_path.exists():
            with open(self._index_path) as f:
                result: dict[str, Any] = json.load(f)
                return result

        return {"version": "1.0", "tasks": {}, "breakpoints": {}}

    def _update_index_atomic(self) -> None:
        """Atomically update index.json using write-to-temp + rename."""
        temp_path = self._index_path.with_suffix(".tmp")
        with open(temp_path, "w") as f:
            json.dump(self._index, f, indent=2)
        temp_path.replace(self._index_path)

    def _write_json(self, relative: str, data: Any) -> None:
        path = self._run_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = path.with_suffix(".tmp")
        with open(temp_path, "w") as f:
            json.dump(data, f, indent=2, default=str)
        temp_path.replace(path)

    def record_task(self, task: TaskDefinition, args: dict[str, Any]) -> None:
        with self._lock:
            self._write_json(f"tasks/{task.effect_id}/task.json", task.to_dict())
            self._write_json(task.io.input_json_path, args)
            self._index["tasks"][task.effect_id] = {
                "task_id": task.task_id,
                "kind": task.kind.value,
                "status": "pending",
            }
            self._update_index_atomic()

    def record_result(self, task: TaskDefinition, result: dict[str, Any]) -> None:
        with self._lock:
            self._write_json(task.io.output_json_path, result)
            entry = self._index["tasks"].setdefault(
                task.effect_id, {"task_id": task.task_id, "kind": task.kind.value}
            )
            entry["status"] = "completed"
            self._update_index_atomic()

    def load_result(self, effect_id: str) -> dict[str, Any] | None:
        if self._index["tasks"].get(effect_id, {}).get("status") != "completed":
            return None
        path = self._run_dir / "tasks" / effect_id / "result.json"
        if not path.exists():
            return None
        with open(path) as f:
            result: dict[str, Any] = json.load(f)
            return result

    def record_breakpoint(
        self, request: BreakpointRequest, decision: BreakpointDecision
    ) -> None:
        with self._lock:
            self._write_json(
                f"breakpoints/{request.breakpoint_id}.json",
                {
                    "breakpointId": request.breakpoint_id,
                    "title": request.title,
                    "question": request.question,
                    "context": request.context,
                    "decision": {
                        "approved": decision.approved,
                        "feedback": decision.feedback,
                        "responder": decision.responder,
                    },
                },
            )
            self._index["breakpoints"][request.breakpoint_id] = decision.approved
            self._update_index_atomic()

    def load_breakpoint(self, breakpoint_id: str) -> BreakpointDecision | None:
        if breakpoint_id not in self._index["breakpoints"]:
            return None
        path = self._run_dir / "breakpoints" / f"{breakpoint_id}.json"
        with open(path) as f:
            data = json.load(f)["decision"]
        return BreakpointDecision(
            approved=data["approved"],
            feedback=data.get("feedback", ""),
            responder=data.get("responder", ""),
        )

    def append_event(self, event: RunEvent) -> None:
        with self._lock, open(self._events_path, "a") as f:
            f.write(json.dumps(event.to_dict()) + "\n")

    def events(self, event_type: RunEventType | None = None) -> list[RunEvent]:
        if not self._events_path.exists():
            return []
        events: list[RunEvent] = []
        with open(self._events_path) as f:
            for line in f:
                event = RunEvent.from_dict(json.loads(line))
                if event_type and event.event_type != event_type:
                    continue
                events.append(event)
        return events
