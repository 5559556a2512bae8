"""Helpers for the artifact lists that phases accumulate."""

from collections.abc import Iterable, Mapping
from typing import Any


def collect_artifacts(*results: Mapping[str, Any] | None) -> list[dict[str, Any]]:
    """Concatenate the `artifacts` lists of the given results, in order."""
    collected: list[dict[str, Any]] = []
    for result in results:
        if not result:
            continue
        artifacts = result.get("artifacts")
        if isinstance(artifacts, list):
            collected.extend(artifacts)
    return collected


def file_refs(
    artifacts: Iterable[Mapping[str, Any]],
    default_format: str = "markdown",
    language: str | None = None,
    label: str | None = None,
) -> list[dict[str, Any]]:
    """
    Map artifacts to breakpoint file references.

    An artifact's own format, language and label take precedence over the
    defaults. Keys whose value ends up None are omitted.
    """
    refs = []
    for artifact in artifacts:
        ref = {
            "path": artifact.get("path"),
            "format": artifact.get("format") or default_format,
            "language": artifact.get("language") or language,
            "label": artifact.get("label") or label,
        }
        refs.append({k: v for k, v in ref.items() if v is not None})
    return refs
