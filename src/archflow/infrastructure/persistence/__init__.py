"""Task journal implementations."""

from archflow.infrastructure.persistence.filesystem import FilesystemTaskJournal
from archflow.infrastructure.persistence.memory import InMemoryTaskJournal

__all__ = ["FilesystemTaskJournal", "InMemoryTaskJournal"]
