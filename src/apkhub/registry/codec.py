"""Metadata codec -- JSON file persistence with one generation of backup.

save():
  1. rename the current file to ``<path>.bak``
  2. write the new document to ``<path>``
  3. on failure rename the backup back and re-raise
  4. on success delete the backup

A ``.bak`` found at load time means a save was interrupted between steps
1 and 4. The primary wins if it parses; otherwise the backup is restored.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from apkhub.errors import CorruptMetadataError, PersistenceError
from apkhub.models import Project

logger = logging.getLogger(__name__)

_PROJECTS = TypeAdapter(list[Project])


class MetadataCodec:
    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.backup_path = self.path.with_name(self.path.name + ".bak")

    def load(self) -> list[Project]:
        if self.backup_path.exists():
            return self._recover()
        if not self.path.exists():
            return []
        return self._read(self.path)

    def save(self, projects: list[Project]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        had_backup = False
        if self.path.exists():
            try:
                os.replace(self.path, self.backup_path)
            except OSError as e:
                raise PersistenceError(f"Failed to back up metadata: {e}") from e
            had_backup = True

        try:
            self._write(projects)
        except Exception as e:
            if had_backup:
                self._restore_backup()
            if isinstance(e, PersistenceError):
                raise
            raise PersistenceError(f"Failed to write metadata: {e}") from e

        if had_backup:
            try:
                self.backup_path.unlink()
            except OSError:
                logger.warning("Could not remove metadata backup %s", self.backup_path)

    def _write(self, projects: list[Project]) -> None:
        data = self.encode(projects)
        with open(self.path, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())

    @staticmethod
    def encode(projects: list[Project]) -> bytes:
        return _PROJECTS.dump_json(projects, indent=2, by_alias=True)

    @staticmethod
    def decode(data: bytes | str) -> list[Project]:
        return _PROJECTS.validate_json(data)

    def _read(self, path: Path) -> list[Project]:
        try:
            data = path.read_bytes()
        except OSError as e:
            raise PersistenceError(f"Failed to read metadata {path}: {e}") from e
        try:
            return self.decode(data)
        except ValidationError as e:
            raise CorruptMetadataError(f"Metadata file {path} cannot be parsed: {e}") from e

    def _restore_backup(self) -> None:
        try:
            os.replace(self.backup_path, self.path)
        except OSError:
            logger.exception("Failed to restore metadata backup %s", self.backup_path)

    def _recover(self) -> list[Project]:
        if self.path.exists():
            try:
                projects = self._read(self.path)
            except PersistenceError:
                logger.warning("Metadata %s is unreadable, restoring backup", self.path)
            else:
                logger.warning("Discarding stale metadata backup %s", self.backup_path)
                self.backup_path.unlink(missing_ok=True)
                return projects
        else:
            logger.warning("Metadata %s missing after interrupted save, restoring backup", self.path)

        # Both files stay untouched unless the backup itself parses
        projects = self._read(self.backup_path)
        try:
            os.replace(self.backup_path, self.path)
        except OSError as e:
            raise PersistenceError(f"Failed to restore metadata backup: {e}") from e
        return projects
