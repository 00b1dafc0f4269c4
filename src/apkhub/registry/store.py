"""Registry store -- the in-memory project/app/build tree.

Every read and every mutation takes the same lock, and a mutation holds it
through the metadata save, so readers never see memory ahead of disk and
two mutations never interleave. A mutation whose save fails is reverted
before the error propagates. The lock is re-entrant so workflows can hold
it across icon file changes and the mutation they belong to.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field

from apkhub.errors import AppNotFoundError, BuildNotFoundError, PersistenceError
from apkhub.models import AppEntry, AppInfo, BuildInfo, Project
from apkhub.registry.codec import MetadataCodec

logger = logging.getLogger(__name__)


@dataclass
class DeleteBuildResult:
    build: BuildInfo
    app_removed: bool
    icon_path: str = ""


@dataclass
class DeleteAppResult:
    app: AppEntry
    removed_builds: list[BuildInfo] = field(default_factory=list)


class RegistryStore:
    def __init__(self, codec: MetadataCodec, projects: list[Project] | None = None) -> None:
        self.codec = codec
        self._projects: list[Project] = projects if projects is not None else []
        self._lock = threading.RLock()

    @classmethod
    def open(cls, codec: MetadataCodec) -> RegistryStore:
        """Load the metadata file; a missing file yields an empty registry."""
        projects = codec.load()
        logger.info("Loaded %d project(s) from %s", len(projects), codec.path)
        return cls(codec, projects)

    def locked(self):
        """The registry lock, for callers whose file changes must not interleave with mutations."""
        return self._lock

    # ── Reads ───────────────────────────────────────────────────────────

    def snapshot(self) -> list[Project]:
        with self._lock:
            return [p.model_copy(deep=True) for p in self._projects]

    def find_app(self, package_name: str) -> AppEntry | None:
        with self._lock:
            located = self._locate(package_name)
            if located is None:
                return None
            return located[1].model_copy(deep=True)

    def get_app(self, package_name: str) -> AppEntry:
        app = self.find_app(package_name)
        if app is None:
            raise AppNotFoundError(package_name)
        return app

    # ── Mutations ───────────────────────────────────────────────────────

    def upsert_build(self, project_name: str, app_info: AppInfo, build: BuildInfo) -> None:
        with self._lock:
            before = self._checkpoint()

            project = next((p for p in self._projects if p.project_name == project_name), None)
            if project is None:
                project = Project(project_name=project_name)
                self._projects.append(project)

            app = next((a for a in project.apps if a.package_name == app_info.package_name), None)
            if app is None:
                app = AppEntry(app_name=app_info.app_name, package_name=app_info.package_name)
                project.apps.append(app)

            app.app_name = app_info.app_name
            # A failed icon extraction must not erase the stored icon
            if app_info.icon_path:
                app.icon_path = app_info.icon_path

            app.builds.insert(0, build)
            self._commit(before)

    def delete_build(self, package_name: str, file_name: str) -> DeleteBuildResult:
        with self._lock:
            located = self._locate(package_name)
            if located is None:
                raise AppNotFoundError(package_name)
            project, app = located

            index = next((i for i, b in enumerate(app.builds) if b.file_name == file_name), None)
            if index is None:
                raise BuildNotFoundError(package_name, file_name)

            before = self._checkpoint()
            build = app.builds.pop(index)
            app_removed = not app.builds
            if app_removed:
                self._remove_app(project, app)
            self._commit(before)
            return DeleteBuildResult(
                build=build,
                app_removed=app_removed,
                icon_path=app.icon_path if app_removed else "",
            )

    def delete_app(self, package_name: str) -> DeleteAppResult:
        with self._lock:
            located = self._locate(package_name)
            if located is None:
                raise AppNotFoundError(package_name)
            project, app = located

            before = self._checkpoint()
            self._remove_app(project, app)
            self._commit(before)
            return DeleteAppResult(app=app.model_copy(deep=True), removed_builds=list(app.builds))

    # ── Internals (lock held) ───────────────────────────────────────────

    def _locate(self, package_name: str) -> tuple[Project, AppEntry] | None:
        for project in self._projects:
            for app in project.apps:
                if app.package_name == package_name:
                    return project, app
        return None

    def _remove_app(self, project: Project, app: AppEntry) -> None:
        project.apps = [a for a in project.apps if a is not app]
        if not project.apps:
            self._projects = [p for p in self._projects if p is not project]

    def _checkpoint(self) -> list[Project]:
        return [p.model_copy(deep=True) for p in self._projects]

    def _commit(self, before: list[Project]) -> None:
        try:
            self.codec.save(self._projects)
        except PersistenceError:
            logger.exception("Metadata save failed, reverting in-memory change")
            self._projects = before
            raise
