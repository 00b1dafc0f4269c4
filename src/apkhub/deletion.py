"""Deletion workflow -- remove builds or whole apps, then their files.

The metadata change is authoritative. File removal afterwards is best
effort: failures are logged and never fail the request. Icons are removed
under the registry lock, and only while the app is still absent, so a
concurrent re-upload keeps the icon it just wrote.
"""

from __future__ import annotations

import logging

from apkhub.auth import verify_secret
from apkhub.registry.store import DeleteAppResult, DeleteBuildResult, RegistryStore
from apkhub.storage import BlobStore

logger = logging.getLogger(__name__)


class DeletionService:
    def __init__(self, store: RegistryStore, blobs: BlobStore, secret: str) -> None:
        self.store = store
        self.blobs = blobs
        self._secret = secret

    def delete_build(self, package_name: str, file_name: str, secret: str | None) -> DeleteBuildResult:
        verify_secret(secret, self._secret)
        with self.store.locked():
            result = self.store.delete_build(package_name, file_name)
            if result.app_removed:
                logger.info("App %s has no builds left, removed", package_name)
                self._remove_icon(package_name, result.icon_path)
        logger.info("Deleted build %s of %s", file_name, package_name)

        self._remove_artifact(result.build.file_name)
        return result

    def delete_app(self, package_name: str, secret: str | None) -> DeleteAppResult:
        verify_secret(secret, self._secret)
        with self.store.locked():
            result = self.store.delete_app(package_name)
            self._remove_icon(package_name, result.app.icon_path)
        logger.info("Deleted app %s with %d build(s)", package_name, len(result.removed_builds))

        for build in result.removed_builds:
            self._remove_artifact(build.file_name)
        return result

    def _remove_artifact(self, file_name: str) -> None:
        try:
            self.blobs.delete_artifact(file_name)
        except OSError as e:
            logger.warning("Failed to delete artifact %s: %s", file_name, e)

    def _remove_icon(self, package_name: str, icon_path: str) -> None:
        # Lock held by the caller
        if self.store.find_app(package_name) is not None:
            return
        try:
            self.blobs.delete_icon(icon_path)
        except OSError as e:
            logger.warning("Failed to delete icon %s: %s", icon_path, e)
