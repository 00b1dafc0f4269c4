"""Upload ingestion -- turn an uploaded artifact into a registry build.

Steps: stage the upload, extract metadata, validate it, claim a unique
name and promote the file there, then store the icon and upsert the build
under the registry lock. Any failure after the name is claimed removes the
artifact again. An icon that cannot be written is treated as no icon.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import BinaryIO, Callable

from apkhub.errors import ArtifactValidationError, InputError
from apkhub.extractor import ArtifactExtractor, ExtractedArtifact
from apkhub.models import UPLOAD_TIME_FORMAT, AppInfo, BuildInfo, download_url_for
from apkhub.registry.store import RegistryStore
from apkhub.storage import BlobStore

logger = logging.getLogger(__name__)

_UNSAFE = re.compile(r"[^A-Za-z0-9._-]+")
_REQUIRED_FIELDS = [("app_name", "appName"), ("package_name", "packageName"), ("version", "version")]


@dataclass
class UploadRequest:
    project_name: str
    channel: str
    stream: BinaryIO
    release_notes: str = ""
    source: str = ""
    original_name: str = ""


def _safe(part: str) -> str:
    return _UNSAFE.sub("_", part.strip()).strip("._") or "x"


def build_file_name(package_name: str, version: str, channel: str, now: datetime) -> str:
    """``<package>-<version>-<channel>-<timestamp>.apk`` with unsafe characters replaced."""
    stamp = now.strftime("%Y%m%d%H%M%S%f")
    return f"{_safe(package_name)}-{_safe(version)}-{_safe(channel)}-{stamp}.apk"


class IngestionService:
    def __init__(
        self,
        store: RegistryStore,
        blobs: BlobStore,
        extractor: ArtifactExtractor,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.store = store
        self.blobs = blobs
        self.extractor = extractor
        self._clock = clock

    def ingest(self, request: UploadRequest) -> tuple[AppInfo, BuildInfo]:
        project_name = request.project_name.strip()
        channel = request.channel.strip()
        if not project_name:
            raise InputError("projectName is required")
        if not channel:
            raise InputError("channel is required")

        logger.info(
            "Upload received: project=%s channel=%s file=%s source=%s",
            project_name, channel, request.original_name, request.source or "api",
        )

        temp_path = self.blobs.save_temp(request.stream)
        try:
            extracted = self.extractor.extract(temp_path)
            self._validate(extracted)
            logger.info(
                "Extracted %s (%s) version %s",
                extracted.app_name, extracted.package_name, extracted.version,
            )
            now = self._clock()
            file_name = self._reserve_name(extracted, channel, now)
            try:
                final_path = self.blobs.promote(temp_path, file_name)
            except Exception:
                self._discard(file_name)
                raise
        finally:
            temp_path.unlink(missing_ok=True)

        # Everything past promote removes the artifact on failure
        try:
            build = BuildInfo(
                version=extracted.version,
                channel=channel,
                release_notes=request.release_notes,
                file_name=file_name,
                file_size=final_path.stat().st_size,
                upload_time=now.strftime(UPLOAD_TIME_FORMAT),
                download_url=download_url_for(file_name),
            )
            # Icon file and registry entry change together; deletions wait
            with self.store.locked():
                app_info = AppInfo(
                    app_name=extracted.app_name,
                    package_name=extracted.package_name,
                    version=extracted.version,
                    icon_path=self._save_icon(extracted),
                )
                self.store.upsert_build(project_name, app_info, build)
        except Exception:
            self._discard(file_name)
            raise

        logger.info("Stored build %s for %s", file_name, extracted.package_name)
        return app_info, build

    @staticmethod
    def _validate(extracted: ExtractedArtifact) -> None:
        for attr, label in _REQUIRED_FIELDS:
            if not getattr(extracted, attr).strip():
                raise ArtifactValidationError(label)

    def _save_icon(self, extracted: ExtractedArtifact) -> str:
        if not extracted.icon_png:
            return ""
        try:
            icon_path = self.blobs.save_icon(extracted.package_name, extracted.icon_png)
        except OSError as e:
            logger.warning("Could not store icon for %s: %s", extracted.package_name, e)
            return ""
        logger.info("Icon saved to %s", icon_path)
        return icon_path

    def _discard(self, file_name: str) -> None:
        try:
            self.blobs.delete_artifact(file_name)
        except OSError:
            logger.warning("Could not remove orphaned artifact %s", file_name)

    def _reserve_name(self, extracted: ExtractedArtifact, channel: str, now: datetime) -> str:
        base = build_file_name(extracted.package_name, extracted.version, channel, now)
        file_name = base
        n = 1
        while not self.blobs.reserve(file_name):
            file_name = f"{base.removesuffix('.apk')}-{n}.apk"
            n += 1
        return file_name
