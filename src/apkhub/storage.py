"""Blob store for uploaded artifacts and app icons."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import BinaryIO

from apkhub.config import HubConfig

logger = logging.getLogger(__name__)


class BlobStore:
    def __init__(
        self,
        uploads_dir: Path | str,
        icons_dir: Path | str,
        temp_dir: Path | str,
        icon_url_prefix: str = "static/icons",
    ) -> None:
        self.uploads_dir = Path(uploads_dir)
        self.icons_dir = Path(icons_dir)
        self.temp_dir = Path(temp_dir)
        self.icon_url_prefix = icon_url_prefix.strip("/")
        for d in (self.uploads_dir, self.icons_dir, self.temp_dir):
            d.mkdir(parents=True, exist_ok=True)

    @classmethod
    def from_config(cls, config: HubConfig) -> BlobStore:
        icons = Path(config.icons_dir)
        static = Path(config.static_dir)
        try:
            prefix = "static/" + icons.relative_to(static).as_posix()
        except ValueError:
            prefix = "static/icons"
        return cls(config.uploads_dir, config.icons_dir, config.temp_dir, icon_url_prefix=prefix)

    # ── Artifacts ───────────────────────────────────────────────────────

    def save_temp(self, stream: BinaryIO, suffix: str = ".apk") -> Path:
        """Copy an upload stream into a fresh temp file and return its path."""
        fd, name = tempfile.mkstemp(dir=self.temp_dir, prefix="upload-", suffix=suffix)
        try:
            with os.fdopen(fd, "wb") as out:
                shutil.copyfileobj(stream, out)
        except Exception:
            Path(name).unlink(missing_ok=True)
            raise
        return Path(name)

    def artifact_path(self, file_name: str) -> Path:
        return self.uploads_dir / Path(file_name).name

    def reserve(self, file_name: str) -> bool:
        """Claim ``file_name`` by creating it exclusively. False if it is taken."""
        try:
            with open(self.artifact_path(file_name), "xb"):
                pass
        except FileExistsError:
            return False
        return True

    def promote(self, temp_path: Path, file_name: str) -> Path:
        """Move a staged temp file over the name claimed with ``reserve``."""
        target = self.artifact_path(file_name)
        shutil.move(str(temp_path), target)
        return target

    def delete_artifact(self, file_name: str) -> None:
        self.artifact_path(file_name).unlink(missing_ok=True)

    # ── Icons ───────────────────────────────────────────────────────────

    def save_icon(self, package_name: str, png: bytes) -> str:
        """Store an icon keyed by package and return its web path."""
        name = Path(f"{package_name}.png").name
        (self.icons_dir / name).write_bytes(png)
        return f"{self.icon_url_prefix}/{name}"

    def delete_icon(self, icon_path: str) -> None:
        if not icon_path:
            return
        (self.icons_dir / Path(icon_path).name).unlink(missing_ok=True)
