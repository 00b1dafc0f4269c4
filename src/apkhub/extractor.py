"""APK metadata extraction.

The concrete extractor needs the optional ``apk`` extra (pyaxmlparser).
Anything else implementing ``ArtifactExtractor`` can be passed to the app
factory instead.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from PIL import Image

from apkhub.errors import ExtractionError

logger = logging.getLogger(__name__)


@dataclass
class ExtractedArtifact:
    app_name: str
    package_name: str
    version: str
    icon_png: bytes | None = None


class ArtifactExtractor(Protocol):
    def extract(self, path: Path) -> ExtractedArtifact: ...


def to_png(data: bytes) -> bytes:
    """Re-encode any Pillow-readable image as PNG."""
    with Image.open(io.BytesIO(data)) as img:
        out = io.BytesIO()
        img.save(out, format="PNG")
        return out.getvalue()


class ApkExtractor:
    def __init__(self) -> None:
        try:
            from pyaxmlparser import APK
        except ImportError as e:
            raise RuntimeError(
                "pyaxmlparser is not installed, install it with 'pip install apk-hub[apk]'"
            ) from e
        self._apk_cls = APK

    def extract(self, path: Path) -> ExtractedArtifact:
        try:
            apk = self._apk_cls(str(path))
            app_name = apk.application or ""
            package_name = apk.package or ""
            version = apk.version_name or ""
        except Exception as e:
            raise ExtractionError(f"Failed to parse APK: {e}") from e

        return ExtractedArtifact(
            app_name=str(app_name),
            package_name=str(package_name),
            version=str(version),
            icon_png=self._icon(apk, package_name),
        )

    @staticmethod
    def _icon(apk, package_name: str) -> bytes | None:
        try:
            data = apk.icon_data
            if not data:
                raise ValueError("no icon in package")
            return to_png(data)
        except Exception as e:
            # Adaptive (XML) icons land here too
            logger.warning("Could not extract icon for '%s': %s", package_name, e)
            return None
