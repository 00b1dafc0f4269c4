"""Shared fixtures: a fake extractor and a hub rooted in tmp_path."""
from __future__ import annotations

from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from apkhub.app import create_app
from apkhub.config import HubConfig
from apkhub.errors import ExtractionError
from apkhub.extractor import ExtractedArtifact
from apkhub.registry import MetadataCodec, RegistryStore
from apkhub.storage import BlobStore

FAKE_PNG = b"\x89PNG\r\n\x1a\nfake-icon"


def fake_apk(package: str, version: str, name: str = "Example", icon: bool = False) -> bytes:
    """Bytes the FakeExtractor understands in place of a real APK."""
    lines = [f"name={name}", f"package={package}", f"version={version}"]
    if icon:
        lines.append("icon=yes")
    return "\n".join(lines).encode()


class FakeExtractor:
    """Reads ``key=value`` lines instead of parsing a binary manifest."""

    def extract(self, path: Path) -> ExtractedArtifact:
        fields: dict[str, str] = {}
        for line in path.read_text(encoding="utf-8", errors="replace").splitlines():
            key, sep, value = line.partition("=")
            if sep:
                fields[key] = value
        if "package" not in fields:
            raise ExtractionError("not an APK")
        return ExtractedArtifact(
            app_name=fields.get("name", ""),
            package_name=fields["package"],
            version=fields.get("version", ""),
            icon_png=FAKE_PNG if fields.get("icon") == "yes" else None,
        )


@pytest.fixture
def hub_config(tmp_path) -> HubConfig:
    return HubConfig(
        metadata_path=str(tmp_path / "metadata.json"),
        uploads_dir=str(tmp_path / "uploads"),
        static_dir=str(tmp_path / "static"),
        icons_dir=str(tmp_path / "static" / "icons"),
        temp_dir=str(tmp_path / "incoming"),
        delete_secret="s3cret",
    )


@pytest.fixture
def codec(tmp_path) -> MetadataCodec:
    return MetadataCodec(tmp_path / "metadata.json")


@pytest.fixture
def store(codec) -> RegistryStore:
    return RegistryStore.open(codec)


@pytest.fixture
def blobs(hub_config) -> BlobStore:
    return BlobStore.from_config(hub_config)


@pytest.fixture
def hub_app(hub_config):
    return create_app(hub_config, extractor=FakeExtractor())


@pytest.fixture
async def client(hub_app):
    """Async HTTP client wired to the FastAPI app."""
    transport = ASGITransport(app=hub_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
