"""Shared dependencies -- the hub context held on ``app.state``."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from fastapi import Request

from apkhub.config import HubConfig
from apkhub.deletion import DeletionService
from apkhub.extractor import ApkExtractor, ArtifactExtractor
from apkhub.ingest import IngestionService
from apkhub.registry import MetadataCodec, RegistryStore
from apkhub.storage import BlobStore


@dataclass(frozen=True)
class HubContext:
    """Everything a request handler needs, built once per app."""

    config: HubConfig
    store: RegistryStore
    blobs: BlobStore
    ingestion: IngestionService
    deletion: DeletionService

    @classmethod
    def from_config(
        cls, config: HubConfig, extractor: ArtifactExtractor | None = None
    ) -> HubContext:
        Path(config.static_dir).mkdir(parents=True, exist_ok=True)
        store = RegistryStore.open(MetadataCodec(config.metadata_file))
        blobs = BlobStore.from_config(config)
        return cls(
            config=config,
            store=store,
            blobs=blobs,
            ingestion=IngestionService(store, blobs, extractor or ApkExtractor()),
            deletion=DeletionService(store, blobs, config.delete_secret),
        )


def get_context(request: Request) -> HubContext:
    return request.app.state.context
