"""Pydantic models for the project -> app -> build tree.

Field names on disk and over the API are camelCase, matching the metadata
file written by earlier releases.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

UPLOAD_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
DOWNLOAD_PREFIX = "/downloads/"


def download_url_for(file_name: str) -> str:
    return f"{DOWNLOAD_PREFIX}{file_name}"


class _Camel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BuildInfo(_Camel):
    """One uploaded artifact. Never changed after creation."""

    model_config = ConfigDict(frozen=True)

    version: str
    channel: str
    release_notes: str = ""
    file_name: str
    file_size: int = Field(default=0, ge=0)
    upload_time: str = ""
    download_url: str = Field(default="", alias="downloadURL")


class AppEntry(_Camel):
    app_name: str
    package_name: str
    icon_path: str = ""
    builds: list[BuildInfo] = Field(default_factory=list)

    @property
    def latest(self) -> BuildInfo | None:
        return self.builds[0] if self.builds else None


class Project(_Camel):
    project_name: str
    apps: list[AppEntry] = Field(default_factory=list)


class AppInfo(_Camel):
    """App-level fields produced by one ingestion."""

    app_name: str
    package_name: str
    version: str
    icon_path: str = ""
