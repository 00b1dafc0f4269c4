"""Artifact upload endpoint."""
from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import RedirectResponse

from apkhub.deps import HubContext, get_context
from apkhub.errors import InputError
from apkhub.ingest import UploadRequest

router = APIRouter(prefix="/api", tags=["upload"])


@router.post("/upload")
def upload(
    project_name: str = Form("", alias="projectName"),
    channel: str = Form(""),
    release_notes: str = Form("", alias="releaseNotes"),
    source: str = Form(""),
    file: UploadFile | None = File(None),
    ctx: HubContext = Depends(get_context),
):
    """Ingest one APK. Web form callers get a redirect, API callers JSON."""
    if file is None or not file.filename:
        raise InputError("file is required")

    _, build = ctx.ingestion.ingest(
        UploadRequest(
            project_name=project_name,
            channel=channel,
            release_notes=release_notes,
            source=source,
            stream=file.file,
            original_name=file.filename,
        )
    )

    if source == "web":
        return RedirectResponse("/?upload=success", status_code=302)
    return {"message": "Upload successful", "build": build.model_dump(by_alias=True)}
