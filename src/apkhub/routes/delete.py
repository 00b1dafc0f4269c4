"""Build and app deletion endpoints, guarded by the shared secret."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Form

from apkhub.deps import HubContext, get_context

router = APIRouter(prefix="/api/delete", tags=["delete"])


@router.post("/build")
def delete_build(
    package_name: str = Form(..., alias="packageName"),
    file_name: str = Form(..., alias="fileName"),
    secret: str = Form(""),
    ctx: HubContext = Depends(get_context),
):
    result = ctx.deletion.delete_build(package_name, file_name, secret)
    return {
        "message": "Build deleted",
        "fileName": result.build.file_name,
        "appRemoved": result.app_removed,
    }


@router.post("/app")
def delete_app(
    package_name: str = Form(..., alias="packageName"),
    secret: str = Form(""),
    ctx: HubContext = Depends(get_context),
):
    result = ctx.deletion.delete_app(package_name, secret)
    return {
        "message": "App deleted",
        "packageName": result.app.package_name,
        "removedBuilds": [b.file_name for b in result.removed_builds],
    }
