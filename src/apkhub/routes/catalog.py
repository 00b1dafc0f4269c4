"""Read-only JSON views of the registry."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from apkhub.deps import HubContext, get_context

router = APIRouter(prefix="/api", tags=["catalog"])


@router.get("/projects")
def list_projects(ctx: HubContext = Depends(get_context)):
    return [p.model_dump(by_alias=True) for p in ctx.store.snapshot()]


@router.get("/apps/{package_name}")
def get_app(package_name: str, ctx: HubContext = Depends(get_context)):
    return ctx.store.get_app(package_name).model_dump(by_alias=True)
