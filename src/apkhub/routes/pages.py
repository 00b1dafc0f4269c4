"""Server-rendered HTML pages."""
from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from apkhub.deps import HubContext, get_context

router = APIRouter(tags=["pages"])

_KB = 1 << 10
_MB = 1 << 20
_GB = 1 << 30


def format_size(size: int) -> str:
    """Render a byte count as B, KB, MB or GB."""
    if size >= _GB:
        return f"{size / _GB:.2f} GB"
    if size >= _MB:
        return f"{size / _MB:.2f} MB"
    if size >= _KB:
        return f"{size / _KB:.2f} KB"
    return f"{size} B"


def first(text: str) -> str:
    return text[:1]


templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))
templates.env.filters["format_size"] = format_size
templates.env.filters["first"] = first


@router.get("/", response_class=HTMLResponse)
def index(request: Request, ctx: HubContext = Depends(get_context)):
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "projects": ctx.store.snapshot(),
            "upload_status": request.query_params.get("upload", ""),
        },
    )


@router.get("/app/{package_name}", response_class=HTMLResponse)
def app_detail(package_name: str, request: Request, ctx: HubContext = Depends(get_context)):
    app = ctx.store.get_app(package_name)
    return templates.TemplateResponse(
        request,
        "details.html",
        {"app": app, "base_url": str(request.base_url).rstrip("/")},
    )


@router.get("/upload", response_class=HTMLResponse)
def upload_form(request: Request):
    return templates.TemplateResponse(request, "upload.html", {})
