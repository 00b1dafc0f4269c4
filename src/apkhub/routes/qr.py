"""QR code images for download links."""
from __future__ import annotations

import io

import qrcode
from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import Response
from PIL import Image

router = APIRouter(tags=["qr"])

QR_SIZE = 256


def render_qr(url: str, size: int = QR_SIZE) -> bytes:
    qr = qrcode.QRCode(error_correction=qrcode.constants.ERROR_CORRECT_M, border=2)
    qr.add_data(url)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white").get_image()
    img = img.convert("RGB").resize((size, size), Image.NEAREST)
    out = io.BytesIO()
    img.save(out, format="PNG")
    return out.getvalue()


@router.get("/qr")
def qr_code(url: str = Query("")):
    if not url:
        raise HTTPException(status_code=400, detail="url parameter is required")
    return Response(content=render_qr(url), media_type="image/png")
