from __future__ import annotations

import logging

from fastapi import FastAPI

from rwd_images.config import get_settings
from rwd_images.handlers import render_handler

logging.basicConfig(level=get_settings().log_level.upper())

app = FastAPI(title="Responsive Images API")

app.include_router(render_handler.router)


@app.get("/healthz")
async def healthz():
    return {"status": "ok"}
