"""HTTP endpoints for rendering responsive images."""
from __future__ import annotations

import logging
from typing import Union

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field

from rwd_images.models import RenderAttributes
from rwd_images.services.images import ResponsiveImageService, get_image_service
from rwd_images.services.renderer import Aspect
from rwd_images.services.media import RenderContext

router = APIRouter()
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class RequestRenderContext(RenderContext):
    """Scheme and host of the incoming request, honouring a proxy's X-Forwarded-Proto."""

    def __init__(self, request: Request) -> None:
        self._request = request

    def is_secure_request(self) -> bool:
        forwarded = self._request.headers.get("x-forwarded-proto")
        scheme = forwarded.split(",")[0].strip() if forwarded else self._request.url.scheme
        return scheme.lower() == "https"

    def current_host(self) -> str:
        return self._request.headers.get("host") or (self._request.url.hostname or "")


class RenderRequest(BaseModel):
    size: str
    image: Union[int, str]
    overrides: dict[str, Union[int, str]] = Field(default_factory=dict)
    attributes: RenderAttributes | None = None
    aspect: Aspect = "picture"
    selector: str = ""


class RenderResponse(BaseModel):
    html: str
    warnings: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get("/sizes")
async def list_sizes(service: ResponsiveImageService = Depends(get_image_service)) -> dict[str, list[str]]:
    return {key: rwd_set.breakpoint_keys for key, rwd_set in service.registry.sets.items()}


@router.post("/render", response_model=RenderResponse)
def render_image(
    body: RenderRequest,
    request: Request,
    service: ResponsiveImageService = Depends(get_image_service),
) -> RenderResponse:
    try:
        markup, resolution = service.render_with_resolution(
            body.size,
            body.image,
            body.overrides,
            body.attributes,
            context=RequestRenderContext(request),
            aspect=body.aspect,
            selector=body.selector,
        )
    except Exception as exc:  # pragma: no cover
        logger.exception("Rendering %s for image %s failed: %s", body.size, body.image, exc)
        raise HTTPException(status_code=500, detail="Render failed") from exc

    if resolution is None:
        raise HTTPException(status_code=404, detail=f"Unknown image {body.image}")
    return RenderResponse(html=markup, warnings=resolution.warnings)
