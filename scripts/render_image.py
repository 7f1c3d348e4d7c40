#!/usr/bin/env python
"""Script to render one responsive image from a local uploads directory."""
from __future__ import annotations

import argparse
from pathlib import Path

from rwd_images.config import get_settings
from rwd_images.services.images import ResponsiveImageService
from rwd_images.services.loader import load_sizes
from rwd_images.services.media import LocalMediaRepository, StaticRenderContext
from rwd_images.services.registry import SizeRegistry


def _override(value: str) -> tuple[str, str]:
    breakpoint_key, _, image_id = value.partition("=")
    if not image_id:
        raise argparse.ArgumentTypeError(f"expected BREAKPOINT=IMAGE_ID, got {value!r}")
    return breakpoint_key, image_id


def main() -> None:
    parser = argparse.ArgumentParser(description="Render responsive image markup")
    parser.add_argument("--sizes", type=Path, required=True, help="JSON file of sizes and sets")
    parser.add_argument("--media_root", type=Path, required=True)
    parser.add_argument("--size", required=True)
    parser.add_argument("--image", required=True)
    parser.add_argument("--override", type=_override, action="append", default=[])
    parser.add_argument("--aspect", choices=("picture", "img", "background"), default="picture")
    parser.add_argument("--selector", default="")
    parser.add_argument("--alt")
    parser.add_argument("--secure_host", help="Render as if requested over https on this host")
    args = parser.parse_args()

    registry = load_sizes(SizeRegistry(), args.sizes)
    service = ResponsiveImageService(registry, LocalMediaRepository(args.media_root), settings=get_settings())
    context = StaticRenderContext(secure=bool(args.secure_host), host=args.secure_host or "")
    attributes = {"alt": args.alt} if args.alt is not None else None
    print(
        service.render_responsive_image(
            args.size,
            args.image,
            dict(args.override),
            attributes,
            context=context,
            aspect=args.aspect,
            selector=args.selector,
        )
    )


if __name__ == "__main__":
    main()
