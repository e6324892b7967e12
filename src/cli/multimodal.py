# =============================================================================
# src/cli/multimodal.py — CLI Multimodal Command (Text + Image Inference)
# =============================================================================
#
# Sends one prompt, optionally with an image, to a HuggingFace multimodal
# model and prints the decoded response.  Uses HuggingFace_API_KEY from
# the environment / .env.
#
# Typical usage:
#   python -m src.cli.multimodal --model Salesforce/blip2-opt-2.7b \
#       --prompt "describe this image" --image photo.png
#   python -m src.cli.multimodal --model CompVis/stable-diffusion-v1-4 \
#       --prompt "a lighthouse at dusk" --output lighthouse.png
#
# Binary responses (generated images) need --output; JSON responses are
# printed to stdout or written to --output.
# =============================================================================

"""Run a single multimodal inference request from the command line.

Usage::

    python -m src.cli.multimodal --model M --prompt P [--image PATH] [--output FILE]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from src.config.settings import Settings
from src.models.provider import ProviderResponse
from src.utils.errors import ModelGateError

_MAX_IMAGE_SIZE = 5 * 1024 * 1024  # 5 MB, same as the API upload limit


async def _run(args: argparse.Namespace, settings: Settings, image_bytes: bytes | None) -> ProviderResponse:
    from src.config.credentials import resolve_provider_credentials
    from src.providers.llm.huggingface_provider import HuggingFaceProvider

    provider = HuggingFaceProvider(settings)
    credentials = resolve_provider_credentials(
        provider.name,
        provider.config,
        server_env=settings.server_env(),
    )
    return await provider.generate_multimodal_response(
        args.model,
        args.prompt,
        image_bytes,
        credentials.api_key or "",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m src.cli.multimodal",
        description="Send a text prompt and optional image to a HuggingFace model.",
    )
    parser.add_argument("--model", required=True, help="HuggingFace model id")
    parser.add_argument("--prompt", required=True, help="Text prompt")
    parser.add_argument("--image", type=Path, help="Image file to attach (sent as input.png)")
    parser.add_argument("-o", "--output", type=Path, help="Write the response to this file")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    from src.utils.logging import configure_logging

    settings = Settings()
    configure_logging(log_level="WARNING", stream=sys.stderr)

    image_bytes: bytes | None = None
    if args.image is not None:
        if not args.image.is_file():
            print(f"Error: image not found: {args.image}", file=sys.stderr)
            return 1
        image_bytes = args.image.read_bytes()
        if len(image_bytes) > _MAX_IMAGE_SIZE:
            print("Error: image exceeds 5 MB limit", file=sys.stderr)
            return 1

    try:
        response = asyncio.run(_run(args, settings, image_bytes))
    except ModelGateError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if isinstance(response.data, bytes):
        if args.output is None:
            print(
                f"Error: binary response ({response.content_type}); use --output to save it",
                file=sys.stderr,
            )
            return 1
        args.output.write_bytes(response.data)
        print(f"Wrote {len(response.data)} bytes to {args.output}")
        return 0

    text = json.dumps(response.data, indent=2, ensure_ascii=False)
    if args.output is not None:
        args.output.write_text(text, encoding="utf-8")
        print(f"Wrote response to {args.output}")
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
