# =============================================================================
# src/cli/models.py — CLI Models Command (List Provider Catalogs)
# =============================================================================
#
# Prints every registered provider's model catalog without starting the
# API server.  Static catalogs are always shown; --dynamic also queries
# providers that can list models from a live server (LM Studio).
#
# Typical usage:
#   python -m src.cli.models                         # All static catalogs
#   python -m src.cli.models --provider LMStudio --dynamic
#   python -m src.cli.models --dynamic --json        # Machine-readable
#
# Credentials and base URLs come from the environment / .env via Settings,
# the same way the API server resolves them.
# =============================================================================

"""List provider model catalogs from the command line.

Usage::

    python -m src.cli.models
    python -m src.cli.models --provider HuggingFace
    python -m src.cli.models --dynamic --json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from src.config.settings import Settings
from src.models.provider import ModelInfo
from src.utils.errors import ModelGateError


def _format_text_output(models: list[ModelInfo]) -> str:
    """Format models as an aligned table grouped by provider."""
    if not models:
        return "No models available."

    width = max(len(m.name) for m in models)
    lines: list[str] = []
    current: str | None = None
    for model in models:
        if model.provider != current:
            if current is not None:
                lines.append("")
            current = model.provider
            lines.append(current)
            lines.append("-" * len(current))
        tokens = str(model.max_token_allowed) if model.max_token_allowed else "n/a"
        lines.append(f"  {model.name.ljust(width)}  {tokens:>6}  {model.label}")
    return "\n".join(lines)


async def _collect(args: argparse.Namespace, settings: Settings) -> list[ModelInfo]:
    from src.providers.llm.registry import build_default_registry

    registry = build_default_registry(settings)
    if args.dynamic:
        return await registry.list_models(server_env=settings.server_env(), provider=args.provider)
    if args.provider:
        return registry.get_provider(args.provider).list_static_models()
    return registry.list_static_models()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m src.cli.models",
        description="List the models each LLM provider exposes.",
    )
    parser.add_argument("--provider", help="Only list this provider (e.g. HuggingFace, LMStudio)")
    parser.add_argument(
        "--dynamic",
        action="store_true",
        help="Also query live model listings where the provider supports it",
    )
    parser.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    parser.add_argument("--quiet", action="store_true", help="Only log warnings, to stderr")
    return parser


def _configure_cli_logging(settings: Settings, quiet: bool) -> None:
    from src.utils.logging import configure_logging

    if quiet:
        configure_logging(log_level="WARNING", stream=sys.stderr)
    else:
        configure_logging(log_level=settings.log_level, stream=sys.stderr)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = Settings()
    # JSON output implies quiet so stdout stays parseable.
    _configure_cli_logging(settings, args.quiet or args.json)

    try:
        models = asyncio.run(_collect(args, settings))
    except ModelGateError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps([m.model_dump() for m in models], indent=2))
    else:
        print(_format_text_output(models))
    return 0


if __name__ == "__main__":
    sys.exit(main())
