# =============================================================================
# src/cli/__init__.py — CLI Module Overview
# =============================================================================
#
# Standalone command-line tools, each runnable via `python -m src.cli.<module>`:
#
#   1. MODELS     (models.py)
#      Lists provider catalogs; --dynamic also queries live listings.
#
#   2. MULTIMODAL (multimodal.py)
#      Sends one text + optional image request to a HuggingFace model.
#
# Both use argparse and defer provider imports into the command bodies so
# `--help` stays fast.  Logs go to stderr; stdout carries command output.
# =============================================================================

"""CLI tools for modelgate.

- ``python -m src.cli.models`` — list provider model catalogs.
- ``python -m src.cli.multimodal`` — run a text + image inference request.
"""
