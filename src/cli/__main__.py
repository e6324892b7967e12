# =============================================================================
# src/cli/__main__.py — Package Entry Point
# =============================================================================
#
# `python -m src.cli` lists model catalogs, the most common CLI operation.
# For the multimodal tool run it directly:
#     python -m src.cli.multimodal --model M --prompt P
# =============================================================================

"""Allow ``python -m src.cli`` execution."""

import sys

from src.cli.models import main

sys.exit(main())
