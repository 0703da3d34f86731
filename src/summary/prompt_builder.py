# src/summary/prompt_builder.py — v1
"""Prompt construction for the combined summary + keywords request.

Selects a bounded set of structurally important cells and renders them
into the instruction template shipped in ``prompts/``.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Sequence
from pathlib import Path

from docdigest.core.models import SemanticCell

logger = logging.getLogger(__name__)

_PROMPT_PATH = Path(__file__).parent.parent / "prompts" / "summary_and_keywords.txt"

DEFAULT_STRUCTURAL_THRESHOLD = 0.6
DEFAULT_MAX_CELLS = 20
DEFAULT_CELL_CHARS = 200


@functools.lru_cache(maxsize=1)
def load_template() -> str:
    """Load and cache the prompt template."""
    return _PROMPT_PATH.read_text(encoding="utf-8")


def select_prompt_cells(
    cells: Sequence[SemanticCell],
    threshold: float = DEFAULT_STRUCTURAL_THRESHOLD,
    limit: int = DEFAULT_MAX_CELLS,
) -> list[SemanticCell]:
    """Pick the cells sent to the model.

    Cells scoring strictly above ``threshold`` are kept in document order,
    up to ``limit``. When none qualify, the first ``limit`` cells are used
    so the selection is never empty for a non-empty document.
    """
    important = [c for c in cells if c.structural_score > threshold][:limit]
    if not important:
        logger.info(
            "No cell above structural score %.2f, using first %d of %d cells",
            threshold, min(limit, len(cells)), len(cells),
        )
        important = list(cells[:limit])
    return important


def build_prompt(
    cells: Sequence[SemanticCell],
    max_chars: int = DEFAULT_CELL_CHARS,
) -> str:
    """Render the instruction prompt for the selected cells.

    Args:
        cells: Cells already chosen by select_prompt_cells().
        max_chars: Per-cell content truncation.

    Returns:
        Prompt text: instructions, reply-shape example, then each cell's
        truncated content followed by a blank line.
    """
    body = "".join(f"{cell.content[:max_chars]}\n\n" for cell in cells)
    return load_template().format(cells=body)
