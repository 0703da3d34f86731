# src/cache/fingerprint.py — v3
"""Document fingerprinting for analysis cache keys.

The fingerprint is a SHA-256 over the cell contents joined with newlines,
so it is sensitive to both content and cell order.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Sequence

from docdigest.core.models import SemanticCell

logger = logging.getLogger(__name__)

_SEPARATOR = "\n"


def join_cell_content(cells: Sequence[SemanticCell]) -> str:
    """Concatenate cell contents in sequence order."""
    return _SEPARATOR.join(cell.content for cell in cells)


def compute_document_hash(cells: Sequence[SemanticCell]) -> str | None:
    """Compute the cache fingerprint for a cell sequence.

    Args:
        cells: Ordered document cells.

    Returns:
        64-char hex SHA-256 digest, or None when the document is
        uncacheable (empty text or text that cannot be UTF-8 encoded).
    """
    text = join_cell_content(cells)
    if not text:
        return None
    try:
        payload = text.encode("utf-8")
    except UnicodeEncodeError as e:
        logger.warning("Document text not hashable, skipping cache: %s", e)
        return None
    return hashlib.sha256(payload).hexdigest()
