# src/summary/response_parser.py — v1
"""Lenient extraction of summary and keywords from a model reply.

Generative models do not reliably emit valid JSON, so the reply is never
handed to a JSON parser. Instead a small scanner walks the text:

    seek field token  ->  seek delimiter  ->  scan value

A quote preceded by a backslash is treated as escaped while scanning the
summary value. Any token or delimiter that cannot be found aborts the
whole parse with ResponseParseError; a partial result is never returned.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

MAX_KEYWORDS = 10

_SUMMARY_TOKEN = '"summary"'
_KEYWORDS_TOKEN = '"keywords"'

_FENCE_OPEN_RE = re.compile(r"```json\s*")
_FENCE_CLOSE_RE = re.compile(r"```\s*$")


class ResponseParseError(ValueError):
    """Raised when a model reply does not have the expected layout."""


@dataclass(frozen=True)
class ParsedReply:
    """Fields extracted from a model reply."""

    summary: str
    keywords: list[str] = field(default_factory=list)


def strip_code_fence(text: str) -> str:
    """Remove ```json fence tags and a trailing ``` fence."""
    text = _FENCE_OPEN_RE.sub("", text)
    text = _FENCE_CLOSE_RE.sub("", text)
    return text.strip()


class _Scanner:
    """Cursor over the reply text; every seek fails loudly."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def seek(self, needle: str, start: int | None = None) -> int:
        """Move to the next occurrence of ``needle`` and return its index."""
        idx = self.text.find(needle, self.pos if start is None else start)
        if idx == -1:
            raise ResponseParseError(f"{needle!r} not found")
        self.pos = idx
        return idx

    def scan_quoted(self) -> str:
        """Read a quoted value starting at the opening quote under the cursor."""
        value_start = self.pos + 1
        cursor = value_start
        while True:
            end = self.text.find('"', cursor)
            if end == -1:
                raise ResponseParseError("unterminated summary value")
            if self.text[end - 1] != "\\":
                break
            cursor = end + 1
        self.pos = end + 1
        return self.text[value_start:end]


def _extract_summary(scanner: _Scanner) -> str:
    token_at = scanner.seek(_SUMMARY_TOKEN, start=0)
    scanner.seek(":", start=token_at + len(_SUMMARY_TOKEN))
    scanner.seek('"', start=scanner.pos + 1)
    return scanner.scan_quoted().replace('\\"', '"').strip()


def _extract_keywords(scanner: _Scanner) -> list[str]:
    # Searched from the start of the reply, independent of the summary.
    token_at = scanner.seek(_KEYWORDS_TOKEN, start=0)
    open_at = scanner.seek("[", start=token_at)
    close_at = scanner.seek("]", start=open_at)
    return split_keywords(scanner.text[open_at + 1:close_at])


def split_keywords(raw: str, limit: int = MAX_KEYWORDS) -> list[str]:
    """Split a comma-separated keyword list body.

    Quote characters are removed and whitespace stripped; empty pieces and
    exact duplicates are dropped. At most ``limit`` keywords are kept, in
    their original order.
    """
    keywords: list[str] = []
    for piece in raw.split(","):
        keyword = piece.replace('"', "").strip()
        if keyword and keyword not in keywords:
            keywords.append(keyword)
        if len(keywords) >= limit:
            break
    return keywords


def parse_reply(response: str) -> ParsedReply:
    """Extract summary and keywords from a raw model reply.

    Args:
        response: Completion text, optionally wrapped in a ```json fence.

    Returns:
        ParsedReply with the summary and up to 10 keywords.

    Raises:
        ResponseParseError: A field token, delimiter or closing quote is
            missing.
    """
    text = strip_code_fence(response)
    # Both tokens must be present before any value is extracted.
    for token in (_SUMMARY_TOKEN, _KEYWORDS_TOKEN):
        if token not in text:
            raise ResponseParseError(f"{token} field not found")

    scanner = _Scanner(text)
    summary = _extract_summary(scanner)
    keywords = _extract_keywords(scanner)
    return ParsedReply(summary=summary, keywords=keywords)
