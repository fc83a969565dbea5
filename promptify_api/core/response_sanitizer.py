"""Normalizes raw model output into a candidate HTML document (no validation)"""
import re
from typing import Optional

DOCTYPE_LITERAL = "<!doctype html"

_BOM = "\ufeff"
_FENCE = "```"
# Fence marker plus its optional language tag; content on the same line is kept
_OPENING_FENCE = re.compile(r'```[A-Za-z0-9_+.-]*[ \t]*\n?')
_TRAILING_FENCES = re.compile(r'(?:\s*```)+\s*$')


def _strip_bom(text: str) -> str:
    return text[1:] if text.startswith(_BOM) else text


def _sanitize_pass(text: str) -> str:
    cleaned = _strip_bom(text.strip()).strip()

    doctype_at = cleaned.lower().find(DOCTYPE_LITERAL)
    fence_at = cleaned.find(_FENCE)
    fence_wraps = fence_at != -1 and (
        (doctype_at != -1 and fence_at < doctype_at) or (doctype_at == -1 and fence_at == 0)
    )
    if fence_wraps:
        opening = _OPENING_FENCE.match(cleaned, fence_at)
        cleaned = cleaned[opening.end():]
        closing_at = cleaned.rfind(_FENCE)
        if closing_at != -1:
            cleaned = cleaned[:closing_at]

    doctype_at = cleaned.lower().find(DOCTYPE_LITERAL)
    if doctype_at > 0:
        cleaned = cleaned[doctype_at:]

    cleaned = _TRAILING_FENCES.sub("", cleaned)
    return _strip_bom(cleaned.strip()).strip()


def sanitize_model_output(text: Optional[str]) -> str:
    """
    Strip markdown fences, preambles and byte-order marks from model output.

    Each pass:
      - unwraps a fence opening before the doctype (or leading a doctype-less
        reply): the fence marker and language tag go, and the text is cut at
        the last closing fence
      - drops everything before the first case-insensitive "<!doctype html"
      - removes trailing fence markers and a leading BOM, then trims

    Passes only ever remove text, so they are repeated until the output stops
    changing. Sanitizing an already-sanitized string returns it unchanged.
    """
    if not text:
        return ""

    cleaned = _sanitize_pass(text)
    while True:
        again = _sanitize_pass(cleaned)
        if again == cleaned:
            return cleaned
        cleaned = again
